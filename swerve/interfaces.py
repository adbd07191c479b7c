"""
Core interfaces (protocols) for external collaborators.

These define the contracts that hardware bindings must follow.
The control core never talks to motor controllers or sensors
directly; anything with these methods can be plugged in.
"""

from typing import Protocol


class WheelModule(Protocol):
    """
    Interface for one drive/steer wheel assembly.

    Implementations own the motor controllers, encoder feedback and
    closed-loop position control of the steer axis.
    """

    def move(self, speed: float, angle: float) -> None:
        """
        Command drive speed and steer angle.

        Args:
            speed: Normalized drive speed (-1.0 to 1.0)
            angle: Steer angle as a fraction of a turn (-0.5 to 0.5)
        """
        ...

    def stop(self) -> None:
        """Stop the drive motor"""
        ...

    def reset_position(self, value: float) -> None:
        """
        Set the steer encoder's position reference.

        Args:
            value: New position reading for the current steer angle
        """
        ...

    def current_position(self) -> float:
        """
        Read the raw steer encoder position.

        Returns:
            Position in the encoder's native units
        """
        ...


class HeadingSensor(Protocol):
    """Interface for the chassis heading sensor (gyro)"""

    def current_angle_degrees(self) -> float:
        """
        Read the accumulated heading.

        Returns:
            Heading in degrees, unbounded (may exceed +/-360)
        """
        ...

    def calibrate(self) -> None:
        """
        Run the sensor's calibration routine.

        Blocks until done. The chassis must be stationary.
        """
        ...
