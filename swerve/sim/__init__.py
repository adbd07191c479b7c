"""
Simulated collaborators - For testing without hardware.

Stand-ins for wheel modules and the heading sensor that record
commands instead of driving motors.
"""

import logging
import time
from typing import Optional

from swerve.types import SwerveDirective


logger = logging.getLogger(__name__)


class SimulatedWheelModule:
    """
    Simulated drive/steer wheel assembly.

    The steer axis is ideal: its position follows the commanded angle
    immediately, offset by the last reset_position() reference.
    """

    def __init__(self, name: str = "wheel", fail_on_move: bool = False) -> None:
        """
        Initialize simulated module.

        Args:
            name: Label used in log output
            fail_on_move: If True, move() raises RuntimeError
        """
        self.name = name
        self.fail_on_move = fail_on_move

        self._last_directive: Optional[SwerveDirective] = None
        self._command_count = 0
        self._stopped = True

        # Steer axis: commanded angle plus encoder reference offset
        self._angle = 0.0
        self._offset = 0.0

    def move(self, speed: float, angle: float) -> None:
        """Record command and steer to angle"""
        if self.fail_on_move:
            raise RuntimeError(f"[SIM] {self.name} failed to accept command")

        self._last_directive = SwerveDirective(angle=angle, speed=speed)
        self._command_count += 1
        self._stopped = speed == 0.0
        self._angle = angle

        logger.debug(f"[SIM] {self.name} #{self._command_count}: speed={speed:+.3f} angle={angle:+.3f}")

    def stop(self) -> None:
        """Stop drive motor, steer angle is held"""
        self._stopped = True
        if self._last_directive is not None:
            self._last_directive = SwerveDirective(angle=self._angle, speed=0.0)
        logger.debug(f"[SIM] {self.name} stopped")

    def reset_position(self, value: float) -> None:
        """Make the current steer angle read as value"""
        self._offset = value - self._angle

    def current_position(self) -> float:
        """Simulated steer encoder reading"""
        return self._angle + self._offset

    @property
    def last_directive(self) -> Optional[SwerveDirective]:
        """Get last command received (for testing)"""
        return self._last_directive

    @property
    def command_count(self) -> int:
        """Get total move commands received (for testing)"""
        return self._command_count

    @property
    def is_stopped(self) -> bool:
        """Check if the drive motor is stopped"""
        return self._stopped


class SimulatedHeadingSensor:
    """
    Simulated gyro.

    Heading is accumulated and unbounded, like a real rate gyro.
    """

    def __init__(self, angle: float = 0.0, calibration_delay: float = 0.0) -> None:
        """
        Initialize simulated sensor.

        Args:
            angle: Initial heading in degrees
            calibration_delay: Time calibrate() blocks for, in seconds
        """
        self.angle = angle
        self._calibration_delay = calibration_delay
        self._calibrated = False
        self._calibration_count = 0

    def current_angle_degrees(self) -> float:
        """Return accumulated heading"""
        return self.angle

    def calibrate(self) -> None:
        """Simulate blocking calibration, resets the heading to zero"""
        logger.info("[SIM] Calibrating heading sensor")
        if self._calibration_delay > 0:
            time.sleep(self._calibration_delay)
        self.angle = 0.0
        self._calibrated = True
        self._calibration_count += 1

    def rotate(self, degrees: float) -> None:
        """Turn the simulated chassis by degrees (clockwise positive)"""
        self.angle += degrees

    @property
    def is_calibrated(self) -> bool:
        """Check if calibrate() has run"""
        return self._calibrated

    @property
    def calibration_count(self) -> int:
        """Get number of calibrations (for testing)"""
        return self._calibration_count
