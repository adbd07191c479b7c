"""
Supervisor - Driver policy and state ownership for the drivetrain.

The Supervisor is the top-level entry point. It:
- Owns the DrivetrainState (centric mode, orientation flip, speed limit)
- Applies speed limiting and the sign convention to raw driver axes
- Supplies the live heading to the drive orchestrator
- Triggers gyro calibration and encoder resets
- Aggregates telemetry

Everything runs synchronously on the control thread.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional

from .drive import SwerveDrive
from .interfaces import HeadingSensor
from .types import (
    CentricMode,
    DrivetrainState,
    DrivetrainTelemetry,
    SupervisorConfig,
)


logger = logging.getLogger(__name__)

StateCallback = Callable[[DrivetrainState, DrivetrainState], Any]


class DrivetrainSupervisor:
    """
    Policy layer above SwerveDrive.

    Setters only change DrivetrainState; they take effect on the next
    drive() call.
    """

    def __init__(
        self,
        drive: SwerveDrive,
        heading_sensor: Optional[HeadingSensor],
        config: SupervisorConfig,
    ) -> None:
        """
        Initialize supervisor.

        Args:
            drive: Drive orchestrator for the chassis
            heading_sensor: Gyro, or None if the chassis has none
                (FIELD mode then fails on every drive())
            config: Supervisor configuration
        """
        self.drive_train = drive
        self.heading_sensor = heading_sensor
        self.config = config

        self._state = DrivetrainState(centric_mode=config.initial_centric_mode)
        self.drive_train.set_centric_mode(self._state.centric_mode)

        # State change callbacks
        self._state_callbacks: List[StateCallback] = []

    def add_state_callback(self, callback: StateCallback) -> None:
        """
        Register callback for state changes.

        Callback signature: callback(old_state, new_state)

        Args:
            callback: Function to call on state change
        """
        self._state_callbacks.append(callback)

    def initialize(self) -> None:
        """Startup sequence: zero the steer encoders, then calibrate the gyro"""
        self.reset_encoders()
        if self.config.calibrate_on_init:
            self.calibrate_gyro()

    def drive(self, fwd: float, strafe: float, rotate_cw: float) -> None:
        """
        Drive from raw driver axes.

        Args:
            fwd: Forward axis (-1.0 to 1.0)
            strafe: Strafe axis (-1.0 to 1.0)
            rotate_cw: Clockwise rotation axis (-1.0 to 1.0)

        Raises:
            MissingHeadingError: FIELD mode without a heading sensor
        """
        if self._state.limit_speed:
            factor = self.config.limit_speed_factor
            fwd *= factor
            strafe *= factor
            rotate_cw *= factor

        # Rotation sense does not depend on which end is forward
        if self._state.centric_mode != CentricMode.ROBOT or not self._state.back_is_forward:
            fwd = -fwd
            strafe = -strafe

        self.drive_train.move(fwd, strafe, rotate_cw, self.get_heading())

    def stop(self) -> None:
        """Stop all wheels"""
        self.drive_train.stop()

    def get_heading(self) -> Optional[float]:
        """
        Get chassis heading.

        Returns:
            Heading in degrees reduced to [0, 360), or None without a sensor
        """
        if self.heading_sensor is None:
            return None
        return self.heading_sensor.current_angle_degrees() % 360

    def calibrate_gyro(self) -> None:
        """
        Calibrate the heading sensor.

        Blocks until the sensor is done. Only call while stationary.
        """
        if self.heading_sensor is None:
            logger.warning("No heading sensor to calibrate")
            return
        logger.info("Calibrating the gyro...")
        self.heading_sensor.calibrate()
        logger.info("Done calibrating the gyro")

    def reset_encoders(self) -> None:
        """Zero the steer encoder of every wheel module"""
        self.drive_train.reset_positions(0.0)
        logger.info("Drivetrain encoders have been reset")

    def get_wheel_angles(self) -> List[float]:
        """Raw steer positions of all wheels, in slot order"""
        return self.drive_train.wheel_positions()

    def telemetry(self) -> DrivetrainTelemetry:
        """Snapshot of wheel angles, heading and policy state"""
        return DrivetrainTelemetry(
            wheel_angles=self.get_wheel_angles(),
            heading=self.get_heading(),
            centric_mode=self._state.centric_mode,
            back_is_forward=self._state.back_is_forward,
            limit_speed=self._state.limit_speed,
        )

    # State mutators

    def set_centric_mode(self, mode: CentricMode) -> None:
        """Select robot- or field-centric control"""
        self.drive_train.set_centric_mode(mode)
        self._update_state(centric_mode=mode)

    def set_back_as_forward(self) -> None:
        """Treat the back of the chassis as the front"""
        self._update_state(back_is_forward=True)

    def set_front_as_forward(self) -> None:
        """Treat the front of the chassis as the front"""
        self._update_state(back_is_forward=False)

    def set_limit_speed(self) -> None:
        """Attenuate all axes for precision maneuvers"""
        self._update_state(limit_speed=True)

    def set_full_speed(self) -> None:
        """Restore full driver authority"""
        self._update_state(limit_speed=False)

    def toggle_limit_speed(self) -> None:
        """Switch between limited and full speed"""
        if self._state.limit_speed:
            self.set_full_speed()
        else:
            self.set_limit_speed()

    # Public properties for UI/monitoring

    @property
    def state(self) -> DrivetrainState:
        """Copy of the current drivetrain state"""
        return replace(self._state)

    @property
    def centric_mode(self) -> CentricMode:
        """Current control frame"""
        return self._state.centric_mode

    @property
    def is_back_forward(self) -> bool:
        """Check if the back of the chassis is treated as front"""
        return self._state.back_is_forward

    @property
    def is_speed_limited(self) -> bool:
        """Check if speed limiting is active"""
        return self._state.limit_speed

    def _update_state(self, **changes: Any) -> None:
        """
        Apply changes to the state and notify callbacks.

        Args:
            **changes: DrivetrainState fields to set
        """
        old_state = replace(self._state)
        new_state = replace(self._state, **changes)
        if new_state == old_state:
            return

        self._state = new_state
        logger.info(f"Drivetrain state: {old_state} -> {new_state}")

        for callback in self._state_callbacks:
            try:
                callback(replace(old_state), replace(new_state))
            except Exception as e:
                logger.error(f"Error in state callback: {e}", exc_info=True)
