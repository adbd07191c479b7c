"""
swerve-core - Typed, testable swerve drivetrain control.

This package contains the core logic for driving a swerve chassis:
- Types: Geometry, directives, centric mode, drivetrain state
- Interfaces: Protocols for wheel modules and the heading sensor
- Kinematics: Driver axes + heading -> per-wheel speed and angle
- Drive: Dispatches directives to the wheel modules
- Supervisor: Speed limit, orientation flip, telemetry, calibration
"""

from .types import (
    CentricMode,
    ChassisGeometry,
    DrivetrainState,
    DrivetrainTelemetry,
    KinematicsConfig,
    MissingHeadingError,
    SupervisorConfig,
    SwerveDirective,
    WheelSlot,
)
from .interfaces import (
    HeadingSensor,
    WheelModule,
)
from .kinematics import SwerveKinematics
from .drive import SwerveDrive
from .supervisor import DrivetrainSupervisor

__all__ = [
    "CentricMode",
    "ChassisGeometry",
    "DrivetrainState",
    "DrivetrainTelemetry",
    "KinematicsConfig",
    "MissingHeadingError",
    "SupervisorConfig",
    "SwerveDirective",
    "WheelSlot",
    "HeadingSensor",
    "WheelModule",
    "SwerveKinematics",
    "SwerveDrive",
    "DrivetrainSupervisor",
]
