"""
Core data types for the swerve control core.

All the data structures that flow through the system, fully typed.
"""

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Tuple


class MissingHeadingError(RuntimeError):
    """Raised when field-centric kinematics are requested without a heading"""


class CentricMode(Enum):
    """Control frame used to interpret driver input"""
    ROBOT = "robot"    # Frame fixed to the chassis body
    FIELD = "field"    # Frame fixed to the field, needs a live heading


class WheelSlot(IntEnum):
    """
    Fixed wheel positions.

    The integer value is the index of the wheel in every directive list
    and module collection.

                 Front
        FRONT_LEFT ------- FRONT_RIGHT
            |                   |
            |      CENTER       |
            |                   |
        BACK_LEFT -------- BACK_RIGHT
                 Back
    """
    FRONT_LEFT = 0
    FRONT_RIGHT = 1
    BACK_RIGHT = 2
    BACK_LEFT = 3
    CENTER = 4


CORNER_SLOTS = (
    WheelSlot.FRONT_LEFT,
    WheelSlot.FRONT_RIGHT,
    WheelSlot.BACK_RIGHT,
    WheelSlot.BACK_LEFT,
)


@dataclass(frozen=True)
class ChassisGeometry:
    """
    Chassis footprint between wheel contact points.

    Units are arbitrary but must be consistent between width and length.
    """
    width: float
    length: float

    def __post_init__(self) -> None:
        """Validate dimensions"""
        if not (math.isfinite(self.width) and self.width > 0):
            raise ValueError(f"Width has to be a finite number larger than 0, got {self.width}")
        if not (math.isfinite(self.length) and self.length > 0):
            raise ValueError(f"Length has to be a finite number larger than 0, got {self.length}")

    @property
    def diagonal(self) -> float:
        """Diagonal of the footprint, weights the rotational contribution"""
        return math.hypot(self.width, self.length)


@dataclass(frozen=True)
class SwerveDirective:
    """
    Command for a single wheel module.

    angle is a signed fraction of a full turn (-0.5 to 0.5, where 0.5 is
    180 degrees), speed is normalized to -1.0 to 1.0.
    """
    angle: float
    speed: float

    @property
    def angle_degrees(self) -> float:
        """Angle converted back to degrees"""
        return self.angle * 360.0

    @property
    def is_stop(self) -> bool:
        """Check if this directive commands no drive speed"""
        return self.speed == 0.0


@dataclass
class DrivetrainState:
    """
    Driver-facing policy state owned by the supervisor.

    Only the supervisor's setters mutate this; everyone else gets a copy.
    """
    centric_mode: CentricMode = CentricMode.ROBOT
    back_is_forward: bool = False    # Treat the back of the chassis as front
    limit_speed: bool = False        # Attenuate all axes for precision driving


@dataclass
class DrivetrainTelemetry:
    """Snapshot of drivetrain sensors and policy state"""
    wheel_angles: List[float] = field(default_factory=list)  # Raw steer positions, slot order
    heading: Optional[float] = None                           # Degrees in [0, 360), None without sensor
    centric_mode: CentricMode = CentricMode.ROBOT
    back_is_forward: bool = False
    limit_speed: bool = False


@dataclass(frozen=True)
class KinematicsConfig:
    """Configuration for the kinematics engine"""
    geometry: ChassisGeometry                          # Corner wheels ("Default")
    center_geometry: Optional[ChassisGeometry] = None  # Center wheel ("Plus"), None for 4 wheels
    speed_scale: float = 1.0                           # Bench-test authority limit (0 < scale <= 1)

    def __post_init__(self) -> None:
        """Validate scale"""
        if not 0.0 < self.speed_scale <= 1.0:
            raise ValueError(f"speed_scale must be in (0, 1], got {self.speed_scale}")

    @property
    def has_center_wheel(self) -> bool:
        """Check if the 5-wheel layout is configured"""
        return self.center_geometry is not None

    @property
    def slots(self) -> Tuple[WheelSlot, ...]:
        """Configured wheel slots in directive order"""
        if self.has_center_wheel:
            return CORNER_SLOTS + (WheelSlot.CENTER,)
        return CORNER_SLOTS


@dataclass(frozen=True)
class SupervisorConfig:
    """Configuration for the drivetrain supervisor"""
    limit_speed_factor: float = 0.25                   # Axis attenuation while speed limited
    initial_centric_mode: CentricMode = CentricMode.ROBOT
    calibrate_on_init: bool = True                     # Calibrate heading sensor in initialize()

    def __post_init__(self) -> None:
        """Validate attenuation factor"""
        if not 0.0 < self.limit_speed_factor <= 1.0:
            raise ValueError(
                f"limit_speed_factor must be in (0, 1], got {self.limit_speed_factor}"
            )
