"""
Kinematics - Converts chassis motion into per-wheel swerve directives.

Closed-form inverse kinematics for a 4-wheel rectangular chassis with an
optional fifth center wheel. The engine handles:
- Field-centric rotation of the translation vector by the heading
- Per-wheel speed and angle from the blended corner terms
- Proportional normalization so no wheel exceeds full speed
- Angle output as a fraction of a turn (-0.5 to 0.5)
"""

import logging
import math
from typing import List, Optional, Tuple

from .types import (
    CentricMode,
    ChassisGeometry,
    KinematicsConfig,
    MissingHeadingError,
    SwerveDirective,
    WheelSlot,
)


logger = logging.getLogger(__name__)


class SwerveKinematics:
    """
    Computes swerve directives from forward, strafe and rotation input.

    Holds no state across calls apart from the centric mode and the
    static configuration.
    """

    def __init__(
        self,
        config: KinematicsConfig,
        centric_mode: CentricMode = CentricMode.ROBOT,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Chassis geometry, optional center geometry, speed scale
            centric_mode: Initial control frame
        """
        self.config = config
        self._centric_mode = centric_mode

    @property
    def centric_mode(self) -> CentricMode:
        """Current control frame"""
        return self._centric_mode

    def set_centric_mode(self, mode: CentricMode) -> None:
        """Change control frame, used from the next compute() on"""
        self._centric_mode = mode

    @property
    def slots(self) -> Tuple[WheelSlot, ...]:
        """Wheel slots in directive order"""
        return self.config.slots

    def compute(
        self,
        fwd: float,
        strafe: float,
        rotate_cw: float,
        heading: Optional[float] = None,
    ) -> List[SwerveDirective]:
        """
        Compute one directive per configured wheel.

        Inputs are expected in -1.0 to 1.0 and are not clamped.

        Args:
            fwd: Forward power, -1.0 (back) to 1.0 (forward)
            strafe: Strafe power, -1.0 (left) to 1.0 (right)
            rotate_cw: Rotation power, -1.0 (ccw) to 1.0 (cw)
            heading: Chassis heading in degrees, required in FIELD mode

        Returns:
            Directives in slot order (corners, then center if configured)

        Raises:
            MissingHeadingError: FIELD mode without a heading
        """
        if self._centric_mode == CentricMode.FIELD:
            if heading is None:
                raise MissingHeadingError(
                    "Cannot use field centric mode without a heading value"
                )
            fwd, strafe = self._rotate_to_robot(fwd, strafe, heading)

        geometry = self.config.geometry
        a, b, c, d = self._wheel_terms(fwd, strafe, rotate_cw, geometry)

        # (y, x) components per wheel, corners in slot order
        components = [
            (0.75 * b + 0.25 * a, 1.25 * d),  # front left
            (0.75 * b + 0.25 * a, 1.25 * c),  # front right
            (0.75 * a + 0.25 * b, 1.25 * c),  # back right
            (0.75 * a + 0.25 * b, 1.25 * d),  # back left
        ]

        center_geometry = self.config.center_geometry
        if center_geometry is not None:
            a_plus, _, c_plus, d_plus = self._wheel_terms(
                fwd, strafe, rotate_cw, center_geometry
            )
            components.append((a_plus, (c_plus + d_plus) / 2))

        speeds = [math.hypot(y, x) for y, x in components]
        angles = [math.degrees(math.atan2(y, x)) for y, x in components]

        speeds = self._normalize(speeds)
        scale = self.config.speed_scale

        directives = [
            SwerveDirective(angle=angle / 360.0, speed=speed * scale)
            for angle, speed in zip(angles, speeds)
        ]

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Directives: "
                + " ".join(
                    "stop" if d.is_stop else f"{d.speed:.3f}@{d.angle_degrees:+.1f}deg"
                    for d in directives
                )
            )

        return directives

    @staticmethod
    def _rotate_to_robot(fwd: float, strafe: float, heading: float) -> Tuple[float, float]:
        """
        Rotate a field-frame translation into the chassis frame.

        Args:
            fwd: Field-relative forward component
            strafe: Field-relative strafe component
            heading: Chassis heading in degrees

        Returns:
            (fwd, strafe) relative to the chassis
        """
        theta = math.radians(heading)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return (
            fwd * cos_t + strafe * sin_t,
            -fwd * sin_t + strafe * cos_t,
        )

    @staticmethod
    def _wheel_terms(
        fwd: float,
        strafe: float,
        rotate_cw: float,
        geometry: ChassisGeometry,
    ) -> Tuple[float, float, float, float]:
        """Intermediate a, b, c, d terms for one geometry"""
        length_ratio = geometry.length / geometry.diagonal
        width_ratio = geometry.width / geometry.diagonal
        return (
            strafe - rotate_cw * length_ratio,
            strafe + rotate_cw * length_ratio,
            fwd - rotate_cw * width_ratio,
            fwd + rotate_cw * width_ratio,
        )

    @staticmethod
    def _normalize(speeds: List[float]) -> List[float]:
        """
        Scale all speeds down so the fastest wheel is at 1.0.

        Relative speeds are kept, so the chassis follows the same path.
        Speeds are never scaled up.
        """
        max_speed = max(abs(s) for s in speeds)
        if max_speed > 1.0:
            return [s / max_speed for s in speeds]
        return speeds
