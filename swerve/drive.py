"""
SwerveDrive - Dispatches kinematics output to the wheel modules.

Owns the ordered wheel-module collection and the kinematics engine.
Directive index i always goes to the module bound to slot i.
"""

import logging
from typing import List, Mapping, Optional, Tuple

from .interfaces import WheelModule
from .kinematics import SwerveKinematics
from .types import CentricMode, WheelSlot


logger = logging.getLogger(__name__)


class SwerveDrive:
    """
    Chassis-level move/stop on top of the kinematics engine.

    Every move() commands every module, including wheels at zero speed,
    since the steer angle may still need to change.
    """

    def __init__(
        self,
        modules: Mapping[WheelSlot, WheelModule],
        kinematics: SwerveKinematics,
    ) -> None:
        """
        Bind wheel modules to slots.

        Args:
            modules: One module per slot configured in the kinematics engine
            kinematics: Engine matching the chassis geometry

        Raises:
            ValueError: If the bound slots don't match the configured slots
        """
        expected = set(kinematics.slots)
        bound = set(modules)
        if bound != expected:
            missing = sorted(s.name for s in expected - bound)
            extra = sorted(s.name for s in bound - expected)
            raise ValueError(
                f"Wheel modules don't match chassis slots "
                f"(missing: {missing or 'none'}, unexpected: {extra or 'none'})"
            )

        self.kinematics = kinematics
        self._slots = kinematics.slots
        self._modules: List[WheelModule] = [modules[slot] for slot in self._slots]

    @property
    def slots(self) -> Tuple[WheelSlot, ...]:
        """Wheel slots in dispatch order"""
        return self._slots

    @property
    def modules(self) -> Tuple[WheelModule, ...]:
        """Wheel modules in slot order"""
        return tuple(self._modules)

    @property
    def centric_mode(self) -> CentricMode:
        """Control frame currently used by the engine"""
        return self.kinematics.centric_mode

    def move(
        self,
        fwd: float,
        strafe: float,
        rotate_cw: float,
        heading: Optional[float] = None,
    ) -> None:
        """
        Compute directives and command every wheel module.

        Errors from the engine or a module are not retried; the caller
        should stop() the chassis, since some wheels may already have
        received the new command.

        Args:
            fwd: Forward power (-1.0 to 1.0)
            strafe: Strafe power (-1.0 to 1.0)
            rotate_cw: Clockwise rotation power (-1.0 to 1.0)
            heading: Chassis heading in degrees, required in FIELD mode
        """
        directives = self.kinematics.compute(fwd, strafe, rotate_cw, heading)

        for slot, module, directive in zip(self._slots, self._modules, directives):
            try:
                module.move(directive.speed, directive.angle)
            except Exception as e:
                logger.error(f"Wheel {slot.name} rejected command: {e}")
                raise

    def stop(self) -> None:
        """Stop every wheel module"""
        for module in self._modules:
            module.stop()

    def set_centric_mode(self, mode: CentricMode) -> None:
        """
        Change the control frame.

        Takes effect on the next move(), not retroactively.
        """
        self.kinematics.set_centric_mode(mode)

    def reset_positions(self, value: float = 0.0) -> None:
        """Set every module's steer encoder reference to value"""
        for module in self._modules:
            module.reset_position(value)

    def wheel_positions(self) -> List[float]:
        """Raw steer encoder positions in slot order"""
        return [module.current_position() for module in self._modules]
