#!/usr/bin/env python3
"""
Swerve Core Demo - Simple example application.

Drives a simulated chassis through scripted driver input at a fixed
control-loop cadence and logs the resulting wheel telemetry.
"""

import asyncio
import logging
import sys
from typing import Dict, List, Optional, Tuple

from swerve.drive import SwerveDrive
from swerve.kinematics import SwerveKinematics
from swerve.sim import SimulatedHeadingSensor, SimulatedWheelModule
from swerve.supervisor import DrivetrainSupervisor
from swerve.types import (
    CentricMode,
    DrivetrainState,
    KinematicsConfig,
    SupervisorConfig,
    MissingHeadingError,
)
from swerve_config import SwerveConfig


logger = logging.getLogger(__name__)

# (fwd, strafe, rotate_cw) per tick
Axes = Tuple[float, float, float]


class DriveScripts:
    """Pre-defined driver input scripts"""

    @staticmethod
    def forward() -> List[Axes]:
        """Accelerate forward, cruise, then slow down"""
        return [
            (0.0, 0.0, 0.0),
            (0.3, 0.0, 0.0),
            (0.6, 0.0, 0.0),
            (1.0, 0.0, 0.0),
            (1.0, 0.0, 0.0),
            (0.5, 0.0, 0.0),
            (0.0, 0.0, 0.0),
        ]

    @staticmethod
    def rotate() -> List[Axes]:
        """Spin in place both ways"""
        return [
            (0.0, 0.0, 0.5),
            (0.0, 0.0, 1.0),
            (0.0, 0.0, 0.0),
            (0.0, 0.0, -1.0),
            (0.0, 0.0, 0.0),
        ]

    @staticmethod
    def strafe_and_turn() -> List[Axes]:
        """Translate diagonally while rotating"""
        return [
            (0.5, 0.5, 0.0),
            (0.5, 0.5, 0.3),
            (0.0, -0.7, 0.3),
            (0.0, 0.0, 0.0),
        ]


SCRIPTS: Dict[str, List[Axes]] = {
    "forward": DriveScripts.forward(),
    "rotate": DriveScripts.rotate(),
    "strafe_turn": DriveScripts.strafe_and_turn(),
}


def build_simulated_drivetrain(
    kinematics_config: KinematicsConfig,
    supervisor_config: SupervisorConfig,
    sensor: Optional[SimulatedHeadingSensor] = None,
) -> Tuple[DrivetrainSupervisor, Dict, SimulatedHeadingSensor]:
    """
    Wire a supervisor to simulated wheel modules and gyro.

    Returns:
        (supervisor, modules by slot, heading sensor)
    """
    sensor = sensor or SimulatedHeadingSensor()
    modules = {
        slot: SimulatedWheelModule(name=slot.name.lower())
        for slot in kinematics_config.slots
    }
    kinematics = SwerveKinematics(kinematics_config)
    drive = SwerveDrive(modules, kinematics)
    supervisor = DrivetrainSupervisor(drive, sensor, supervisor_config)
    return supervisor, modules, sensor


async def run_script(
    supervisor: DrivetrainSupervisor,
    sensor: SimulatedHeadingSensor,
    axes: List[Axes],
    loop_interval: float,
) -> None:
    """Feed one script to the supervisor, one entry per tick"""
    for fwd, strafe, rotate_cw in axes:
        try:
            supervisor.drive(fwd, strafe, rotate_cw)
        except MissingHeadingError as e:
            logger.error(f"Drive rejected: {e}")
            supervisor.stop()
            return
        except Exception:
            supervisor.stop()
            raise

        # Crude heading integration so field-centric runs see a turning chassis
        sensor.rotate(rotate_cw * 90.0 * loop_interval)

        telemetry = supervisor.telemetry()
        angles = " ".join(f"{a:+.3f}" for a in telemetry.wheel_angles)
        logger.info(
            f"in=({fwd:+.2f},{strafe:+.2f},{rotate_cw:+.2f}) "
            f"heading={telemetry.heading:6.1f} wheels=[{angles}]"
        )
        await asyncio.sleep(loop_interval)

    supervisor.stop()


async def run_demo(
    config: SwerveConfig,
    sensor: Optional[SimulatedHeadingSensor] = None,
) -> DrivetrainSupervisor:
    """Run the scripted demo on a simulated chassis"""

    logger.info("=" * 60)
    logger.info("Swerve Core Demo")
    logger.info("=" * 60)

    supervisor, modules, sensor = build_simulated_drivetrain(
        config.kinematics_config(),
        config.supervisor_config(),
        sensor,
    )
    logger.info(f"Chassis with {len(modules)} wheels")

    def on_state_change(old_state: DrivetrainState, new_state: DrivetrainState):
        logger.info(f"STATE CHANGE: {old_state} -> {new_state}")

    supervisor.add_state_callback(on_state_change)
    # Gyro calibration may block
    await asyncio.to_thread(supervisor.initialize)

    loop_interval = config.loop_interval
    configured_mode = supervisor.centric_mode

    for name, axes in SCRIPTS.items():
        logger.info("-" * 60)
        logger.info(f"Script '{name}' ({configured_mode.value} centric)")
        await run_script(supervisor, sensor, axes, loop_interval)

    logger.info("-" * 60)
    logger.info("Script 'forward' (field centric)")
    supervisor.set_centric_mode(CentricMode.FIELD)
    await run_script(supervisor, sensor, SCRIPTS["forward"], loop_interval)
    supervisor.set_centric_mode(configured_mode)

    logger.info("-" * 60)
    logger.info("Script 'forward' (speed limited)")
    supervisor.set_limit_speed()
    await run_script(supervisor, sensor, SCRIPTS["forward"], loop_interval)
    supervisor.set_full_speed()

    total = sum(m.command_count for m in modules.values())
    logger.info("=" * 60)
    logger.info(f"Demo finished: {total} wheel commands sent")
    logger.info("=" * 60)

    return supervisor


def main(env_file: Optional[str] = None):
    """Main entry point"""
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            stream=sys.stdout
        )

    config = SwerveConfig(env_file)
    try:
        asyncio.run(run_demo(config))
    except KeyboardInterrupt:
        logger.info("Demo interrupted by user")
    except Exception as e:
        logger.error(f"Demo failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
