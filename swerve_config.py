#!/usr/bin/env python3
"""
Swerve Environment Configuration Helper

Provides access to .env configuration for the swerve tools.
Loads the .env file and provides defaults for the chassis dimensions.
"""

import math
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from swerve.types import (
    CentricMode,
    ChassisGeometry,
    KinematicsConfig,
    SupervisorConfig,
)


DEFAULT_WIDTH = 31.18
DEFAULT_LENGTH = 18.0


class SwerveConfig:
    """Configuration manager for swerve tools"""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration

        Args:
            env_file: Path to .env file (default: .env in current directory)
        """
        self._loaded = False

        if env_file is None:
            env_path = Path(".env")
        else:
            env_path = Path(env_file)

        if env_path.exists():
            load_dotenv(env_path)
            self._loaded = True

    @property
    def width(self) -> Optional[float]:
        """Corner wheel track width"""
        return self._float("SWERVE_WIDTH", DEFAULT_WIDTH)

    @property
    def length(self) -> Optional[float]:
        """Corner wheel base length"""
        return self._float("SWERVE_LENGTH", DEFAULT_LENGTH)

    @property
    def plus_width(self) -> Optional[float]:
        """Center wheel geometry width (unset for 4-wheel chassis)"""
        return self._float("SWERVE_PLUS_WIDTH")

    @property
    def plus_length(self) -> Optional[float]:
        """Center wheel geometry length (unset for 4-wheel chassis)"""
        return self._float("SWERVE_PLUS_LENGTH")

    @property
    def centric_mode(self) -> str:
        """Initial centric mode, 'robot' or 'field' (default: robot)"""
        return os.getenv("SWERVE_CENTRIC_MODE", "robot").strip().lower()

    @property
    def speed_scale(self) -> Optional[float]:
        """Bench-test speed scale (default: 1.0)"""
        return self._float("SWERVE_SPEED_SCALE", 1.0)

    @property
    def limit_factor(self) -> Optional[float]:
        """Axis attenuation while speed limited (default: 0.25)"""
        return self._float("SWERVE_LIMIT_FACTOR", 0.25)

    @property
    def loop_interval(self) -> Optional[float]:
        """Control loop interval in seconds (default: 0.02)"""
        return self._float("SWERVE_LOOP_INTERVAL", 0.02)

    @property
    def has_center_wheel(self) -> bool:
        """Check if the 5-wheel layout is configured"""
        return self.plus_width is not None and self.plus_length is not None

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate configuration

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        for name, value in [
            ("SWERVE_WIDTH", self.width),
            ("SWERVE_LENGTH", self.length),
        ]:
            if value is None:
                errors.append(f"{name} is not a number")
            elif not math.isfinite(value):
                errors.append(f"{name} must be finite")
            elif value <= 0:
                errors.append(f"{name} must be larger than 0")

        # Center wheel needs both dimensions or neither
        plus_vars = [("SWERVE_PLUS_WIDTH", self.plus_width), ("SWERVE_PLUS_LENGTH", self.plus_length)]
        plus_set = [name for name, _ in plus_vars if os.getenv(name)]
        if len(plus_set) == 1:
            errors.append(f"Only {plus_set[0]} set, center wheel needs both dimensions")
        for name, value in plus_vars:
            if os.getenv(name):
                if value is None:
                    errors.append(f"{name} is not a number")
                elif not math.isfinite(value):
                    errors.append(f"{name} must be finite")
                elif value <= 0:
                    errors.append(f"{name} must be larger than 0")

        if self.centric_mode not in ("robot", "field"):
            errors.append(f"SWERVE_CENTRIC_MODE has invalid value '{self.centric_mode}' (expected robot or field)")

        for name, value in [
            ("SWERVE_SPEED_SCALE", self.speed_scale),
            ("SWERVE_LIMIT_FACTOR", self.limit_factor),
        ]:
            if value is None:
                errors.append(f"{name} is not a number")
            elif not 0 < value <= 1:
                errors.append(f"{name} must be in (0, 1]")

        interval = self.loop_interval
        if interval is None or not (math.isfinite(interval) and interval > 0):
            errors.append("SWERVE_LOOP_INTERVAL must be a positive number")

        return len(errors) == 0, errors

    def kinematics_config(self) -> KinematicsConfig:
        """
        Build the kinematics configuration

        Raises:
            ValueError: If the configuration is invalid
        """
        self._raise_if_invalid()
        center_geometry = None
        if self.has_center_wheel:
            center_geometry = ChassisGeometry(width=self.plus_width, length=self.plus_length)
        return KinematicsConfig(
            geometry=ChassisGeometry(width=self.width, length=self.length),
            center_geometry=center_geometry,
            speed_scale=self.speed_scale,
        )

    def supervisor_config(self) -> SupervisorConfig:
        """
        Build the supervisor configuration

        Raises:
            ValueError: If the configuration is invalid
        """
        self._raise_if_invalid()
        return SupervisorConfig(
            limit_speed_factor=self.limit_factor,
            initial_centric_mode=CentricMode(self.centric_mode),
        )

    def print_status(self):
        """Print configuration status"""
        print("Swerve Configuration Status:")
        print(f"  .env loaded:   {'Yes' if self._loaded else 'No'}")
        print(f"  Width:         {self.width}")
        print(f"  Length:        {self.length}")
        if self.has_center_wheel:
            print(f"  Center wheel:  {self.plus_width} x {self.plus_length}")
        else:
            print("  Center wheel:  (not configured)")
        print(f"  Centric mode:  {self.centric_mode}")
        print(f"  Speed scale:   {self.speed_scale}")
        print(f"  Limit factor:  {self.limit_factor}")
        print(f"  Loop interval: {self.loop_interval}s")

        is_valid, errors = self.validate()
        if is_valid:
            print("\n  Status: Configuration is valid")
        else:
            print("\n  Status: Configuration has errors:")
            for error in errors:
                print(f"    - {error}")

    def _raise_if_invalid(self) -> None:
        is_valid, errors = self.validate()
        if not is_valid:
            raise ValueError("Invalid swerve configuration: " + "; ".join(errors))

    @staticmethod
    def _float(name: str, default: Optional[float] = None) -> Optional[float]:
        """Read a float variable, None if set but not a number"""
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return float(raw)
        except ValueError:
            return None


# Global config instance
_config = None

def get_config(reload: bool = False) -> SwerveConfig:
    """
    Get the global configuration instance

    Args:
        reload: Force reload of .env file

    Returns:
        SwerveConfig instance
    """
    global _config
    if _config is None or reload:
        _config = SwerveConfig()
    return _config


def main():
    """Command-line utility to check configuration"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Swerve Configuration Utility",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Check current configuration:
    python swerve_config.py

  Validate configuration:
    python swerve_config.py --validate

  Use custom .env file:
    python swerve_config.py --env-file /path/to/.env
        """
    )

    parser.add_argument("--env-file", help="Path to .env file")
    parser.add_argument("--validate", action="store_true",
                       help="Validate configuration and exit with error if invalid")

    args = parser.parse_args()

    config = SwerveConfig(args.env_file)
    config.print_status()

    if args.validate:
        is_valid, errors = config.validate()
        if not is_valid:
            print("\nValidation failed!")
            import sys
            sys.exit(1)
        else:
            print("\nValidation passed!")


if __name__ == "__main__":
    main()
