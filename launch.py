#!/usr/bin/env python3
"""
swerve-core Launcher

Usage:
    python launch.py --demo            # Drive a simulated chassis
    python launch.py --check-config    # Show and validate .env configuration
"""

import sys
import argparse
import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure logging"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )


def launch_demo(env_file: str = None) -> None:
    """Launch the simulated chassis demo"""
    print("Starting swerve demo...")
    from demo_swerve import main
    main(env_file)


def check_config(env_file: str = None) -> int:
    """Print configuration status, return exit code"""
    from swerve_config import SwerveConfig

    config = SwerveConfig(env_file)
    config.print_status()
    is_valid, _ = config.validate()
    return 0 if is_valid else 1


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="swerve-core - Swerve Drivetrain Control",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python launch.py --demo                    Run simulated demo
  python launch.py --demo --log-level DEBUG  Show every wheel directive
  python launch.py --check-config            Validate .env settings
        """
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run simulated chassis demo"
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Show and validate configuration"
    )
    parser.add_argument(
        "--env-file",
        help="Path to .env file (default: ./.env)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level"
    )

    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.check_config:
        sys.exit(check_config(args.env_file))
    elif args.demo:
        launch_demo(args.env_file)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
