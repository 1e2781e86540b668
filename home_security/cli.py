#!/usr/bin/env python3
"""Command-line entry point for the home security system."""

import argparse
import sys
from typing import List, Optional

from .config_manager import ConfigManager
from .exceptions import SecurityServiceError
from .logging_config import get_logger, setup_logging
from .models.security import ArmingStatus, Sensor, SensorType
from .services.interfaces import CatDetectorInterface
from .services.security_service import SecurityService
from .services.state_store import JsonStateStore
from .services.status_display import StatusDisplay
from .utils import load_image

logger = get_logger("cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_UNKNOWN_SENSOR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="home-security",
        description="Home security monitor: sensors, arming and camera alarm control"
    )
    parser.add_argument("--config", default=None,
                        help="Path to the JSON configuration file")
    parser.add_argument("--state-file", default=None,
                        help="Override the state file from the configuration")
    parser.add_argument("--log-level", default=None,
                        help="Override the log level from the configuration")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show alarm status, arming status and sensors")

    sensor_types = [t.name for t in SensorType]
    for name, help_text in (("add-sensor", "Register a sensor"),
                            ("remove-sensor", "Remove a sensor"),
                            ("activate", "Mark a sensor active"),
                            ("deactivate", "Mark a sensor inactive")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("name", help="Sensor name")
        sub.add_argument("sensor_type", type=str.upper, choices=sensor_types,
                         help="Sensor type")

    arm = subparsers.add_parser("arm", help="Arm the system")
    arm.add_argument("mode", choices=["home", "away"])

    subparsers.add_parser("disarm", help="Disarm the system")

    scan = subparsers.add_parser("scan", help="Run cat detection on a camera image")
    scan.add_argument("image", help="Path to an image file")
    scan.add_argument("--fake-detector", action="store_true",
                      help="Use the random detector instead of OpenCV")
    scan.add_argument("--seed", type=int, default=None,
                      help="Seed for the random detector")

    return parser


def _build_detector(args, cascade_path: Optional[str]) -> CatDetectorInterface:
    from .services.cat_detector import FakeCatDetector, OpenCVCatDetector

    if getattr(args, "fake_detector", False):
        return FakeCatDetector(seed=args.seed)
    if args.command == "scan":
        return OpenCVCatDetector(cascade_path=cascade_path)
    return FakeCatDetector()


def _find_sensor(service: SecurityService, name: str, sensor_type: SensorType) -> Optional[Sensor]:
    wanted = Sensor(name, sensor_type)
    for sensor in service.get_sensors():
        if sensor == wanted:
            return sensor
    return None


def _print_state(service: SecurityService, display: StatusDisplay) -> None:
    alarm_status = service.get_alarm_status()
    arming_status = service.get_arming_status()
    print(f"Alarm status:  {alarm_status.name} ({alarm_status.description})")
    print(f"Arming status: {arming_status.name} ({arming_status.description})")
    if display.camera_message:
        print(f"Camera:        {display.camera_message}")

    sensors = sorted(service.get_sensors(), key=lambda s: (s.name, s.sensor_type.name))
    if not sensors:
        print("Sensors:       none")
    for sensor in sensors:
        state = "active" if sensor.active else "inactive"
        print(f"  {sensor.name:<20} {sensor.sensor_type.name:<8} {state}")


def run(args: argparse.Namespace) -> int:
    config = ConfigManager(args.config).get_config()
    setup_logging(args.log_level or config.log_level, config.log_dir)

    store = JsonStateStore(args.state_file or config.state_file)
    service = SecurityService(store, _build_detector(args, config.cascade_path),
                              cat_confidence_threshold=config.cat_confidence_threshold)
    display = StatusDisplay(store.get_alarm_status())
    service.add_status_listener(display)

    command = args.command
    if command in ("add-sensor", "remove-sensor", "activate", "deactivate"):
        sensor_type = SensorType[args.sensor_type]
        if command == "add-sensor":
            service.add_sensor(Sensor(args.name, sensor_type))
        else:
            sensor = _find_sensor(service, args.name, sensor_type)
            if sensor is None:
                print(f"Unknown sensor: {args.name} ({sensor_type.name})", file=sys.stderr)
                return EXIT_UNKNOWN_SENSOR
            if command == "remove-sensor":
                service.remove_sensor(sensor)
            else:
                service.change_sensor_activation_status(sensor, command == "activate")
    elif command == "arm":
        mode = ArmingStatus.ARMED_HOME if args.mode == "home" else ArmingStatus.ARMED_AWAY
        service.set_arming_status(mode)
    elif command == "disarm":
        service.set_arming_status(ArmingStatus.DISARMED)
    elif command == "scan":
        service.process_image(load_image(args.image))

    _print_state(service, display)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the home security command line."""
    args = build_parser().parse_args(argv)

    try:
        return run(args)
    except SecurityServiceError as e:
        logger.error(f"Command {args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
