#!/usr/bin/env python3
"""
Taiko Configurator - Command Line Entry Point
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from .constants import APP_NAME
from .models.config_manager import ConfigManager
from .models.firmware_options import resolve_firmware_options
from .models.pins import format_pin_hint
from .models.taiko_schema import ENABLED_FIELD, build_json_schema
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_LOAD_FAILED = 2


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="taiko-configurator",
        description=f"{APP_NAME} - Taiko drum addon configuration tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s validate taiko.json                    # Check a saved configuration
  %(prog)s validate taiko.json --used-pins 26 27  # Also check pin availability
  %(prog)s defaults > taiko.json                  # Write default configuration
  %(prog)s resolve taiko.json                     # Show values the firmware uses
"""
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--log-dir",
        metavar="DIR",
        help="Directory for log files"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate a configuration file")
    validate.add_argument("file", help="JSON configuration file")
    validate.add_argument(
        "--used-pins",
        nargs="*",
        type=int,
        default=[],
        metavar="PIN",
        help="Pins already claimed by other addons"
    )
    validate.add_argument(
        "--force-enable",
        action="store_true",
        help="Validate as if the addon were enabled"
    )

    subparsers.add_parser("defaults", help="Print the default configuration")
    subparsers.add_parser("schema", help="Print the field rules as JSON Schema")

    pins = subparsers.add_parser("pins", help="List available ADC pins")
    pins.add_argument("--used-pins", nargs="*", type=int, default=[], metavar="PIN")

    resolve = subparsers.add_parser("resolve", help="Show effective firmware options")
    resolve.add_argument("file", help="JSON configuration file")

    return parser.parse_args(argv)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def _cmd_validate(args) -> int:
    manager = ConfigManager()
    success, error_msg = manager.load_from_file(args.file)
    if not success:
        print(error_msg, file=sys.stderr)
        return EXIT_LOAD_FAILED

    if args.force_enable:
        manager.set_value(ENABLED_FIELD, 1)

    errors = manager.get_errors()
    for field, message in errors.items():
        print(f"ERROR   {field}: {message}")

    for field, message in manager.get_consistency_errors(args.used_pins).items():
        print(f"WARNING {field}: {message}")

    if errors:
        return EXIT_INVALID
    print("Configuration is valid")
    return EXIT_OK


def _cmd_resolve(args) -> int:
    manager = ConfigManager()
    success, error_msg = manager.load_from_file(args.file)
    if not success:
        print(error_msg, file=sys.stderr)
        return EXIT_LOAD_FAILED

    options = resolve_firmware_options(manager.get_config())
    data = asdict(options)
    for sensor, settings in zip(data["sensors"], options.sensors):
        sensor["active"] = settings.active
        sensor["buttons"] = settings.buttons
        sensor["suppressed_by"] = list(options.suppressors(settings.index))
    _print_json(data)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logger(logging.DEBUG if args.verbose else logging.WARNING, log_dir=args.log_dir)

    if args.command == "validate":
        return _cmd_validate(args)
    if args.command == "resolve":
        return _cmd_resolve(args)
    if args.command == "defaults":
        _print_json(ConfigManager().export_config())
        return EXIT_OK
    if args.command == "schema":
        _print_json(build_json_schema())
        return EXIT_OK
    if args.command == "pins":
        print(format_pin_hint(args.used_pins))
        return EXIT_OK

    logger.error(f"Unknown command: {args.command}")
    return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
