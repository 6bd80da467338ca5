"""
Command Line Interface

`storeconf check <path>` resolves a configuration and prints it as YAML,
or reports why it was rejected.

Author: storeconf Project
License: MIT
"""

import argparse
import sys
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .config.certificates import CertificateStore
from .config.durations import format_duration
from .config.exceptions import ConfigurationError
from .config.pipeline import parse_config

MASKED = "********"
MASKED_KEYS = ("key-password", "trust-password")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storeconf")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Resolve and print a configuration")
    check_parser.add_argument("path", help="Config file or directory")
    check_parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="SECTION.KEY=VALUE",
        help="Initial setting, overridden by the config files (repeatable)",
    )
    return parser


def parse_overrides(items: Sequence[str]) -> Dict[str, Dict[str, Any]]:
    """
    Turn `section.key=value` strings into an initial settings map.

    Raises:
        ConfigurationError: If an item is malformed
    """
    overrides: Dict[str, Dict[str, Any]] = {}
    for item in items:
        name, sep, value = item.partition("=")
        section, dot, key = name.partition(".")
        if not sep or not dot or not section or not key:
            raise ConfigurationError(f"Invalid --set value '{item}', expected SECTION.KEY=VALUE")
        overrides.setdefault(section, {})[key] = yaml.safe_load(value) if value else value
    return overrides


def render(value: Any, key: Optional[str] = None) -> Any:
    """Convert a resolved configuration into YAML-friendly values."""
    if isinstance(value, dict):
        return {k: render(v, k) for k, v in value.items()}
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, CertificateStore):
        return {"aliases": value.aliases()}
    if key in MASKED_KEYS and value:
        return MASKED
    return value


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        try:
            config = parse_config(args.path, parse_overrides(args.overrides))
        except ConfigurationError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        yaml.safe_dump(render(config), sys.stdout, default_flow_style=False, sort_keys=False)
        return 0

    parser.error(f"unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
