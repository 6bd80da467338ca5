"""
GC and Retention Parameters

Converts the GC-related TTL and interval settings from their config file
representation to timedelta values, filling in defaults for absent ones.

Author: storeconf Project
License: MIT
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from .durations import days, maybe_days, maybe_minutes, maybe_parse_duration, minutes, seconds
from .exceptions import ConfigurationError
from .schema import COMMAND_PROCESSING, DATABASE

GC_INTERVAL_DEFAULT = minutes(60)
DLO_COMPRESSION_DEFAULT = days(1)
REPORT_TTL_DEFAULT = days(14)
# Real zero durations rather than None: an explicit "0s" must end up equal
# to the default
NODE_TTL_DEFAULT = seconds(0)
NODE_PURGE_TTL_DEFAULT = seconds(0)

DATABASE_DURATION_KEYS = ("gc-interval", "report-ttl", "node-purge-ttl", "node-ttl")
LEGACY_NODE_TTL_KEY = "node-ttl-days"


def _first(*values: Optional[timedelta]) -> Optional[timedelta]:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_node_ttl(database: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fold the legacy `node-ttl-days` setting into `node-ttl`.

    `node-ttl` wins when both are present. The legacy key is always removed.
    """
    result = {k: v for k, v in database.items() if k != LEGACY_NODE_TTL_KEY}
    result["node-ttl"] = _first(
        maybe_parse_duration(database.get("node-ttl"), "node-ttl"),
        maybe_days(database.get(LEGACY_NODE_TTL_KEY), LEGACY_NODE_TTL_KEY),
        NODE_TTL_DEFAULT,
    )
    return result


def _check_gc_params(
    database_in: Dict[str, Any],
    database_out: Dict[str, Any],
    commandproc_out: Dict[str, Any]
) -> None:
    ignored = set(DATABASE_DURATION_KEYS) | {LEGACY_NODE_TTL_KEY}
    before = {k: v for k, v in database_in.items() if k not in ignored}
    after = {k: v for k, v in database_out.items() if k not in ignored}
    if before != after:
        raise ConfigurationError("GC normalization altered unrelated database settings")

    if not isinstance(commandproc_out.get("dlo-compression-threshold"), timedelta):
        raise ConfigurationError("dlo-compression-threshold did not resolve to a duration")
    for key in DATABASE_DURATION_KEYS:
        if not isinstance(database_out.get(key), timedelta):
            raise ConfigurationError(f"database {key} did not resolve to a duration")


def configure_gc_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize GC intervals and TTLs to timedelta values.

    - `command-processing.dlo-compression-threshold`: duration, default 1 day
    - `database.gc-interval`: minutes, default 60 minutes
    - `database.report-ttl`: duration, default 14 days
    - `database.node-purge-ttl`: duration, default 0
    - `database.node-ttl`: duration, else legacy `node-ttl-days`, default 0

    All other settings in both sections pass through unchanged. Values that
    are already timedeltas are kept, so running this twice is harmless.

    Args:
        config: Configuration value, after database defaulting

    Returns:
        New configuration value with resolved durations

    Raises:
        InvalidDurationError: If a setting cannot be parsed
    """
    database = dict(config.get(DATABASE) or {})
    commandproc = dict(config.get(COMMAND_PROCESSING) or {})

    commandproc["dlo-compression-threshold"] = _first(
        maybe_parse_duration(
            commandproc.get("dlo-compression-threshold"), "dlo-compression-threshold"
        ),
        DLO_COMPRESSION_DEFAULT,
    )

    parsed_database = dict(database)
    parsed_database["gc-interval"] = _first(
        maybe_minutes(database.get("gc-interval"), "gc-interval"),
        GC_INTERVAL_DEFAULT,
    )
    parsed_database["report-ttl"] = _first(
        maybe_parse_duration(database.get("report-ttl"), "report-ttl"),
        REPORT_TTL_DEFAULT,
    )
    parsed_database["node-purge-ttl"] = _first(
        maybe_parse_duration(database.get("node-purge-ttl"), "node-purge-ttl"),
        NODE_PURGE_TTL_DEFAULT,
    )
    parsed_database = resolve_node_ttl(parsed_database)

    _check_gc_params(database, parsed_database, commandproc)
    return {**config, DATABASE: parsed_database, COMMAND_PROCESSING: commandproc}
