"""
Logging Setup from Configuration

Applies the logging settings found in the `global` section, either a
dictConfig file or the individual `log-*` keys.

Author: storeconf Project
License: MIT
"""

import json
import logging.config
from typing import Any, Dict

import yaml

from ..utils.logger import setup_logging
from .exceptions import ConfigurationError
from .schema import GLOBAL, LoggingSettings


def _load_dict_config(path: str) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        if path.endswith(".json"):
            return json.load(f)
        return yaml.safe_load(f) or {}


def configure_logging(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Configure process logging from the `global` section of `config`.

    `logging-config` names a dictConfig file (YAML or JSON) and takes
    precedence over the individual `log-*` settings. When neither is given,
    logging is left as it is.

    Args:
        config: Merged raw configuration

    Returns:
        `config`, unchanged
    """
    global_section = config.get(GLOBAL) or {}
    present = LoggingSettings.keys() & set(global_section)
    if not present:
        return config

    try:
        settings = LoggingSettings.model_validate(
            {k: global_section[k] for k in present}
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid logging settings: {e}") from e

    if settings.logging_config:
        try:
            logging.config.dictConfig(_load_dict_config(settings.logging_config))
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Unable to apply logging config {settings.logging_config}: {e}"
            ) from e
        return config

    setup_logging(
        log_level=settings.log_level,
        log_to_file=settings.log_file is not None,
        log_file_path=settings.log_file or "logs/storeconf.log",
        log_rotation_size=settings.log_rotation_size,
        log_retention_count=settings.log_retention_count,
        json_format=settings.log_json,
    )
    return config
