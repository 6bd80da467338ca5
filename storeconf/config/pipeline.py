"""
Configuration Pipeline

Parses the config file or directory and configures each subsystem's
section in a fixed order. Every stage takes a configuration value and
returns a new one; none of them mutate their input.

Author: storeconf Project
License: MIT
"""

from typing import Any, Dict, Mapping, Optional

from ..utils.file_ops import is_readable
from ..utils.logger import get_logger
from .commandproc import configure_commandproc_threads
from .database import configure_database
from .exceptions import UnreadableSourceError
from .gc_params import configure_gc_params
from .loader import load_settings
from .log_setup import configure_logging
from .web_server import configure_web_server

logger = get_logger(__name__)


def parse_config(
    path: str,
    initial_config: Optional[Mapping[str, Any]] = None,
    cpu_count: Optional[int] = None
) -> Dict[str, Any]:
    """
    Parse the given config file/directory and configure its subcomponents.

    Values in `initial_config` are included in the result unless the loaded
    settings override them.

    Args:
        path: Config file or directory
        initial_config: Settings the loaded ones are merged over
        cpu_count: Processor count; detected from the host if None

    Returns:
        Fully-resolved configuration

    Raises:
        UnreadableSourceError: If `path` is missing or unreadable
        ConfigurationError: If any stage rejects the configuration
    """
    if not is_readable(str(path)):
        raise UnreadableSourceError(str(path))

    config = load_settings(str(path), initial_config or {})
    config = configure_logging(config)
    config = configure_commandproc_threads(config, cpu_count)
    config = configure_web_server(config, cpu_count)
    config = configure_database(config)
    config = configure_gc_params(config)

    logger.info(f"Configuration loaded from {path}")
    return config
