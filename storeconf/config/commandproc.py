"""
Command-Processing Thread Defaults

Author: storeconf Project
License: MIT
"""

from typing import Any, Dict, Optional

from ..utils.system import num_cpus
from .exceptions import ConfigurationError
from .schema import COMMAND_PROCESSING


def default_thread_count(cpu_count: int) -> int:
    """Half the CPUs, but never fewer than one thread."""
    return max(1, cpu_count // 2)


def configure_commandproc_threads(
    config: Dict[str, Any],
    cpu_count: Optional[int] = None
) -> Dict[str, Any]:
    """
    Fill in the number of command-processing threads.

    An explicit `threads` value is kept as given; otherwise it defaults to
    half the number of CPUs (minimum 1).

    Args:
        config: Configuration value
        cpu_count: Processor count; detected from the host if None

    Returns:
        New configuration value with `command-processing.threads` set

    Raises:
        ConfigurationError: If the resulting thread count is not a positive integer
    """
    if cpu_count is None:
        cpu_count = num_cpus()

    section = dict(config.get(COMMAND_PROCESSING) or {})
    if section.get("threads") is None:
        section["threads"] = default_thread_count(cpu_count)

    threads = section["threads"]
    if isinstance(threads, bool) or not isinstance(threads, int) or threads <= 0:
        raise ConfigurationError(
            f"command-processing threads must be a positive integer, got {threads!r}"
        )

    return {**config, COMMAND_PROCESSING: section}
