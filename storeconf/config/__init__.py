"""
storeconf Configuration Module

This module handles configuration loading, normalization and validation for
the server process. Raw settings are threaded through a fixed sequence of
stages, each returning a new configuration value.

Author: storeconf Project
License: MIT
"""

from .exceptions import (
    ConfigurationError,
    InvalidSSLConfigurationError,
    InvalidVardirError,
    MissingSettingError,
    UnreadableSourceError,
)
from .pipeline import parse_config

__all__ = [
    "ConfigurationError",
    "InvalidSSLConfigurationError",
    "InvalidVardirError",
    "MissingSettingError",
    "UnreadableSourceError",
    "parse_config",
]
