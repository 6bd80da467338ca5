"""
Configuration Exceptions

Every failure raised while resolving the startup configuration derives from
ConfigurationError, so callers can reject a bad configuration with a single
except clause.

Author: storeconf Project
License: MIT
"""

from typing import Iterable, Optional


class ConfigurationError(ValueError):
    """Base exception for all configuration errors."""


class UnreadableSourceError(ConfigurationError):
    """Raised when the configuration path is missing or unreadable."""

    def __init__(self, path: str):
        """
        Initialize with the offending path.

        Args:
            path: Configuration file or directory path
        """
        self.path = path
        super().__init__(
            f"Configuration path '{path}' must exist and must be readable."
        )


class InvalidSSLConfigurationError(ConfigurationError):
    """Raised when only part of the PEM-based SSL settings are supplied."""

    def __init__(self, found: Iterable[str], required: Iterable[str]):
        """
        Initialize with the keys that were found and the full required set.

        Args:
            found: PEM keys present in the web-server section
            required: Keys that must be supplied together
        """
        self.found = list(found)
        self.required = list(required)
        super().__init__(
            f"Found SSL config options: {', '.join(self.found)}; If configuring "
            f"SSL from PEM files, you must provide all of the following options: "
            f"{', '.join(self.required)}"
        )


class MissingSettingError(ConfigurationError):
    """Raised when a required setting is absent."""

    def __init__(self, setting: str, hint: Optional[str] = None):
        self.setting = setting
        message = f"Required setting '{setting}' is not specified."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class InvalidVardirError(ConfigurationError):
    """Base class for an unusable vardir."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class VardirNotAbsoluteError(InvalidVardirError):
    def __init__(self, path: str):
        super().__init__(path, f"Vardir {path} must be an absolute path.")


class VardirNotFoundError(InvalidVardirError):
    def __init__(self, path: str):
        super().__init__(
            path,
            f"Vardir {path} does not exist. Please create it and ensure it is writable."
        )


class VardirNotDirectoryError(InvalidVardirError):
    def __init__(self, path: str):
        super().__init__(path, f"Vardir {path} is not a directory.")


class VardirNotWritableError(InvalidVardirError):
    def __init__(self, path: str):
        super().__init__(path, f"Vardir {path} is not writable.")


class InvalidDurationError(ConfigurationError):
    """Raised when a duration setting cannot be parsed."""

    def __init__(self, setting: str, value: object):
        self.setting = setting
        self.value = value
        super().__init__(
            f"Invalid duration for '{setting}': {value!r} "
            f"(expected e.g. '14d', '2h', '30m', '10s', '500ms')"
        )


class CertificateError(ConfigurationError):
    """Raised when PEM material cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Unable to load PEM file {path}: {reason}")
