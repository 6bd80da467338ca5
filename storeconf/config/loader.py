"""
Raw Settings Loader

Loads the flat section/key settings from an INI or YAML file, or from a
directory of such files, and interpolates environment variable references.

Author: storeconf Project
License: MIT
"""

import configparser
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from ..utils.file_ops import list_files
from ..utils.logger import get_logger
from .exceptions import ConfigurationError

logger = get_logger(__name__)

INI_EXTENSIONS = ("ini", "conf")
YAML_EXTENSIONS = ("yaml", "yml")
CONFIG_EXTENSIONS = INI_EXTENSIONS + YAML_EXTENSIONS

_ENV_TOKEN_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-(.*?))?\}")
_INT_RE = re.compile(r"^[+-]?\d+$")


def merge_settings(
    base: Mapping[str, Any],
    override: Mapping[str, Any]
) -> Dict[str, Any]:
    """
    Merge two settings maps section by section; `override` wins per key.

    Args:
        base: Lower-precedence settings
        override: Higher-precedence settings

    Returns:
        New merged settings map
    """
    merged: Dict[str, Any] = {k: v for k, v in base.items()}
    for section, values in override.items():
        current = merged.get(section)
        if isinstance(current, Mapping) and isinstance(values, Mapping):
            merged[section] = {**current, **values}
        else:
            merged[section] = values
    return merged


def _coerce_ini_value(value: str) -> Any:
    if _INT_RE.match(value.strip()):
        return int(value)
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return value


class SettingsLoader:
    """
    Raw settings loader.

    Reads one config file or every config file in a directory, merges them
    in filename order and resolves `${VAR}` / `${VAR:-default}` references
    against the environment (including a `.env` file, if present).
    """

    def __init__(self, path: str):
        """
        Initialize the settings loader.

        Args:
            path: Config file or directory of config files
        """
        self.path = str(path)

        # Load environment variables from .env if present
        load_dotenv(find_dotenv(usecwd=True))

    def load(self) -> Dict[str, Any]:
        """
        Load raw settings.

        Returns:
            Mapping of section name to section mapping

        Raises:
            ConfigurationError: If a file cannot be parsed
        """
        source = Path(self.path)
        if source.is_dir():
            settings: Dict[str, Any] = {}
            for file_path in list_files(self.path, CONFIG_EXTENSIONS):
                settings = merge_settings(settings, self._load_file(file_path))
        else:
            settings = self._load_file(source)

        return settings

    def _load_file(self, file_path: Path) -> Dict[str, Any]:
        logger.debug(f"Loading settings from {file_path}")
        if file_path.suffix.lower().lstrip('.') in YAML_EXTENSIONS:
            return self._load_yaml(file_path)
        return self._load_ini(file_path)

    def _load_ini(self, file_path: Path) -> Dict[str, Any]:
        """
        Parse an INI file. Environment references are resolved first, then
        integer-looking values become ints and true/false become booleans.
        """
        parser = configparser.ConfigParser(interpolation=None)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                parser.read_file(f)
        except (configparser.Error, OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to parse INI config {file_path}: {e}") from e

        return {
            section: {
                key: _coerce_ini_value(self._interpolate_env(value))
                for key, value in parser.items(section)
            }
            for section in parser.sections()
        }

    def _load_yaml(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to parse YAML config {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"YAML config {file_path} must contain a mapping of sections"
            )
        for section, values in data.items():
            if values is not None and not isinstance(values, dict):
                raise ConfigurationError(
                    f"Section '{section}' in {file_path} must be a mapping"
                )
        return self._interpolate_env(
            {section: dict(values or {}) for section, values in data.items()}
        )

    def _interpolate_env(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: self._interpolate_env(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._interpolate_env(item) for item in value]
        if isinstance(value, str) and "${" in value:
            return _ENV_TOKEN_RE.sub(self._replace_env_token, value)
        return value

    @staticmethod
    def _replace_env_token(match: "re.Match[str]") -> str:
        name = match.group(1)
        default = match.group(2)
        resolved = os.environ.get(name)
        if resolved is not None:
            return resolved
        if default is not None:
            return default
        raise ConfigurationError(
            f"missing required environment variable '{name}' referenced by '{match.group(0)}'"
        )


def load_settings(path: str, initial_config: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Convenience function to load raw settings.

    Args:
        path: Config file or directory
        initial_config: Settings the loaded ones are merged over

    Returns:
        Merged raw settings
    """
    loaded = SettingsLoader(path).load()
    return merge_settings(initial_config or {}, loaded)
