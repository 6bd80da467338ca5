"""
Database Defaults

Author: storeconf Project
License: MIT
"""

from typing import Any, Dict

from ..utils.logger import get_logger
from .schema import DATABASE, GLOBAL, READ_DATABASE, READ_ONLY_KEY, EmbeddedDatabaseConfig
from .vardir import validate_vardir

logger = get_logger(__name__)


def default_db_config(global_section: Dict[str, Any]) -> Dict[str, Any]:
    """
    Descriptor for the embedded database stored under `<vardir>/db`.

    Raises:
        MissingSettingError: If vardir is not set
        InvalidVardirError: If vardir is not a usable directory
    """
    vardir = validate_vardir((global_section or {}).get("vardir"))
    return EmbeddedDatabaseConfig.for_vardir(vardir).as_descriptor()


def configure_database(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Ensure both a write and a read-only database descriptor exist.

    If any part of the database settings is given (e.g. classname but not
    subprotocol) no defaults are filled in. The read database defaults to a
    copy of the write database and is always marked read-only.

    Args:
        config: Configuration value

    Returns:
        New configuration value with `database` and `read-database` set
    """
    write_db = config.get(DATABASE)
    if not write_db:
        write_db = default_db_config(config.get(GLOBAL))
        logger.info(f"Using default embedded database: {write_db['subname']}")
    write_db = {k: v for k, v in write_db.items() if k != READ_ONLY_KEY}

    read_db = config.get(READ_DATABASE) or write_db
    read_db = {**read_db, READ_ONLY_KEY: True}

    return {**config, DATABASE: write_db, READ_DATABASE: read_db}
