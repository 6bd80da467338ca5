"""
Configuration Schema and Models

Section names, defaults, and the Pydantic models for the parts of the
configuration that have a fixed shape: logging settings and the default
embedded database descriptor.

Author: storeconf Project
License: MIT
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Section names
GLOBAL = "global"
COMMAND_PROCESSING = "command-processing"
WEB_SERVER = "web-server"
DATABASE = "database"
READ_DATABASE = "read-database"

# Web server
DEFAULT_MAX_THREADS = 50
CLIENT_AUTH_REQUIRED = "required"
PEM_REQUIRED_KEYS = ("ssl-key", "ssl-cert", "ssl-ca-cert")
LEGACY_SSL_KEYS = ("keystore", "truststore", "key-password", "trust-password")
TRUSTSTORE_CA_ALIAS = "storeconf CA"
KEYSTORE_KEY_ALIAS = "storeconf Agent Private Key"

# Read replica marker
READ_ONLY_KEY = "read-only"


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingSettings(BaseModel):
    """Logging options read from the `global` section."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", use_enum_values=True, validate_default=True
    )

    logging_config: Optional[str] = Field(
        default=None,
        alias="logging-config",
        description="Path to a YAML or JSON logging dictConfig file"
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        alias="log-level",
        description="Application logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        alias="log-file",
        description="Log file path (file logging is disabled when unset)"
    )
    log_json: bool = Field(
        default=False,
        alias="log-json",
        description="Use JSON formatting for logs"
    )
    log_rotation_size: int = Field(
        default=10485760,  # 10MB
        alias="log-rotation-size",
        description="Log file size before rotation (bytes)"
    )
    log_retention_count: int = Field(
        default=5,
        alias="log-retention-count",
        description="Number of rotated log files to keep"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("log_rotation_size", "log_retention_count")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError(f"must be positive: {v}")
        return v

    @classmethod
    def keys(cls) -> set:
        """Config keys that belong to the logging settings."""
        return {f.alias for f in cls.model_fields.values()}


class EmbeddedDatabaseConfig(BaseModel):
    """Descriptor for the default embedded database stored under vardir."""

    classname: str = "org.hsqldb.jdbcDriver"
    subprotocol: str = "hsqldb"
    subname: str

    @classmethod
    def for_vardir(cls, vardir: str) -> "EmbeddedDatabaseConfig":
        db_path = Path(vardir) / "db"
        return cls(subname=f"file:{db_path};hsqldb.tx=mvcc;sql.syntax_pgs=true")

    def as_descriptor(self) -> Dict[str, Any]:
        return self.model_dump()
