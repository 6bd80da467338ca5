"""
Web Server Configuration

Resolves the web server's SSL settings and thread floor. SSL can be given
either as legacy keystore settings, which pass through untouched, or as
three PEM files, which are turned into in-memory certificate stores.

Author: storeconf Project
License: MIT
"""

import secrets
from typing import Any, Dict, Optional

from ..utils.logger import get_logger
from ..utils.system import num_cpus
from .certificates import add_ca_certificate, add_private_key, create_store
from .exceptions import ConfigurationError, InvalidSSLConfigurationError
from .schema import (
    CLIENT_AUTH_REQUIRED,
    DEFAULT_MAX_THREADS,
    KEYSTORE_KEY_ALIAS,
    LEGACY_SSL_KEYS,
    PEM_REQUIRED_KEYS,
    TRUSTSTORE_CA_ALIAS,
    WEB_SERVER,
)

logger = get_logger(__name__)


def _check_no_pem_keys(section: Dict[str, Any]) -> None:
    leftover = [k for k in PEM_REQUIRED_KEYS if k in section]
    if leftover:
        raise ConfigurationError(
            f"web-server section still holds raw PEM settings: {', '.join(leftover)}"
        )


def configure_web_server_ssl_from_pems(web_server: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace PEM-based SSL settings with in-memory key and trust stores.

    Any keystore-based settings in the section are dropped in favour of the
    PEM files, with a warning.

    Args:
        web_server: Web-server section holding `ssl-key`, `ssl-cert` and `ssl-ca-cert`

    Returns:
        New section with `keystore`, `truststore` and `key-password`, and
        without the PEM keys or `trust-password`
    """
    missing = [k for k in PEM_REQUIRED_KEYS if not web_server.get(k)]
    if missing:
        raise InvalidSSLConfigurationError(
            [k for k in PEM_REQUIRED_KEYS if k not in missing], PEM_REQUIRED_KEYS
        )

    old_ssl_config = [k for k in LEGACY_SSL_KEYS if k in web_server]
    if old_ssl_config:
        logger.warning(
            "Found settings for both keystore-based and PEM-based SSL; using "
            f"PEM-based settings, ignoring {', '.join(old_ssl_config)}"
        )

    truststore = add_ca_certificate(
        create_store(), TRUSTSTORE_CA_ALIAS, web_server["ssl-ca-cert"]
    )
    key_password = secrets.token_urlsafe(32)
    keystore = add_private_key(
        create_store(),
        KEYSTORE_KEY_ALIAS,
        web_server["ssl-key"],
        key_password,
        web_server["ssl-cert"],
    )

    result = {
        k: v for k, v in web_server.items()
        if k not in PEM_REQUIRED_KEYS and k != "trust-password"
    }
    result["keystore"] = keystore
    result["key-password"] = key_password
    result["truststore"] = truststore
    return result


def minimum_threads(threads: int, min_threads: Optional[int] = None) -> int:
    """
    Enforce a floor on the web server's worker thread count.

    Some web server runtimes block when max-threads is below the number of
    CPUs, so anything under `cpu_count + 1` is raised to that floor with a
    warning.

    Args:
        threads: Configured max-threads
        min_threads: Floor; defaults to the CPU count plus one

    Returns:
        `threads`, or the floor if `threads` is below it
    """
    if min_threads is None:
        min_threads = num_cpus() + 1

    if isinstance(threads, bool) or not isinstance(threads, int) or threads <= 0:
        raise ConfigurationError(
            f"web-server max-threads must be a positive integer, got {threads!r}"
        )
    if min_threads <= 0:
        raise ConfigurationError(f"minimum thread count must be positive, got {min_threads}")

    if threads < min_threads:
        logger.warning(
            f"max-threads = {threads} is less than the minimum allowed on this system "
            f"for the web server to operate. This will be automatically increased to "
            f"the safe minimum: {min_threads}"
        )
        return min_threads
    return threads


def configure_web_server(
    config: Dict[str, Any],
    cpu_count: Optional[int] = None
) -> Dict[str, Any]:
    """
    Resolve the `web-server` section.

    PEM settings must be given all together or not at all. Client auth is
    always required, and max-threads (default 50) is raised to the thread
    floor when needed.

    Args:
        config: Configuration value
        cpu_count: Processor count; detected from the host if None

    Returns:
        New configuration value with a resolved `web-server` section

    Raises:
        InvalidSSLConfigurationError: If only some PEM settings are present
    """
    if cpu_count is None:
        cpu_count = num_cpus()

    web_server = dict(config.get(WEB_SERVER) or {})
    pem_config = [k for k in PEM_REQUIRED_KEYS if k in web_server]

    if len(pem_config) == len(PEM_REQUIRED_KEYS):
        web_server = configure_web_server_ssl_from_pems(web_server)
    elif pem_config:
        raise InvalidSSLConfigurationError(pem_config, PEM_REQUIRED_KEYS)

    max_threads = web_server.get("max-threads")
    if max_threads is None:
        max_threads = DEFAULT_MAX_THREADS

    web_server["client-auth"] = CLIENT_AUTH_REQUIRED
    web_server["max-threads"] = minimum_threads(max_threads, cpu_count + 1)

    _check_no_pem_keys(web_server)
    return {**config, WEB_SERVER: web_server}
