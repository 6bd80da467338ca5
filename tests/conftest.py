"""
Shared test fixtures: throwaway PEM material and a writable vardir.

Author: storeconf Project
License: MIT
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


def _name(common_name):
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


def _make_cert(subject_key, subject_cn, issuer_key, issuer_cn, is_ca):
    now = datetime.now(timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(_name(subject_cn))
        .issuer_name(_name(issuer_cn))
        .public_key(subject_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .add_extension(x509.BasicConstraints(ca=is_ca, path_length=None), critical=True)
        .sign(issuer_key, hashes.SHA256())
    )


def _write_key(path, key):
    path.write_bytes(key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ))


def _write_cert(path, cert):
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))


@pytest.fixture
def pem_files(tmp_path):
    """CA certificate plus a server key and certificate signed by it."""
    ssl_dir = tmp_path / "ssl"
    ssl_dir.mkdir()

    ca_key = ec.generate_private_key(ec.SECP256R1())
    ca_cert = _make_cert(ca_key, "Test CA", ca_key, "Test CA", is_ca=True)
    server_key = ec.generate_private_key(ec.SECP256R1())
    server_cert = _make_cert(server_key, "server.example.com", ca_key, "Test CA", is_ca=False)

    paths = {
        "ssl-key": ssl_dir / "private.pem",
        "ssl-cert": ssl_dir / "cert.pem",
        "ssl-ca-cert": ssl_dir / "ca.pem",
    }
    _write_key(paths["ssl-key"], server_key)
    _write_cert(paths["ssl-cert"], server_cert)
    _write_cert(paths["ssl-ca-cert"], ca_cert)

    return {key: str(path) for key, path in paths.items()}


@pytest.fixture
def unrelated_key(tmp_path):
    """A private key that matches none of the certificates in pem_files."""
    path = tmp_path / "unrelated.pem"
    _write_key(path, ec.generate_private_key(ec.SECP256R1()))
    return str(path)


@pytest.fixture
def vardir(tmp_path):
    """An absolute, existing, writable directory."""
    path = tmp_path / "var"
    path.mkdir()
    return str(path)


@pytest.fixture
def restore_logging():
    """Undo handler and propagation changes made to the storeconf logger."""
    logger = logging.getLogger("storeconf")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
