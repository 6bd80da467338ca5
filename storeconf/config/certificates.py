"""
Certificate Stores

In-memory key and trust stores built from PEM files. A store maps an alias
to a certificate chain and, for key entries, a private key kept encrypted
under the password it was added with.

Author: storeconf Project
License: MIT
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from ..utils.file_ops import read_file_bytes
from ..utils.logger import get_logger
from .exceptions import CertificateError

logger = get_logger(__name__)


@dataclass
class StoreEntry:
    """A single alias in a certificate store."""
    certificates: List[x509.Certificate]
    encrypted_key: Optional[bytes] = None

    @property
    def is_key_entry(self) -> bool:
        return self.encrypted_key is not None


@dataclass
class CertificateStore:
    """
    In-memory certificate store.

    Trust entries hold a single CA certificate; key entries hold a private
    key (PKCS#8, encrypted) together with its certificate chain.
    """
    entries: Dict[str, StoreEntry] = field(default_factory=dict)

    def aliases(self) -> List[str]:
        return sorted(self.entries)

    def __contains__(self, alias: str) -> bool:
        return alias in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get_certificate(self, alias: str) -> x509.Certificate:
        return self.entries[alias].certificates[0]

    def get_certificate_chain(self, alias: str) -> List[x509.Certificate]:
        return list(self.entries[alias].certificates)

    def get_private_key(self, alias: str, password: str):
        """
        Decrypt and return the private key stored under `alias`.

        Raises:
            KeyError: If the alias has no key entry
            ValueError: If the password is wrong
        """
        entry = self.entries[alias]
        if not entry.is_key_entry:
            raise KeyError(f"{alias} is not a key entry")
        return serialization.load_pem_private_key(
            entry.encrypted_key, password=password.encode("utf-8")
        )


def create_store() -> CertificateStore:
    """Build an empty store."""
    return CertificateStore()


def _load_certificates(path: str) -> List[x509.Certificate]:
    try:
        data = read_file_bytes(path)
    except OSError as e:
        raise CertificateError(path, str(e)) from e

    try:
        certificates = x509.load_pem_x509_certificates(data)
    except ValueError as e:
        raise CertificateError(path, f"no PEM certificate found ({e})") from e
    return certificates


def _load_private_key(path: str):
    try:
        data = read_file_bytes(path)
    except OSError as e:
        raise CertificateError(path, str(e)) from e

    try:
        return serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as e:
        raise CertificateError(path, f"no unencrypted PEM private key found ({e})") from e


def _public_bytes(public_key) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def add_ca_certificate(store: CertificateStore, alias: str, cert_path: str) -> CertificateStore:
    """
    Add the CA certificate in `cert_path` to `store` under `alias`.

    Returns:
        The same store, for chaining
    """
    certificates = _load_certificates(cert_path)
    store.entries[alias] = StoreEntry(certificates=certificates[:1])
    logger.debug(f"Added CA certificate {cert_path} as '{alias}'")
    return store


def add_private_key(
    store: CertificateStore,
    alias: str,
    key_path: str,
    password: str,
    cert_path: str
) -> CertificateStore:
    """
    Add a private key and its certificate chain to `store`.

    The key is re-encrypted with `password` before it is stored.

    Args:
        store: Store to add to
        alias: Entry alias
        key_path: PEM private key file
        password: Password protecting the stored key
        cert_path: PEM certificate (chain) file matching the key

    Returns:
        The same store, for chaining

    Raises:
        CertificateError: If either file cannot be loaded or they do not match
    """
    key = _load_private_key(key_path)
    certificates = _load_certificates(cert_path)

    if _public_bytes(key.public_key()) != _public_bytes(certificates[0].public_key()):
        raise CertificateError(
            cert_path, f"certificate does not match private key {key_path}"
        )

    encrypted_key = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.BestAvailableEncryption(password.encode("utf-8")),
    )
    store.entries[alias] = StoreEntry(
        certificates=certificates, encrypted_key=encrypted_key
    )
    logger.debug(f"Added private key {key_path} with certificate {cert_path} as '{alias}'")
    return store
