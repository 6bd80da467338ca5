"""
Unit Tests for Certificate Stores

Author: storeconf Project
License: MIT
"""

import pytest
from cryptography import x509

from storeconf.config.certificates import (
    CertificateStore,
    add_ca_certificate,
    add_private_key,
    create_store,
)
from storeconf.config.exceptions import CertificateError


class TestCertificateStore:
    """Test suite for the store builder operations."""

    def test_create_store_is_empty(self):
        """Test that new stores have no entries."""
        store = create_store()

        assert isinstance(store, CertificateStore)
        assert len(store) == 0
        assert store.aliases() == []

    def test_add_ca_certificate(self, pem_files):
        """Test adding a trusted CA certificate."""
        store = add_ca_certificate(create_store(), "ca", pem_files["ssl-ca-cert"])

        assert "ca" in store
        cert = store.get_certificate("ca")
        assert isinstance(cert, x509.Certificate)
        assert "Test CA" in cert.subject.rfc4514_string()
        assert not store.entries["ca"].is_key_entry

    def test_add_private_key(self, pem_files):
        """Test adding a key entry protected by a password."""
        store = add_private_key(
            create_store(), "agent", pem_files["ssl-key"], "s3cret", pem_files["ssl-cert"]
        )

        assert store.entries["agent"].is_key_entry
        key = store.get_private_key("agent", "s3cret")
        cert = store.get_certificate("agent")
        assert key.public_key().public_numbers() == cert.public_key().public_numbers()

        chain = store.get_certificate_chain("agent")
        assert len(chain) >= 1
        assert chain[0] == cert

    def test_stored_key_is_encrypted(self, pem_files):
        """Test that the stored key cannot be read with the wrong password."""
        store = add_private_key(
            create_store(), "agent", pem_files["ssl-key"], "right", pem_files["ssl-cert"]
        )

        assert b"ENCRYPTED" in store.entries["agent"].encrypted_key
        with pytest.raises(ValueError):
            store.get_private_key("agent", "wrong")

    def test_trust_entry_has_no_key(self, pem_files):
        """Test that asking a trust entry for a key fails."""
        store = add_ca_certificate(create_store(), "ca", pem_files["ssl-ca-cert"])

        with pytest.raises(KeyError):
            store.get_private_key("ca", "anything")

    def test_missing_file(self, tmp_path):
        """Test that a missing PEM file is a configuration error."""
        with pytest.raises(CertificateError, match="missing.pem"):
            add_ca_certificate(create_store(), "ca", str(tmp_path / "missing.pem"))

    def test_garbage_certificate(self, tmp_path):
        """Test that a non-PEM file is rejected."""
        bogus = tmp_path / "bogus.pem"
        bogus.write_text("not a certificate")

        with pytest.raises(CertificateError):
            add_ca_certificate(create_store(), "ca", str(bogus))

    def test_certificate_in_place_of_key(self, pem_files):
        """Test that a certificate cannot be used as the private key."""
        with pytest.raises(CertificateError):
            add_private_key(
                create_store(), "agent", pem_files["ssl-cert"], "pw", pem_files["ssl-cert"]
            )

    def test_mismatched_key_and_certificate(self, pem_files, unrelated_key):
        """Test that a key must match its certificate."""
        with pytest.raises(CertificateError, match="does not match"):
            add_private_key(
                create_store(), "agent", unrelated_key, "pw", pem_files["ssl-cert"]
            )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
