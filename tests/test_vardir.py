"""
Unit Tests for Vardir Validation

Author: storeconf Project
License: MIT
"""

import pytest

from storeconf.config import vardir as vardir_module
from storeconf.config.exceptions import (
    InvalidVardirError,
    MissingSettingError,
    VardirNotAbsoluteError,
    VardirNotDirectoryError,
    VardirNotFoundError,
    VardirNotWritableError,
)
from storeconf.config.vardir import validate_vardir


class TestValidateVardir:
    """Test suite for validate_vardir."""

    def test_valid_vardir_returned_unchanged(self, vardir):
        """Test that a good vardir is returned as given."""
        assert validate_vardir(vardir) == vardir

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_vardir(self, value):
        """Test that an unset vardir is a missing-setting error."""
        with pytest.raises(MissingSettingError, match="vardir"):
            validate_vardir(value)

    def test_missing_is_not_invalid(self):
        """Test that missing and invalid are distinct errors."""
        with pytest.raises(MissingSettingError) as exc_info:
            validate_vardir(None)
        assert not isinstance(exc_info.value, InvalidVardirError)

    def test_relative_path(self, tmp_path, monkeypatch):
        """Test that a relative path fails even when it exists."""
        (tmp_path / "relative" / "path").mkdir(parents=True)
        monkeypatch.chdir(tmp_path)

        with pytest.raises(VardirNotAbsoluteError, match="must be an absolute path") as exc_info:
            validate_vardir("relative/path")
        assert exc_info.value.path == "relative/path"

    def test_nonexistent_path(self, tmp_path):
        """Test that a missing directory is reported."""
        missing = str(tmp_path / "nope")

        with pytest.raises(VardirNotFoundError, match="does not exist"):
            validate_vardir(missing)

    def test_file_instead_of_directory(self, tmp_path):
        """Test that a regular file is rejected."""
        file_path = tmp_path / "file.txt"
        file_path.write_text("not a dir")

        with pytest.raises(VardirNotDirectoryError, match="is not a directory"):
            validate_vardir(str(file_path))

    def test_unwritable_directory(self, vardir, monkeypatch):
        """Test that a read-only directory is rejected."""
        monkeypatch.setattr(vardir_module.os, "access", lambda path, mode: False)

        with pytest.raises(VardirNotWritableError, match="is not writable") as exc_info:
            validate_vardir(vardir)
        assert vardir in str(exc_info.value)

    def test_check_order(self, tmp_path, monkeypatch):
        """Test that the absolute-path check runs before the existence check."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(VardirNotAbsoluteError):
            validate_vardir("does/not/exist")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
