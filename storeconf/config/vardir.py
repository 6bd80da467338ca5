"""
Vardir Validation

Author: storeconf Project
License: MIT
"""

import os
from pathlib import Path
from typing import Optional

from .exceptions import (
    MissingSettingError,
    VardirNotAbsoluteError,
    VardirNotDirectoryError,
    VardirNotFoundError,
    VardirNotWritableError,
)


def validate_vardir(vardir: Optional[str]) -> str:
    """
    Check that `vardir` is specified, absolute, exists, is a directory and
    is writable. The first failing check determines the error.

    Args:
        vardir: Directory path from the `global` section

    Returns:
        The path, unchanged

    Raises:
        MissingSettingError: If vardir is not specified
        InvalidVardirError: One subclass per failed condition
    """
    if vardir is None or str(vardir) == "":
        raise MissingSettingError(
            "vardir", "Please set it to a writable directory."
        )

    path = Path(vardir)
    if not path.is_absolute():
        raise VardirNotAbsoluteError(str(vardir))
    if not path.exists():
        raise VardirNotFoundError(str(vardir))
    if not path.is_dir():
        raise VardirNotDirectoryError(str(vardir))
    if not os.access(path, os.W_OK):
        raise VardirNotWritableError(str(vardir))

    return vardir
