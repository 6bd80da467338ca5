"""
File Operation Utilities

Small helpers for checking and reading configuration inputs.

Author: storeconf Project
License: MIT
"""

import os
from pathlib import Path
from typing import List, Sequence

from .logger import get_logger

logger = get_logger(__name__)


def is_readable(path: str) -> bool:
    """
    Check that a file or directory exists and can be read by this process.

    Args:
        path: File or directory path

    Returns:
        True if readable
    """
    return os.path.exists(path) and os.access(path, os.R_OK)


def read_file_bytes(file_path: str) -> bytes:
    """
    Read a whole file.

    Raises:
        FileNotFoundError: If file doesn't exist
        OSError: If the file cannot be read
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(file_path, 'rb') as f:
        return f.read()


def list_files(directory: str, extensions: Sequence[str]) -> List[Path]:
    """
    List regular files in `directory` with one of `extensions`, sorted by name.

    Args:
        directory: Directory to scan (not recursive)
        extensions: Extensions to include, lowercase without dots

    Returns:
        Sorted list of matching paths
    """
    matches = [
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower().lstrip('.') in extensions
    ]
    logger.debug(f"Found {len(matches)} config file(s) in {directory}")
    return sorted(matches, key=lambda p: p.name)
