from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Thin blocking wrappers over the 'os' module used by the projection and the
artifact I/O. Every OSError is re-raised as FilesystemError carrying the
offending path so callers never have to guess which entry failed.
"""

import os
from typing import Iterator, NamedTuple, Optional

from package_bundler.domain.constants import ENCODING
from package_bundler.domain.errors import FilesystemError

# -----------------------------------------------------------------------------
# DATA STRUCTURES
# -----------------------------------------------------------------------------

class DirEntry(NamedTuple):
    """A path discovered during a recursive walk."""
    path: str
    is_dir: bool

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def to_posix(rel_path: str) -> str:
    """Convert an OS-specific relative path to forward-slash form."""
    return rel_path.replace(os.sep, "/")

# -----------------------------------------------------------------------------
# DIRECTORY API
# -----------------------------------------------------------------------------

def walk_directory(root: str) -> Iterator[DirEntry]:
    """
    Lazily enumerate every entry under root in pre-order.

    A directory is yielded before its contents. Entries are sorted by name at
    each level so the discovery order does not depend on the platform.

    Args:
        root: Directory to traverse.

    Yields:
        DirEntry: Absolute path and directory flag of each entry.

    Raises:
        FilesystemError: If a directory cannot be listed.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise FilesystemError("Cannot list directory", root) from e

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield DirEntry(entry.path, True)
            yield from walk_directory(entry.path)
        else:
            yield DirEntry(entry.path, False)


def make_dirs(path: str) -> None:
    """
    Recursively create a directory, succeeding if it already exists.

    Raises:
        FilesystemError: If the directory cannot be created.
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FilesystemError("Cannot create directory", path) from e

# -----------------------------------------------------------------------------
# FILE API
# -----------------------------------------------------------------------------

def read_text(path: str) -> str:
    """
    Read a whole text file.

    Undecodable byte sequences are replaced rather than aborting the read.

    Raises:
        FilesystemError: If the file cannot be read.
    """
    try:
        with open(path, "r", encoding=ENCODING, errors="replace", newline="") as f:
            return f.read()
    except OSError as e:
        raise FilesystemError("Cannot read file", path) from e


def write_text(path: str, content: str) -> None:
    """
    Write a whole text file, replacing any existing content.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding=ENCODING, newline="") as f:
            f.write(content)
    except OSError as e:
        raise FilesystemError("Cannot write file", path) from e


def read_bytes(path: str) -> bytes:
    """
    Read a whole binary file.

    Raises:
        FilesystemError: If the file cannot be read.
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FilesystemError("Cannot read file", path) from e


def write_bytes(path: str, data: bytes) -> None:
    """
    Write a whole binary file, replacing any existing content.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise FilesystemError("Cannot write file", path) from e
