from __future__ import annotations

"""
Bundle Error Taxonomy.

All failures raised by the codecs and the filesystem projection derive from
BundleError so callers can trap the whole family with a single clause.
"""

from typing import Optional


class BundleError(Exception):
    """Base class for every bundle failure."""


class MalformedArtifactError(BundleError):
    """
    The text stream cannot be turned back into a tree.

    Attributes:
        offset: Character offset in the stream where parsing failed, if known.
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)
        self.offset = offset


class DecompressionError(BundleError):
    """The bytes handed to a codec are not valid compressed data."""


class FilesystemError(BundleError):
    """
    An I/O operation failed.

    Attributes:
        path: Path of the file or directory involved.
    """

    def __init__(self, message: str, path: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class TreeLayoutError(BundleError):
    """A folder names a parent that is missing from the tree or is its own ancestor."""

    def __init__(self, message: str, folder: str):
        super().__init__(message)
        self.folder = folder
