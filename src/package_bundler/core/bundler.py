from __future__ import annotations

"""
Package Bundler.

In-memory bundle tree (root files plus a flat mapping of folders) and the
entry points that move it between its three representations: canonical
text, compressed bytes and a directory on disk.
"""

import logging
from typing import Dict, Iterable, List, Optional

from package_bundler.core import projection
from package_bundler.core.codec import text as text_codec
from package_bundler.core.codec.compression import CompressionCodec, get_codec
from package_bundler.core.filetypes import TypeTable
from package_bundler.domain.constants import ENCODING, KIND_BIN, KIND_STRING
from package_bundler.domain.errors import MalformedArtifactError
from package_bundler.domain.models import (
    BundleWarning,
    ExtractionResult,
    FileEntry,
    FolderEntry,
)
from package_bundler.infra.fs import read_bytes, read_text, write_bytes, write_text

logger = logging.getLogger(__name__)


class PackageBundler:
    """
    A tree of named, typed text files grouped into folders.

    Root files and folders are kept in two insertion-ordered mappings. Folder
    nesting is not stored structurally: a nested folder carries its relative
    path and names its parent through it.
    """

    def __init__(self) -> None:
        self.files: Dict[str, FileEntry] = {}
        self.folders: Dict[str, FolderEntry] = {}
        self.warnings: List[BundleWarning] = []

    # -------------------------------------------------------------------------
    # TREE MODEL
    # -------------------------------------------------------------------------

    def add_file(self, name: str, type: str, code: Optional[str] = None) -> None:
        """Insert a root file, replacing any root file with the same name."""
        if name in self.files:
            self._warn_overwrite("file", name)
        self.files[name] = FileEntry(name=name, type=type, code=code)

    def add_folder(
            self,
            name: str,
            files: Iterable[FileEntry],
            path: Optional[str] = None,
    ) -> None:
        """Insert a folder, replacing any folder with the same name."""
        if name in self.folders:
            self._warn_overwrite("folder", name)
        self.folders[name] = FolderEntry(name=name, files=list(files), path=path)

    def _warn_overwrite(self, kind: str, name: str) -> None:
        detail = f"Duplicate {kind} name '{name}'; previous entry replaced"
        logger.warning(detail)
        self.warnings.append(BundleWarning("overwrite", name, detail))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageBundler):
            return NotImplemented
        return self.files == other.files and self.folders == other.folders

    def __repr__(self) -> str:
        return f"PackageBundler(files={len(self.files)}, folders={len(self.folders)})"

    # -------------------------------------------------------------------------
    # TEXT CODEC
    # -------------------------------------------------------------------------

    def to_string(self, sized: bool = False) -> str:
        """
        Serialize the tree to the canonical marker stream.

        Raises:
            TreeLayoutError: If a folder's parent is missing or cyclic.
        """
        return text_codec.serialize(self.files, self.folders, sized=sized)

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def from_string(cls, text: str) -> PackageBundler:
        """
        Parse a canonical marker stream.

        Raises:
            MalformedArtifactError: If the stream cannot be reconstructed.
        """
        decoded = text_codec.parse(text)
        bundler = cls()
        bundler.files = decoded.files
        bundler.folders = decoded.folders
        bundler.warnings = decoded.warnings
        for warning in decoded.warnings:
            logger.warning(warning.detail)
        return bundler

    # -------------------------------------------------------------------------
    # BINARY CODEC
    # -------------------------------------------------------------------------

    def to_buffer(self, compress: bool = True, codec: Optional[CompressionCodec] = None) -> bytes:
        """
        Encode the tree as bytes.

        Args:
            compress: Compress the UTF-8 text. Without compression the result
                cannot be read back with from_buffer.
            codec: Compression codec. Defaults to deflate.
        """
        data = self.to_string().encode(ENCODING)
        if not compress:
            return data
        return (codec or get_codec()).compress(data)

    @classmethod
    def from_buffer(cls, data: bytes, codec: Optional[CompressionCodec] = None) -> PackageBundler:
        """
        Decode compressed bytes produced by to_buffer.

        Raises:
            DecompressionError: If data is not compressed with codec.
            MalformedArtifactError: If the decompressed text is not UTF-8 or
                cannot be parsed.
        """
        raw = (codec or get_codec()).decompress(data)
        try:
            text = raw.decode(ENCODING)
        except UnicodeDecodeError as e:
            raise MalformedArtifactError(f"Artifact is not valid {ENCODING} text", e.start) from e
        return cls.from_string(text)

    # -------------------------------------------------------------------------
    # ARTIFACT FILES
    # -------------------------------------------------------------------------

    def bundle(
            self,
            path: str,
            kind: str = KIND_BIN,
            compression: bool = True,
            codec: Optional[CompressionCodec] = None,
            sized: bool = False,
    ) -> None:
        """
        Write the artifact to a file.

        Args:
            path: Destination file.
            kind: 'string' for the text artifact, 'bin' for bytes.
            compression: Compress a 'bin' artifact.
            codec: Compression codec for 'bin' artifacts.
            sized: Emit payload sizes in a 'string' artifact.

        Raises:
            ValueError: If kind is unknown.
            FilesystemError: If the file cannot be written.
        """
        if kind == KIND_STRING:
            write_text(path, self.to_string(sized=sized))
        elif kind == KIND_BIN:
            write_bytes(path, self.to_buffer(compression, codec))
        else:
            raise ValueError(f"Unknown artifact kind '{kind}'")
        logger.info(f"Bundle written to {path} ({kind})")

    @classmethod
    def load(
            cls,
            path: str,
            kind: str = KIND_BIN,
            codec: Optional[CompressionCodec] = None,
    ) -> PackageBundler:
        """
        Read an artifact written by bundle.

        Raises:
            ValueError: If kind is unknown.
            FilesystemError: If the file cannot be read.
        """
        if kind == KIND_STRING:
            return cls.from_string(read_text(path))
        if kind == KIND_BIN:
            return cls.from_buffer(read_bytes(path), codec)
        raise ValueError(f"Unknown artifact kind '{kind}'")

    # -------------------------------------------------------------------------
    # FILESYSTEM PROJECTION
    # -------------------------------------------------------------------------

    @classmethod
    def from_path(cls, path: str, type_table: Optional[TypeTable] = None) -> PackageBundler:
        """
        Build a tree from the directory at path.

        Raises:
            FilesystemError: If the directory or one of its files cannot be read.
        """
        bundler = cls()
        projection.load_directory(bundler, path, type_table)
        return bundler

    def extract(self, path: str, type_table: Optional[TypeTable] = None) -> ExtractionResult:
        """
        Write the tree as files and directories under path.

        Raises:
            FilesystemError: If a directory or file cannot be written.
        """
        return projection.write_directory(self, path, type_table)
