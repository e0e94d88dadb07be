from __future__ import annotations

"""
Filesystem Projection.

Converts between a bundle tree and a real directory tree. Reading infers
each file's type from its extension and each folder's nesting from its
relative path; writing recreates the directories and names files from the
same type table, reporting entries whose type has no extension.
"""

import logging
import os
from typing import TYPE_CHECKING, List, Optional

from package_bundler.core.filetypes import TypeTable
from package_bundler.domain.errors import FilesystemError
from package_bundler.domain.models import BundleWarning, ExtractionResult, FileEntry
from package_bundler.infra.fs import (
    DirEntry,
    make_dirs,
    read_text,
    to_posix,
    walk_directory,
    write_text,
)

if TYPE_CHECKING:
    from package_bundler.core.bundler import PackageBundler

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DIRECTORY -> TREE
# -----------------------------------------------------------------------------

def load_directory(
        bundler: PackageBundler,
        root: str,
        type_table: Optional[TypeTable] = None,
) -> None:
    """
    Populate a bundler from the directory tree under root.

    Every directory is registered before any file is attached to it.
    Top-level directories become root folders; deeper ones keep their
    relative path and are keyed by their own name. Top-level files become
    root files; deeper files join the folder named after their parent
    directory.

    Args:
        bundler: Empty bundler receiving the entries.
        root: Directory to read.
        type_table: Table used to split filenames into name and type.

    Raises:
        FilesystemError: If root is not a directory or an entry cannot be read.
    """
    table = type_table or TypeTable()
    if not os.path.isdir(root):
        raise FilesystemError("Not a directory", root)

    entries = list(walk_directory(root))
    directories = [e for e in entries if e.is_dir]
    files = [e for e in entries if not e.is_dir]

    for entry in directories:
        parts = _relative_parts(entry, root)
        if len(parts) == 1:
            bundler.add_folder(parts[-1], [])
        else:
            bundler.add_folder(parts[-1], [], path="/".join(parts))

    for entry in files:
        parts = _relative_parts(entry, root)
        name, type_ = table.split_filename(parts[-1])
        file_entry = FileEntry(name=name, type=type_, code=read_text(entry.path))

        if len(parts) == 1:
            bundler.add_file(file_entry.name, file_entry.type, file_entry.code)
        else:
            bundler.folders[parts[-2]].files.append(file_entry)

    logger.debug(
        f"Loaded {len(files)} files and {len(directories)} directories from {root}"
    )


def _relative_parts(entry: DirEntry, root: str) -> List[str]:
    return to_posix(os.path.relpath(entry.path, root)).split("/")

# -----------------------------------------------------------------------------
# TREE -> DIRECTORY
# -----------------------------------------------------------------------------

def write_directory(
        bundler: PackageBundler,
        output_path: str,
        type_table: Optional[TypeTable] = None,
) -> ExtractionResult:
    """
    Materialize a bundler onto disk under output_path.

    Folders are created first (with their files), then root files. Files
    whose type is not in the table are not written and are reported in the
    result. Files already written stay on disk if a later write fails.

    Args:
        bundler: Tree to write.
        output_path: Destination root directory.
        type_table: Table mapping types to file extensions.

    Returns:
        ExtractionResult: Written paths and skipped entries.

    Raises:
        FilesystemError: If a directory or file cannot be written.
    """
    table = type_table or TypeTable()
    result = ExtractionResult(output_path=output_path)

    make_dirs(output_path)

    for folder in bundler.folders.values():
        directory = os.path.join(output_path, *folder.location.split("/"))
        make_dirs(directory)
        for entry in folder.files:
            _write_entry(directory, entry, table, result, f"{folder.location}/{entry.name}")

    for entry in bundler.files.values():
        _write_entry(output_path, entry, table, result, entry.name)

    logger.debug(f"Extracted {len(result.written)} files to {output_path}")
    return result


def _write_entry(
        directory: str,
        entry: FileEntry,
        table: TypeTable,
        result: ExtractionResult,
        label: str,
) -> None:
    filename = table.filename_for(entry)
    if filename is None:
        warning = BundleWarning(
            "unsupported_type", label, f"No extension registered for type '{entry.type}'"
        )
        logger.warning(f"Skipping {label}: {warning.detail}")
        result.skipped.append(warning)
        return

    target = os.path.join(directory, filename)
    write_text(target, entry.code or "")
    result.written.append(target)
