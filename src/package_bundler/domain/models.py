from __future__ import annotations

"""
Bundle Tree Data Models.

Defines the flat structures used to hold a bundle in memory: root files,
folders (nesting is expressed only through a slash-separated path string)
and the records used to report non-fatal data loss.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# TREE COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """
    A named, typed text file.

    Attributes:
        name: Logical file name without extension.
        type: Content-kind tag (e.g. 'json', 'ts').
        code: Text payload. None until loaded.
    """
    name: str
    type: str
    code: Optional[str] = None


@dataclass
class FolderEntry:
    """
    A folder holding an ordered list of files.

    Attributes:
        name: Folder name, unique across the whole tree.
        files: Files owned by this folder, in insertion order.
        path: Relative slash-separated path. Present only for nested folders.
    """
    name: str
    files: List[FileEntry] = field(default_factory=list)
    path: Optional[str] = None

    @property
    def parent(self) -> Optional[str]:
        """Name of the enclosing folder, resolved from the path."""
        if not self.path:
            return None
        segments = self.path.split("/")
        if len(segments) < 2:
            return None
        return segments[-2]

    @property
    def location(self) -> str:
        """Relative directory this folder materializes to."""
        return self.path or self.name

# -----------------------------------------------------------------------------
# REPORTING MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BundleWarning:
    """
    Non-fatal condition detected while building or extracting a bundle.

    Attributes:
        kind: Category identifier ('overwrite', 'unsupported_type').
        name: Entry the warning refers to.
        detail: Human readable description.
    """
    kind: str
    name: str
    detail: str


@dataclass
class ExtractionResult:
    """
    Outcome of materializing a bundle onto disk.

    Attributes:
        output_path: Root directory that received the files.
        written: Paths of the files written, in write order.
        skipped: Entries that were not written.
    """
    output_path: str
    written: List[str] = field(default_factory=list)
    skipped: List[BundleWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped
