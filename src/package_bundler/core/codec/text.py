from __future__ import annotations

"""
Canonical Text Codec.

Serializes a bundle tree to a flat stream of '<<...>>' markers and parses the
stream back. Every marker is either a header ('name=N type=T [folder=F]
[size=S]') or the payload of the file header right before it. Folder nesting
is expressed by naming the parent folder, so the stream must list a parent
before its children; the parser relies on that order and rejects streams that
break it.

Example stream:

    <<name=readme type=json>>
    <<{}>>
    <<name=src type=folder>>
    <<name=index type=ts folder=src>>
    <<export default 1>>
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, NamedTuple, Optional

from package_bundler.domain.constants import (
    FOLDER_TYPE,
    KEY_FOLDER,
    KEY_NAME,
    KEY_SIZE,
    KEY_TYPE,
    MARKER_CLOSE,
    MARKER_OPEN,
    MARKER_SEPARATOR,
)
from package_bundler.domain.errors import MalformedArtifactError, TreeLayoutError
from package_bundler.domain.models import BundleWarning, FileEntry, FolderEntry

logger = logging.getLogger(__name__)

_HEADER_MARK = f"{KEY_NAME}="

# -----------------------------------------------------------------------------
# DATA STRUCTURES
# -----------------------------------------------------------------------------

class _Marker(NamedTuple):
    """Content of one '<<...>>' marker and the offset of its opening bracket."""
    text: str
    offset: int


class _Header(NamedTuple):
    name: str
    type: str
    folder: Optional[str]
    size: Optional[int]


@dataclass
class DecodedTree:
    """
    Result of parsing a text stream.

    Attributes:
        files: Root files by name, in stream order.
        folders: Folders by name, in stream order.
        warnings: Entries overwritten by a later marker with the same name.
    """
    files: Dict[str, FileEntry] = field(default_factory=dict)
    folders: Dict[str, FolderEntry] = field(default_factory=dict)
    warnings: List[BundleWarning] = field(default_factory=list)

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def serialize(
        files: Mapping[str, FileEntry],
        folders: Mapping[str, FolderEntry],
        *,
        sized: bool = False,
) -> str:
    """
    Render a tree as a marker stream.

    Root files come first, then each folder header followed by its files.
    Folders keep insertion order except that a parent always precedes its
    children.

    Payloads that would end their marker early (they contain '>>' or end
    with '>') and files typed 'folder' get a 'size=' key even when sized is
    False; every other header keeps the plain layout.

    Args:
        files: Root files keyed by name.
        folders: Folders keyed by name.
        sized: Emit a 'size=' key on every file header.

    Returns:
        str: The canonical text artifact.

    Raises:
        TreeLayoutError: If a folder's parent is not in folders, or folders
            name each other as parents in a cycle.
    """
    parts: List[str] = []

    for name, entry in files.items():
        _append_file(parts, name, entry, None, sized)

    for name in _parent_first(folders):
        folder = folders[name]
        parts.append(_marker(_header_text(name, FOLDER_TYPE, folder.parent, None)))
        for entry in folder.files:
            _append_file(parts, entry.name, entry, name, sized)

    return "".join(parts)


def _parent_first(folders: Mapping[str, FolderEntry]) -> List[str]:
    """Order folder names so each parent comes before its children (stable)."""
    ordered: List[str] = []
    # False while a folder's ancestors are being resolved, True once emitted
    done: Dict[str, bool] = {}

    def visit(name: str) -> None:
        state = done.get(name)
        if state:
            return
        if state is False:
            raise TreeLayoutError(f"Folder '{name}' is its own ancestor", name)

        done[name] = False
        parent = folders[name].parent
        if parent is not None:
            if parent not in folders:
                raise TreeLayoutError(
                    f"Folder '{name}' names parent '{parent}' which is not in the tree", name
                )
            visit(parent)
        done[name] = True
        ordered.append(name)

    for name in folders:
        visit(name)
    return ordered


def _append_file(
        parts: List[str],
        name: str,
        entry: FileEntry,
        folder: Optional[str],
        sized: bool,
) -> None:
    code = entry.code or ""
    size = len(code) if sized or _needs_size(entry.type, code) else None
    parts.append(_marker(_header_text(name, entry.type, folder, size)))
    parts.append(_marker(code))


def _needs_size(type_: str, code: str) -> bool:
    """True when an unsized header would misread this payload or this file."""
    if type_ == FOLDER_TYPE:
        return True
    return (code + MARKER_CLOSE).find(MARKER_CLOSE) != len(code)


def _header_text(name: str, type_: str, folder: Optional[str], size: Optional[int]) -> str:
    text = f"{KEY_NAME}={name} {KEY_TYPE}={type_}"
    if folder:
        text += f" {KEY_FOLDER}={folder}"
    if size is not None:
        text += f" {KEY_SIZE}={size}"
    return text


def _marker(content: str) -> str:
    return f"{MARKER_OPEN}{content}{MARKER_CLOSE}{MARKER_SEPARATOR}"

# -----------------------------------------------------------------------------
# PARSING
# -----------------------------------------------------------------------------

def parse(text: str) -> DecodedTree:
    """
    Rebuild a tree from a marker stream in a single forward pass.

    Markers that are not headers are skipped when a header is expected. A
    file header always takes the next marker as its payload, so payload text
    is never mistaken for a header.

    Args:
        text: Canonical text artifact.

    Returns:
        DecodedTree: Files, folders and overwrite warnings.

    Raises:
        MalformedArtifactError: If the stream has no markers, a marker is not
            terminated, a header lacks its name or type, a folder reference
            points to a folder not declared earlier, or a payload is missing.
    """
    tree = DecodedTree()
    if not text.strip():
        return tree

    scanner = _Scanner(text)
    seen_marker = False

    while True:
        marker = scanner.next_marker()
        if marker is None:
            break
        seen_marker = True

        if _HEADER_MARK not in marker.text:
            logger.debug(f"Skipping stray marker at offset {marker.offset}")
            continue

        header = _parse_header(marker)

        # A sized 'folder' header is a file whose type happens to be 'folder'
        if header.type == FOLDER_TYPE and header.size is None:
            _register_folder(tree, header, marker.offset)
            continue

        payload = scanner.next_payload(header.size)
        if payload is None:
            raise MalformedArtifactError(
                f"File '{header.name}' has no payload marker", marker.offset
            )
        _register_file(tree, header, payload, marker.offset)

    if not seen_marker:
        raise MalformedArtifactError("No markers found in text artifact")

    logger.debug(f"Parsed {len(tree.files)} root files and {len(tree.folders)} folders")
    return tree


def _register_folder(tree: DecodedTree, header: _Header, offset: int) -> None:
    if header.folder is None:
        folder = FolderEntry(name=header.name)
    else:
        parent = tree.folders.get(header.folder)
        if parent is None:
            raise MalformedArtifactError(
                f"Folder '{header.name}' references undeclared parent '{header.folder}'",
                offset,
            )
        folder = FolderEntry(name=header.name, path=f"{parent.location}/{header.name}")

    if header.name in tree.folders:
        tree.warnings.append(BundleWarning(
            "overwrite", header.name, f"Folder '{header.name}' declared twice; keeping the last one"
        ))
    tree.folders[header.name] = folder


def _register_file(tree: DecodedTree, header: _Header, payload: str, offset: int) -> None:
    entry = FileEntry(name=header.name, type=header.type, code=payload)

    if header.folder is None:
        if header.name in tree.files:
            tree.warnings.append(BundleWarning(
                "overwrite", header.name, f"Root file '{header.name}' declared twice; keeping the last one"
            ))
        tree.files[header.name] = entry
        return

    owner = tree.folders.get(header.folder)
    if owner is None:
        raise MalformedArtifactError(
            f"File '{header.name}' references undeclared folder '{header.folder}'", offset
        )
    owner.files.append(entry)


def _parse_header(marker: _Marker) -> _Header:
    name = _header_value(marker.text, KEY_NAME)
    type_ = _header_value(marker.text, KEY_TYPE)
    if not name:
        raise MalformedArtifactError("Header has an empty name", marker.offset)
    if not type_:
        raise MalformedArtifactError(f"Header '{name}' has no type", marker.offset)

    folder = _header_value(marker.text, KEY_FOLDER) or None

    size: Optional[int] = None
    raw_size = _header_value(marker.text, KEY_SIZE)
    if raw_size is not None:
        if not raw_size.isdigit():
            raise MalformedArtifactError(f"Header '{name}' has invalid size '{raw_size}'", marker.offset)
        size = int(raw_size)

    return _Header(name, type_, folder, size)


def _header_value(text: str, key: str) -> Optional[str]:
    """Return the value following 'key=' up to the next whitespace, or None."""
    match = re.search(rf"(?:^|\s){key}=(\S*)", text)
    return match.group(1) if match else None

# -----------------------------------------------------------------------------
# SCANNER
# -----------------------------------------------------------------------------

class _Scanner:
    """Cursor over the stream returning one marker at a time."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def next_marker(self) -> Optional[_Marker]:
        """Return the next delimited marker, or None at end of stream."""
        start = self._text.find(MARKER_OPEN, self._pos)
        if start < 0:
            self._pos = len(self._text)
            return None

        content_start = start + len(MARKER_OPEN)
        end = self._text.find(MARKER_CLOSE, content_start)
        if end < 0:
            raise MalformedArtifactError("Unterminated marker", start)

        self._pos = end + len(MARKER_CLOSE)
        return _Marker(self._text[content_start:end], start)

    def next_payload(self, size: Optional[int]) -> Optional[str]:
        """
        Return the payload following a file header.

        With a size, exactly that many characters are taken and must be
        followed by the closing bracket; otherwise the next marker is used.
        """
        if size is None:
            marker = self.next_marker()
            return None if marker is None else marker.text

        start = self._text.find(MARKER_OPEN, self._pos)
        if start < 0:
            return None

        content_start = start + len(MARKER_OPEN)
        end = content_start + size
        if not self._text.startswith(MARKER_CLOSE, end):
            raise MalformedArtifactError(
                f"Payload does not match its declared size of {size}", start
            )

        self._pos = end + len(MARKER_CLOSE)
        return self._text[content_start:end]
