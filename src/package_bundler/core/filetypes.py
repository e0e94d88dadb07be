from __future__ import annotations

"""
File Type Table.

Maps type tags to file extensions. The same table drives type inference when
a directory is read and file naming when a bundle is extracted, so a type
that can be read can always be written back.
"""

from typing import Dict, Iterator, Mapping, Optional, Tuple

from package_bundler.domain.constants import DEFAULT_TYPES
from package_bundler.domain.models import FileEntry

# -----------------------------------------------------------------------------
# TYPE TABLE
# -----------------------------------------------------------------------------

class TypeTable:
    """
    Extensible type tag -> extension mapping.

    Extensions are stored without the leading dot and may themselves contain
    dots (e.g. 'd.ts').
    """

    def __init__(self, types: Optional[Mapping[str, str]] = None):
        self._types: Dict[str, str] = {}
        for type_, ext in (DEFAULT_TYPES if types is None else types).items():
            self.register(type_, ext)

    def register(self, type_: str, extension: Optional[str] = None) -> None:
        """
        Add or replace a type.

        Args:
            type_: Type tag stored in the bundle.
            extension: File extension. Defaults to the type tag itself.
        """
        ext = (extension or type_).lstrip(".")
        self._types[type_] = ext

    def extension_for(self, type_: str) -> Optional[str]:
        """Return the extension registered for a type, or None."""
        return self._types.get(type_)

    def type_for(self, extension: str) -> Optional[str]:
        """Return the type registered for an extension, or None."""
        for type_, ext in self._types.items():
            if ext == extension:
                return type_
        return None

    def split_filename(self, filename: str) -> Tuple[str, str]:
        """
        Split a filename into its logical name and type tag.

        The longest registered extension that ends the filename wins, so
        'index.d.ts' resolves against 'd.ts' before 'ts'. Unregistered
        extensions fall back to the text after the last dot, and a filename
        without a dot gets an empty type.

        Args:
            filename: Base name of the file.

        Returns:
            Tuple[str, str]: (name, type).
        """
        for ext in sorted(self._types.values(), key=len, reverse=True):
            suffix = "." + ext
            if filename.endswith(suffix) and len(filename) > len(suffix):
                return filename[:-len(suffix)], self.type_for(ext) or ext

        name, dot, ext = filename.rpartition(".")
        if not dot or not name:
            return filename, ""
        return name, ext

    def filename_for(self, entry: FileEntry) -> Optional[str]:
        """Return the on-disk filename for an entry, or None if its type is unknown."""
        ext = self.extension_for(entry.type)
        if ext is None:
            return None
        return f"{entry.name}.{ext}"

    def as_dict(self) -> Dict[str, str]:
        return dict(self._types)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)
