"""Bundle trees of named, typed text files into a single markered artifact."""

from package_bundler.core.bundler import PackageBundler
from package_bundler.core.codec.compression import (
    CompressionCodec,
    DeflateCodec,
    ZstdCodec,
    get_codec,
    register_codec,
)
from package_bundler.core.filetypes import TypeTable
from package_bundler.domain.errors import (
    BundleError,
    DecompressionError,
    FilesystemError,
    MalformedArtifactError,
    TreeLayoutError,
)
from package_bundler.domain.models import (
    BundleWarning,
    ExtractionResult,
    FileEntry,
    FolderEntry,
)

__version__ = "0.1.0"

__all__ = [
    "BundleError",
    "BundleWarning",
    "CompressionCodec",
    "DecompressionError",
    "DeflateCodec",
    "ExtractionResult",
    "FileEntry",
    "FilesystemError",
    "FolderEntry",
    "MalformedArtifactError",
    "PackageBundler",
    "TreeLayoutError",
    "TypeTable",
    "ZstdCodec",
    "get_codec",
    "register_codec",
]
