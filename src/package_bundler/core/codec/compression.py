from __future__ import annotations

"""
Compression Codecs.

Replaceable compress/decompress pairs used by the binary artifact format.
Deflate (zlib stream) is the default; Zstandard is available through the
'zstandard' package. Decompression failures are always raised as
DecompressionError, never returned as corrupted data.
"""

import logging
import zlib
from abc import ABC, abstractmethod
from typing import Callable, Dict, List

import zstandard

from package_bundler.domain.constants import DEFAULT_CODEC
from package_bundler.domain.errors import DecompressionError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CODEC CONTRACT
# -----------------------------------------------------------------------------

class CompressionCodec(ABC):
    """Abstract compress/decompress pair."""

    name: str = ""

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        """Compress raw bytes."""

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        """
        Expand compressed bytes.

        Raises:
            DecompressionError: If data is not a valid compressed stream.
        """

# -----------------------------------------------------------------------------
# IMPLEMENTATIONS
# -----------------------------------------------------------------------------

class DeflateCodec(CompressionCodec):
    """zlib-wrapped deflate stream."""

    name = "deflate"

    def __init__(self, level: int = zlib.Z_DEFAULT_COMPRESSION):
        self.level = level

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(data, self.level)

    def decompress(self, data: bytes) -> bytes:
        try:
            return zlib.decompress(data)
        except zlib.error as e:
            raise DecompressionError(f"Invalid deflate data: {e}") from e


class ZstdCodec(CompressionCodec):
    """Zstandard frame."""

    name = "zstd"

    def __init__(self, level: int = 3):
        self.level = level

    def compress(self, data: bytes) -> bytes:
        return zstandard.ZstdCompressor(level=self.level).compress(data)

    def decompress(self, data: bytes) -> bytes:
        try:
            return zstandard.ZstdDecompressor().decompress(data)
        except zstandard.ZstdError as e:
            raise DecompressionError(f"Invalid zstd data: {e}") from e

# -----------------------------------------------------------------------------
# REGISTRY
# -----------------------------------------------------------------------------

_REGISTRY: Dict[str, Callable[[], CompressionCodec]] = {
    DeflateCodec.name: DeflateCodec,
    ZstdCodec.name: ZstdCodec,
}


def register_codec(name: str, factory: Callable[[], CompressionCodec]) -> None:
    """
    Make a codec available by name.

    Args:
        name: Identifier used in configuration and on the command line.
        factory: Zero-argument callable returning a codec instance.
    """
    _REGISTRY[name] = factory
    logger.debug(f"Registered compression codec '{name}'")


def get_codec(name: str = DEFAULT_CODEC) -> CompressionCodec:
    """
    Instantiate a registered codec.

    Raises:
        ValueError: If no codec is registered under name.
    """
    factory = _REGISTRY.get(name)
    if factory is None:
        raise ValueError(f"Unknown compression codec '{name}'. Available: {', '.join(available_codecs())}")
    return factory()


def available_codecs() -> List[str]:
    return sorted(_REGISTRY)
