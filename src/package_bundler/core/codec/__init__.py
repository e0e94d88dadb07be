from __future__ import annotations

from .compression import (
    CompressionCodec,
    DeflateCodec,
    ZstdCodec,
    available_codecs,
    get_codec,
    register_codec,
)
from .text import DecodedTree, parse, serialize

__all__ = [
    "CompressionCodec",
    "DecodedTree",
    "DeflateCodec",
    "ZstdCodec",
    "available_codecs",
    "get_codec",
    "parse",
    "register_codec",
    "serialize",
]
