from __future__ import annotations

"""
Unit tests for the Binary Codec and compression registry.

Verifies:
1. Compressed round trips with every built-in codec.
2. The encode/decode asymmetry: uncompressed buffers are rejected.
3. Explicit failures on corrupted or non-UTF-8 data.
"""

import zlib

import pytest

from package_bundler.core.bundler import PackageBundler
from package_bundler.core.codec import compression
from package_bundler.core.codec.compression import (
    CompressionCodec,
    DeflateCodec,
    ZstdCodec,
    available_codecs,
    get_codec,
    register_codec,
)
from package_bundler.domain.errors import DecompressionError, MalformedArtifactError


@pytest.mark.parametrize("codec_name", ["deflate", "zstd"])
def test_compressed_round_trip(sample_bundler: PackageBundler, codec_name: str) -> None:
    codec = get_codec(codec_name)
    data = sample_bundler.to_buffer(compress=True, codec=codec)

    restored = PackageBundler.from_buffer(data, codec=codec)
    assert restored == PackageBundler.from_string(sample_bundler.to_string())


def test_default_codec_is_zlib_deflate(sample_bundler: PackageBundler) -> None:
    data = sample_bundler.to_buffer()
    assert zlib.decompress(data).decode("utf-8") == sample_bundler.to_string()


def test_uncompressed_buffer_is_plain_utf8(sample_bundler: PackageBundler) -> None:
    data = sample_bundler.to_buffer(compress=False)
    assert data == sample_bundler.to_string().encode("utf-8")


@pytest.mark.parametrize("codec", [DeflateCodec(), ZstdCodec()])
def test_from_buffer_rejects_uncompressed_input(sample_bundler: PackageBundler, codec: CompressionCodec) -> None:
    data = sample_bundler.to_buffer(compress=False)
    with pytest.raises(DecompressionError):
        PackageBundler.from_buffer(data, codec=codec)


def test_truncated_deflate_stream_fails() -> None:
    bundler = PackageBundler()
    bundler.add_file("a", "ts", "x" * 500)
    data = bundler.to_buffer()

    with pytest.raises(DecompressionError):
        PackageBundler.from_buffer(data[: len(data) // 2])


def test_non_utf8_payload_is_malformed() -> None:
    data = zlib.compress(b"<<name=a type=ts>>\n<<\xff\xfe>>\n")
    with pytest.raises(MalformedArtifactError, match="utf-8"):
        PackageBundler.from_buffer(data)


def test_get_codec_unknown_name() -> None:
    with pytest.raises(ValueError, match="Unknown compression codec"):
        get_codec("lzma-nope")


def test_register_custom_codec(sample_bundler: PackageBundler, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(compression, "_REGISTRY", dict(compression._REGISTRY))

    class ReversingCodec(CompressionCodec):
        name = "reverse"

        def compress(self, data: bytes) -> bytes:
            return data[::-1]

        def decompress(self, data: bytes) -> bytes:
            return data[::-1]

    register_codec("reverse", ReversingCodec)
    assert "reverse" in available_codecs()

    codec = get_codec("reverse")
    data = sample_bundler.to_buffer(codec=codec)
    assert PackageBundler.from_buffer(data, codec=codec) == sample_bundler
