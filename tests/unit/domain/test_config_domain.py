from __future__ import annotations

"""
Unit tests for configuration defaults and JSON config loading.
"""

import json
from pathlib import Path

import pytest

from package_bundler.domain.config import get_default_config, load_config_file
from package_bundler.domain.errors import FilesystemError


def test_default_config_is_fresh_copy() -> None:
    first = get_default_config()
    first["types"]["md"] = "md"

    assert "md" not in get_default_config()["types"]


def test_load_config_file_merges_types(tmp_path: Path) -> None:
    path = tmp_path / "bundler.json"
    path.write_text(json.dumps({"codec": "zstd", "types": {"md": "md"}}), encoding="utf-8")

    cfg = load_config_file(str(path))

    assert cfg["codec"] == "zstd"
    assert cfg["format"] == "bin"
    assert cfg["types"] == {"json": "json", "js": "js", "ts": "ts", "md": "md"}


def test_load_config_file_ignores_non_object(tmp_path: Path) -> None:
    path = tmp_path / "bundler.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert load_config_file(str(path)) == get_default_config()


def test_load_config_file_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bundler.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config_file(str(path))


def test_load_config_file_missing(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError) as exc_info:
        load_config_file(str(tmp_path / "missing.json"))
    assert exc_info.value.path.endswith("missing.json")
