from __future__ import annotations

"""
Unit tests for the File Type Table.

Verifies that inference and file naming use the same table, including
multi-dot names and multi-dot extensions.
"""

import pytest

from package_bundler.core.filetypes import TypeTable
from package_bundler.domain.models import FileEntry


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("index.ts", ("index", "ts")),
        ("package.json", ("package", "json")),
        ("app.config.js", ("app.config", "js")),
        ("README.md", ("README", "md")),
        ("archive.tar.gz", ("archive.tar", "gz")),
        ("Makefile", ("Makefile", "")),
        (".gitignore", (".gitignore", "")),
    ],
)
def test_split_filename_default_table(filename: str, expected: tuple) -> None:
    assert TypeTable().split_filename(filename) == expected


def test_split_filename_prefers_longest_extension() -> None:
    table = TypeTable()
    table.register("dts", "d.ts")

    assert table.split_filename("index.d.ts") == ("index", "dts")
    assert table.split_filename("index.ts") == ("index", "ts")


def test_filename_for_registered_and_unknown_types() -> None:
    table = TypeTable()

    assert table.filename_for(FileEntry("index", "ts")) == "index.ts"
    assert table.filename_for(FileEntry("notes", "md")) is None


def test_register_strips_leading_dot_and_defaults_extension() -> None:
    table = TypeTable({})
    table.register("markdown", ".md")
    table.register("yaml")

    assert table.as_dict() == {"markdown": "md", "yaml": "yaml"}
    assert table.split_filename("guide.md") == ("guide", "markdown")
    assert table.filename_for(FileEntry("guide", "markdown")) == "guide.md"


def test_table_is_symmetric() -> None:
    table = TypeTable({"json": "json", "dts": "d.ts"})
    for filename in ("data.json", "types.d.ts"):
        name, type_ = table.split_filename(filename)
        assert table.filename_for(FileEntry(name, type_)) == filename


def test_default_table_contents() -> None:
    table = TypeTable()
    assert set(table) == {"json", "js", "ts"}
    assert len(table) == 3
    assert "ts" in table
