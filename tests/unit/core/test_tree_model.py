from __future__ import annotations

"""
Unit tests for the in-memory Tree Model.

Verifies:
1. Insertion and ordering of root files and folders.
2. Overwrite reporting on duplicate names.
3. Parent resolution derived from folder paths.
"""

from package_bundler.core.bundler import PackageBundler
from package_bundler.domain.models import FileEntry, FolderEntry


def test_add_file_and_folder_keep_insertion_order() -> None:
    bundler = PackageBundler()
    bundler.add_file("b", "js", "2")
    bundler.add_file("a", "js", "1")
    bundler.add_folder("z", [])
    bundler.add_folder("y", [FileEntry("f", "ts", "x")], path="z/y")

    assert list(bundler.files) == ["b", "a"]
    assert list(bundler.folders) == ["z", "y"]
    assert bundler.files["a"] == FileEntry("a", "js", "1")
    assert bundler.folders["y"].path == "z/y"
    assert bundler.warnings == []


def test_add_file_overwrite_is_reported() -> None:
    bundler = PackageBundler()
    bundler.add_file("main", "js", "old")
    bundler.add_file("main", "ts", "new")

    assert bundler.files["main"].code == "new"
    assert len(bundler.warnings) == 1
    assert bundler.warnings[0].kind == "overwrite"
    assert bundler.warnings[0].name == "main"


def test_add_folder_overwrite_is_reported() -> None:
    bundler = PackageBundler()
    bundler.add_folder("src", [FileEntry("a", "ts", "")])
    bundler.add_folder("src", [])

    assert bundler.folders["src"].files == []
    assert [w.name for w in bundler.warnings] == ["src"]


def test_add_folder_copies_file_sequence() -> None:
    files = (FileEntry("a", "ts", "1"),)
    bundler = PackageBundler()
    bundler.add_folder("src", files)

    bundler.folders["src"].files.append(FileEntry("b", "ts", "2"))
    assert len(files) == 1


def test_folder_parent_resolution() -> None:
    assert FolderEntry("src").parent is None
    assert FolderEntry("solo", path="solo").parent is None
    assert FolderEntry("ui", path="src/components/ui").parent == "components"
    assert FolderEntry("ui", path="src/components/ui").location == "src/components/ui"
    assert FolderEntry("src").location == "src"


def test_bundlers_compare_by_content(sample_bundler: PackageBundler) -> None:
    other = PackageBundler()
    assert other != sample_bundler

    other.files = dict(sample_bundler.files)
    other.folders = dict(sample_bundler.folders)
    assert other == sample_bundler
