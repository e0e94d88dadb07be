from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for sample trees and on-disk projects.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from package_bundler.core.bundler import PackageBundler  # noqa: E402
from package_bundler.domain.models import FileEntry  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_bundler() -> PackageBundler:
    """
    Return a tree with root files and folders nested three levels deep.

    Layout:
        readme.json
        config.js
        src/index.ts
        src/components/button.ts
        src/components/ui/theme.json
        lib/util.js
    """
    bundler = PackageBundler()
    bundler.add_file("readme", "json", '{"title": "demo"}')
    bundler.add_file("config", "js", "module.exports = {}\n")
    bundler.add_folder("src", [FileEntry("index", "ts", "export default 1")])
    bundler.add_folder(
        "components",
        [FileEntry("button", "ts", "export const Button = () => null;\n")],
        path="src/components",
    )
    bundler.add_folder(
        "ui",
        [FileEntry("theme", "json", '{\n  "dark": true\n}\n')],
        path="src/components/ui",
    )
    bundler.add_folder("lib", [FileEntry("util", "js", "exports.add = (a, b) => a + b;")])
    return bundler


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a project directory on disk.

    Structure:
    /project
      package.json
      index.ts
      NOTES.md
      /src
        main.ts
        /components
          button.ts
          /ui
            theme.json
      /lib
        util.js
    """
    root = tmp_path / "project"
    (root / "src" / "components" / "ui").mkdir(parents=True)
    (root / "lib").mkdir()

    (root / "package.json").write_text('{"name": "demo"}', encoding="utf-8")
    (root / "index.ts").write_text("import './src/main';\n", encoding="utf-8")
    (root / "NOTES.md").write_text("# Notes\n", encoding="utf-8")
    (root / "src" / "main.ts").write_text("console.log('main');\n", encoding="utf-8")
    (root / "src" / "components" / "button.ts").write_text("export const b = 1;\n", encoding="utf-8")
    (root / "src" / "components" / "ui" / "theme.json").write_text('{"dark": true}', encoding="utf-8")
    (root / "lib" / "util.js").write_text("exports.x = 1;\n", encoding="utf-8")
    return root
