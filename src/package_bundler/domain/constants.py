from __future__ import annotations

"""
Domain Constants.

Marker grammar tokens, artifact kinds and the default type table shared by
the codecs, the projection layer and the configuration defaults.
"""

from typing import Dict, Tuple

# -----------------------------------------------------------------------------
# MARKER GRAMMAR
# -----------------------------------------------------------------------------

MARKER_OPEN = "<<"
MARKER_CLOSE = ">>"
MARKER_SEPARATOR = "\n"

KEY_NAME = "name"
KEY_TYPE = "type"
KEY_FOLDER = "folder"
KEY_SIZE = "size"

FOLDER_TYPE = "folder"

# -----------------------------------------------------------------------------
# ARTIFACT KINDS & CODECS
# -----------------------------------------------------------------------------

KIND_STRING = "string"
KIND_BIN = "bin"
ARTIFACT_KINDS: Tuple[str, ...] = (KIND_BIN, KIND_STRING)

DEFAULT_CODEC = "deflate"
ENCODING = "utf-8"

# Type tag -> file extension (without the leading dot)
DEFAULT_TYPES: Dict[str, str] = {
    "json": "json",
    "js": "js",
    "ts": "ts",
}
