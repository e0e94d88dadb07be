from __future__ import annotations

"""
Configuration Domain Management.

Provides the runtime configuration defaults and loading of an optional
JSON configuration file. Nothing is persisted implicitly; a file is only read
when the caller names one.
"""

import json
import logging
from typing import Any, Dict

from package_bundler.domain.constants import DEFAULT_CODEC, DEFAULT_TYPES, KIND_BIN
from package_bundler.infra.fs import read_text

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Artifact Format
        "format": KIND_BIN,
        "compress": True,
        "codec": DEFAULT_CODEC,
        "sized_payloads": False,

        # Type Table (type tag -> extension)
        "types": dict(DEFAULT_TYPES),
    }


# -----------------------------------------------------------------------------
# Loading Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load configuration values from a JSON file.

    Missing keys fall back to defaults. A document that is not a JSON object
    is ignored.

    Args:
        path: Location of the JSON document.

    Returns:
        Dict[str, Any]: Defaults updated with the file's values.

    Raises:
        FilesystemError: If the file cannot be read.
        ValueError: If the file is not valid JSON.
    """
    config = get_default_config()
    data = json.loads(read_text(path))

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a JSON object.")
        return config

    types = data.pop("types", None)
    config.update(data)
    if isinstance(types, dict):
        config["types"].update(types)
    elif types is not None:
        config["types"] = types

    logger.debug(f"Configuration loaded from {path}")
    return config
