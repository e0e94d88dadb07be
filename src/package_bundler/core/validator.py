from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from the CLI or from a JSON
file: coerces loosely typed values, fills missing keys with defaults and
checks the artifact format, the codec name and the type table.
"""

import logging
from typing import Any, Dict, List, Tuple

from package_bundler.core.codec.compression import available_codecs
from package_bundler.domain.config import get_default_config
from package_bundler.domain.constants import ARTIFACT_KINDS

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          the warnings produced.

    Raises:
        TypeError: In strict mode, if a value has the wrong type.
        ValueError: In strict mode, if a format or codec is unknown.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("compress", "sized_payloads"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["format"] = _as_choice(
        merged.get("format"), defaults["format"], ARTIFACT_KINDS, "format", warnings, strict
    )
    merged["codec"] = _as_choice(
        merged.get("codec"), defaults["codec"], available_codecs(), "codec", warnings, strict
    )
    merged["types"] = _as_type_map(merged.get("types"), defaults["types"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_choice(
        value: Any,
        fallback: str,
        choices: Any,
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Accept a string among the allowed choices."""
    if value is None:
        return fallback
    if not isinstance(value, str):
        msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    v = value.strip().lower()
    if v in choices:
        return v

    msg = f"Invalid field '{field}': '{value}' is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_type_map(
        value: Any,
        fallback: Dict[str, str],
        warnings: List[str],
        strict: bool,
) -> Dict[str, str]:
    """
    Normalize the type table.

    Accepts a mapping of type -> extension or, outside strict mode, a list of
    types (each mapped to an extension of the same name) or a CSV string of
    'TYPE[=EXT]' items. Leading dots are stripped from extensions.
    """
    if value is None:
        return dict(fallback)

    # Support CSV string to mapping conversion for CLI/config compatibility
    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if not items:
            return dict(fallback)
        warnings.append("Field 'types' converted from CSV string to mapping.")
        value = {}
        for item in items:
            type_, _, ext = item.partition("=")
            value[type_.strip()] = ext.strip()

    if isinstance(value, list) and not strict:
        warnings.append("Field 'types' converted from list to mapping.")
        value = {item: item for item in value if isinstance(item, str)}

    if not isinstance(value, dict):
        msg = f"Invalid field 'types': expected dict, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return dict(fallback)

    out: Dict[str, str] = {}
    for type_, ext in value.items():
        if not isinstance(type_, str) or not isinstance(ext, str) or not type_.strip():
            msg = f"Invalid entry in 'types': {type_!r} -> {ext!r}."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Entry discarded.")
            continue
        e = ext.strip().lstrip(".") or type_.strip()
        out[type_.strip()] = e
    return out
