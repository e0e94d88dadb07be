from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global options plus the pack, unpack and
inspect subcommands) and translates parsed namespaces into configuration
overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from package_bundler.core.codec.compression import available_codecs
from package_bundler.domain.constants import ARTIFACT_KINDS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the package-bundler CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="package-bundler",
        description="Bundle a directory of text files into a single artifact and back.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration values.",
    )
    p.add_argument(
        "--type",
        dest="types",
        action="append",
        default=None,
        metavar="TYPE[=EXT]",
        help="Register a file type (repeatable). EXT defaults to TYPE.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )

    sub = p.add_subparsers(dest="command", required=True)

    # --- pack ---
    pack = sub.add_parser("pack", help="Bundle a directory into an artifact.")
    pack.add_argument("source", help="Directory to bundle.")
    pack.add_argument("output", help="Artifact file to write.")
    _add_format_options(pack)
    pack.add_argument(
        "--no-compress",
        action="store_true",
        help="Write raw UTF-8 bytes for the 'bin' format.",
    )
    pack.add_argument(
        "--sized",
        action="store_true",
        help="Record payload sizes so file contents may contain marker brackets.",
    )

    # --- unpack ---
    unpack = sub.add_parser("unpack", help="Extract an artifact into a directory.")
    unpack.add_argument("artifact", help="Artifact file to read.")
    unpack.add_argument("output", help="Destination directory.")
    _add_format_options(unpack)

    # --- inspect ---
    inspect = sub.add_parser("inspect", help="List the contents of an artifact.")
    inspect.add_argument("artifact", help="Artifact file to read.")
    _add_format_options(inspect)
    inspect.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the tree as JSON.",
    )

    return p


def _add_format_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--format",
        dest="format",
        choices=ARTIFACT_KINDS,
        default=None,
        help="Artifact kind: compressed bytes ('bin') or plain text ('string').",
    )
    p.add_argument(
        "--codec",
        dest="codec",
        choices=available_codecs(),
        default=None,
        help="Compression codec for the 'bin' format.",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options given on the command line appear in the result.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.format:
        overrides["format"] = args.format
    if args.codec:
        overrides["codec"] = args.codec
    if getattr(args, "no_compress", False):
        overrides["compress"] = False
    if getattr(args, "sized", False):
        overrides["sized_payloads"] = True

    extra_types = _parse_types(args.types)
    if extra_types:
        overrides["types"] = extra_types

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _parse_types(values: Optional[List[str]]) -> Dict[str, str]:
    """
    Convert 'TYPE[=EXT]' items into a type -> extension mapping.
    """
    out: Dict[str, str] = {}
    for value in values or []:
        type_, _, ext = value.partition("=")
        type_ = type_.strip()
        if type_:
            out[type_] = ext.strip().lstrip(".") or type_
    return out
