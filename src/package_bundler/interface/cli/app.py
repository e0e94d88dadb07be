from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, optional JSON file, command-line overrides), command dispatch and
result rendering.
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from package_bundler.core.bundler import PackageBundler
from package_bundler.core.codec.compression import get_codec
from package_bundler.core.filetypes import TypeTable
from package_bundler.core.validator import validate_config
from package_bundler.domain.config import get_default_config, load_config_file
from package_bundler.domain.errors import BundleError
from package_bundler.infra.fs import normalize_path
from package_bundler.infra.logging import LoggingConfig, configure_logging, get_logger
from package_bundler.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 1. Configuration hierarchy
    try:
        base_conf = load_config_file(args.config_file) if args.config_file else get_default_config()
    except (BundleError, ValueError) as e:
        logger.error(f"Cannot load configuration: {e}")
        print(f"ERROR: Cannot load configuration: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 2. Command dispatch
    commands = {
        "pack": _run_pack,
        "unpack": _run_unpack,
        "inspect": _run_inspect,
    }
    try:
        return commands[args.command](args, conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except BundleError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_pack(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    source = normalize_path(args.source, os.getcwd())
    output = normalize_path(args.output, os.getcwd())

    if not os.path.isdir(source):
        return _bad_input(f"Source directory does not exist: {source}")

    logger.info(f"Bundling directory: {source}")
    bundler = PackageBundler.from_path(source, TypeTable(conf["types"]))
    bundler.bundle(
        output,
        kind=conf["format"],
        compression=conf["compress"],
        codec=get_codec(conf["codec"]),
        sized=conf["sized_payloads"],
    )

    print(f"Packed {_count_files(bundler)} files in {len(bundler.folders)} folders into {output}")
    return EXIT_OK


def _run_unpack(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    artifact = normalize_path(args.artifact, os.getcwd())
    output = normalize_path(args.output, os.getcwd())

    if not os.path.isfile(artifact):
        return _bad_input(f"Artifact does not exist: {artifact}")

    bundler = PackageBundler.load(artifact, kind=conf["format"], codec=get_codec(conf["codec"]))
    result = bundler.extract(output, TypeTable(conf["types"]))

    print(f"Extracted {len(result.written)} files to {output}")
    for skipped in result.skipped:
        print(f"  - skipped {skipped.name}: {skipped.detail}")
    return EXIT_OK


def _run_inspect(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    artifact = normalize_path(args.artifact, os.getcwd())

    if not os.path.isfile(artifact):
        return _bad_input(f"Artifact does not exist: {artifact}")

    bundler = PackageBundler.load(artifact, kind=conf["format"], codec=get_codec(conf["codec"]))

    if args.json_output:
        print(json.dumps(describe_tree(bundler), ensure_ascii=False, indent=2))
    else:
        _print_human_tree(bundler)
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge command-line overrides into the base configuration.

    Types given on the command line extend the configured table rather than
    replacing it.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k == "types" and isinstance(out.get("types"), dict):
            out["types"] = {**out["types"], **v}
        elif v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def describe_tree(bundler: PackageBundler) -> Dict[str, Any]:
    """Build a JSON-friendly summary of a bundle (without file contents)."""
    def _file(entry: Any) -> Dict[str, Any]:
        return {"name": entry.name, "type": entry.type, "size": len(entry.code or "")}

    return {
        "files": [_file(f) for f in bundler.files.values()],
        "folders": [
            {
                "name": folder.name,
                "path": folder.location,
                "parent": folder.parent,
                "files": [_file(f) for f in folder.files],
            }
            for folder in bundler.folders.values()
        ],
    }


def _print_human_tree(bundler: PackageBundler) -> None:
    for entry in bundler.files.values():
        print(f"{entry.name}.{entry.type}")
    for folder in bundler.folders.values():
        print(f"{folder.location}/")
        for entry in folder.files:
            print(f"  {entry.name}.{entry.type}")
    print(f"\n{_count_files(bundler)} files, {len(bundler.folders)} folders")


def _count_files(bundler: PackageBundler) -> int:
    return len(bundler.files) + sum(len(f.files) for f in bundler.folders.values())


def _bad_input(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
