from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Subcommand parsing.
2. Mapping of CLI flags to configuration overrides.
3. Parsing of repeatable --type options.
"""

import pytest

from package_bundler.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_pack_flags_mapping() -> None:
    args = parse_args(["pack", "src", "out.bin", "--no-compress", "--sized", "--codec", "zstd"])
    overrides = args_to_overrides(args)

    assert args.command == "pack"
    assert args.source == "src"
    assert args.output == "out.bin"
    assert overrides == {"codec": "zstd", "compress": False, "sized_payloads": True}


def test_unpack_format_mapping() -> None:
    args = parse_args(["unpack", "bundle.txt", "out", "--format", "string"])

    assert args.artifact == "bundle.txt"
    assert args_to_overrides(args) == {"format": "string"}


def test_defaults_produce_no_overrides() -> None:
    args = parse_args(["inspect", "bundle.bin"])

    assert args.json_output is False
    assert args_to_overrides(args) == {}


def test_type_options_are_merged() -> None:
    args = parse_args(["--type", "md", "--type", "dts=.d.ts", "--type", " ", "inspect", "x"])

    assert args_to_overrides(args)["types"] == {"md": "md", "dts": "d.ts"}


def test_global_options() -> None:
    args = parse_args(["--debug", "--log-file", "run.log", "--config", "cfg.json", "inspect", "x"])

    assert args.debug is True
    assert args.log_file == "run.log"
    assert args.config_file == "cfg.json"


def test_invalid_codec_is_rejected() -> None:
    with pytest.raises(SystemExit):
        parse_args(["pack", "a", "b", "--codec", "brotli"])


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        parse_args([])
