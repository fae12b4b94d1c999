"""Command-line interface for adocast.

Reads AsciiDoc files and prints their spanned AST, either as JSON in the
shape linting hosts consume or as a tree for reading in a terminal.

Usage
-----
    adocast README.adoc
    adocast docs/*.adoc --format tree
    cat README.adoc | adocast - --indent 0
    adocast guide.adoc --no-skip-comments --include-table-header

Exit codes: 0 on success, 1 on unexpected errors, 3 for invalid options or
configuration, 4 when an input file cannot be read.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from adocast import __version__
from adocast.cli.config import discover_config_file, load_config_file
from adocast.cli.output import render_json, render_tree
from adocast.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_JSON_INDENT,
    DEFAULT_OUTPUT_FORMAT,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from adocast.converter import parse
from adocast.exceptions import AdocAstError, ConfigError, FileAccessError, FileError, FileNotFoundError, ValidationError
from adocast.logging_utils import LOG_LEVEL_NAMES, configure_logging
from adocast.options.asciidoc import ConverterOptions, ReaderOptions, options_from_dict
from adocast.options.base import BaseOptions

logger = logging.getLogger(__name__)

# Prefixes keep converter and reader overrides apart in the namespace
_CONVERTER_DEST = "converter__"
_READER_DEST = "reader__"


def _add_option_arguments(group: Any, options_class: type[BaseOptions], dest_prefix: str) -> None:
    """Add one flag per option field that declares a ``cli_name``.

    Boolean fields become ``--name`` / ``--no-name`` switches depending on
    their default; fields with ``choices`` become choice arguments. Unset
    flags leave no attribute behind, so config file values are kept.
    """
    for option_field in options_class.option_fields().values():
        cli_name = option_field.metadata.get("cli_name")
        if not cli_name:
            continue
        kwargs: dict[str, Any] = {
            "dest": dest_prefix + option_field.name,
            "default": argparse.SUPPRESS,
            "help": option_field.metadata.get("help"),
        }
        if option_field.type in ("bool", bool):
            kwargs["action"] = "store_true" if option_field.default is False else "store_false"
        elif "choices" in option_field.metadata:
            kwargs["choices"] = option_field.metadata["choices"]
        group.add_argument(f"--{cli_name}", **kwargs)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``adocast`` command."""
    parser = argparse.ArgumentParser(
        prog="adocast",
        description="Convert AsciiDoc files into an AST with exact source spans.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="+", help="AsciiDoc files to convert; '-' reads standard input")
    parser.add_argument("--version", action="version", version=f"adocast {__version__}")

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--format",
        choices=["json", "tree"],
        default=DEFAULT_OUTPUT_FORMAT,
        help="Output format (default: %(default)s)",
    )
    output_group.add_argument(
        "--indent",
        type=int,
        default=DEFAULT_JSON_INDENT,
        help="JSON indentation; 0 or less prints compact JSON (default: %(default)s)",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help=f"Configuration file (also read from ${CONFIG_ENV_VAR})")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    conversion_group = parser.add_argument_group("conversion")
    _add_option_arguments(conversion_group, ConverterOptions, _CONVERTER_DEST)
    _add_option_arguments(conversion_group, ReaderOptions, _READER_DEST)

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        choices=list(LOG_LEVEL_NAMES),
        default="WARNING",
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    """Configure logging; --trace implies DEBUG level."""
    log_level = "DEBUG" if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _overrides(parsed_args: argparse.Namespace, dest_prefix: str) -> dict[str, Any]:
    return {
        name[len(dest_prefix) :]: value for name, value in vars(parsed_args).items() if name.startswith(dest_prefix)
    }


def build_options(parsed_args: argparse.Namespace) -> ConverterOptions:
    """Merge configuration file settings with command-line flags.

    Command-line flags take precedence over the configuration file.

    Raises
    ------
    ConfigError
        If the configuration file cannot be loaded or holds invalid settings

    """
    config: dict[str, Any] = {}
    config_source: Optional[str] = None
    if not parsed_args.no_config:
        config_path = parsed_args.config or os.environ.get(CONFIG_ENV_VAR) or discover_config_file()
        if config_path:
            config_source = str(config_path)
            logger.debug(f"Loading configuration from {config_source}")
            config = load_config_file(config_path)

    options = options_from_dict(config, source=config_source)

    reader_overrides = _overrides(parsed_args, _READER_DEST)
    if reader_overrides:
        options = options.create_updated(reader=options.reader.create_updated(**reader_overrides))
    converter_overrides = _overrides(parsed_args, _CONVERTER_DEST)
    if converter_overrides:
        options = options.create_updated(**converter_overrides)
    return options


def read_input(path: str) -> str:
    """Read an input file, or standard input for ``-``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read or is not UTF-8 text

    """
    if path == "-":
        return sys.stdin.read()

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(path)
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FileAccessError(path, message=f"File is not valid UTF-8 text: {path}", original_error=e) from e
    except OSError as e:
        raise FileAccessError(path, original_error=e) from e


def main(args: list[str] | None = None) -> int:
    """Run the ``adocast`` command and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        _setup_logging(parsed_args)
        options = build_options(parsed_args)
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    exit_code = EXIT_SUCCESS
    results = []
    for path in parsed_args.input:
        try:
            text = read_input(path)
        except FileError as e:
            print(f"Error: {e}", file=sys.stderr)
            exit_code = EXIT_FILE_ERROR
            continue

        try:
            document = parse(text, options)
        except AdocAstError as e:
            logger.error(f"Failed to convert {path}: {e}")
            exit_code = EXIT_ERROR
            continue

        display_path = "<stdin>" if path == "-" else path
        if parsed_args.format == "tree":
            render_tree(document, title=display_path)
        else:
            results.append((display_path, document))

    if results:
        indent = parsed_args.indent if parsed_args.indent > 0 else None
        render_json(results, indent, sys.stdout)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
