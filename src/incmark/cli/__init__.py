"""Command-line interface for incmark.

Subcommands
-----------
close
    Print the auto-closed form of a (partial) markdown buffer.
table
    Print the buffer with its trailing pipe table completed.
detect
    Report unclosed syntax as JSON; with ``--check`` exit with status 3
    when anything is open. ``--rich`` prints tables instead on a terminal.
render
    Parse and render to HTML, or to the compact JSON tree.

Input is read from the file given as argument, or from stdin when it is
omitted or ``-``. Options come from ``--config``, the ``INCMARK_CONFIG``
environment variable, or the nearest ``.incmark.toml`` / ``.incmark.yaml`` /
``.incmark.json`` / ``pyproject.toml [tool.incmark]``.

Examples
--------
Close a partial buffer::

    $ printf '::card\\nSome **bold' | incmark close
    ::card
    Some **bold**
    ::

Fail a CI step on unclosed syntax::

    $ incmark detect --check answer.md

Render with a table of contents::

    $ incmark render --format json doc.md

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/incmark/cli/__init__.py

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from incmark import __version__
from incmark.ast.serialization import ast_to_json
from incmark.autoclose import close_markup, close_table, detect_unclosed
from incmark.cli.config import CliOptions, build_options, find_config_in_parents, load_config_file
from incmark.cli.output import render_report_rich, should_use_rich_output
from incmark.constants import EXIT_ERROR, EXIT_SUCCESS, EXIT_UNCLOSED, EXIT_VALIDATION_ERROR
from incmark.exceptions import IncmarkError, ValidationError
from incmark.logging_utils import configure_logging
from incmark.parsers import MarkdownParser
from incmark.renderers import render_html
from incmark.transforms import SanitizeTransform, apply_transforms, essentials

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "INCMARK_CONFIG"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="incmark",
        description="Auto-close, inspect and render streaming markdown.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    subparsers = parser.add_subparsers(dest="command", required=True)

    close_parser = subparsers.add_parser("close", help="Auto-close a partial markdown buffer")
    close_parser.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    close_parser.add_argument("--tables", action="store_true", help="Also complete the trailing table")

    table_parser = subparsers.add_parser("table", help="Complete the trailing markdown table")
    table_parser.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")

    detect_parser = subparsers.add_parser("detect", help="Report unclosed syntax as JSON")
    detect_parser.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    detect_parser.add_argument(
        "--check", action="store_true", help=f"Exit with status {EXIT_UNCLOSED} if anything is unclosed"
    )
    detect_parser.add_argument("--rich", action="store_true", help="Show the report as Rich tables on a terminal")
    detect_parser.add_argument("--force-rich", action="store_true", help="Use Rich formatting even when not a TTY")

    render_parser = subparsers.add_parser("render", help="Parse and render markdown")
    render_parser.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    render_parser.add_argument("--format", choices=["html", "json"], default="html", help="Output format")
    render_parser.add_argument("--no-transforms", action="store_true", help="Skip the TOC and summary transforms")
    render_parser.add_argument("--sanitize", action="store_true", help="Remove unsafe elements and attributes")

    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _resolve_options(parsed_args: argparse.Namespace) -> CliOptions:
    """Load options from the explicit, environment or discovered config file.

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration cannot be loaded or is invalid

    """
    if parsed_args.no_config:
        return CliOptions()

    config_path: Optional[Path] = None
    if parsed_args.config:
        config_path = Path(parsed_args.config)
    elif os.environ.get(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])
    else:
        config_path = find_config_in_parents()

    if config_path is None:
        return CliOptions()

    logger.debug("Using configuration file: %s", config_path)
    return build_options(load_config_file(config_path))


def _run_command(parsed_args: argparse.Namespace, options: CliOptions, text: str) -> int:
    command = parsed_args.command

    if command == "close":
        autoclose = options.autoclose
        if parsed_args.tables:
            autoclose = autoclose.create_updated(close_tables=True)
        print(close_markup(text, autoclose))
        return EXIT_SUCCESS

    if command == "table":
        print(close_table(text))
        return EXIT_SUCCESS

    if command == "detect":
        report = detect_unclosed(text, options.autoclose)
        if should_use_rich_output(parsed_args):
            render_report_rich(report)
        else:
            print(json.dumps(report.to_dict(), indent=2))
        if parsed_args.check and report.has_unclosed:
            return EXIT_UNCLOSED
        return EXIT_SUCCESS

    document = MarkdownParser(options.parser).parse(text)
    transforms = [] if parsed_args.no_transforms else essentials()
    if parsed_args.sanitize:
        transforms.insert(0, SanitizeTransform())
    document = apply_transforms(document, transforms)

    if parsed_args.format == "json":
        print(ast_to_json(document, indent=2))
    else:
        print(render_html(document, options.html), end="" if options.html.pretty else "\n")
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Run the incmark CLI and return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = _resolve_options(parsed_args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        text = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read input {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        return _run_command(parsed_args, options, text)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except IncmarkError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


__all__ = ["create_parser", "main"]


if __name__ == "__main__":
    sys.exit(main())
