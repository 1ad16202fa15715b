#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for the rxmd Markdown parser.

Converts a Markdown file (or standard input) to HTML using the built-in
transforms plus any transforms declared in a configuration file.

Examples
--------
Convert a file to standard output::

    $ rxmd README.md

Write to a file, skipping strikethrough::

    $ rxmd README.md -o README.html --disable strikethrough

Read from a pipe::

    $ cat notes.md | rxmd -

Use an explicit configuration file::

    $ rxmd notes.md --config ./rxmd.yaml
    $ export RXMD_CONFIG=./rxmd.yaml

Show the registered transforms::

    $ rxmd list-transforms
    $ rxmd list-transforms bold --rich

"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rxmd import __version__
from rxmd.cli.commands import dispatch_command
from rxmd.cli.config import build_parser_from_config, resolve_config
from rxmd.constants import CONFIG_ENV_VAR, EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from rxmd.exceptions import PatternError, ValidationError
from rxmd.logging_utils import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the conversion command.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser

    """
    parser = argparse.ArgumentParser(
        prog="rxmd",
        description="Convert Markdown to HTML with regular-expression transforms.",
        epilog="Run 'rxmd list-transforms' to see the registered transforms.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Markdown file to convert, or '-' for stdin")
    parser.add_argument("-o", "--out", help="Write HTML to this file instead of stdout")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    config_group = parser.add_mutually_exclusive_group()
    config_group.add_argument("--config", help=f"Configuration file (defaults to ${CONFIG_ENV_VAR} or discovery)")
    config_group.add_argument("--no-config", action="store_true", help="Do not load any configuration file")

    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="NAME",
        help="Remove a transform from the pipeline (repeatable)",
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVEL_CHOICES,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    log_group.add_argument("--log-file", help="Also write log records to this file")
    log_group.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    log_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    log_group.add_argument("--rich", action="store_true", help="Render log output with rich")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level)

    configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        use_rich=parsed_args.rich,
    )


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(html: str, destination: Optional[str]) -> None:
    if destination is None:
        sys.stdout.write(html)
        if html and not html.endswith("\n"):
            sys.stdout.write("\n")
        return
    Path(destination).write_text(html, encoding="utf-8")
    logger.info(f"Wrote {len(html)} characters to {destination}")


def main(args: list[str] | None = None) -> int:
    """Execute the rxmd command-line entry point.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code: 0 success, 1 general error, 2 validation or
        configuration error, 3 file error

    """
    command_result = dispatch_command(args)
    if command_result is not None:
        return command_result

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        md = build_parser_from_config(
            resolve_config(parsed_args.config, no_config=parsed_args.no_config), disable=parsed_args.disable
        )
    except (ValidationError, PatternError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        markdown = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        html = md.parse(markdown)
    except Exception as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        _write_output(html, parsed_args.out)
    except OSError as e:
        print(f"Error writing {parsed_args.out}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS


__all__ = [
    "create_parser",
    "main",
]


if __name__ == "__main__":
    sys.exit(main())
