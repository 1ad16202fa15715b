#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/rxmd/cli/commands/transforms.py
"""Transform listing command for the rxmd CLI.

Prints the transforms a parser would run, in pipeline order, including any
added or disabled by the configuration file (``--config``, ``$RXMD_CONFIG``
or discovery). Supports both plain text and rich terminal output.
"""

import argparse
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rxmd.cli.config import build_parser_from_config, resolve_config
from rxmd.constants import EXIT_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from rxmd.exceptions import RxmdError
from rxmd.parser import MarkdownParser
from rxmd.transforms.definition import TransformDefinition


def _create_list_transforms_parser() -> argparse.ArgumentParser:
    """Create argparse parser for list-transforms command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser for list-transforms command

    """
    parser = argparse.ArgumentParser(
        prog="rxmd list-transforms", description="Show registered Markdown transforms.", add_help=True
    )
    parser.add_argument("transform", nargs="?", help="Show details for specific transform")
    parser.add_argument("--rich", action="store_true", help="Use rich terminal output")
    parser.add_argument("--config", help="Configuration file (defaults to $RXMD_CONFIG or discovery)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    return parser


def _load_parser(parsed: argparse.Namespace) -> MarkdownParser:
    return build_parser_from_config(resolve_config(parsed.config, no_config=parsed.no_config))


def _print_rich(definitions: list[TransformDefinition], detailed: bool) -> None:
    console = Console()

    if detailed:
        definition = definitions[0]
        content = Text()
        content.append("Name: ", style="bold")
        content.append(f"{definition.name}\n")
        content.append("Description: ", style="bold")
        content.append(f"{definition.description}\n")
        content.append("Usage: ", style="bold")
        content.append(f"{definition.usage}\n")
        content.append("Pattern: ", style="bold")
        content.append(definition.signature, style="yellow")
        if definition.tags:
            content.append("\nTags: ", style="bold")
            content.append(", ".join(definition.tags))
        console.print(Panel(content, title=f"Transform: {definition.name}"))
        return

    table = Table(title=f"Registered Transforms ({len(definitions)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Tags", style="yellow")
    for position, definition in enumerate(definitions, start=1):
        table.add_row(str(position), Text(definition.name), Text(definition.description), ", ".join(definition.tags))
    console.print(table)


def _print_plain(definitions: list[TransformDefinition], detailed: bool) -> None:
    if detailed:
        definition = definitions[0]
        print(f"\n{definition.name}")
        print("=" * 60)
        print(f"Description: {definition.description}")
        print(f"Usage: {definition.usage}")
        print(f"Pattern: {definition.signature}")
        if definition.tags:
            print(f"Tags: {', '.join(definition.tags)}")
        return

    print("\nRegistered Transforms")
    print("=" * 60)
    for definition in definitions:
        tags_str = f" [{', '.join(definition.tags)}]" if definition.tags else ""
        print(f"  {definition.name:20} {definition.description}{tags_str}")
    print(f"\nTotal: {len(definitions)} transforms")
    print("Use 'rxmd list-transforms <transform>' for details")


def handle_list_transforms_command(args: list[str] | None = None) -> int:
    """Handle list-transforms command.

    Parameters
    ----------
    args : list[str], optional
        Arguments following the subcommand name

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_list_transforms_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        # argparse exits on --help or on a usage error
        return e.code if isinstance(e.code, int) else EXIT_SUCCESS

    try:
        md = _load_parser(parsed)
    except RxmdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    definitions = list(md.transforms.snapshot())
    if parsed.transform:
        definition = md.lookup(parsed.transform)
        if definition is None:
            print(f"Error: Transform '{parsed.transform}' not found", file=sys.stderr)
            print(f"Available: {', '.join(md.list())}", file=sys.stderr)
            return EXIT_ERROR
        definitions = [definition]

    # display_mode = "terminal" in the config implies --rich
    if parsed.rich or md.tty:
        _print_rich(definitions, detailed=bool(parsed.transform))
    else:
        _print_plain(definitions, detailed=bool(parsed.transform))

    return EXIT_SUCCESS


__all__ = ["handle_list_transforms_command"]
