#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/help.py
"""Help rendering for registered transforms.

Two presentations are available:

- ``render_help_markdown`` produces plain Markdown documentation.
- ``render_help_terminal`` produces ANSI-decorated terminal output built
  with ``rich`` (panels, tables and colored pattern signatures).

Both only read the registry through ``lookup`` and ``snapshot``. An unknown
transform name yields a ``"Feature '<name>' not found"`` message rather
than an exception.

"""

from __future__ import annotations

import io
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rxmd.transforms.definition import TransformDefinition
from rxmd.transforms.registry import TransformRegistry

HELP_TITLE = "rxmd Markdown Parser"
HELP_TAGLINE = "Regular expressions in, HTML out"
TERMINAL_WIDTH = 100


def not_found_message(name: str) -> str:
    """Return the message shown for an unknown transform name."""
    return f"Feature '{name}' not found"


def _markdown_feature(definition: TransformDefinition, level: str) -> str:
    tags = f"\n**Tags:** {', '.join(definition.tags)}\n" if definition.tags else ""
    return (
        f"{level} {definition.name}\n\n"
        f"{definition.description}\n\n"
        f"**Usage:**\n```\n{definition.usage}\n```\n\n"
        f"**Pattern:** `{definition.signature}`\n"
        f"{tags}"
    )


def render_help_markdown(registry: TransformRegistry, name: Optional[str] = None) -> str:
    """Render help as Markdown.

    Parameters
    ----------
    registry : TransformRegistry
        Registry to document
    name : str, optional
        Document a single transform instead of all of them

    Returns
    -------
    str
        Markdown text, or the not-found message for an unknown ``name``

    """
    if name is not None:
        definition = registry.lookup(name)
        if definition is None:
            return not_found_message(name)
        return _markdown_feature(definition, "##")

    parts = [f"# {HELP_TITLE}\n\n*{HELP_TAGLINE}*\n\n## Registered Features\n"]
    parts.extend(_markdown_feature(definition, "###") for definition in registry.snapshot())
    parts.append(
        "## Usage\n\n"
        "```python\n"
        "from rxmd import MarkdownParser\n\n"
        "md = MarkdownParser()\n"
        "md.parse('# Hello World')\n"
        "md.help('bold')     # details for one feature\n"
        "md.tty = True       # colored terminal help\n"
        "```\n"
    )
    return "\n".join(parts)


def _terminal_feature(definition: TransformDefinition) -> Panel:
    body = Text()
    body.append(f"{definition.description}\n\n")
    body.append("Usage:\n", style="green")
    body.append(f"  {definition.usage}\n\n")
    body.append("Pattern:\n", style="green")
    body.append(f"  {definition.signature}", style="yellow")
    if definition.tags:
        body.append("\n\nTags: ", style="green")
        body.append(", ".join(definition.tags))
    return Panel(body, title=Text(definition.name, style="bold blue"), title_align="left")


def _terminal_overview(registry: TransformRegistry) -> Group:
    table = Table(title="Registered Features", title_style="green", show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Pattern", style="yellow", overflow="fold")

    for position, definition in enumerate(registry.snapshot(), start=1):
        # Text cells so brackets in patterns are not read as rich markup
        table.add_row(
            str(position), Text(definition.name), Text(definition.description), Text(definition.signature)
        )

    usage = Text()
    usage.append("Usage:\n", style="green")
    usage.append("  md.help('feature-name')  - detailed help for a feature\n")
    usage.append("  md.parse(markdown)       - convert markdown to HTML\n")
    usage.append("  md.tty = True            - enable terminal colors")

    header = Text()
    header.append(f"{HELP_TITLE}\n", style="bold blue")
    header.append(HELP_TAGLINE, style="yellow")
    return Group(header, Text(), table, Text(), usage)


def render_help_terminal(
    registry: TransformRegistry,
    name: Optional[str] = None,
    console: Optional[Console] = None,
) -> str:
    """Render help as ANSI-decorated terminal text.

    Parameters
    ----------
    registry : TransformRegistry
        Registry to document
    name : str, optional
        Document a single transform instead of all of them
    console : rich.console.Console, optional
        Console used for rendering; by default a forced-terminal console
        writing to an in-memory buffer

    Returns
    -------
    str
        The rendered text including ANSI escape sequences

    """
    if console is None:
        console = Console(
            file=io.StringIO(),
            force_terminal=True,
            color_system="standard",
            width=TERMINAL_WIDTH,
        )

    if name is not None:
        definition = registry.lookup(name)
        renderable = (
            Text(not_found_message(name), style="yellow") if definition is None else _terminal_feature(definition)
        )
    else:
        renderable = _terminal_overview(registry)

    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


__all__ = [
    "not_found_message",
    "render_help_markdown",
    "render_help_terminal",
]
