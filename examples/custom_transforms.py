#!/usr/bin/env python3
"""Custom transforms for rxmd.

This example shows how to extend and reshape the rxmd pipeline: adding new
syntax, replacing a built-in, reordering, and inspecting the result with
``help()``.

Features
--------
- ``==highlight==`` rendered as ``<mark>``
- WikiWord auto-links (``MyPage`` becomes ``<a href="/wiki/MyPage">``)
- ``{{include path}}`` pulling in another Markdown file before parsing
- Bold replaced with ``<b>`` instead of ``<strong>``

Usage
-----
    python custom_transforms.py README.md
    python custom_transforms.py README.md --help-feature highlight
    python custom_transforms.py README.md --tty
"""

import argparse
import sys
from pathlib import Path

from rxmd import MarkdownParser, RxmdOptions
from rxmd.transforms import NamedCaptures
from rxmd.utils.escape import escape_html


def make_include_render(base_dir: Path):
    """Return a render function that inlines ``{{include file}}`` directives."""

    def render_include(captures: NamedCaptures) -> str:
        target = (base_dir / captures["path"]).resolve()
        try:
            return target.read_text(encoding="utf-8")
        except OSError as e:
            return f"<!-- include failed: {escape_html(captures['path'])}: {e.strerror} -->"

    return render_include


def build_parser(base_dir: Path, tty: bool = False) -> MarkdownParser:
    """Create a parser with the example transforms installed."""
    md = MarkdownParser(RxmdOptions(display_mode="terminal" if tty else "plain"))

    # Includes must be expanded before any other transform sees the text
    md.register(
        name="include",
        description="Inline another Markdown file",
        usage="{{include chapter1.md}}",
        pattern=r"^\{\{include[ \t]+(?<path>[^}\s]+)[ \t]*\}\}[ \t]*$",
        flags="gm",
        render=make_include_render(base_dir),
        tags=("block",),
        before="code-blocks",
    )

    md.register(
        name="highlight",
        description="Highlight text with ==double equals==",
        usage="==important text==",
        pattern=r"==(?<text>[^=\n]+)==",
        render=lambda c: f"<mark>{c['text']}</mark>",
        tags=("inline",),
        after="strikethrough",
    )

    md.register(
        name="wiki-links",
        description="Automatic links for WikiWords",
        usage="HelloWorld becomes a link",
        pattern=r"(?<![\w/])(?<word>[A-Z][a-z]+(?:[A-Z][a-z]+)+)(?![\w/])",
        render=lambda c: f'<a href="/wiki/{c["word"]}">{c["word"]}</a>',
        tags=("inline", "links"),
        after="paragraphs",
    )

    # Replacing keeps bold at its original pipeline position
    md.register(
        name="bold",
        description="Bold text rendered with <b>",
        usage="**bold text**",
        pattern=r"\*\*(?<text>[^*\n]+)\*\*",
        render=lambda c: f"<b>{c['text']}</b>",
    )
    return md


def main() -> int:
    """Run the example."""
    parser = argparse.ArgumentParser(description="Convert Markdown with custom rxmd transforms")
    parser.add_argument("input", help="Markdown file to convert")
    parser.add_argument("--help-feature", metavar="NAME", help="Show help for one transform and exit")
    parser.add_argument("--tty", action="store_true", help="Colored help output")
    args = parser.parse_args()

    source = Path(args.input)
    md = build_parser(source.parent, tty=args.tty)

    if args.help_feature:
        print(md.help(args.help_feature))
        return 0

    try:
        markdown = source.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(md.parse(markdown))
    return 0


if __name__ == "__main__":
    sys.exit(main())
