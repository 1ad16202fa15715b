#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/transforms/builtin.py
"""Built-in transforms.

This module defines the render functions and ``TransformDefinition``
objects installed into every new parser. ``BUILTIN_TRANSFORMS`` lists them
in default pipeline order:

1. Block structures: fenced code blocks, headers, horizontal rules,
   unordered and ordered lists, blockquotes
2. Inline markup: inline code, images, links, bold, italic, strikethrough
3. Paragraph wrapping, which has the most permissive pattern and must run
   after everything it would otherwise swallow

Code is escaped with :func:`~rxmd.utils.escape.escape_code`, so the
emphasis and link transforms that run later leave code untouched. Fenced
code is emitted on a single physical line (newlines as ``&#10;``), which
also keeps line-anchored transforms and paragraph splitting out of it.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rxmd.constants import (
    BLOCK_LEVEL_TAGS,
    TRANSFORM_BLOCKQUOTE,
    TRANSFORM_BOLD,
    TRANSFORM_CODE_BLOCKS,
    TRANSFORM_HEADERS,
    TRANSFORM_HORIZONTAL_RULE,
    TRANSFORM_IMAGES,
    TRANSFORM_INLINE_CODE,
    TRANSFORM_ITALIC,
    TRANSFORM_LINKS,
    TRANSFORM_ORDERED_LIST,
    TRANSFORM_PARAGRAPHS,
    TRANSFORM_STRIKETHROUGH,
    TRANSFORM_UNORDERED_LIST,
)
from rxmd.transforms.captures import Captures
from rxmd.transforms.definition import TransformDefinition
from rxmd.utils.escape import escape_attribute, escape_code

if TYPE_CHECKING:
    from rxmd.transforms.registry import TransformRegistry

_UNORDERED_MARKER_RE = re.compile(r"^ {0,3}[*+-][ \t]+")
_ORDERED_MARKER_RE = re.compile(r"^ {0,3}(\d{1,9})[.)][ \t]+")
_QUOTE_MARKER_RE = re.compile(r"^ {0,3}>[ \t]?")
_BLOCK_LINE_RE = re.compile(
    r"^[ \t]*(?:<!--|</?(?:" + "|".join(BLOCK_LEVEL_TAGS) + r")(?=[\s/>]|$))",
    re.IGNORECASE,
)

# Inline span bodies never cross a blank line. The paired form admits a lone
# marker so that *italic* can sit inside **bold**.
_SPAN_BODY = r"(?:[^{c}\n]|\n(?!\s*\n))+?"
_PAIRED_SPAN_BODY = r"(?:[^{c}\n]|{c}(?!{c})|\n(?!\s*\n))+?"


def _title_attribute(captures: Captures) -> str:
    title = captures.get("title")
    return f' title="{escape_attribute(title)}"' if title else ""


def _trailing_newline(block: str) -> str:
    return "\n" if block.endswith("\n") else ""


def render_code_block(captures: Captures) -> str:
    """Render a fenced code block as ``<pre><code>``."""
    lang = captures.get("lang")
    code = captures.get("code")
    if code.endswith("\n"):
        code = code[:-2] if code.endswith("\r\n") else code[:-1]
    code = escape_code(code, preserve_newlines=False)
    if lang:
        return f'<pre><code class="{escape_attribute(lang)}">{code}</code></pre>'
    return f"<pre><code>{code}</code></pre>"


def render_header(captures: Captures) -> str:
    """Render an ATX header; the number of hashes is the level."""
    level = len(captures["hashes"])
    return f"<h{level}>{captures['text']}</h{level}>"


def render_horizontal_rule(captures: Captures) -> str:
    """Render a thematic break."""
    return "<hr>"


def _render_list(block: str, marker_re: re.Pattern[str], tag: str, start: str = "") -> str:
    items = [marker_re.sub("", line, count=1).strip() for line in block.split("\n") if line.strip()]
    body = "\n".join(f"  <li>{item}</li>" for item in items)
    return f"<{tag}{start}>\n{body}\n</{tag}>{_trailing_newline(block)}"


def render_unordered_list(captures: Captures) -> str:
    """Render a run of ``-``, ``*`` or ``+`` items as ``<ul>``."""
    return _render_list(captures[0], _UNORDERED_MARKER_RE, "ul")


def render_ordered_list(captures: Captures) -> str:
    """Render a run of numbered items as ``<ol>``.

    A list that does not start at 1 keeps its first number as ``start``.
    """
    block = captures[0]
    first = _ORDERED_MARKER_RE.match(block)
    number = int(first.group(1)) if first else 1
    start = f' start="{number}"' if number != 1 else ""
    return _render_list(block, _ORDERED_MARKER_RE, "ol", start)


def render_blockquote(captures: Captures) -> str:
    """Render consecutive ``>`` lines as one ``<blockquote>``."""
    block = captures[0]
    lines = [_QUOTE_MARKER_RE.sub("", line, count=1).strip() for line in block.split("\n")]
    text = " ".join(line for line in lines if line)
    return f"<blockquote>{text}</blockquote>{_trailing_newline(block)}"


def render_inline_code(captures: Captures) -> str:
    """Render a backtick code span."""
    code = captures["code"]
    # One space of padding on both sides is stripped, so `` `x` `` can be written
    if len(code) > 2 and code.startswith(" ") and code.endswith(" ") and code.strip():
        code = code[1:-1]
    return f"<code>{escape_code(code)}</code>"


def render_image(captures: Captures) -> str:
    """Render an image reference as ``<img>``."""
    src = escape_attribute(captures["url"])
    alt = escape_attribute(captures["alt"])
    return f'<img src="{src}" alt="{alt}"{_title_attribute(captures)}>'


def render_link(captures: Captures) -> str:
    """Render an inline link as ``<a>``; the link text stays open to later transforms."""
    href = escape_attribute(captures["url"])
    return f'<a href="{href}"{_title_attribute(captures)}>{captures["text"]}</a>'


def render_bold(captures: Captures) -> str:
    """Render strong emphasis; ``***text***`` nests it inside emphasis."""
    combined = captures.get("combined")
    if combined:
        return f"<em><strong>{combined}</strong></em>"
    return f"<strong>{captures['text']}</strong>"


def render_italic(captures: Captures) -> str:
    """Render emphasis."""
    return f"<em>{captures['text']}</em>"


def render_strikethrough(captures: Captures) -> str:
    """Render deleted text."""
    return f"<del>{captures['text']}</del>"


def render_paragraphs(captures: Captures) -> str:
    """Wrap runs of text lines in ``<p>``, leaving block-level HTML lines alone.

    Lines of a text run are joined with single spaces.
    """
    output: list[str] = []
    pending: list[str] = []

    def flush() -> None:
        if pending:
            output.append(f"<p>{' '.join(pending)}</p>")
            pending.clear()

    for line in captures["text"].split("\n"):
        if _BLOCK_LINE_RE.match(line):
            flush()
            output.append(line)
        else:
            pending.append(line.strip())
    flush()
    return "\n".join(output)


CODE_BLOCKS_DEFINITION = TransformDefinition(
    name=TRANSFORM_CODE_BLOCKS,
    description="Fenced code blocks with an optional language hint",
    usage="```python\nprint('hello')\n```",
    pattern=r"^```[ \t]*(?<lang>[\w#+.-]+)?[ \t]*\r?\n(?<code>[\s\S]*?)^```[ \t]*\r?$",
    flags="gm",
    render=render_code_block,
    tags=("block", "code"),
)

HEADERS_DEFINITION = TransformDefinition(
    name=TRANSFORM_HEADERS,
    description="Headers from h1 (# ) to h6 (######)",
    usage="## Heading Level 2",
    pattern=r"^(?<hashes>#{1,6})[ \t]+(?<text>.+?)(?:[ \t]+#+)?[ \t]*$",
    flags="gm",
    render=render_header,
    tags=("block",),
)

HORIZONTAL_RULE_DEFINITION = TransformDefinition(
    name=TRANSFORM_HORIZONTAL_RULE,
    description="Horizontal rule from three or more dashes, asterisks or underscores",
    usage="---",
    pattern=r"^ {0,3}(?:(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,})$",
    flags="gm",
    render=render_horizontal_rule,
    tags=("block",),
)

UNORDERED_LIST_DEFINITION = TransformDefinition(
    name=TRANSFORM_UNORDERED_LIST,
    description="Unordered list items starting with -, * or +",
    usage="- item one\n- item two",
    pattern=r"(?:^ {0,3}[*+-][ \t]+\S.*$\n?)+",
    flags="gm",
    render=render_unordered_list,
    tags=("block", "lists"),
)

ORDERED_LIST_DEFINITION = TransformDefinition(
    name=TRANSFORM_ORDERED_LIST,
    description="Ordered list items starting with numbers",
    usage="1. first\n2. second",
    pattern=r"(?:^ {0,3}\d{1,9}[.)][ \t]+\S.*$\n?)+",
    flags="gm",
    render=render_ordered_list,
    tags=("block", "lists"),
)

BLOCKQUOTE_DEFINITION = TransformDefinition(
    name=TRANSFORM_BLOCKQUOTE,
    description="Blockquote lines starting with >",
    usage="> quoted text",
    pattern=r"(?:^ {0,3}>.*$\n?)+",
    flags="gm",
    render=render_blockquote,
    tags=("block",),
)

INLINE_CODE_DEFINITION = TransformDefinition(
    name=TRANSFORM_INLINE_CODE,
    description="Inline code wrapped in backticks",
    usage="`const x = 42;`",
    pattern=r"(?<!`)(?<ticks>`+)(?!`)(?<code>[^\n]+?)(?<!`)\k<ticks>(?!`)",
    flags="g",
    render=render_inline_code,
    tags=("inline", "code"),
)

IMAGES_DEFINITION = TransformDefinition(
    name=TRANSFORM_IMAGES,
    description="Images with alt text, URL and optional title",
    usage='![alt text](image.jpg "optional title")',
    pattern=r"!\[(?<alt>[^\]]*)\]\((?<url>[^)\s]+)(?:[ \t]+\"(?<title>[^\"]*)\")?\)",
    flags="g",
    render=render_image,
    tags=("inline", "images"),
)

LINKS_DEFINITION = TransformDefinition(
    name=TRANSFORM_LINKS,
    description="Hyperlinks with text, URL and optional title",
    usage="[link text](https://example.com)",
    pattern=r"(?<!!)\[(?<text>[^\]]+)\]\((?<url>[^)\s]+)(?:[ \t]+\"(?<title>[^\"]*)\")?\)",
    flags="g",
    render=render_link,
    tags=("inline", "links"),
)

BOLD_DEFINITION = TransformDefinition(
    name=TRANSFORM_BOLD,
    description="Bold text wrapped in double asterisks (triple for bold italic)",
    usage="**bold text**",
    pattern=(
        r"(?<![\\*])\*\*\*(?=[^\s*])(?<combined>" + _PAIRED_SPAN_BODY.format(c=r"\*") + r")(?<=\S)\*\*\*(?!\*)"
        r"|(?<![\\*])\*\*(?=[^\s*])(?<text>" + _PAIRED_SPAN_BODY.format(c=r"\*") + r")(?<=\S)\*\*(?!\*)"
    ),
    flags="g",
    render=render_bold,
    tags=("inline", "emphasis"),
)

ITALIC_DEFINITION = TransformDefinition(
    name=TRANSFORM_ITALIC,
    description="Italic text wrapped in single asterisks",
    usage="*italic text*",
    pattern=r"(?<![\w\\*])\*(?=[^\s*])(?<text>" + _SPAN_BODY.format(c=r"*") + r")(?<=\S)\*(?![\w*])",
    flags="g",
    render=render_italic,
    tags=("inline", "emphasis"),
)

STRIKETHROUGH_DEFINITION = TransformDefinition(
    name=TRANSFORM_STRIKETHROUGH,
    description="Strikethrough text wrapped in double tildes",
    usage="~~deleted text~~",
    pattern=r"(?<![\\~])~~(?=[^\s~])(?<text>" + _PAIRED_SPAN_BODY.format(c=r"~") + r")(?<=\S)~~(?!~)",
    flags="g",
    render=render_strikethrough,
    tags=("inline", "emphasis"),
)

PARAGRAPHS_DEFINITION = TransformDefinition(
    name=TRANSFORM_PARAGRAPHS,
    description="Paragraphs separated by blank lines",
    usage="paragraph one\n\nparagraph two",
    pattern=r"(?<text>[^\S\n]*\S[^\n]*(?:\n[^\S\n]*\S[^\n]*)*)",
    flags="g",
    render=render_paragraphs,
    tags=("block",),
)

# Default pipeline order
BUILTIN_TRANSFORMS: tuple[TransformDefinition, ...] = (
    CODE_BLOCKS_DEFINITION,
    HEADERS_DEFINITION,
    HORIZONTAL_RULE_DEFINITION,
    UNORDERED_LIST_DEFINITION,
    ORDERED_LIST_DEFINITION,
    BLOCKQUOTE_DEFINITION,
    INLINE_CODE_DEFINITION,
    IMAGES_DEFINITION,
    LINKS_DEFINITION,
    BOLD_DEFINITION,
    ITALIC_DEFINITION,
    STRIKETHROUGH_DEFINITION,
    PARAGRAPHS_DEFINITION,
)


def register_builtin_transforms(registry: TransformRegistry) -> TransformRegistry:
    """Install the built-in transforms into ``registry`` in default order.

    Parameters
    ----------
    registry : TransformRegistry
        Registry to populate; existing entries with the same names are
        replaced in place

    Returns
    -------
    TransformRegistry
        The same registry

    """
    for definition in BUILTIN_TRANSFORMS:
        registry.register(definition)
    return registry


__all__ = [
    "BUILTIN_TRANSFORMS",
    "register_builtin_transforms",
    "render_blockquote",
    "render_bold",
    "render_code_block",
    "render_header",
    "render_horizontal_rule",
    "render_image",
    "render_inline_code",
    "render_italic",
    "render_link",
    "render_ordered_list",
    "render_paragraphs",
    "render_strikethrough",
    "render_unordered_list",
]
