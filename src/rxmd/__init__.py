#  Copyright (c) 2025 Tom Villani, Ph.D.
"""rxmd - a small, inspectable, regex-driven Markdown to HTML converter.

Markdown is converted by running an ordered list of transforms over the
input. Each transform is a pattern plus a render function; the output of
one transform is the input of the next. The order is fully under the
caller's control.

Examples
--------
    >>> import rxmd
    >>> rxmd.parse("**bold** and *italic*")
    '<p><strong>bold</strong> and <em>italic</em></p>'

    >>> md = rxmd.MarkdownParser()
    >>> md.list()[:3]
    ['code-blocks', 'headers', 'horizontal-rule']

"""

from rxmd.exceptions import ConfigurationError, PatternError, RxmdError, ValidationError
from rxmd.options import RxmdOptions
from rxmd.parser import MarkdownParser, parse
from rxmd.transforms import (
    BUILTIN_TRANSFORMS,
    NamedCaptures,
    PositionalCaptures,
    TransformDefinition,
    TransformRegistry,
)

__version__ = "0.1.0"

__all__ = [
    "BUILTIN_TRANSFORMS",
    "ConfigurationError",
    "MarkdownParser",
    "NamedCaptures",
    "PatternError",
    "PositionalCaptures",
    "RxmdError",
    "RxmdOptions",
    "TransformDefinition",
    "TransformRegistry",
    "ValidationError",
    "parse",
]
