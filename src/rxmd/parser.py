#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/parser.py
"""The Markdown parser facade.

``MarkdownParser`` owns one ``TransformRegistry``, fills it with the
built-in transforms on construction and runs the pipeline over it.

Examples
--------
Basic conversion:

    >>> from rxmd import MarkdownParser
    >>> md = MarkdownParser()
    >>> md.parse("# Hello World")
    '<h1>Hello World</h1>'

Add a transform ahead of paragraph wrapping and replace a built-in:

    >>> md.register(
    ...     name="highlight",
    ...     pattern=r"==(?<text>[^=]+)==",
    ...     render=lambda c: f"<mark>{c['text']}</mark>",
    ...     before="paragraphs",
    ... ).register(
    ...     name="bold",
    ...     pattern=r"\\*\\*(?<text>[^*]+)\\*\\*",
    ...     render=lambda c: f"<b>{c['text']}</b>",
    ... )
    >>> md.parse("**x** ==y==")
    '<p><b>x</b> <mark>y</mark></p>'

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from rxmd.help import render_help_markdown, render_help_terminal
from rxmd.options import RxmdOptions
from rxmd.transforms.builtin import register_builtin_transforms
from rxmd.transforms.definition import TransformDefinition
from rxmd.transforms.pipeline import run_pipeline
from rxmd.transforms.registry import TransformRegistry

logger = logging.getLogger(__name__)


class MarkdownParser:
    """Convert Markdown to HTML with an ordered, editable set of transforms.

    Parameters
    ----------
    options : RxmdOptions, optional
        Parser options; defaults to ``RxmdOptions()``

    Attributes
    ----------
    transforms : TransformRegistry
        The registry owned by this parser; its order is the pipeline order
    tty : bool
        Whether ``help()`` renders decorated terminal output

    Notes
    -----
    Parsers share nothing; each instance has its own registry. ``parse``
    works on a snapshot of the registry taken when it starts.

    """

    def __init__(self, options: Optional[RxmdOptions] = None) -> None:
        """Create a parser populated with the built-in transforms."""
        self.options = options or RxmdOptions()
        self.transforms = TransformRegistry()
        self.tty = self.options.display_mode == "terminal"
        self.initialize()

    def initialize(self) -> None:
        """Install the built-in transforms, then drop the disabled ones."""
        register_builtin_transforms(self.transforms)
        for name in self.options.disabled_transforms:
            self.transforms.unregister(name)
        logger.debug(f"Initialized parser with {len(self.transforms)} transform(s)")

    def register(
        self,
        definition: TransformDefinition | Mapping[str, Any] | None = None,
        *,
        before: Optional[str] = None,
        after: Optional[str] = None,
        **fields: Any,
    ) -> MarkdownParser:
        """Register or replace a transform.

        Parameters
        ----------
        definition : TransformDefinition or Mapping, optional
            The transform; keyword ``fields`` may supply or override fields
        before : str, optional
            Insert before this registered transform
        after : str, optional
            Insert after this registered transform
        **fields
            Definition fields (``name``, ``description``, ``usage``,
            ``pattern``, ``flags``, ``render``, ``tags``)

        Returns
        -------
        MarkdownParser
            This parser, for chaining

        Raises
        ------
        ValidationError
            If ``name``, ``pattern`` or ``render`` is missing
        PatternError
            If the pattern does not compile

        Notes
        -----
        Replacing an existing name keeps its pipeline position.

        """
        self.transforms.register(definition, before=before, after=after, **fields)
        return self

    def unregister(self, name: str) -> MarkdownParser:
        """Remove a transform by name; unknown names are ignored."""
        self.transforms.unregister(name)
        return self

    def list(self) -> list[str]:
        """Return the registered transform names in pipeline order."""
        return self.transforms.list()

    def lookup(self, name: str) -> Optional[TransformDefinition]:
        """Return a transform definition, or None if it is not registered."""
        return self.transforms.lookup(name)

    def parse(self, markdown: str) -> str:
        """Convert ``markdown`` to HTML.

        Parameters
        ----------
        markdown : str
            Input text

        Returns
        -------
        str
            The HTML produced by the final pipeline pass; ``""`` for empty input

        Raises
        ------
        PatternError
            If a transform's pattern does not compile
        TypeError
            If ``markdown`` is not a string, or a render function returns a
            non-string

        Notes
        -----
        Exceptions raised by render functions propagate unchanged.

        """
        if not isinstance(markdown, str):
            raise TypeError(f"parse() expects str, got {type(markdown).__name__}")
        if not markdown:
            return ""
        return run_pipeline(markdown, self.transforms.snapshot())

    def help(self, name: Optional[str] = None) -> str:
        """Describe all transforms, or one by name.

        Renders Markdown by default and ANSI-decorated text when ``tty`` is
        set. An unknown name returns a "not found" message.
        """
        if self.tty:
            return render_help_terminal(self.transforms, name)
        return render_help_markdown(self.transforms, name)

    def __repr__(self) -> str:
        return f"MarkdownParser(transforms={self.list()!r})"


def parse(markdown: str, options: Optional[RxmdOptions] = None) -> str:
    """Convert ``markdown`` to HTML with a fresh parser.

    Parameters
    ----------
    markdown : str
        Input text
    options : RxmdOptions, optional
        Options for the temporary parser

    Returns
    -------
    str
        The generated HTML

    """
    return MarkdownParser(options).parse(markdown)


__all__ = [
    "MarkdownParser",
    "parse",
]
