#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/transforms/pipeline.py
"""Sequential application of transforms to a text buffer.

The pipeline is a plain ordered loop: each transform scans the whole
buffer, every match is rendered and spliced back left to right, and the
resulting buffer is the input of the next transform.

The pipeline never reorders transforms, detects conflicts between them,
or retries; putting block structures ahead of the permissive inline and
paragraph rules is the integrator's job. Exceptions raised by render
functions propagate unchanged.

Examples
--------
    >>> from rxmd.transforms import TransformDefinition, run_pipeline
    >>> definitions = [
    ...     TransformDefinition(name="bold", pattern=r"\\*\\*(?<text>[^*]+)\\*\\*",
    ...                         render=lambda c: f"<strong>{c['text']}</strong>"),
    ... ]
    >>> run_pipeline("a **b** c", definitions)
    'a <strong>b</strong> c'

"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from rxmd.transforms.captures import extract_captures
from rxmd.transforms.definition import TransformDefinition
from rxmd.transforms.patterns import compile_pattern

logger = logging.getLogger(__name__)


def apply_transform(definition: TransformDefinition, text: str) -> str:
    """Run one transform over ``text``.

    Parameters
    ----------
    definition : TransformDefinition
        The transform to apply
    text : str
        Current buffer

    Returns
    -------
    str
        Buffer with every visited match replaced by the rendered output

    Raises
    ------
    PatternError
        If the transform's pattern does not compile
    TypeError
        If the render function returns something other than a string

    """
    compiled = compile_pattern(definition.pattern, definition.flags, transform_name=definition.name)
    render = definition.render
    if render is None:
        raise TypeError(f"Transform '{definition.name}' has no render function")

    def _replace(match: re.Match[str]) -> str:
        result = render(extract_captures(match))
        if not isinstance(result, str):
            raise TypeError(
                f"Render function for transform '{definition.name}' returned "
                f"{type(result).__name__} instead of str"
            )
        return result

    output, count = compiled.sub(_replace, text)
    logger.debug(f"Transform '{definition.name}' replaced {count} match(es)")
    return output


def run_pipeline(text: str, definitions: Iterable[TransformDefinition]) -> str:
    """Apply ``definitions`` in order to ``text``.

    Parameters
    ----------
    text : str
        Input markup
    definitions : iterable of TransformDefinition
        Transforms in pipeline order. The iterable is materialized before the
        first pass, so later changes to its source do not affect this run

    Returns
    -------
    str
        The final buffer; ``""`` for empty input, without running any transform

    """
    if not text:
        return ""

    ordered = tuple(definitions)
    buffer = text
    for definition in ordered:
        buffer = apply_transform(definition, buffer)

    logger.debug(f"Pipeline applied {len(ordered)} transform(s) to {len(text)} character(s)")
    return buffer


__all__ = [
    "apply_transform",
    "run_pipeline",
]
