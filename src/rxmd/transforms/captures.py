#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/transforms/captures.py
"""Capture bags handed to render functions.

Each match found by a transform is converted into a capture bag before its
render function is called. The bag comes in two shapes:

- ``NamedCaptures`` when the pattern declares named groups: a read-only
  mapping of group name to matched text.
- ``PositionalCaptures`` when it does not: a read-only sequence where index
  ``0`` is the full match and ``1..n`` are the numbered groups.

Both shapes expose the full match as ``captures.match`` and ``captures[0]``,
the numbered groups as ``captures.groups``, and ``get(key, default="")``.
Optional groups that did not participate in the match are reported as
``""``, never ``None``, so render functions need no special case for them.

Examples
--------
    >>> import re
    >>> bag = extract_captures(re.search(r"(?P<lang>\\w+)?:(?P<code>.*)", ":x = 1"))
    >>> bag["lang"], bag["code"]
    ('', 'x = 1')
    >>> bag = extract_captures(re.search(r"(\\d+)-(\\d+)", "pages 3-7"))
    >>> bag[0], bag[1], bag[2]
    ('3-7', '3', '7')

"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Literal, Union, overload

CaptureKey = Union[str, int]


class Captures:
    """Common state of both capture bag shapes.

    Parameters
    ----------
    match : re.Match
        The raw match this bag describes

    """

    __slots__ = ("_full", "_groups", "_span")

    kind: Literal["named", "positional"]

    def __init__(self, match: re.Match[str]) -> None:
        """Copy the matched text out of ``match``."""
        self._full: str = match.group(0)
        self._groups: tuple[str, ...] = tuple(group if group is not None else "" for group in match.groups())
        self._span: tuple[int, int] = match.span()

    @property
    def match(self) -> str:
        """The full matched text."""
        return self._full

    @property
    def groups(self) -> tuple[str, ...]:
        """Numbered groups in order, absent groups as ``""``."""
        return self._groups

    @property
    def span(self) -> tuple[int, int]:
        """Start and end offsets of the match in the buffer it was found in."""
        return self._span

    def _positional(self, index: int) -> str:
        values = (self._full, *self._groups)
        try:
            return values[index]
        except IndexError:
            raise IndexError(f"No capture group {index}") from None

    def get(self, key: CaptureKey, default: Any = "") -> Any:
        """Return the capture for ``key``, or ``default`` if there is none."""
        try:
            return self[key]  # type: ignore[index]
        except (KeyError, IndexError):
            return default

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._full!r})"


class NamedCaptures(Captures, Mapping[str, str]):
    """Capture bag for patterns that declare named groups.

    Iteration, ``len()`` and ``keys()`` cover the named groups only; integer
    keys reach the full match (``0``) and numbered groups.

    """

    __slots__ = ("_named",)

    kind = "named"

    def __init__(self, match: re.Match[str]) -> None:
        """Build the name -> text record from ``match``."""
        super().__init__(match)
        index = match.re.groupindex
        self._named: dict[str, str] = {
            name: self._groups[number - 1] for name, number in sorted(index.items(), key=lambda item: item[1])
        }

    def __getitem__(self, key: CaptureKey) -> str:  # type: ignore[override]
        if isinstance(key, int):
            return self._positional(key)
        try:
            return self._named[key]
        except KeyError:
            raise KeyError(f"Pattern has no group named '{key}'") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._named)

    def __len__(self) -> int:
        return len(self._named)

    def as_dict(self) -> dict[str, str]:
        """Return a plain ``dict`` copy of the named groups."""
        return dict(self._named)


class PositionalCaptures(Captures, Sequence[str]):
    """Capture bag for patterns without named groups.

    Behaves like the argument list of a replacement callback: index ``0`` is
    the full match, ``1..n`` the numbered groups.

    """

    __slots__ = ()

    kind = "positional"

    @overload
    def __getitem__(self, key: int) -> str: ...

    @overload
    def __getitem__(self, key: slice) -> tuple[str, ...]: ...

    def __getitem__(self, key: int | slice) -> str | tuple[str, ...]:
        if isinstance(key, slice):
            return (self._full, *self._groups)[key]
        if not isinstance(key, int):
            raise KeyError(f"Pattern has no named groups, cannot look up '{key}'")
        return self._positional(key)

    def __len__(self) -> int:
        return len(self._groups) + 1


def extract_captures(match: re.Match[str]) -> NamedCaptures | PositionalCaptures:
    """Build the capture bag for one match.

    Parameters
    ----------
    match : re.Match
        A match produced while scanning the buffer

    Returns
    -------
    NamedCaptures or PositionalCaptures
        Named record when the pattern declares named groups, positional
        sequence otherwise

    """
    if match.re.groupindex:
        return NamedCaptures(match)
    return PositionalCaptures(match)


__all__ = [
    "CaptureKey",
    "Captures",
    "NamedCaptures",
    "PositionalCaptures",
    "extract_captures",
]
