#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/transforms/patterns.py
"""Pattern compilation for transforms.

This module turns a transform's textual pattern and matching options into a
``CompiledPattern``: a compiled regular expression plus the scanning mode
(every non-overlapping match, or only the first).

Flags may be given as a string of letters (``"gm"``) or as an iterable of
letters and long names (``{"global", "multiline"}``):

- ``g`` / ``global`` - replace every match instead of only the first
- ``m`` / ``multiline`` - ``^`` and ``$`` anchor at every physical line
- ``i`` / ``ignorecase`` - case-insensitive matching
- ``s`` / ``dotall`` - ``.`` also matches newlines
- ``u`` / ``unicode`` - accepted, patterns are always Unicode-aware
- ``x`` / ``verbose`` - whitespace and comments in the pattern are ignored
- ``a`` / ``ascii`` - ``\\w``, ``\\b`` and friends match ASCII only

Named groups may be written either as ``(?P<name>...)`` or in the portable
``(?<name>...)`` form, with ``\\k<name>`` backreferences; the portable forms
are rewritten before compilation. Lookbehind and lookahead assertions are
passed through unchanged.

Examples
--------
    >>> compiled = compile_pattern(r"^(?<hashes>#{1,6})\\s+(?<text>.+)$", "gm")
    >>> compiled.group_names
    ('hashes', 'text')
    >>> compiled.sub(lambda m: m.group("text").upper(), "# a\\n## b")
    ('A\\nB', 2)

"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Union

from rxmd.constants import DEFAULT_FLAGS, FLAG_LONG_NAMES, FLAG_ORDER, FLAG_RE_MAP
from rxmd.exceptions import PatternError

logger = logging.getLogger(__name__)

FlagsLike = Union[str, Iterable[str], None]

# "(?<name>" not preceded by an odd number of backslashes; lookbehind "(?<=" / "(?<!" never matches
_PORTABLE_GROUP_RE = re.compile(r"(?<!\\)((?:\\\\)*)\(\?<([A-Za-z_][A-Za-z0-9_]*)>")
_PORTABLE_BACKREF_RE = re.compile(r"(?<!\\)((?:\\\\)*)\\k<([A-Za-z_][A-Za-z0-9_]*)>")


@dataclass(frozen=True)
class CompiledPattern:
    """A compiled transform pattern bound to its scanning mode.

    Parameters
    ----------
    source : str
        The pattern as written in the transform definition
    flags : str
        Canonical flag letters (e.g. ``"gm"``)
    regex : re.Pattern
        The compiled regular expression
    is_global : bool
        Whether every match is replaced, or only the first

    """

    source: str
    flags: str
    regex: re.Pattern[str]
    is_global: bool

    @property
    def group_names(self) -> tuple[str, ...]:
        """Named groups declared by the pattern, in group-number order."""
        index = self.regex.groupindex
        return tuple(sorted(index, key=index.__getitem__))

    @property
    def has_named_groups(self) -> bool:
        """Whether the pattern declares at least one named group."""
        return bool(self.regex.groupindex)

    def sub(self, callback: Callable[[re.Match[str]], str], text: str) -> tuple[str, int]:
        """Replace matches in ``text`` left to right with ``callback(match)``.

        Parameters
        ----------
        callback : callable
            Receives each ``re.Match`` and returns the replacement string
        text : str
            Buffer to scan

        Returns
        -------
        tuple[str, int]
            The new buffer and the number of replacements made

        """
        return self.regex.subn(callback, text, count=0 if self.is_global else 1)


def normalize_flags(flags: FlagsLike) -> str:
    """Normalize flag input to a canonical string of flag letters.

    Parameters
    ----------
    flags : str, iterable of str, or None
        Flag letters (``"gm"``), or an iterable of letters and long names.
        ``None`` and empty values select the default (``"g"``); to replace
        only the first match, pass any flag set without ``g`` (e.g. ``"u"``).

    Returns
    -------
    str
        Deduplicated flag letters in canonical order

    Raises
    ------
    PatternError
        If a flag is unknown or unsupported

    """
    if not flags:
        return DEFAULT_FLAGS

    if isinstance(flags, str):
        tokens: list[str] = list(flags)
    else:
        tokens = []
        for item in flags:
            if not isinstance(item, str):
                raise PatternError(f"Flags must be strings, got {type(item).__name__}")
            key = item.strip()
            # A long name maps to one letter; anything else is read as a run of letters
            tokens.extend([FLAG_LONG_NAMES[key.lower()]] if key.lower() in FLAG_LONG_NAMES else list(key))

    letters: set[str] = set()
    for token in tokens:
        if token.isspace():
            continue
        if token not in FLAG_RE_MAP:
            raise PatternError(f"Unsupported pattern flag: {token!r}")
        letters.add(token)

    return "".join(letter for letter in FLAG_ORDER if letter in letters)


def translate_pattern(pattern: str) -> str:
    r"""Rewrite portable named-group syntax into Python ``re`` syntax.

    Examples
    --------
        >>> translate_pattern(r"(?<word>\w+) \k<word>")
        '(?P<word>\\w+) (?P=word)'
        >>> translate_pattern(r"(?<!\\)(?<=a)b")
        '(?<!\\\\)(?<=a)b'

    """
    translated = _PORTABLE_GROUP_RE.sub(r"\1(?P<\2>", pattern)
    return _PORTABLE_BACKREF_RE.sub(r"\1(?P=\2)", translated)


@functools.lru_cache(maxsize=256)
def _compile_cached(pattern: str, flags: str) -> CompiledPattern:
    re_flags = 0
    for letter in flags:
        re_flags |= FLAG_RE_MAP[letter]
    regex = re.compile(translate_pattern(pattern), re_flags)
    return CompiledPattern(source=pattern, flags=flags, regex=regex, is_global="g" in flags)


def compile_pattern(pattern: str, flags: FlagsLike = None, transform_name: str | None = None) -> CompiledPattern:
    """Compile a transform pattern with its matching options.

    Compiled patterns are cached per ``(pattern, flags)``, so recompiling
    the same transform on every ``parse`` call is cheap.

    Parameters
    ----------
    pattern : str
        Regular expression source
    flags : str, iterable of str, or None
        Matching options, see :func:`normalize_flags`
    transform_name : str, optional
        Name of the owning transform, used in error messages

    Returns
    -------
    CompiledPattern
        The compiled matcher

    Raises
    ------
    PatternError
        If the pattern is not a string, fails to compile, or uses an
        unsupported flag

    """
    if not isinstance(pattern, str):
        raise PatternError(
            f"Pattern must be a string, got {type(pattern).__name__}",
            transform_name=transform_name,
        )

    owner = f" for transform '{transform_name}'" if transform_name else ""
    try:
        canonical = normalize_flags(flags)
    except PatternError as e:
        raise PatternError(
            f"{e.message}{owner}: /{pattern}/", pattern=pattern, transform_name=transform_name, original_error=e
        ) from e

    try:
        return _compile_cached(pattern, canonical)
    except re.error as e:
        logger.debug(f"Pattern compilation failed{owner}: {pattern!r}")
        raise PatternError(
            f"Invalid pattern{owner}: /{pattern}/{canonical}: {e}",
            pattern=pattern,
            transform_name=transform_name,
            original_error=e,
        ) from e


__all__ = [
    "CompiledPattern",
    "FlagsLike",
    "compile_pattern",
    "normalize_flags",
    "translate_pattern",
]
