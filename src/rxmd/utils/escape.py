#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/rxmd/utils/escape.py
"""HTML escaping utilities.

This module provides the escape functions used by the built-in render
functions. ``escape_html`` is the plain entity encoder the other two build
on, also public for custom render functions. ``escape_code`` additionally
neutralizes the characters later transforms match on, so that code emitted
early in the pipeline survives the inline passes verbatim.

"""

from __future__ import annotations

import html

# Markup characters that inline transforms match on, as numeric references.
# Browsers decode these back to the literal characters.
_MARKUP_ENTITIES = {
    "*": "&#42;",
    "_": "&#95;",
    "~": "&#126;",
    "`": "&#96;",
    "[": "&#91;",
    "]": "&#93;",
    "!": "&#33;",
}

_MARKUP_TABLE = str.maketrans(_MARKUP_ENTITIES)


def escape_html(text: str, quote: bool = True) -> str:
    """Escape HTML special characters to entities.

    Parameters
    ----------
    text : str
        Text to escape
    quote : bool, default True
        Also escape double and single quotes (needed inside attribute values)

    Returns
    -------
    str
        Text with HTML entities

    Examples
    --------
        >>> escape_html("<script>alert('XSS')</script>")
        '&lt;script&gt;alert(&#x27;XSS&#x27;)&lt;/script&gt;'

    Notes
    -----
    This function escapes the following characters:
    - & -> &amp;
    - < -> &lt;
    - > -> &gt;
    - " -> &quot; (when ``quote`` is true)
    - ' -> &#x27; (when ``quote`` is true)

    """
    if not text:
        return text

    return html.escape(text, quote=quote)


def escape_code(text: str, preserve_newlines: bool = True) -> str:
    r"""Escape code content so later transforms cannot match inside it.

    The text is HTML-escaped, then the characters used by emphasis, code,
    link and image markup are replaced with numeric character references.
    With ``preserve_newlines=False`` line breaks become ``&#10;`` so the
    result occupies a single physical line, which keeps line-anchored
    patterns (headers, lists, rules) from matching lines of code.

    Parameters
    ----------
    text : str
        Raw code text
    preserve_newlines : bool, default True
        Keep literal newlines instead of encoding them

    Returns
    -------
    str
        Escaped code, rendering identically in a browser

    Examples
    --------
        >>> escape_code("a **b** <c>")
        'a &#42;&#42;b&#42;&#42; &lt;c&gt;'
        >>> escape_code("x\ny", preserve_newlines=False)
        'x&#10;y'

    """
    if not text:
        return text

    escaped = escape_html(text, quote=False).translate(_MARKUP_TABLE)
    if not preserve_newlines:
        escaped = escaped.replace("\r\n", "\n").replace("\n", "&#10;")
    return escaped


def escape_attribute(text: str) -> str:
    """Escape text for use inside a double-quoted HTML attribute.

    Quotes are entity-encoded and markup characters are neutralized like in
    :func:`escape_code`, so URLs and alt texts are not rewritten by the
    emphasis transforms that run afterwards.

    Examples
    --------
        >>> escape_attribute('a "b" *c*')
        'a &quot;b&quot; &#42;c&#42;'

    """
    if not text:
        return text

    return escape_html(text).translate(_MARKUP_TABLE)


__all__ = [
    "escape_html",
    "escape_code",
    "escape_attribute",
]
