#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the rxmd library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Pattern Flags - Matching option letters and their long names
3. Built-in Transforms - Names and default pipeline order
4. Configuration - Config file discovery and CLI exit codes
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DisplayMode = Literal["plain", "terminal"]

# =============================================================================
# Pattern Flags
# =============================================================================

DEFAULT_FLAGS = "g"

# Flag letter -> re flag. "g" has no re counterpart: it selects scan-all vs first-match.
FLAG_RE_MAP: dict[str, int] = {
    "g": 0,
    "m": re.MULTILINE,
    "i": re.IGNORECASE,
    "s": re.DOTALL,
    "u": 0,
    "x": re.VERBOSE,
    "a": re.ASCII,
}

FLAG_LONG_NAMES: dict[str, str] = {
    "global": "g",
    "multiline": "m",
    "ignorecase": "i",
    "case_insensitive": "i",
    "dotall": "s",
    "unicode": "u",
    "verbose": "x",
    "ascii": "a",
}

# Canonical order used when flags are rendered back to text (help output, logs)
FLAG_ORDER = "gimsuxa"

# =============================================================================
# Built-in Transforms
# =============================================================================

TRANSFORM_CODE_BLOCKS = "code-blocks"
TRANSFORM_HEADERS = "headers"
TRANSFORM_HORIZONTAL_RULE = "horizontal-rule"
TRANSFORM_UNORDERED_LIST = "unordered-list"
TRANSFORM_ORDERED_LIST = "ordered-list"
TRANSFORM_BLOCKQUOTE = "blockquote"
TRANSFORM_INLINE_CODE = "inline-code"
TRANSFORM_IMAGES = "images"
TRANSFORM_LINKS = "links"
TRANSFORM_BOLD = "bold"
TRANSFORM_ITALIC = "italic"
TRANSFORM_STRIKETHROUGH = "strikethrough"
TRANSFORM_PARAGRAPHS = "paragraphs"

# Block structures first, inline markup next, paragraph wrapping last
BUILTIN_TRANSFORM_ORDER: tuple[str, ...] = (
    TRANSFORM_CODE_BLOCKS,
    TRANSFORM_HEADERS,
    TRANSFORM_HORIZONTAL_RULE,
    TRANSFORM_UNORDERED_LIST,
    TRANSFORM_ORDERED_LIST,
    TRANSFORM_BLOCKQUOTE,
    TRANSFORM_INLINE_CODE,
    TRANSFORM_IMAGES,
    TRANSFORM_LINKS,
    TRANSFORM_BOLD,
    TRANSFORM_ITALIC,
    TRANSFORM_STRIKETHROUGH,
    TRANSFORM_PARAGRAPHS,
)

# Tags that paragraph wrapping leaves alone when they open a line
BLOCK_LEVEL_TAGS: tuple[str, ...] = (
    "address",
    "article",
    "aside",
    "blockquote",
    "details",
    "div",
    "dl",
    "fieldset",
    "figure",
    "footer",
    "form",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "header",
    "hr",
    "li",
    "main",
    "nav",
    "ol",
    "p",
    "pre",
    "section",
    "table",
    "ul",
)

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_DISPLAY_MODE: DisplayMode = "plain"

CONFIG_FILENAMES: tuple[str, ...] = (".rxmd.toml", ".rxmd.yaml", ".rxmd.yml", ".rxmd.json")
PYPROJECT_TOOL_SECTION = "rxmd"
CONFIG_ENV_VAR = "RXMD_CONFIG"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
