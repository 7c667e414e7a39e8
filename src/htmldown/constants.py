#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the htmldown library.

This module centralizes the tag families, escape tables and default option
values used by the traversal engine, so the dispatch code reads as plain
lookups.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Formatting - escaping and delimiters
3. Tag Families - element groups the traversal dispatches on
4. Conversion Defaults - default values for ``ConvertOptions``
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]

HTML_PARSERS: tuple[str, ...] = ("html5lib", "html.parser", "lxml")

# Package that provides each bs4 tree builder, for dependency errors
HTML_PARSER_PACKAGES: dict[str, str] = {
    "html5lib": "html5lib",
    "lxml": "lxml",
    "html.parser": "",
}

# =============================================================================
# Markdown Formatting
# =============================================================================

# \ is the escape character itself, * _ are delimiters and bullets,
# [ ] ( ) build links and images, < > raw HTML and blockquotes,
# # headings, + - list bullets, ! images, ` code spans
MARKDOWN_SPECIAL_CHARS = "\\*_[]()<>#+-!`"

MARKDOWN_ESCAPE_PATTERN = re.compile("([" + re.escape(MARKDOWN_SPECIAL_CHARS) + "])")

# ASCII whitespace only; a non-breaking space is content, not layout
WHITESPACE_RUN_PATTERN = re.compile(r"[ \t\n\v\f\r]+")

CODE_FENCE = "```"
BACKTICK_RUN_PATTERN = re.compile("`+")
HORIZONTAL_RULE = "---"
UNORDERED_LIST_MARKER = "* "
BLOCKQUOTE_PREFIX = "> "
LANGUAGE_CLASS_PREFIX = "language-"

# =============================================================================
# Tag Families
# =============================================================================

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

# A preceding sibling of one of these kinds already ended its line
BLOCK_BOUNDARY_TAGS = frozenset({"br", "p", "ul", "ol", "div", "blockquote"}) | HEADING_TAGS

TABLE_SECTION_TAGS = frozenset({"thead", "tbody", "tfoot"})
TABLE_CELL_TAGS = frozenset({"td", "th"})

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html5lib"
DEFAULT_INDENT_WIDTH = 4
DEFAULT_MAX_DEPTH = 100
DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_TRIM_SPACE = False
DEFAULT_SCRIPT_PASSTHROUGH = False
DEFAULT_STYLE_PASSTHROUGH = False
