#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/utils/text.py
"""Text normalization and escaping utilities.

This module provides the whitespace, escaping and delimiter helpers the
traversal engine applies to rendered text.

"""

from __future__ import annotations

import json

from rich.cells import cell_len

from htmldown.constants import BACKTICK_RUN_PATTERN, MARKDOWN_ESCAPE_PATTERN, WHITESPACE_RUN_PATTERN


def collapse_whitespace(text: str) -> str:
    """Collapse runs of ASCII whitespace in a text node to single spaces.

    Tabs, carriage returns and newlines at either end are removed first, so a
    text node that only carries source indentation after a line break keeps a
    single separating space at most.

    Parameters
    ----------
    text : str
        Raw text node content

    Returns
    -------
    str
        Normalized text

    Examples
    --------
        >>> collapse_whitespace("foo \\t\\n  bar")
        'foo bar'

    """
    return WHITESPACE_RUN_PATTERN.sub(" ", text.strip("\t\r\n"))


def escape_markdown(text: str) -> str:
    r"""Backslash-escape Markdown-significant characters.

    Examples
    --------
        >>> escape_markdown("a_b [c]")
        'a\\_b \\[c\\]'

    """
    return MARKDOWN_ESCAPE_PATTERN.sub(r"\\\1", text)


def wrap_non_whitespace(text: str, before: str, after: str) -> str:
    """Wrap delimiters around the non-whitespace extent of ``text``.

    A delimiter run must not be followed (opening) or preceded (closing) by
    whitespace, so leading and trailing whitespace stays outside the
    delimiters. All-whitespace text is returned unchanged without delimiters.

    Parameters
    ----------
    text : str
        Rendered inline content
    before : str
        Opening delimiter, e.g. ``"**"`` or ``"["``
    after : str
        Closing delimiter, e.g. ``"**"`` or ``"](https://example.org)"``

    Returns
    -------
    str
        The wrapped text

    Examples
    --------
        >>> wrap_non_whitespace(" foo bar ", "**", "**")
        ' **foo bar** '

    """
    if not text.strip():
        return text

    start = len(text) - len(text.lstrip())
    stop = len(text.rstrip())
    return text[:start] + before + text[start:stop] + after + text[stop:]


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies (wide characters count twice)."""
    return cell_len(text)


def quote_title(title: str) -> str:
    """Render a link or image title as a double-quoted string with escapes."""
    return json.dumps(title, ensure_ascii=False)


def backtick_fence(text: str, minimum: int = 1) -> str:
    """Return a backtick run longer than any run inside ``text``.

    Parameters
    ----------
    text : str
        Code content the fence must enclose
    minimum : int, default 1
        Shortest fence to return (3 for fenced blocks)

    Returns
    -------
    str
        Fence string, e.g. ``"```"`` or ``"````"``

    """
    longest = max((len(run) for run in BACKTICK_RUN_PATTERN.findall(text)), default=0)
    return "`" * max(minimum, longest + 1)


def code_span(text: str) -> str:
    """Render ``text`` literally as an inline code span.

    Content that starts or ends with a backtick is padded with one space so
    the fence stays separate from it.

    Examples
    --------
        >>> code_span("a*b")
        '`a*b`'
        >>> code_span("a`b")
        '``a`b``'

    """
    fence = backtick_fence(text)
    pad = " " if text.startswith("`") or text.endswith("`") else ""
    return f"{fence}{pad}{text}{pad}{fence}"
