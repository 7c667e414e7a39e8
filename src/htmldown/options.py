#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML to Markdown conversion.

``ConvertOptions`` is immutable. Code paths that need a locally different
setting (entering a code block, entering a list body) derive a new value with
:meth:`CloneFrozenMixin.create_updated` and pass it down the recursion; the
caller's instance is never modified.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Sequence

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from htmldown.constants import (
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_HTML_PARSER,
    DEFAULT_INDENT_WIDTH,
    DEFAULT_MAX_DEPTH,
    DEFAULT_SCRIPT_PASSTHROUGH,
    DEFAULT_STYLE_PASSTHROUGH,
    DEFAULT_TRIM_SPACE,
    HTML_PARSERS,
    HtmlParser,
)

if TYPE_CHECKING:
    from htmldown.rules import CustomRule

LanguageGuesser = Callable[[str], str]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConvertOptions(CloneFrozenMixin):
    """Settings for a single HTML to Markdown conversion.

    Parameters
    ----------
    guess_lang : callable or None, default None
        Called with the text of a code block; returns a language label for the
        opening fence. Raising an exception or returning an empty string means
        "no guess" and is never fatal.
    script : bool, default False
        Emit ``<script>`` elements verbatim as raw HTML instead of dropping them.
    style : bool, default False
        Emit ``<style>`` elements verbatim as raw HTML instead of dropping them.
    trim_space : bool, default False
        Drop whitespace-only text nodes entirely. List bodies always render in
        this mode.
    custom_rules : sequence of CustomRule, default ()
        Extension rules consulted before the built-in tag handling. When two
        rules claim the same tag, the later one wins.
    escape_special : bool, default True
        Backslash-escape Markdown-significant characters in text. Code contexts
        render with a clone that has this turned off.
    html_parser : {"html5lib", "html.parser", "lxml"}, default "html5lib"
        BeautifulSoup tree builder used to parse the input.
    indent_width : int, default 4
        Spaces per list nesting level, also used for list item continuation lines.
    max_depth : int, default 100
        Maximum element nesting depth the traversal will descend into.

    """

    guess_lang: LanguageGuesser | None = field(
        default=None,
        metadata={"help": "Callable guessing a code block language", "exclude_from_cli": True},
    )
    script: bool = field(
        default=DEFAULT_SCRIPT_PASSTHROUGH,
        metadata={"help": "Pass <script> elements through as raw HTML"},
    )
    style: bool = field(
        default=DEFAULT_STYLE_PASSTHROUGH,
        metadata={"help": "Pass <style> elements through as raw HTML"},
    )
    trim_space: bool = field(
        default=DEFAULT_TRIM_SPACE,
        metadata={"help": "Drop whitespace-only text nodes"},
    )
    custom_rules: Sequence[CustomRule] = field(
        default=(),
        metadata={"help": "Extension rules keyed by tag name", "exclude_from_cli": True},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Do not escape Markdown special characters in text", "cli_name": "no-escape-special"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup tree builder used to parse the input", "choices": list(HTML_PARSERS)},
    )
    indent_width: int = field(
        default=DEFAULT_INDENT_WIDTH,
        metadata={"help": "Spaces per list nesting level", "type": int},
    )
    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum element nesting depth to convert", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate field values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.indent_width < 0:
            raise ValueError(f"indent_width must be non-negative, got {self.indent_width}")
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.html_parser not in HTML_PARSERS:
            raise ValueError(f"html_parser must be one of {', '.join(HTML_PARSERS)}, got {self.html_parser!r}")
        if self.guess_lang is not None and not callable(self.guess_lang):
            raise ValueError("guess_lang must be callable")
