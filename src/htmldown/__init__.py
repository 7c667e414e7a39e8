"""htmldown - convert HTML documents to Markdown.

htmldown walks a parsed HTML tree once, depth first, mapping each element to a
Markdown emission rule: headings, paragraphs, emphasis, links, images, lists,
blockquotes, tables and fenced code blocks. Unknown tags are transparent, and
callers can register extension rules that replace (or wrap) the handling of
any tag.

Examples
--------
Convert a string:

    >>> from htmldown import html_to_markdown
    >>> html_to_markdown("<ol><li>one</li><li>two</li></ol>")
    '1. one\\n2. two\\n\\n\\n'

Stream from a file into another:

    >>> from htmldown import convert
    >>> with open("page.html", "rb") as src, open("page.md", "w", encoding="utf-8") as out:
    ...     convert(out, src)

Guess code block languages with Pygments:

    >>> from htmldown import ConvertOptions, guess_language
    >>> markdown = html_to_markdown(html, ConvertOptions(guess_lang=guess_language))

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from htmldown.exceptions import (
    DependencyError,
    HtmldownError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from htmldown.html2markdown import HTMLToMarkdown, convert, html_to_markdown
from htmldown.options import ConvertOptions
from htmldown.rules import CustomRule, TagRule, tag_rule
from htmldown.utils.code import guess_language

__all__ = [
    "ConvertOptions",
    "CustomRule",
    "DependencyError",
    "HTMLToMarkdown",
    "HtmldownError",
    "ParsingError",
    "RenderingError",
    "TagRule",
    "ValidationError",
    "convert",
    "guess_language",
    "html_to_markdown",
    "tag_rule",
]
