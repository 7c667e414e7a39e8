"""HTML to Markdown conversion module.

This module converts a parsed HTML document into Markdown with a single
depth-first walk of the BeautifulSoup tree. Each element is dispatched by its
lowercased tag name to an emission rule that appends text to an output sink;
elements without a rule are transparent and render their children.

Rules that need to measure or reshape their subtree's output (links and
emphasis, lists, blockquotes, tables, code blocks) render it into a scratch
buffer first and then write the result into the parent's sink.

Supported HTML Elements
-----------------------
- Text formatting: ``b``/``strong``, ``i``/``em``, ``del``/``s``, inline ``code``
- Structure: ``h1``-``h6``, ``p``, ``div``, ``br``, ``hr``
- Lists: ``ul``, ``ol``, ``li`` with nesting
- Tables: ``table`` with ``thead``/``tbody``/``tfoot`` sections
- Links and images: ``a``, ``img``
- Code blocks: ``pre`` and ``blockquote class="code"``
- Blockquotes with nesting
- Raw passthrough of ``script`` and ``style`` when enabled

Examples
--------
Basic HTML string conversion:

    >>> from htmldown import html_to_markdown
    >>> html_to_markdown("<p>Content with <strong>bold</strong> text.</p>")
    'Content with **bold** text.\\n\\n\\n'

Streaming from a binary file into a text sink:

    >>> import sys
    >>> from htmldown import convert
    >>> with open("page.html", "rb") as f:
    ...     convert(sys.stdout, f)

Custom configuration with options:

    >>> from htmldown.options import ConvertOptions
    >>> options = ConvertOptions(script=True, trim_space=True)
    >>> markdown = html_to_markdown("<ul><li>One</li><li>Two</li></ul>", options)
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
#  Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
#  documentation files (the “Software”), to deal in the Software without restriction, including without limitation
#  the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
#  and to permit persons to whom the Software is furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in all copies or substantial
#  portions of the Software.
#
#  THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING
#  BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
#  IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY,
#  WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
#  SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

import io
import logging
from typing import IO, TextIO, Union

from bs4 import BeautifulSoup, PageElement, Tag
from bs4.exceptions import FeatureNotFound

from .constants import (
    BLOCK_BOUNDARY_TAGS,
    BLOCKQUOTE_PREFIX,
    CODE_FENCE,
    HEADING_TAGS,
    HORIZONTAL_RULE,
    HTML_PARSER_PACKAGES,
    UNORDERED_LIST_MARKER,
)
from .exceptions import DependencyError, ParsingError, RenderingError
from .options import ConvertOptions
from .rules import WalkFunc, build_rule_table
from .tables import collect_rows, normalize_cell, render_table, row_cells
from .utils.code import lang_from_class, resolve_language
from .utils.html_utils import (
    get_attr,
    has_class,
    is_child_of,
    is_comment,
    is_text,
    raw_text,
    render_raw,
    tag_name,
)
from .utils.text import (
    backtick_fence,
    code_span,
    collapse_whitespace,
    escape_markdown,
    quote_title,
    wrap_non_whitespace,
)

logger = logging.getLogger(__name__)

HtmlSource = Union[str, bytes, IO[str], IO[bytes]]

# Text walked inside these elements (by an extension rule) is never escaped
CODE_CONTEXT_TAGS = frozenset({"pre", "code"})


class HTMLToMarkdown:
    """HTML to Markdown converter.

    One instance serves one conversion: the extension rule table is built from
    ``options.custom_rules`` when the converter is created and is read-only
    afterwards.

    Parameters
    ----------
    options : ConvertOptions or None, default None
        Conversion settings. Defaults to ``ConvertOptions()``.

    """

    def __init__(self, options: ConvertOptions | None = None):
        self.options = options or ConvertOptions()
        self._rules = build_rule_table(self.options.custom_rules, self.walk)
        self._level = 0
        # ol element id -> {li element id: 1-based ordinal}
        self._ordinals: dict[int, dict[int, int]] = {}

        self._dispatch: dict[str, WalkFunc] = {
            "a": self._convert_link,
            "b": self._convert_strong,
            "strong": self._convert_strong,
            "i": self._convert_emphasis,
            "em": self._convert_emphasis,
            "del": self._convert_strikethrough,
            "s": self._convert_strikethrough,
            "code": self._convert_inline_code,
            "img": self._convert_image,
            "br": self._convert_line_break,
            "p": self._convert_paragraph,
            "div": self._convert_div,
            "hr": self._convert_horizontal_rule,
            "pre": self._convert_code_block,
            "blockquote": self._convert_blockquote,
            "ul": self._convert_list,
            "ol": self._convert_list,
            "li": self._convert_list_item,
            "table": self._convert_table,
            "script": self._convert_raw,
            "style": self._convert_raw,
        }
        for heading in HEADING_TAGS:
            self._dispatch[heading] = self._convert_heading

    def convert_document(self, soup: BeautifulSoup, sink: TextIO) -> None:
        """Write the Markdown rendering of a parsed document, plus a final newline."""
        self._level = 0
        self._ordinals.clear()
        self.walk(soup, sink, 0, self.options)
        sink.write("\n")

    def walk(self, node: PageElement, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Render the children of ``node`` (or a text node itself) to ``sink``.

        This is the continuation handed to extension rules.

        Parameters
        ----------
        node : PageElement
            Document, element or text node
        sink : TextIO
            Output to append to
        depth : int
            List/blockquote nesting depth
        options : ConvertOptions
            Settings in effect for this subtree

        Raises
        ------
        RenderingError
            If elements are nested deeper than ``options.max_depth``

        """
        if is_text(node):
            self._write_text(str(node), sink, options)
            return
        if not isinstance(node, Tag):
            return

        self._level += 1
        try:
            if self._level > options.max_depth:
                raise RenderingError(
                    f"Document nesting exceeds the maximum depth of {options.max_depth}",
                    rendering_stage="traversal",
                )
            for child in node.children:
                self._convert_node(child, sink, depth, options)
        finally:
            self._level -= 1

    def _convert_node(self, node: PageElement, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Dispatch one child node to its emission rule."""
        if is_comment(node):
            sink.write(f"<!--{node}-->\n")
            return

        name = tag_name(node)
        if name is None:
            self.walk(node, sink, depth, options)
            return

        if name in CODE_CONTEXT_TAGS and options.escape_special:
            options = options.create_updated(escape_special=False)

        custom_walk = self._rules.get(name)
        if custom_walk is not None:
            custom_walk(node, sink, depth, options)
            return

        handler = self._dispatch.get(name, self.walk)
        handler(node, sink, depth, options)

    def _write_text(self, data: str, sink: TextIO, options: ConvertOptions) -> None:
        if options.trim_space and not data.strip():
            return

        text = collapse_whitespace(data)
        if options.escape_special:
            text = escape_markdown(text)
        sink.write(text)

    def _render(self, node: Tag, depth: int, options: ConvertOptions) -> str:
        """Render the children of ``node`` into a scratch buffer and return the text."""
        buffer = io.StringIO()
        self.walk(node, buffer, depth, options)
        return buffer.getvalue()

    def _boundary(self, node: Tag, sink: TextIO, options: ConvertOptions) -> None:
        """Insert a newline when the preceding sibling did not end its line."""
        previous = node.previous_sibling
        if previous is None:
            return

        # Whitespace-only text was dropped, so its line state is unknown
        if options.trim_space:
            sink.write("\n")
            return

        if is_text(previous):
            text = str(previous).strip(" \t")
            if text and not text.endswith("\n"):
                sink.write("\n")
        elif tag_name(previous) in BLOCK_BOUNDARY_TAGS:
            sink.write("\n")

    # Inline rules

    def _wrap(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions, before: str, after: str) -> None:
        sink.write(wrap_non_whitespace(self._render(node, depth, options), before, after))

    def _convert_link(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Process hyperlinks; the brackets hug the non-whitespace link text."""
        href = get_attr(node, "href")
        title = get_attr(node, "title")
        end = f"]({href} {quote_title(title)})" if title else f"]({href})"
        self._wrap(node, sink, depth, options, "[", end)

    def _convert_strong(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._wrap(node, sink, depth, options, "**", "**")

    def _convert_emphasis(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._wrap(node, sink, depth, options, "_", "_")

    def _convert_strikethrough(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._wrap(node, sink, depth, options, "~~", "~~")

    def _convert_inline_code(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        # Block code text is read by the pre rule itself
        if is_child_of(node, "pre"):
            return
        sink.write(code_span(raw_text(node)))

    def _convert_image(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Process images; an image without a source contributes nothing."""
        src = get_attr(node, "src")
        if not src:
            return

        alt = get_attr(node, "alt")
        title = get_attr(node, "title")
        if title:
            sink.write(f"![{alt}]({src} {quote_title(title)})")
        else:
            sink.write(f"![{alt}]({src})")

    def _convert_line_break(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._boundary(node, sink, options)
        sink.write("\n\n")

    # Block rules

    def _convert_paragraph(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._boundary(node, sink, options)
        self.walk(node, sink, depth, options)
        self._boundary(node, sink, options)
        sink.write("\n\n")

    def _convert_div(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._boundary(node, sink, options)
        self.walk(node, sink, depth, options)
        sink.write("\n")

    def _convert_heading(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._boundary(node, sink, options)
        level = int(node.name[1])
        sink.write("#" * level + " ")
        self.walk(node, sink, depth, options)
        sink.write("\n\n")

    def _convert_horizontal_rule(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._boundary(node, sink, options)
        sink.write(f"\n{HORIZONTAL_RULE}\n\n")

    def _write_fenced(self, sink: TextIO, code: str, language: str) -> None:
        fence = backtick_fence(code, minimum=len(CODE_FENCE))
        sink.write(f"{fence}{language}\n")
        sink.write(code)
        if not code.endswith("\n"):
            sink.write("\n")
        sink.write(f"{fence}\n\n")

    def _convert_code_block(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Process ``pre`` blocks as fenced code.

        The fence language comes from a ``language-xxx`` class on the first
        ``code`` child, and is replaced by the configured guesser's answer when
        it produces one.
        """
        self._boundary(node, sink, options)
        code = raw_text(node)
        language = resolve_language(code, options, default=lang_from_class(node))
        self._write_fenced(sink, code, language)

    def _convert_blockquote(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Process blockquotes; ``class="code"`` marks a literal code block."""
        self._boundary(node, sink, options)

        if has_class(node, "code"):
            code = raw_text(node, replace_nbsp=True)
            language = resolve_language(code, options)
            fence = backtick_fence(code, minimum=len(CODE_FENCE))
            sink.write(f"{fence}{language}\n")
            sink.write(code.lstrip("\n"))
            if not code.endswith("\n"):
                sink.write("\n")
            sink.write(f"{fence}\n\n")
            return

        content = self._render(node, depth + 1, options)
        for line in content.strip().split("\n"):
            sink.write(BLOCKQUOTE_PREFIX + line.strip() + "\n")
        sink.write("\n")

    def _convert_list(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Process ``ul``/``ol``; the body renders one level deeper in trim mode."""
        self._boundary(node, sink, options)

        list_options = options if options.trim_space else options.create_updated(trim_space=True)
        content = self._render(node, depth + 1, list_options)

        lines = [line for line in content.split("\n") if line.strip()]
        sink.write("\n".join(lines))
        sink.write("\n")
        if depth == 0:
            sink.write("\n")

    def _list_marker(self, node: Tag) -> str:
        if is_child_of(node, "ul"):
            return UNORDERED_LIST_MARKER
        if is_child_of(node, "ol"):
            return f"{self._ordinal(node)}. "
        return ""

    def _ordinal(self, item: Tag) -> int:
        """Return the 1-based position of ``item`` among the ``li`` children of its list.

        Positions are computed once per list, on its first item.
        """
        parent = item.parent
        ordinals = self._ordinals.get(id(parent))
        if ordinals is None:
            items = (child for child in parent.children if tag_name(child) == "li")
            ordinals = {id(li): position for position, li in enumerate(items, start=1)}
            self._ordinals[id(parent)] = ordinals
        return ordinals[id(item)]

    def _convert_list_item(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Process list items.

        The marker goes in front of the first non-blank rendered line; the
        following lines are indented one level so they stay inside the item.
        """
        self._boundary(node, sink, options)

        content = self._render(node, 0, options)
        indent = " " * (options.indent_width * max(depth - 1, 0))
        continuation = " " * options.indent_width
        marker = self._list_marker(node)

        marked = False
        for line in content.split("\n"):
            if not line.strip():
                continue
            if marked:
                sink.write("\n" + continuation)
            sink.write(indent)
            if not marked:
                sink.write(marker)
                marked = True
            sink.write(line)
        sink.write("\n")

    def _convert_table(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        self._boundary(node, sink, options)
        rows = [
            [normalize_cell(self._render(cell, 0, options)) for cell in row_cells(row)] for row in collect_rows(node)
        ]
        render_table(rows, sink)
        sink.write("\n")

    def _convert_raw(self, node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
        """Emit ``script``/``style`` verbatim when enabled, otherwise drop them."""
        enabled = options.script if tag_name(node) == "script" else options.style
        if not enabled:
            return
        self._boundary(node, sink, options)
        sink.write(render_raw(node))
        sink.write("\n\n")


def read_source(source: HtmlSource) -> Union[str, bytes]:
    """Read the whole HTML input.

    Raises
    ------
    ParsingError
        If reading the input fails

    """
    if isinstance(source, (str, bytes)):
        return source

    try:
        return source.read()
    except Exception as e:
        raise ParsingError(
            f"Failed to read HTML input: {e}", parsing_stage="input_reading", original_error=e
        ) from e


def parse_html(markup: Union[str, bytes], options: ConvertOptions) -> BeautifulSoup:
    """Parse markup into a BeautifulSoup tree with the configured tree builder.

    Multi-valued attributes are disabled so ``class`` stays a single string.

    Raises
    ------
    DependencyError
        If the selected tree builder is not installed
    ParsingError
        If the parser fails on the input

    """
    try:
        soup = BeautifulSoup(markup, options.html_parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        package = HTML_PARSER_PACKAGES.get(options.html_parser, "")
        raise DependencyError(
            f"HTML parser '{options.html_parser}' is not available: {e}",
            missing_packages=[package] if package else [],
            original_error=e,
        ) from e
    except Exception as e:
        raise ParsingError(f"Failed to parse HTML: {e}", parsing_stage="html_parsing", original_error=e) from e

    logger.debug("Parsed HTML input with %s", options.html_parser)
    return soup


def convert(sink: TextIO, source: HtmlSource, options: ConvertOptions | None = None) -> None:
    """Convert HTML read from ``source`` to Markdown written to ``sink``.

    The whole input is read and parsed before anything is written; the
    Markdown is followed by a single trailing newline.

    Parameters
    ----------
    sink : TextIO
        Text output to write Markdown to
    source : str, bytes, or file-like object
        HTML markup, or a text/binary stream to read it from
    options : ConvertOptions or None, default None
        Conversion settings

    Raises
    ------
    ParsingError
        If the input cannot be read or parsed
    DependencyError
        If the configured parser backend is not installed
    ValidationError
        If an extension rule is malformed
    RenderingError
        If the document nests deeper than ``options.max_depth``

    """
    options = options or ConvertOptions()
    converter = HTMLToMarkdown(options)
    soup = parse_html(read_source(source), options)
    converter.convert_document(soup, sink)


def html_to_markdown(input_data: HtmlSource, options: ConvertOptions | None = None) -> str:
    """Convert HTML to a Markdown string.

    Parameters
    ----------
    input_data : str, bytes, or file-like object
        HTML markup, or a stream containing it
    options : ConvertOptions or None, default None
        Conversion settings

    Returns
    -------
    str
        The Markdown rendering, ending in a newline

    Examples
    --------
        >>> html_to_markdown("<strong> foo bar </strong>")
        ' **foo bar** \\n'

    """
    sink = io.StringIO()
    convert(sink, input_data, options)
    return sink.getvalue()

