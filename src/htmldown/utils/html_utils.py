#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/utils/html_utils.py
"""Node inspection helpers over the BeautifulSoup tree.

The traversal engine only distinguishes four node kinds: the document,
elements, comments and text. Doctypes, CDATA sections, declarations and
processing instructions are ``PreformattedString`` subclasses in bs4 and are
treated as contributing nothing.
"""

from __future__ import annotations

from typing import Any

from bs4 import Comment, NavigableString, PageElement, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import PreformattedString
from bs4.formatter import HTMLFormatter


def is_text(node: Any) -> bool:
    """Return True for text nodes (comments, doctypes and the like excluded)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_comment(node: Any) -> bool:
    """Return True for HTML comments."""
    return isinstance(node, Comment)


def tag_name(node: Any) -> str | None:
    """Return the lowercased tag name of an element, or None for any other node."""
    if isinstance(node, Tag) and node.name:
        return node.name.lower()
    return None


def is_child_of(node: PageElement, name: str) -> bool:
    """Return True when the immediate parent of ``node`` is a ``name`` element."""
    parent = node.parent
    return parent is not None and tag_name(parent) == name


def get_attr(node: Tag, key: str) -> str:
    """Return the value of attribute ``key``, or an empty string when absent."""
    value = node.attrs.get(key, "")
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value or ""


def has_class(node: Tag, clazz: str) -> bool:
    """Return True when ``clazz`` is one of the whitespace-separated classes of ``node``."""
    return clazz in get_attr(node, "class").split()


def first_child(node: Tag) -> PageElement | None:
    """Return the first child node of ``node`` (of any kind), or None."""
    return node.contents[0] if node.contents else None


def raw_text(node: PageElement, replace_nbsp: bool = False) -> str:
    """Concatenate the text of ``node`` and its descendants without any processing.

    Element markup is skipped and its text descends unchanged; comments are
    dropped.

    Parameters
    ----------
    node : PageElement
        Text node or element to read
    replace_nbsp : bool, default False
        Replace non-breaking spaces with plain spaces

    Returns
    -------
    str
        The literal text content

    """
    if is_text(node):
        parts = [str(node)]
    elif isinstance(node, Tag):
        parts = [str(descendant) for descendant in node.descendants if is_text(descendant)]
    else:
        parts = []

    text = "".join(parts)
    if replace_nbsp:
        text = text.replace("\u00a0", " ")
    return text


class SourceOrderFormatter(HTMLFormatter):
    """Minimal HTML formatter that keeps attributes in document order.

    bs4's stock formatters sort attributes alphabetically.
    """

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return [
            (key, None if self.empty_attributes_are_booleans and value == "" else value)
            for key, value in tag.attrs.items()
        ]


SOURCE_ORDER_FORMATTER = SourceOrderFormatter(entity_substitution=EntitySubstitution.substitute_xml)


def render_raw(node: Tag) -> str:
    """Serialize an element back to HTML (tag, attributes, children, closing tag).

    Attributes keep their source order. Script and style content is emitted
    without entity substitution.
    """
    return node.decode(formatter=SOURCE_ORDER_FORMATTER)
