#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/utils/code.py
"""Code block helpers: fence language detection and guessing."""

from __future__ import annotations

import logging

from bs4 import Tag

from htmldown.constants import LANGUAGE_CLASS_PREFIX
from htmldown.options import ConvertOptions
from htmldown.utils.html_utils import first_child, get_attr, tag_name

logger = logging.getLogger(__name__)


def lang_from_class(node: Tag) -> str:
    """Extract the fence language from a ``language-xxx`` class.

    Only the first child of ``node`` is inspected, and only when it is a
    ``code`` element, as in ``<pre><code class="language-python">``.

    Parameters
    ----------
    node : Tag
        The ``pre`` element

    Returns
    -------
    str
        Language label, or an empty string when none is declared

    """
    child = first_child(node)
    if tag_name(child) != "code":
        return ""

    for cls in get_attr(child, "class").split():
        if cls.startswith(LANGUAGE_CLASS_PREFIX):
            return cls[len(LANGUAGE_CLASS_PREFIX) :]
    return ""


def resolve_language(text: str, options: ConvertOptions, default: str = "") -> str:
    """Run the configured language guesser over ``text``.

    A guesser that raises, or returns an empty label, leaves ``default`` in
    place; the failure is logged and never propagated.
    """
    if options.guess_lang is None:
        return default

    try:
        guess = options.guess_lang(text)
    except Exception as e:
        logger.debug("Language guess failed, keeping %r: %s", default, e)
        return default

    return guess or default


def guess_language(text: str) -> str:
    """Guess the language of a code snippet with Pygments.

    Suitable as ``ConvertOptions.guess_lang``.

    Parameters
    ----------
    text : str
        Code block content

    Returns
    -------
    str
        The primary Pygments alias of the guessed lexer (e.g. ``"python"``)

    Raises
    ------
    LookupError
        If the text is empty or Pygments can only offer its plain-text lexer

    """
    from pygments.lexers import guess_lexer
    from pygments.util import ClassNotFound

    if not text.strip():
        raise LookupError("Cannot guess the language of an empty code block")

    try:
        lexer = guess_lexer(text)
    except ClassNotFound as e:
        raise LookupError("No lexer matches the code block") from e

    if not lexer.aliases or lexer.aliases[0] == "text":
        raise LookupError("Code block language could not be determined")
    return lexer.aliases[0]
