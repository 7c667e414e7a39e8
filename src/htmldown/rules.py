#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/rules.py
"""Extension rules for tags the built-in conversion does not cover (or should not).

A rule claims exactly one tag name. For every element with that name, the
rule's walk function replaces the built-in handling for the element and its
subtree. The rule receives a continuation, the engine's own ``walk``, so it
can wrap the default rendering of the element's children instead of
reimplementing it.

Examples
--------
Wrap ``<mark>`` contents in ``==``:

    >>> from htmldown import html_to_markdown
    >>> from htmldown.options import ConvertOptions
    >>> from htmldown.rules import tag_rule
    >>>
    >>> @tag_rule("mark")
    ... def highlight(node, sink, depth, options, next_walk):
    ...     sink.write("==")
    ...     next_walk(node, sink, depth, options)
    ...     sink.write("==")
    >>>
    >>> html_to_markdown("<mark>hi</mark>", ConvertOptions(custom_rules=[highlight]))
    '==hi==\\n'

Implement the protocol directly, as a class with a ``rule`` method:

    >>> class Underline:
    ...     def rule(self, next_walk):
    ...         def walk_u(node, sink, depth, options):
    ...             sink.write("_")
    ...             next_walk(node, sink, depth, options)
    ...             sink.write("_")
    ...         return "u", walk_u

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TextIO, runtime_checkable

from bs4 import PageElement, Tag

from htmldown.exceptions import ValidationError
from htmldown.options import ConvertOptions

logger = logging.getLogger(__name__)

WalkFunc = Callable[[PageElement, TextIO, int, ConvertOptions], None]
RuleHandler = Callable[[Tag, TextIO, int, ConvertOptions, WalkFunc], None]


@runtime_checkable
class CustomRule(Protocol):
    """Protocol for extension rules.

    ``rule`` is called once per conversion with the engine's walk function and
    returns the tag name the rule handles together with the walk function to
    use for elements of that name.
    """

    def rule(self, next_walk: WalkFunc) -> tuple[str, WalkFunc]:
        """Return ``(tag_name, walk_function)`` for this rule."""
        ...


@dataclass(frozen=True)
class TagRule:
    """Extension rule built from a plain handler function.

    Parameters
    ----------
    tag : str
        Tag name handled by this rule (matched case-insensitively)
    handler : callable
        Called as ``handler(node, sink, depth, options, next_walk)``

    """

    tag: str
    handler: RuleHandler

    def rule(self, next_walk: WalkFunc) -> tuple[str, WalkFunc]:
        """Bind the handler to the engine's continuation."""

        def walk_tag(node: Tag, sink: TextIO, depth: int, options: ConvertOptions) -> None:
            self.handler(node, sink, depth, options, next_walk)

        return self.tag, walk_tag


def tag_rule(tag: str) -> Callable[[RuleHandler], TagRule]:
    """Turn a handler function into a :class:`TagRule` for ``tag``."""

    def decorator(handler: RuleHandler) -> TagRule:
        return TagRule(tag=tag, handler=handler)

    return decorator


def build_rule_table(rules: Iterable[CustomRule], next_walk: WalkFunc) -> dict[str, WalkFunc]:
    """Build the tag name to walk function lookup for one conversion.

    Parameters
    ----------
    rules : iterable of CustomRule
        Rules in registration order
    next_walk : WalkFunc
        The engine's default walk, handed to every rule as its continuation

    Returns
    -------
    dict[str, WalkFunc]
        Mapping from lowercased tag name to walk function. When several rules
        claim the same tag, the last one registered wins.

    Raises
    ------
    ValidationError
        If a rule does not implement ``rule()`` or returns an invalid tag name
        or walk function

    """
    table: dict[str, WalkFunc] = {}
    for custom_rule in rules:
        if not isinstance(custom_rule, CustomRule):
            raise ValidationError(
                f"Extension rule {custom_rule!r} does not define a rule() method",
                parameter_name="custom_rules",
                parameter_value=custom_rule,
            )

        tag, walk_func = custom_rule.rule(next_walk)
        if not isinstance(tag, str) or not tag.strip():
            raise ValidationError(
                f"Extension rule {custom_rule!r} returned an invalid tag name: {tag!r}",
                parameter_name="custom_rules",
                parameter_value=tag,
            )
        if not callable(walk_func):
            raise ValidationError(
                f"Extension rule for <{tag}> did not return a callable",
                parameter_name="custom_rules",
                parameter_value=walk_func,
            )

        key = tag.strip().lower()
        if key in table:
            logger.warning(f"Extension rule for <{key}> already registered, overwriting")
        table[key] = walk_func
        logger.debug(f"Registered extension rule: <{key}>")

    return table
