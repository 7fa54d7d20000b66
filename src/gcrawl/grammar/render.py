"""Render grammar elements in an EBNF-like notation.

Used for log messages and diagnostics.  Notation:

    ``'x'``         literal token ``x``
    ``name``        rule reference
    ``( a b )``     group, optionally followed by ``?``, ``*`` or ``+``
    ``( a | b )``   choice
    ``,``           separator (rendered by its name)
"""
from __future__ import annotations

from gcrawl.grammar.elements import (
    Choice,
    Element,
    ElementGroup,
    LiteralElement,
    Rule,
    RuleRefElement,
    Separator,
)

_MAX_DEPTH = 8


def render_element(element: Element, max_depth: int = _MAX_DEPTH) -> str:
    """Return a one-line EBNF rendering of *element*.

    Rule references are not expanded, so the output is finite for
    recursive grammars.  Nesting deeper than *max_depth* is elided as
    ``...``.
    """
    if max_depth <= 0:
        return "..."
    if isinstance(element, LiteralElement):
        return f"'{element.name}'"
    if isinstance(element, RuleRefElement):
        return element.name
    if isinstance(element, Separator):
        return element.name or "<sep>"
    if isinstance(element, ElementGroup):
        inner = " ".join(render_element(e, max_depth - 1) for e in element.elements)
        body = f"( {inner} )" if inner else "( )"
        return body + element.repetition.value
    if isinstance(element, Choice):
        inner = " | ".join(render_element(e, max_depth - 1) for e in element.choices)
        return f"( {inner} )" if inner else "( )"
    return f"<{type(element).__qualname__}>"


def render_rule(rule: Rule) -> str:
    """Return ``name ::= alt1 | alt2 ...`` for *rule*."""
    alternatives = [
        " ".join(render_element(e) for e in alternative.elements) or "<empty>"
        for alternative in rule.alternatives
    ]
    return f"{rule.name} ::= {' | '.join(alternatives)}"
