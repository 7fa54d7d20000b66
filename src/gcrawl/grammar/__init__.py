"""grammar-crawl grammar module.

Exports the element model and EBNF rendering helpers.
"""
from __future__ import annotations

from gcrawl.grammar.elements import (
    ELEMENT_TYPES,
    Alternative,
    Choice,
    Element,
    ElementGroup,
    ElementKind,
    LiteralElement,
    Repetition,
    Rule,
    RuleMap,
    RuleRefElement,
    Separator,
    build_rule_map,
)
from gcrawl.grammar.render import render_element, render_rule

__all__ = [
    # Elements
    "Element",
    "ElementKind",
    "ELEMENT_TYPES",
    "LiteralElement",
    "ElementGroup",
    "Repetition",
    "Choice",
    "RuleRefElement",
    "Separator",
    # Rules
    "Alternative",
    "Rule",
    "RuleMap",
    "build_rule_map",
    # Rendering
    "render_element",
    "render_rule",
]
