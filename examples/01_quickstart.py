#!/usr/bin/env python3
"""Example: grammar-crawl quickstart

Builds a tiny SQL-like grammar, then runs a toy generation loop that
asks a coverage-aware strategy which optional parts to expand.  The loop
plays the crawler's role: it records which literals each generated
expression used, so the strategy steers later expressions towards
literals that have not appeared yet.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install grammar-crawl
"""
from __future__ import annotations

import logging
import random

import gcrawl
from gcrawl.grammar import (
    Choice,
    Element,
    ElementGroup,
    LiteralElement,
    Repetition,
    Rule,
    RuleRefElement,
    Separator,
    render_rule,
)

RULES = [
    Rule.of(
        "select_stmt",
        [
            LiteralElement("SELECT"),
            RuleRefElement("column_list"),
            LiteralElement("FROM"),
            LiteralElement("t"),
            ElementGroup(
                (LiteralElement("WHERE"), RuleRefElement("predicate")),
                repetition=Repetition.OPTIONAL,
            ),
        ],
    ),
    Rule.of(
        "column_list",
        [LiteralElement("*")],
        [
            Choice((LiteralElement("a"), LiteralElement("b"))),
            ElementGroup(
                (Separator(","), Choice((LiteralElement("a"), LiteralElement("b")))),
                repetition=Repetition.ZERO_OR_MORE,
            ),
        ],
    ),
    Rule.of(
        "predicate",
        [LiteralElement("a"), Choice((LiteralElement("="), LiteralElement("<"))), LiteralElement("1")],
        [LiteralElement("NOT"), RuleRefElement("predicate")],
    ),
]


def generate(element: Element, state: gcrawl.CrawlState, strategy: gcrawl.CrawlStrategy,
             rng: random.Random, out: list[str]) -> None:
    """Derive one expression from *element*, appending tokens to *out*."""
    rule_map = state.get_rule_map()
    if isinstance(element, LiteralElement):
        out.append(element.name)
    elif isinstance(element, Separator):
        out.append(element.name)
    elif isinstance(element, RuleRefElement):
        rule = rule_map[element.name]
        candidates = [alt for alt in rule.alternatives
                      if any(strategy.should_crawl(e) for e in alt.elements)]
        alternative = rng.choice(candidates or list(rule.alternatives)[:1])
        for child in alternative.elements:
            generate(child, state, strategy, rng, out)
    elif isinstance(element, Choice):
        candidates = [c for c in element.choices if strategy.should_crawl(c)]
        generate(rng.choice(candidates or list(element.choices)), state, strategy, rng, out)
    elif isinstance(element, ElementGroup):
        if element.repetition in (Repetition.OPTIONAL, Repetition.ZERO_OR_MORE):
            if not strategy.should_crawl(element):
                return
        for child in element.elements:
            generate(child, state, strategy, rng, out)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    print(f"grammar-crawl version: {gcrawl.__version__}")
    for rule in RULES:
        print(f"  {render_rule(rule)}")

    state = gcrawl.CrawlState(RULES)
    root = RuleRefElement("select_stmt")
    for name in gcrawl.discover_literals(root, state.get_rules_to_skip(), state.get_rule_map()):
        state.element_usage[name] = 0

    config = gcrawl.CrawlConfig(strategy="coverage-aware", seed=7)
    strategy = gcrawl.build_strategy(config, crawler=state)
    rng = config.make_rng()

    for _ in range(8):
        tokens: list[str] = []
        generate(root, state, strategy, rng, tokens)
        for name in set(tokens):
            if name in state.element_usage:
                state.element_usage[name] += 1
        print(" ".join(tokens))

    unused = sorted(name for name, count in state.element_usage.items() if count == 0)
    print(f"Unused literals: {unused or 'none'}")


if __name__ == "__main__":
    main()
