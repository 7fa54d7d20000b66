"""Shared test fixtures for grammar-crawl.

Fixtures defined here are available to all tests in the suite without
needing an explicit import.  Grammar-specific fixtures that only one
module uses live next to those tests.
"""
from __future__ import annotations

import random

import pytest

from gcrawl.crawler.state import CrawlState
from gcrawl.grammar.elements import LiteralElement, Rule, RuleRefElement


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def rng() -> random.Random:
    """A seeded random source for reproducible decisions."""
    return random.Random(20221)


@pytest.fixture()
def digit_rule() -> Rule:
    """``digit ::= '0' | '1'``"""
    return Rule.of("digit", [LiteralElement("0")], [LiteralElement("1")])


@pytest.fixture()
def digit_state(digit_rule: Rule) -> CrawlState:
    return CrawlState([digit_rule], element_usage={"0": 0, "1": 5})


@pytest.fixture()
def digit_ref() -> RuleRefElement:
    return RuleRefElement("digit")
