"""Coverage-aware crawl strategy.

Prefers expanding elements that can still reach literals no completed
expression has used yet.  Once every reachable literal has been used,
the element is only expanded occasionally, to keep exploring
combinations of literals rather than single literals.

Example
-------
::

    state = CrawlState(rule_map, element_usage={"0": 0, "1": 5})
    strategy = CoverageAwareCrawl(state, rng=random.Random(7))
    strategy.should_crawl(RuleRefElement("digit"))   # True: "0" is unused
"""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from gcrawl.analysis.reachability import discover_literals
from gcrawl.errors import ConfigError
from gcrawl.grammar.elements import Element
from gcrawl.grammar.render import render_element
from gcrawl.strategies.base import CrawlStrategy, check_probability

if TYPE_CHECKING:
    from gcrawl.config import CrawlConfig
    from gcrawl.crawler.state import Crawler

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_PROBABILITY = 0.33


class CoverageAwareCrawl(CrawlStrategy):
    """Crawl when an unused literal is reachable, otherwise rarely.

    Parameters
    ----------
    crawler:
        Source of usage counts, pruned rule names and the rule table.
        Read on every call, so decisions track the crawler's progress.
    rng:
        Random source for the fallback draw.  A private unseeded
        generator is used if omitted.
    fallback_probability:
        Probability of crawling when no reachable literal has a usage
        count of zero.

    Notes
    -----
    A reachable literal with no usage entry is skipped.  The crawler
    omits entries for literals it considers unreachable under the
    current pruning, which can differ from what discovery here finds
    when an element following the current one is pruned.
    """

    requires_crawler = True

    def __init__(
        self,
        crawler: "Crawler",
        rng: random.Random | None = None,
        fallback_probability: float = DEFAULT_FALLBACK_PROBABILITY,
    ) -> None:
        self._crawler = crawler
        self._rng = rng if rng is not None else random.Random()
        self._fallback_probability = check_probability(
            "fallback_probability", fallback_probability
        )

    @property
    def fallback_probability(self) -> float:
        return self._fallback_probability

    def should_crawl(self, element: Element) -> bool:
        literal_names = discover_literals(
            element,
            self._crawler.get_rules_to_skip(),
            self._crawler.get_rule_map(),
        )
        usage = self._crawler.get_element_usage()
        for name in literal_names:
            count = usage.get(name)
            if count is None:
                logger.debug("No usage entry for literal %r; skipping", name)
                continue
            if count == 0:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Crawling %s: literal %r is unused", render_element(element), name
                    )
                return True

        decision = self._rng.random() < self._fallback_probability
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "No unused literal among %d reachable from %s; fallback draw -> %s",
                len(literal_names),
                render_element(element),
                decision,
            )
        return decision

    @classmethod
    def from_config(
        cls,
        crawler: "Crawler | None",
        rng: random.Random,
        config: "CrawlConfig",
    ) -> "CoverageAwareCrawl":
        if crawler is None:
            raise ConfigError("CoverageAwareCrawl requires a crawler")
        return cls(crawler, rng=rng, fallback_probability=config.fallback_probability)

    def __repr__(self) -> str:
        return f"CoverageAwareCrawl(fallback_probability={self._fallback_probability})"
