"""Crawl strategy interface and the stateless strategies.

A crawl strategy answers one question for the crawler at every branch
point of a derivation: should this grammar element be expanded now?

Strategies read shared crawler state and may consume randomness, but
never mutate crawler state.  Randomness comes from a
:class:`random.Random` instance injected at construction time; pass a
seeded instance for reproducible runs.
"""
from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from gcrawl.errors import ConfigError
from gcrawl.grammar.elements import Element

if TYPE_CHECKING:
    from gcrawl.config import CrawlConfig
    from gcrawl.crawler.state import Crawler


def check_probability(name: str, value: float) -> float:
    """Return *value* if it lies in ``[0, 1]``, else raise :class:`ConfigError`."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must be between 0 and 1, got {value!r}")
    return float(value)


class CrawlStrategy(ABC):
    """Decides whether the crawler should expand a grammar element."""

    requires_crawler: ClassVar[bool] = False

    @abstractmethod
    def should_crawl(self, element: Element) -> bool:
        """Return ``True`` if *element* should be expanded."""

    @classmethod
    def from_config(
        cls,
        crawler: "Crawler | None",
        rng: random.Random,
        config: "CrawlConfig",
    ) -> "CrawlStrategy":
        """Build an instance from crawler state, a random source and config.

        The default ignores all three; strategies with parameters
        override this.
        """
        return cls()


class FullCrawl(CrawlStrategy):
    """Expand every element.  Used to enumerate every grammar path."""

    def should_crawl(self, element: Element) -> bool:
        return True

    def __repr__(self) -> str:
        return "FullCrawl()"


class RandomCrawl(CrawlStrategy):
    """Expand an element when a uniform draw exceeds ``threshold``.

    Parameters
    ----------
    rng:
        Random source.  A private unseeded generator is used if omitted.
    threshold:
        Draws in ``[0, 1)`` strictly greater than this value crawl.
        The default of ``0.5`` gives an unweighted coin flip.
    """

    def __init__(self, rng: random.Random | None = None, threshold: float = 0.5) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._threshold = check_probability("threshold", threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def should_crawl(self, element: Element) -> bool:
        # Strictly greater: a draw equal to the threshold does not crawl.
        return self._rng.random() > self._threshold

    @classmethod
    def from_config(
        cls,
        crawler: "Crawler | None",
        rng: random.Random,
        config: "CrawlConfig",
    ) -> "RandomCrawl":
        return cls(rng=rng, threshold=config.random_threshold)

    def __repr__(self) -> str:
        return f"RandomCrawl(threshold={self._threshold})"


FULL_CRAWL: CrawlStrategy = FullCrawl()
RANDOM_CRAWL: CrawlStrategy = RandomCrawl()
