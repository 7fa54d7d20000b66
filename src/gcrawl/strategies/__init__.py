"""Crawl strategies: the policies that decide whether to expand an element."""
from __future__ import annotations

from gcrawl.strategies.base import (
    FULL_CRAWL,
    RANDOM_CRAWL,
    CrawlStrategy,
    FullCrawl,
    RandomCrawl,
)
from gcrawl.strategies.coverage import CoverageAwareCrawl
from gcrawl.strategies.registry import (
    StrategyAlreadyRegisteredError,
    StrategyConfigError,
    StrategyNotFoundError,
    StrategyRegistry,
    create_strategy,
    default_registry,
)

__all__ = [
    # Strategies
    "CrawlStrategy",
    "FullCrawl",
    "RandomCrawl",
    "CoverageAwareCrawl",
    "FULL_CRAWL",
    "RANDOM_CRAWL",
    # Registry
    "StrategyRegistry",
    "default_registry",
    "create_strategy",
    "StrategyNotFoundError",
    "StrategyAlreadyRegisteredError",
    "StrategyConfigError",
]
