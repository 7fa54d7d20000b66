"""grammar-crawl: crawl-strategy decisions for grammar-driven test generation.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import random
    import gcrawl
    from gcrawl.grammar import LiteralElement, Rule, RuleRefElement

    digit = Rule.of("digit", [LiteralElement("0")], [LiteralElement("1")])
    state = gcrawl.CrawlState([digit], element_usage={"0": 0, "1": 5})

    strategy = gcrawl.create_strategy(
        "coverage-aware", crawler=state, rng=random.Random(42)
    )
    strategy.should_crawl(RuleRefElement("digit"))   # True

    gcrawl.discover_literals(RuleRefElement("digit"), set(), state.get_rule_map())
    # {"0", "1"}

    gcrawl.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from gcrawl.analysis.reachability import discover_literals
from gcrawl.config import CrawlConfig, build_strategy, load_config
from gcrawl.crawler.state import Crawler, CrawlState
from gcrawl.errors import (
    ConfigError,
    GrammarCrawlError,
    GrammarModelError,
    UnexpectedElementError,
    UnknownRuleError,
)
from gcrawl.strategies import (
    FULL_CRAWL,
    RANDOM_CRAWL,
    CoverageAwareCrawl,
    CrawlStrategy,
    FullCrawl,
    RandomCrawl,
    create_strategy,
)

__all__ = [
    "__version__",
    # Decisions
    "CrawlStrategy",
    "FullCrawl",
    "RandomCrawl",
    "CoverageAwareCrawl",
    "FULL_CRAWL",
    "RANDOM_CRAWL",
    "create_strategy",
    # Analysis
    "discover_literals",
    # Crawler state
    "Crawler",
    "CrawlState",
    # Configuration
    "CrawlConfig",
    "load_config",
    "build_strategy",
    # Errors
    "GrammarCrawlError",
    "GrammarModelError",
    "UnexpectedElementError",
    "UnknownRuleError",
    "ConfigError",
]
