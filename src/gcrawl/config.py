"""Crawl strategy configuration.

Configuration can be built in code, from a plain dict, or from a YAML
file.  A YAML file holds either the settings at top level or nested
under a ``crawl:`` key::

    crawl:
      strategy: coverage-aware
      seed: 1234
      fallback_probability: 0.33
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from gcrawl.errors import ConfigError
from gcrawl.strategies.base import check_probability
from gcrawl.strategies.coverage import DEFAULT_FALLBACK_PROBABILITY

if TYPE_CHECKING:
    from gcrawl.crawler.state import Crawler
    from gcrawl.strategies.base import CrawlStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrawlConfig:
    """Settings for building a crawl strategy.

    Parameters
    ----------
    strategy:
        Registered strategy name.
    seed:
        Seed for the strategy's random source, or ``None`` for an
        unseeded generator.
    random_threshold:
        ``RandomCrawl`` crawls when a draw exceeds this value.
    fallback_probability:
        ``CoverageAwareCrawl`` crawl probability once every reachable
        literal has been used.
    """

    strategy: str = "coverage-aware"
    seed: int | None = None
    random_threshold: float = 0.5
    fallback_probability: float = DEFAULT_FALLBACK_PROBABILITY

    def __post_init__(self) -> None:
        if not isinstance(self.strategy, str) or not self.strategy:
            raise ConfigError(f"strategy must be a non-empty string, got {self.strategy!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError(f"seed must be an integer or null, got {self.seed!r}")
        object.__setattr__(
            self, "random_threshold", check_probability("random_threshold", self.random_threshold)
        )
        object.__setattr__(
            self,
            "fallback_probability",
            check_probability("fallback_probability", self.fallback_probability),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CrawlConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping of settings, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(map(str, unknown))}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def make_rng(self) -> random.Random:
        """Return a new random source seeded with :attr:`seed`."""
        return random.Random(self.seed)


def load_config(path: str | Path) -> CrawlConfig:
    """Read a :class:`CrawlConfig` from a YAML file.

    An empty file yields the defaults.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid YAML, or holds invalid
        settings.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if isinstance(data, dict) and "crawl" in data:
        data = data["crawl"] or {}
    config = CrawlConfig.from_dict(data)
    logger.debug("Loaded crawl config from %s: %s", path, config)
    return config


def build_strategy(config: CrawlConfig, crawler: "Crawler | None" = None) -> "CrawlStrategy":
    """Create the strategy named by ``config.strategy``."""
    from gcrawl.strategies.registry import create_strategy

    return create_strategy(config.strategy, crawler=crawler, config=config)
