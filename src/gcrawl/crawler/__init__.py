"""Crawler state consumed by crawl strategies."""
from __future__ import annotations

from gcrawl.crawler.state import Crawler, CrawlState

__all__ = [
    "Crawler",
    "CrawlState",
]
