"""Grammar analysis: literal reachability."""
from __future__ import annotations

from gcrawl.analysis.reachability import LiteralDiscovery, discover_literals

__all__ = [
    "LiteralDiscovery",
    "discover_literals",
]
