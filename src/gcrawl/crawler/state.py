"""The crawler-side state that crawl strategies read.

The generation driver owns three pieces of shared state: literal usage
counts, the set of pruned rule names, and the rule table.  Strategies
see them only through the :class:`Crawler` protocol.

:class:`CrawlState` is a plain in-memory holder implementing the
protocol.  Its accessors return read-only views, so a strategy cannot
change crawler state through them; the driver mutates the state through
the holder's own attributes.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from collections.abc import Set as AbstractSet
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from gcrawl.grammar.elements import Rule, RuleMap, build_rule_map


@runtime_checkable
class Crawler(Protocol):
    """Read-only view of crawler state consumed by crawl strategies."""

    def get_element_usage(self) -> Mapping[str, int]:
        """Return literal name -> number of completed expressions using it.

        Literals the crawler considers unreachable under the current
        pruning configuration have no entry.
        """
        ...

    def get_rules_to_skip(self) -> AbstractSet[str]:
        """Return the names of pruned rules."""
        ...

    def get_rule_map(self) -> RuleMap:
        """Return the rule table."""
        ...


class CrawlState:
    """In-memory :class:`Crawler` implementation.

    Parameters
    ----------
    rule_map:
        The rule table.  Either a mapping of name to rule or an iterable
        of rules.
    element_usage:
        Initial usage counts.  Copied.
    rules_to_skip:
        Initially pruned rule names.  Copied.

    Attributes
    ----------
    element_usage:
        Mutable usage counts, owned by the driver.
    rules_to_skip:
        Mutable set of pruned rule names, owned by the driver.
    """

    def __init__(
        self,
        rule_map: RuleMap | Iterable[Rule],
        element_usage: Mapping[str, int] | None = None,
        rules_to_skip: Iterable[str] | None = None,
    ) -> None:
        if isinstance(rule_map, Mapping):
            self._rule_map: dict[str, Rule] = dict(rule_map)
        else:
            self._rule_map = build_rule_map(rule_map)
        self.element_usage: dict[str, int] = dict(element_usage or {})
        self.rules_to_skip: set[str] = set(rules_to_skip or ())

    def get_element_usage(self) -> Mapping[str, int]:
        return MappingProxyType(self.element_usage)

    def get_rules_to_skip(self) -> AbstractSet[str]:
        return frozenset(self.rules_to_skip)

    def get_rule_map(self) -> RuleMap:
        return MappingProxyType(self._rule_map)

    def __repr__(self) -> str:
        return (
            f"CrawlState(rules={len(self._rule_map)}, "
            f"tracked_literals={len(self.element_usage)}, "
            f"rules_to_skip={sorted(self.rules_to_skip)})"
        )
