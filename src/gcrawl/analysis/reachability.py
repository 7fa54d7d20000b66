"""Literal reachability analysis.

Computes the names of all literal tokens reachable from a grammar
element, following rule references through the rule table and never
entering pruned rules.

Usage
-----
::

    from gcrawl.analysis import discover_literals

    names = discover_literals(RuleRefElement("digit"), set(), rule_map)
    # {"0", "1"}

Traversal is depth-first over an explicit stack.  Every element is
visited at most once per call, keyed by object identity, so recursive
and diamond-shaped grammars terminate and deep grammars do not run into
the interpreter recursion limit.
"""
from __future__ import annotations

import logging
from collections.abc import Set as AbstractSet

from gcrawl.errors import UnexpectedElementError, UnknownRuleError
from gcrawl.grammar.elements import (
    ELEMENT_TYPES,
    Choice,
    Element,
    ElementGroup,
    LiteralElement,
    RuleMap,
    RuleRefElement,
    Separator,
)
from gcrawl.grammar.render import render_element

logger = logging.getLogger(__name__)

# (element, enclosing rule name, index of the parent entry in the trail)
_Frame = tuple[object, str | None, int]

_LABEL_DEPTH = 2


class LiteralDiscovery:
    """Literal reachability analyzer bound to a pruning set and rule table.

    Parameters
    ----------
    rules_to_skip:
        Names that must never be expanded.  An element whose name is in
        this set contributes no literals, and neither does anything only
        reachable through it.  Empty names never match.
    rule_map:
        Rule table used to resolve :class:`RuleRefElement` names.
    """

    def __init__(self, rules_to_skip: AbstractSet[str], rule_map: RuleMap) -> None:
        self._rules_to_skip = rules_to_skip
        self._rule_map = rule_map

    def discover(self, element: Element) -> set[str]:
        """Return the names of all literals reachable from *element*.

        Raises
        ------
        UnexpectedElementError
            If an element outside the known variants is reached.
        UnknownRuleError
            If a rule reference names a rule missing from the table.
        """
        results: set[str] = set()
        visited: set[int] = set()
        # Expanded elements with the trail index of their parent; paths
        # are only rebuilt from it when a fault is reported.
        trail: list[tuple[object, int]] = []
        stack: list[_Frame] = [(element, None, -1)]

        while stack:
            current, rule_name, parent = stack.pop()
            if id(current) in visited:
                continue
            visited.add(id(current))

            name = getattr(current, "name", None)
            if name and name in self._rules_to_skip:
                continue

            here = len(trail)
            trail.append((current, parent))

            if not isinstance(current, ELEMENT_TYPES):
                raise UnexpectedElementError(
                    current, rule_name=rule_name, path=self._path(trail, here)
                )

            if isinstance(current, LiteralElement):
                results.add(current.name)
            elif isinstance(current, Separator):
                continue
            elif isinstance(current, Choice):
                self._push(stack, current.choices, rule_name, here)
            elif isinstance(current, ElementGroup):
                children = [e for e in current.elements if not isinstance(e, Separator)]
                self._push(stack, children, rule_name, here)
            elif isinstance(current, RuleRefElement):
                rule = self._rule_map.get(current.name)
                if rule is None:
                    raise UnknownRuleError(
                        current.name, rule_name=rule_name, path=self._path(trail, here)
                    )
                self._push(stack, list(rule.elements()), rule.name, here)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Discovered %d literal(s) reachable from %s",
                len(results),
                render_element(element),
            )
        return results

    @staticmethod
    def _push(
        stack: list[_Frame],
        children: list[Element] | tuple[Element, ...],
        rule_name: str | None,
        parent: int,
    ) -> None:
        # Reversed so children are visited in declaration order.
        for child in reversed(children):
            stack.append((child, rule_name, parent))

    @staticmethod
    def _path(trail: list[tuple[object, int]], index: int) -> tuple[str, ...]:
        labels: list[str] = []
        while index >= 0:
            node, index = trail[index]
            labels.append(render_element(node, max_depth=_LABEL_DEPTH))  # type: ignore[arg-type]
        return tuple(reversed(labels))


def discover_literals(
    element: Element,
    rules_to_skip: AbstractSet[str],
    rule_map: RuleMap,
) -> set[str]:
    """Return the names of all literals reachable from *element*.

    Parameters
    ----------
    element:
        The element to start from.
    rules_to_skip:
        Pruned rule names; their content is invisible to discovery.
    rule_map:
        Rule table used to resolve rule references.

    Returns
    -------
    set[str]
        Literal names.  Distinct literal nodes with the same name
        collapse to one entry.
    """
    return LiteralDiscovery(rules_to_skip, rule_map).discover(element)
