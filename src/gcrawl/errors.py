"""Exception types raised by grammar-crawl.

All exceptions derive from :class:`GrammarCrawlError` so callers can
catch everything the library raises with one ``except`` clause.
Model-consistency faults (:class:`GrammarModelError` and subclasses)
indicate a broken grammar model and should abort the current run.
"""
from __future__ import annotations

from collections.abc import Sequence


class GrammarCrawlError(Exception):
    """Base class for all grammar-crawl errors."""


class GrammarModelError(GrammarCrawlError):
    """The grammar model is internally inconsistent.

    Parameters
    ----------
    message:
        Human-readable description of the fault.
    rule_name:
        Name of the rule being expanded when the fault was detected,
        or ``None`` when the fault occurred outside any rule.
    path:
        Names of the elements traversed from the starting element down
        to the offending one.
    """

    def __init__(
        self,
        message: str,
        rule_name: str | None = None,
        path: Sequence[str] = (),
    ) -> None:
        self.message = message
        self.rule_name = rule_name
        self.path = tuple(path)
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.message]
        if self.rule_name is not None:
            parts.append(f"in rule {self.rule_name!r}")
        if self.path:
            parts.append(f"at {' -> '.join(self.path)}")
        return " ".join(parts)


class UnexpectedElementError(GrammarModelError):
    """Traversal met an element outside the closed set of known kinds."""

    def __init__(
        self,
        element: object,
        rule_name: str | None = None,
        path: Sequence[str] = (),
    ) -> None:
        self.element = element
        self.kind = type(element).__qualname__
        super().__init__(
            f"Unexpected type of element: {self.kind}",
            rule_name=rule_name,
            path=path,
        )


class UnknownRuleError(GrammarModelError):
    """A rule reference names a rule that is not in the rule table."""

    def __init__(
        self,
        referenced: str,
        rule_name: str | None = None,
        path: Sequence[str] = (),
    ) -> None:
        self.referenced = referenced
        super().__init__(
            f"Reference to undefined rule {referenced!r}",
            rule_name=rule_name,
            path=path,
        )


class DuplicateRuleError(GrammarModelError):
    """Two rules with the same name were supplied to one rule table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Rule {name!r} is defined more than once")


class ConfigError(GrammarCrawlError, ValueError):
    """A configuration value or file is invalid."""
