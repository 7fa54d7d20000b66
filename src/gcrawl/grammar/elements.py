"""Grammar element model for grammar-crawl.

A grammar is a mapping from rule name to :class:`Rule`.  Each rule owns
an ordered sequence of :class:`Alternative` objects, and each
alternative is an ordered sequence of elements.  The ``Element`` union
is a closed set of five variants:

``LiteralElement``
    A fixed token of generated output.
``ElementGroup``
    An ordered sequence of child elements, optionally repeated.
``Choice``
    A set of alternative child elements, exactly one of which is used.
``RuleRefElement``
    A reference to another rule, resolved by name through the rule table.
``Separator``
    Structural filler between repeated items; never a literal.

All element classes are frozen dataclasses compared and hashed by
*identity* (``eq=False``).  Two structurally identical elements at
different grammar positions are different nodes, which is what the
reachability analysis relies on for cycle detection.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Union

from gcrawl.errors import DuplicateRuleError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ElementKind(Enum):
    """Discriminator for the closed set of element variants."""

    LITERAL = auto()
    GROUP = auto()
    CHOICE = auto()
    RULE_REF = auto()
    SEPARATOR = auto()


class Repetition(Enum):
    """How many times a group may occur, with its EBNF suffix as value."""

    ONCE = ""
    OPTIONAL = "?"
    ZERO_OR_MORE = "*"
    ONE_OR_MORE = "+"


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, slots=True)
class LiteralElement:
    """A literal token.

    Parameters
    ----------
    name:
        The token name.  Usage is tracked globally by this name, so
        distinct literal nodes sharing a name count as one literal.
    """

    name: str
    kind: ClassVar[ElementKind] = ElementKind.LITERAL

    def __repr__(self) -> str:
        return f"LiteralElement({self.name!r})"


@dataclass(frozen=True, eq=False, slots=True)
class ElementGroup:
    """An ordered sequence of elements that are matched together.

    Parameters
    ----------
    elements:
        Child elements in declaration order.
    name:
        Optional label used for pruning lookups.
    repetition:
        Multiplicity of the whole group.
    """

    elements: tuple["Element", ...]
    name: str = ""
    repetition: Repetition = Repetition.ONCE
    kind: ClassVar[ElementKind] = ElementKind.GROUP

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))

    def __repr__(self) -> str:
        return (
            f"ElementGroup({len(self.elements)} elements"
            f"{self.repetition.value}, name={self.name!r})"
        )


@dataclass(frozen=True, eq=False, slots=True)
class Choice:
    """A set of alternatives of which exactly one is matched.

    Parameters
    ----------
    choices:
        Candidate elements in declaration order.
    name:
        Optional label used for pruning lookups.
    """

    choices: tuple["Element", ...]
    name: str = ""
    kind: ClassVar[ElementKind] = ElementKind.CHOICE

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(self.choices))

    def __repr__(self) -> str:
        return f"Choice({len(self.choices)} choices, name={self.name!r})"


@dataclass(frozen=True, eq=False, slots=True)
class RuleRefElement:
    """A reference to the rule called ``name``."""

    name: str
    kind: ClassVar[ElementKind] = ElementKind.RULE_REF

    def __repr__(self) -> str:
        return f"RuleRefElement({self.name!r})"


@dataclass(frozen=True, eq=False, slots=True)
class Separator:
    """Structural separator between repeated items."""

    name: str = ""
    kind: ClassVar[ElementKind] = ElementKind.SEPARATOR

    def __repr__(self) -> str:
        return f"Separator({self.name!r})"


Element = Union[LiteralElement, ElementGroup, Choice, RuleRefElement, Separator]

ELEMENT_TYPES: tuple[type, ...] = (
    LiteralElement,
    ElementGroup,
    Choice,
    RuleRefElement,
    Separator,
)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, slots=True)
class Alternative:
    """One ordered sequence of elements that derives a rule."""

    elements: tuple[Element, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))


@dataclass(frozen=True, eq=False, slots=True)
class Rule:
    """A named grammar production.

    Parameters
    ----------
    name:
        Rule name, referenced by :class:`RuleRefElement`.
    alternatives:
        The ways this rule can be derived, in declaration order.
    """

    name: str
    alternatives: tuple[Alternative, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "alternatives", tuple(self.alternatives))

    @classmethod
    def of(cls, name: str, *alternatives: Sequence[Element]) -> "Rule":
        """Build a rule from plain element sequences, one per alternative.

        Example
        -------
        ::

            digit = Rule.of("digit", [LiteralElement("0")], [LiteralElement("1")])
        """
        return cls(name, tuple(Alternative(tuple(alt)) for alt in alternatives))

    def elements(self) -> Iterator[Element]:
        """Yield every element of every alternative, in order."""
        for alternative in self.alternatives:
            yield from alternative.elements

    def __repr__(self) -> str:
        return f"Rule({self.name!r}, {len(self.alternatives)} alternatives)"


RuleMap = Mapping[str, Rule]


def build_rule_map(rules: Iterable[Rule]) -> dict[str, Rule]:
    """Index *rules* by name.

    Raises
    ------
    DuplicateRuleError
        If two rules share a name.
    """
    rule_map: dict[str, Rule] = {}
    for rule in rules:
        if rule.name in rule_map:
            raise DuplicateRuleError(rule.name)
        rule_map[rule.name] = rule
    return rule_map
