"""Value objects for implications and association rules."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Tuple

from fcalattice.elements.ordering import item_key
from fcalattice.logger.formatting import format_items


@dataclass(frozen=True)
class Rule:
    """
    An implication ``premise -> conclusion`` between two sets of items.

    Items are whatever the owning implicational system ranges over: context
    attributes, or lattice nodes for rules derived from a lattice.

    Example:
        >>> rule = Rule({"a"}, {"b", "c"})
        >>> str(rule)
        'a -> b c'
    """

    premise: FrozenSet[Any] = frozenset()
    conclusion: FrozenSet[Any] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "premise", frozenset(self.premise))
        object.__setattr__(self, "conclusion", frozenset(self.conclusion))

    @property
    def items(self) -> FrozenSet[Any]:
        return self.premise | self.conclusion

    def with_conclusion(self, conclusion: Iterable[Any]) -> "Rule":
        return Rule(self.premise, frozenset(conclusion))

    def sort_key(self) -> Tuple[Any, ...]:
        return (item_key(self.premise), item_key(self.conclusion))

    def __str__(self) -> str:
        return f"{format_items(self.premise)} -> {format_items(self.conclusion)}"


@dataclass(frozen=True)
class AssociationRule(Rule):
    """
    A rule annotated with its support and confidence in a context.

    ``support`` is the fraction of objects having every item of the rule and
    ``confidence`` the fraction of objects having the premise that also have
    the conclusion. Exact rules have confidence 1.
    """

    support: float = 0.0
    confidence: float = 0.0

    def __post_init__(self) -> None:
        super().__post_init__()
        if not 0.0 <= self.support <= 1.0:
            raise ValueError(f"support must lie in [0, 1], got {self.support}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must lie in [0, 1], got {self.confidence}")

    def with_conclusion(self, conclusion: Iterable[Any]) -> "AssociationRule":
        return AssociationRule(
            self.premise, frozenset(conclusion), self.support, self.confidence
        )

    def is_exact(self) -> bool:
        return self.confidence == 1.0

    def sort_key(self) -> Tuple[Any, ...]:
        return super().sort_key() + (self.support, self.confidence)

    def __str__(self) -> str:
        return f"{super().__str__()} : {self.support}/{self.confidence}"
