"""Formal concepts and their covers in the concept lattice."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, FrozenSet, Iterable, List, Optional, Tuple

from fcalattice.elements.ordering import item_key, sorted_items
from fcalattice.logger.formatting import format_set

if TYPE_CHECKING:
    from fcalattice.context.formal_context import FormalContext


def _minimal_sets(candidates: Iterable[FrozenSet[Any]]) -> List[FrozenSet[Any]]:
    distinct = set(candidates)
    minimal = [
        candidate
        for candidate in distinct
        if not any(other < candidate for other in distinct)
    ]
    return sorted(minimal, key=item_key)


class Concept:
    """
    A pair (extent, intent) of the Galois connection of a context.

    Either side may be left out (``None``) when only one is known, e.g. a
    closed set of attributes. Concepts are ordered by extent inclusion, which
    is reverse intent inclusion.
    """

    __slots__ = ("extent", "intent")

    def __init__(
        self,
        extent: Optional[Iterable[Any]] = None,
        intent: Optional[Iterable[Any]] = None,
    ) -> None:
        self.extent: Optional[FrozenSet[Any]] = (
            frozenset(extent) if extent is not None else None
        )
        self.intent: Optional[FrozenSet[Any]] = (
            frozenset(intent) if intent is not None else None
        )

    def has_extent(self) -> bool:
        return self.extent is not None

    def has_intent(self) -> bool:
        return self.intent is not None

    def intent_in(self, context: "FormalContext") -> FrozenSet[Any]:
        if self.intent is not None:
            return self.intent
        return context.derive_attributes(self.extent or ())

    def extent_in(self, context: "FormalContext") -> FrozenSet[Any]:
        if self.extent is not None:
            return self.extent
        return context.derive_objects(self.intent or ())

    def immediate_successors(self, context: "FormalContext") -> List[FrozenSet[Any]]:
        """
        Intents of the upper covers of this concept's intent in the closed set lattice.

        For every attribute x outside the intent A, the closure of A + {x} is
        a candidate; the inclusion-minimal candidates are the covers.
        """
        intent = self.intent_in(context)
        return _minimal_sets(
            context.closure(intent | {attribute})
            for attribute in context.attributes
            if attribute not in intent
        )

    def immediate_predecessors(self, context: "FormalContext") -> List[FrozenSet[Any]]:
        """
        Intents of the lower covers of this concept's intent in the closed set lattice.

        Computed dually on extents: the inclusion-minimal object closures of
        E + {g} for objects g outside the extent E.
        """
        extent = self.extent_in(context)
        extents = _minimal_sets(
            context.object_closure(extent | {obj})
            for obj in context.objects
            if obj not in extent
        )
        return sorted(
            (context.derive_attributes(candidate) for candidate in extents), key=item_key
        )

    def sort_key(self) -> Tuple[Any, ...]:
        return (item_key(self.extent or frozenset()), item_key(self.intent or frozenset()))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Concept):
            return self.extent == other.extent and self.intent == other.intent
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.extent, self.intent))

    def __str__(self) -> str:
        parts = []
        if self.extent is not None:
            parts.append(format_set(self.extent))
        if self.intent is not None:
            parts.append(format_set(self.intent))
        return " - ".join(parts)

    def __repr__(self) -> str:
        extent = sorted_items(self.extent) if self.extent is not None else None
        intent = sorted_items(self.intent) if self.intent is not None else None
        return f"Concept(extent={extent!r}, intent={intent!r})"
