"""
Formal Context
==============

A finite set of objects, a finite set of attributes and an incidence relation
between them. The two derivation operators form a Galois connection whose
composites are the closure operators on attribute sets (``closure``) and on
object sets (``object_closure``).

The incidence is edited per object. Queries run on a boolean numpy matrix
(objects x attributes, both sorted) that is rebuilt lazily after an edit, or
explicitly with :meth:`FormalContext.finalize`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterable, List, Optional, Set

import numpy as np

from fcalattice.context.concept import Concept
from fcalattice.elements.node import Node
from fcalattice.elements.ordering import sorted_items
from fcalattice.exceptions import UnknownElementError
from fcalattice.logger import lattice_logger

if TYPE_CHECKING:
    from fcalattice.lattice.lattice import Lattice


class FormalContext:
    def __init__(
        self,
        objects: Optional[Iterable[Any]] = None,
        attributes: Optional[Iterable[Any]] = None,
    ) -> None:
        self._intents: Dict[Any, Set[Any]] = {}
        self._attributes: Set[Any] = set()
        self._matrix: Optional[np.ndarray] = None
        self._object_order: List[Any] = []
        self._attribute_order: List[Any] = []
        self._object_index: Dict[Any, int] = {}
        self._attribute_index: Dict[Any, int] = {}
        for obj in objects or ():
            self.add_object(obj)
        for attribute in attributes or ():
            self.add_attribute(attribute)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def objects(self) -> List[Any]:
        self.finalize()
        return list(self._object_order)

    @property
    def attributes(self) -> List[Any]:
        self.finalize()
        return list(self._attribute_order)

    def number_of_objects(self) -> int:
        return len(self._intents)

    def number_of_attributes(self) -> int:
        return len(self._attributes)

    def contains_object(self, obj: Any) -> bool:
        return obj in self._intents

    def contains_attribute(self, attribute: Any) -> bool:
        return attribute in self._attributes

    def add_object(self, obj: Any) -> bool:
        if obj in self._intents:
            return False
        self._intents[obj] = set()
        self._invalidate()
        return True

    def add_attribute(self, attribute: Any) -> bool:
        if attribute in self._attributes:
            return False
        self._attributes.add(attribute)
        self._invalidate()
        return True

    def add_objects(self, objects: Iterable[Any]) -> bool:
        added = False
        for obj in objects:
            added = self.add_object(obj) or added
        return added

    def add_attributes(self, attributes: Iterable[Any]) -> bool:
        added = False
        for attribute in attributes:
            added = self.add_attribute(attribute) or added
        return added

    def remove_object(self, obj: Any) -> bool:
        if obj not in self._intents:
            return False
        del self._intents[obj]
        self._invalidate()
        return True

    def remove_attribute(self, attribute: Any) -> bool:
        if attribute not in self._attributes:
            return False
        self._attributes.remove(attribute)
        for intent in self._intents.values():
            intent.discard(attribute)
        self._invalidate()
        return True

    # ------------------------------------------------------------------
    # Incidence
    # ------------------------------------------------------------------

    def add_incidence(self, obj: Any, attribute: Any) -> bool:
        """
        Record that ``obj`` has ``attribute``.

        Raises:
            UnknownElementError: If either side is not registered.
        """
        self._check_objects([obj])
        self._check_attributes([attribute])
        if attribute in self._intents[obj]:
            return False
        self._intents[obj].add(attribute)
        self._invalidate()
        return True

    def add_incidences(self, obj: Any, attributes: Iterable[Any]) -> bool:
        added = False
        for attribute in attributes:
            added = self.add_incidence(obj, attribute) or added
        return added

    def remove_incidence(self, obj: Any, attribute: Any) -> bool:
        self._check_objects([obj])
        self._check_attributes([attribute])
        if attribute not in self._intents[obj]:
            return False
        self._intents[obj].remove(attribute)
        self._invalidate()
        return True

    def has_incidence(self, obj: Any, attribute: Any) -> bool:
        return attribute in self._intents.get(obj, ())

    def intent(self, obj: Any) -> FrozenSet[Any]:
        self._check_objects([obj])
        return frozenset(self._intents[obj])

    def extent(self, attribute: Any) -> FrozenSet[Any]:
        self._check_attributes([attribute])
        return frozenset(obj for obj, intent in self._intents.items() if attribute in intent)

    # ------------------------------------------------------------------
    # Bit matrix
    # ------------------------------------------------------------------

    def _invalidate(self) -> None:
        self._matrix = None

    def is_finalized(self) -> bool:
        return self._matrix is not None

    def finalize(self) -> np.ndarray:
        """Build (if needed) and return the objects x attributes incidence matrix."""
        if self._matrix is not None:
            return self._matrix
        self._object_order = sorted_items(self._intents)
        self._attribute_order = sorted_items(self._attributes)
        self._object_index = {obj: i for i, obj in enumerate(self._object_order)}
        self._attribute_index = {a: i for i, a in enumerate(self._attribute_order)}
        matrix = np.zeros((len(self._object_order), len(self._attribute_order)), dtype=bool)
        for obj, intent in self._intents.items():
            row = self._object_index[obj]
            for attribute in intent:
                matrix[row, self._attribute_index[attribute]] = True
        self._matrix = matrix
        return matrix

    def _check_objects(self, objects: Iterable[Any]) -> None:
        unknown = [obj for obj in objects if obj not in self._intents]
        if unknown:
            UnknownElementError.raise_unknown("object", unknown, "context")

    def _check_attributes(self, attributes: Iterable[Any]) -> None:
        unknown = [a for a in attributes if a not in self._attributes]
        if unknown:
            UnknownElementError.raise_unknown("attribute", unknown, "context")

    def _object_mask(self, attributes: Iterable[Any]) -> np.ndarray:
        attributes = list(attributes)
        self._check_attributes(attributes)
        matrix = self.finalize()
        columns = np.asarray([self._attribute_index[a] for a in attributes], dtype=np.intp)
        return matrix[:, columns].all(axis=1)

    def _attribute_mask(self, objects: Iterable[Any]) -> np.ndarray:
        objects = list(objects)
        self._check_objects(objects)
        matrix = self.finalize()
        rows = np.asarray([self._object_index[obj] for obj in objects], dtype=np.intp)
        return matrix[rows, :].all(axis=0)

    # ------------------------------------------------------------------
    # Galois connection
    # ------------------------------------------------------------------

    def derive_objects(self, attributes: Iterable[Any]) -> FrozenSet[Any]:
        """Objects having every given attribute (all objects for the empty set)."""
        mask = self._object_mask(attributes)
        return frozenset(self._object_order[i] for i in np.flatnonzero(mask))

    def derive_attributes(self, objects: Iterable[Any]) -> FrozenSet[Any]:
        """Attributes shared by every given object (all attributes for the empty set)."""
        mask = self._attribute_mask(objects)
        return frozenset(self._attribute_order[i] for i in np.flatnonzero(mask))

    def closure(self, attributes: Iterable[Any]) -> FrozenSet[Any]:
        return self.derive_attributes(self.derive_objects(attributes))

    def object_closure(self, objects: Iterable[Any]) -> FrozenSet[Any]:
        return self.derive_objects(self.derive_attributes(objects))

    def extent_size(self, attributes: Iterable[Any]) -> int:
        return int(np.count_nonzero(self._object_mask(attributes)))

    def intent_size(self, objects: Iterable[Any]) -> int:
        return int(np.count_nonzero(self._attribute_mask(objects)))

    # ------------------------------------------------------------------
    # Concepts
    # ------------------------------------------------------------------

    def all_closures(self) -> List[FrozenSet[Any]]:
        """
        Every closed attribute set, in lectic order (Ganter's Next Closure).
        """
        order = self.attributes
        full = frozenset(order)
        current = self.closure(())
        closures = [current]
        while current != full:
            for i in range(len(order) - 1, -1, -1):
                if order[i] in current:
                    continue
                prefix = current & frozenset(order[:i])
                candidate = self.closure(prefix | {order[i]})
                if candidate & frozenset(order[:i]) == prefix:
                    current = candidate
                    closures.append(current)
                    break
        if not lattice_logger.disabled:
            lattice_logger.result("Closed attribute sets", len(closures))
        return closures

    def concepts(self) -> List[Concept]:
        return [Concept(self.derive_objects(intent), intent) for intent in self.all_closures()]

    def closed_set_lattice(self) -> "Lattice[Concept, Any]":
        """
        Hasse diagram of the concepts ordered by intent inclusion.

        Node contents are :class:`Concept` instances; the bottom carries the
        closure of the empty set.
        """
        from fcalattice.lattice.lattice import Lattice

        lattice: Lattice[Concept, Any] = Lattice()
        nodes: Dict[FrozenSet[Any], Node[Concept]] = {}
        concepts = self.concepts()
        for concept in concepts:
            node = Node(concept)
            nodes[concept.intent] = node
            lattice.add_node(node)
        for concept in concepts:
            for successor in concept.immediate_successors(self):
                lattice.add_edge(nodes[concept.intent], nodes[successor])
        return lattice

    def concept_lattice(self) -> "Lattice[Concept, Any]":
        """Hasse diagram of the concepts ordered by extent inclusion."""
        lattice = self.closed_set_lattice()
        lattice.graph.transpose()
        return lattice

    def reverse(self) -> "FormalContext":
        """The dual context: objects and attributes swapped."""
        reversed_context = FormalContext(self._attributes, self._intents)
        for obj, intent in self._intents.items():
            for attribute in intent:
                reversed_context.add_incidence(attribute, obj)
        return reversed_context

    def log_table(self, title: Optional[str] = None) -> None:
        lattice_logger.incidence(
            self.objects, self.attributes, self.has_incidence, title=title or "Context"
        )

    def __str__(self) -> str:
        lines = [
            "Observations: " + " ".join(str(obj) for obj in self.objects),
            "Attributes: " + " ".join(str(a) for a in self.attributes),
        ]
        for obj in self.objects:
            intent = sorted_items(self._intents[obj])
            lines.append(f"{obj} : " + " ".join(str(a) for a in intent))
        return "\n".join(lines) + "\n"
