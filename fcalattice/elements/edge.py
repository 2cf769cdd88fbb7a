from functools import total_ordering
from typing import Any, Generic, Optional, Tuple, TypeVar

from fcalattice.elements.node import Node

T = TypeVar("T")
E = TypeVar("E")


@total_ordering
class Edge(Generic[T, E]):
    __slots__ = ("_source", "_target", "content")

    def __init__(self, source: Node[T], target: Node[T], content: Optional[E] = None):
        """
        A directed edge from ``source`` to ``target`` carrying optional content.

        Identity is the ordered (source, target) pair: two edges between the
        same nodes are equal whatever their content. The content is a label
        or a valuation, e.g. the family of witness sets on a dependency edge.
        """
        self._source = source
        self._target = target
        self.content: Optional[E] = content

    @property
    def source(self) -> Node[T]:
        return self._source

    @property
    def target(self) -> Node[T]:
        return self._target

    def has_content(self) -> bool:
        return self.content is not None

    def sort_key(self) -> Tuple[Any, ...]:
        return (self._source.sort_key(), self._target.sort_key())

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Edge):
            return self._source == other._source and self._target == other._target
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Edge):
            return self.sort_key() < other.sort_key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._source.identifier, self._target.identifier))

    def __str__(self) -> str:
        if self.content is None:
            return f"[{self._source}]->[{self._target}]"
        return f"[{self._source}]-({self.content})->[{self._target}]"

    def __repr__(self) -> str:
        return f"Edge({self._source!r}, {self._target!r}, {self.content!r})"
