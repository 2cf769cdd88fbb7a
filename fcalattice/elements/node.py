from itertools import count
from functools import total_ordering
from numbers import Real
from typing import Any, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")

_identifiers = count(1)


@total_ordering
class Node(Generic[T]):
    __slots__ = ("_identifier", "content")

    def __init__(self, content: Optional[T] = None):
        """
        A graph node: a unique, immutable identifier plus mutable content.

        Nodes compare equal only to themselves (identifier equality). Their
        total order puts numeric contents first, then string contents, then
        every other node, ties and incomparable contents being broken by
        identifier, so that sorted iteration is always deterministic.
        """
        self._identifier: int = next(_identifiers)
        self.content: Optional[T] = content

    @property
    def identifier(self) -> int:
        return self._identifier

    def sort_key(self) -> Tuple[Any, ...]:
        content = self.content
        if isinstance(content, Real) and not isinstance(content, bool):
            return (0, content, self._identifier)
        if isinstance(content, str):
            return (1, content, self._identifier)
        return (2, self._identifier)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Node):
            return self._identifier == other._identifier
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Node):
            return self.sort_key() < other.sort_key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._identifier)

    def __str__(self) -> str:
        if self.content is None:
            return str(self._identifier)
        return str(self.content)

    def __repr__(self) -> str:
        return f"Node({self._identifier}, {self.content!r})"
