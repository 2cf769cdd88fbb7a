"""
Arrow relations between the join- and meet-irreducibles of a lattice.

For a join-irreducible j with unique lower cover j- and a meet-irreducible m
with unique upper cover m+:

    j x m   (Cross)   iff j <= m
    j ↗ m   (Up)      iff j </= m and j <= m+
    j ↙ m   (Down)    iff j </= m and j- <= m
    j ↕ m   (UpDown)  iff both arrows hold
    Circ              otherwise
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional

from fcalattice.context.formal_context import FormalContext
from fcalattice.dgraph.directed_graph import DirectedGraph
from fcalattice.elements.node import Node

if TYPE_CHECKING:
    from fcalattice.lattice.lattice import Lattice


class Arrow(Enum):
    UP = "Up"
    DOWN = "Down"
    UP_DOWN = "UpDown"
    CROSS = "Cross"
    CIRC = "Circ"

    def __str__(self) -> str:
        return self.value


class ArrowRelation(DirectedGraph[Any, Arrow]):
    """
    Bipartite graph over the irreducibles of a lattice: one edge j -> m per
    join-irreducible j and meet-irreducible m, labelled with their :class:`Arrow`.

    A node that is both join- and meet-irreducible appears once and takes
    both roles.
    """

    __slots__ = ("_joins", "_meets")

    def __init__(self, lattice: Optional["Lattice[Any, Any]"] = None) -> None:
        super().__init__()
        self._joins: List[Node[Any]] = []
        self._meets: List[Node[Any]] = []
        if lattice is not None:
            self._build(lattice)

    def _build(self, lattice: "Lattice[Any, Any]") -> None:
        hasse = lattice.hasse_diagram()
        self._joins = lattice.join_irreducibles()
        self._meets = lattice.meet_irreducibles()
        for node in self._joins + self._meets:
            self.add_node(node)
        upsets = {node: lattice.upset(node) for node in lattice.nodes}
        for j in self._joins:
            lower_cover = hasse.predecessor_nodes(j)[0]
            for m in self._meets:
                upper_cover = hasse.successor_nodes(m)[0]
                if m in upsets[j]:
                    arrow = Arrow.CROSS
                else:
                    up = upper_cover in upsets[j]
                    down = m in upsets[lower_cover]
                    if up and down:
                        arrow = Arrow.UP_DOWN
                    elif up:
                        arrow = Arrow.UP
                    elif down:
                        arrow = Arrow.DOWN
                    else:
                        arrow = Arrow.CIRC
                self.add_edge(j, m, arrow)

    @property
    def joins(self) -> List[Node[Any]]:
        return list(self._joins)

    @property
    def meets(self) -> List[Node[Any]]:
        return list(self._meets)

    def get_arrow(self, j: Node[Any], m: Node[Any]) -> Optional[Arrow]:
        edge = self.get_edge(j, m)
        return edge.content if edge is not None else None

    def double_arrow_table(self) -> FormalContext:
        """Context with join-irreducibles as objects, meet-irreducibles as attributes, and j ↕ m as incidence."""
        table = FormalContext(self._joins, self._meets)
        for edge in self.edges:
            if edge.content is Arrow.UP_DOWN:
                table.add_incidence(edge.source, edge.target)
        return table
