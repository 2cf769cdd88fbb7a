from __future__ import annotations

from typing import Any, List, TypeVar

from fcalattice.dgraph.directed_graph import DirectedGraph
from fcalattice.elements.node import Node
from fcalattice.exceptions import CyclicGraphError

T = TypeVar("T")
E = TypeVar("E")


class DAGraph(DirectedGraph[T, E]):
    """
    A directed acyclic graph, read as a partial order (x -> y means x < y).

    Acyclicity is verified when a DAGraph is derived from an arbitrary graph
    via :meth:`from_graph`. Graphs built edge by edge are trusted.
    """

    __slots__ = ()

    @classmethod
    def from_graph(cls, graph: DirectedGraph[T, E]) -> "DAGraph[T, E]":
        """
        Copy ``graph`` into a new DAGraph.

        Raises:
            CyclicGraphError: If ``graph`` contains a cycle (loops included).
        """
        if not graph.is_acyclic():
            raise CyclicGraphError(
                f"Graph with {graph.number_of_nodes()} nodes contains a cycle"
            )
        dag: DAGraph[T, E] = cls()
        for node in graph.nodes:
            dag.add_node(node)
        for edge in graph.edges:
            dag.add_edge(edge.source, edge.target, edge.content)
        return dag

    def minimals(self) -> List[Node[T]]:
        """Nodes without predecessor other than themselves."""
        return [node for node in self.nodes if set(self._predecessors[node]) <= {node}]

    def maximals(self) -> List[Node[T]]:
        """Nodes without successor other than themselves."""
        return [node for node in self.nodes if set(self._successors[node]) <= {node}]

    def majorants(self, node: Node[T]) -> List[Node[T]]:
        """Nodes strictly above ``node`` (reachable along edges)."""
        return sorted(self._reachable(node, forward=True) - {node})

    def minorants(self, node: Node[T]) -> List[Node[T]]:
        """Nodes strictly below ``node`` (reaching it along edges)."""
        return sorted(self._reachable(node, forward=False) - {node})

    def filter(self, node: Node[T]) -> "DAGraph[T, Any]":
        """Subgraph induced by ``node`` and its majorants."""
        return self.subgraph_by_nodes([node, *self.majorants(node)])

    def ideal(self, node: Node[T]) -> "DAGraph[T, Any]":
        """Subgraph induced by ``node`` and its minorants."""
        return self.subgraph_by_nodes([node, *self.minorants(node)])
