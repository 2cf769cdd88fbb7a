"""
Directed Graph Engine
---------------------
A generic mutable directed graph over :class:`Node` and :class:`Edge`.

Adjacency is stored in both directions (node -> {neighbour: edge}) so that
successor and predecessor queries are O(1). Every mutation keeps the two maps
consistent, and every edge's endpoints are nodes of the graph.

Iteration over nodes and edges is always sorted (see ``Node.sort_key``), which
makes every derived structure deterministic.
"""

from __future__ import annotations

import heapq
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Set,
    Tuple,
    TypeVar,
)

from fcalattice.elements.edge import Edge
from fcalattice.elements.node import Node

if TYPE_CHECKING:
    from fcalattice.dgraph.dag import DAGraph

T = TypeVar("T")
E = TypeVar("E")


class DirectedGraph(Generic[T, E]):
    __slots__ = ("_successors", "_predecessors")

    def __init__(self, nodes: Optional[Iterable[Node[T]]] = None) -> None:
        self._successors: Dict[Node[T], Dict[Node[T], Edge[T, E]]] = {}
        self._predecessors: Dict[Node[T], Dict[Node[T], Edge[T, E]]] = {}
        if nodes:
            for node in nodes:
                self.add_node(node)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> List[Node[T]]:
        return sorted(self._successors)

    @property
    def edges(self) -> List[Edge[T, E]]:
        return sorted(
            edge for targets in self._successors.values() for edge in targets.values()
        )

    def number_of_nodes(self) -> int:
        return len(self._successors)

    def number_of_edges(self) -> int:
        return sum(len(targets) for targets in self._successors.values())

    def __contains__(self, node: object) -> bool:
        return node in self._successors

    def contains_node(self, node: Node[T]) -> bool:
        return node in self._successors

    def contains_edge(self, source: Node[T], target: Node[T]) -> bool:
        return target in self._successors.get(source, {})

    def has_edge(self, edge: Edge[T, E]) -> bool:
        return self.contains_edge(edge.source, edge.target)

    def get_edge(self, source: Node[T], target: Node[T]) -> Optional[Edge[T, E]]:
        return self._successors.get(source, {}).get(target)

    def get_node_by_content(self, content: Any) -> Optional[Node[T]]:
        for node in self.nodes:
            if node.content == content:
                return node
        return None

    def get_node_by_identifier(self, identifier: int) -> Optional[Node[T]]:
        for node in self._successors:
            if node.identifier == identifier:
                return node
        return None

    def successor_edges(self, node: Node[T]) -> List[Edge[T, E]]:
        return sorted(self._successors.get(node, {}).values())

    def predecessor_edges(self, node: Node[T]) -> List[Edge[T, E]]:
        return sorted(self._predecessors.get(node, {}).values())

    def successor_nodes(self, node: Node[T]) -> List[Node[T]]:
        return sorted(self._successors.get(node, {}))

    def predecessor_nodes(self, node: Node[T]) -> List[Node[T]]:
        return sorted(self._predecessors.get(node, {}))

    def sources(self) -> List[Node[T]]:
        """Nodes without any incoming edge."""
        return [node for node in self.nodes if not self._predecessors[node]]

    def sinks(self) -> List[Node[T]]:
        """Nodes without any outgoing edge."""
        return [node for node in self.nodes if not self._successors[node]]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_node(self, node: Node[T]) -> bool:
        if node in self._successors:
            return False
        self._successors[node] = {}
        self._predecessors[node] = {}
        return True

    def remove_node(self, node: Node[T]) -> bool:
        """Remove ``node`` and every edge incident to it."""
        if node not in self._successors:
            return False
        for target in self._successors.pop(node):
            if target != node:
                del self._predecessors[target][node]
        for source in self._predecessors.pop(node):
            if source != node:
                del self._successors[source][node]
        return True

    def remove_nodes(self, nodes: Iterable[Node[T]]) -> bool:
        removed = False
        for node in list(nodes):
            removed = self.remove_node(node) or removed
        return removed

    def add_edge(
        self, source: Node[T], target: Node[T], content: Optional[E] = None
    ) -> bool:
        return self.add_edge_instance(Edge(source, target, content))

    def add_edge_instance(self, edge: Edge[T, E]) -> bool:
        """Insert an existing edge object; both endpoints must be nodes of the graph."""
        source, target = edge.source, edge.target
        if source not in self._successors or target not in self._successors:
            return False
        if target in self._successors[source]:
            return False
        self._successors[source][target] = edge
        self._predecessors[target][source] = edge
        return True

    def remove_edge(self, source: Node[T], target: Node[T]) -> bool:
        if not self.contains_edge(source, target):
            return False
        del self._successors[source][target]
        del self._predecessors[target][source]
        return True

    def remove_edge_instance(self, edge: Edge[T, E]) -> bool:
        return self.remove_edge(edge.source, edge.target)

    def copy(self):
        """Copy sharing the node objects, with fresh edges carrying the same contents."""
        graph = type(self)()
        for node in self._successors:
            graph.add_node(node)
        for edge in self.edges:
            graph.add_edge(edge.source, edge.target, edge.content)
        return graph

    # ------------------------------------------------------------------
    # Subgraphs
    # ------------------------------------------------------------------

    def subgraph_by_nodes(self, nodes: Iterable[Node[T]]):
        """Subgraph induced by ``nodes``: edges with both endpoints in the set."""
        graph = type(self)()
        selected = {node for node in nodes if node in self._successors}
        for node in selected:
            graph.add_node(node)
        for source in selected:
            for target, edge in self._successors[source].items():
                if target in selected:
                    graph.add_edge(source, target, edge.content)
        return graph

    def subgraph_by_edges(self, edges: Iterable[Edge[T, E]]):
        """Subgraph with every node of this graph and exactly the given edges."""
        graph = type(self)()
        for node in self._successors:
            graph.add_node(node)
        for edge in edges:
            if self.has_edge(edge):
                graph.add_edge(edge.source, edge.target, edge.content)
        return graph

    # ------------------------------------------------------------------
    # Closures and reductions
    # ------------------------------------------------------------------

    def complementary(self) -> None:
        """Replace the edge set by its complement over all ordered pairs, loops included."""
        nodes = self.nodes
        missing: List[Tuple[Node[T], Node[T]]] = [
            (source, target)
            for source in nodes
            for target in nodes
            if not self.contains_edge(source, target)
        ]
        for node in nodes:
            self._successors[node] = {}
            self._predecessors[node] = {}
        for source, target in missing:
            self.add_edge(source, target)

    def reflexive_closure(self) -> int:
        """Add a loop on every node; return the number of loops added."""
        return sum(1 for node in self.nodes if self.add_edge(node, node))

    def reflexive_reduction(self) -> int:
        """Remove every loop; return the number of loops removed."""
        return sum(1 for node in self.nodes if self.remove_edge(node, node))

    def _reachable(self, start: Node[T], forward: bool = True) -> Set[Node[T]]:
        """Nodes reachable from ``start`` by a path of length at least one."""
        adjacency = self._successors if forward else self._predecessors
        reached: Set[Node[T]] = set()
        stack = list(adjacency.get(start, {}))
        while stack:
            node = stack.pop()
            if node in reached:
                continue
            reached.add(node)
            stack.extend(n for n in adjacency[node] if n not in reached)
        return reached

    def transitive_closure(self) -> int:
        """
        Add an edge x -> y for every pair where y is reachable from x.

        A node lying on a cycle reaches itself and therefore gets a loop.
        Returns the number of edges added.
        """
        reach = {node: self._reachable(node) for node in self.nodes}
        added = 0
        for source, targets in reach.items():
            for target in sorted(targets):
                if self.add_edge(source, target):
                    added += 1
        return added

    def transitive_reduction(self) -> int:
        """
        Remove every edge x -> y such that y is reachable from x through another node.

        Precondition: the graph is acyclic (loops aside). The reduction of a
        DAG is unique; on a cyclic graph the result is undefined and no attempt
        is made to repair the input. Returns the number of edges removed.
        """
        reach = {node: self._reachable(node) - {node} for node in self.nodes}
        removed = 0
        for source in self.nodes:
            indirect: Set[Node[T]] = set()
            for successor in self._successors[source]:
                if successor != source:
                    indirect |= reach[successor]
            for target in list(self._successors[source]):
                if target != source and target in indirect:
                    self.remove_edge(source, target)
                    removed += 1
        return removed

    def transpose(self) -> None:
        """Reverse every edge in place, keeping edge contents."""
        edges = self.edges
        for node in self._successors:
            self._successors[node] = {}
            self._predecessors[node] = {}
        for edge in edges:
            self.add_edge(edge.target, edge.source, edge.content)

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------

    def depth_first_search(self) -> Tuple[List[Node[T]], List[Node[T]]]:
        """
        Iterative depth first search over the whole graph.

        Roots and successors are visited in sorted order. Returns the visit
        (preorder) and the finish (postorder) sequences.
        """
        visited: Set[Node[T]] = set()
        visit_order: List[Node[T]] = []
        finish_order: List[Node[T]] = []
        for root in self.nodes:
            if root in visited:
                continue
            visited.add(root)
            visit_order.append(root)
            stack = [(root, iter(self.successor_nodes(root)))]
            while stack:
                node, successors = stack[-1]
                for successor in successors:
                    if successor not in visited:
                        visited.add(successor)
                        visit_order.append(successor)
                        stack.append((successor, iter(self.successor_nodes(successor))))
                        break
                else:
                    stack.pop()
                    finish_order.append(node)
        return visit_order, finish_order

    def topological_sort(self) -> List[Node[T]]:
        """
        Order nodes by repeatedly removing a node with no remaining predecessor.

        On a cyclic graph, nodes on a cycle and nodes only reachable through
        one never reach in-degree zero and are left out: the result is the
        maximal prefix the removal process achieves and may be shorter than
        the number of nodes.
        """
        # a loop counts as an incoming edge that is never released
        in_degree = {node: len(sources) for node, sources in self._predecessors.items()}
        ready = [node for node, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)
        order: List[Node[T]] = []
        while ready:
            node = heapq.heappop(ready)
            order.append(node)
            for successor in self._successors[node]:
                if successor == node:
                    continue
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    heapq.heappush(ready, successor)
        return order

    def is_acyclic(self) -> bool:
        return len(self.topological_sort()) == self.number_of_nodes()

    def strongly_connected_components(self) -> "DAGraph[frozenset, Any]":
        """
        Condensation graph of the strongly connected components (Kosaraju).

        Each node of the result carries the frozenset of original nodes of one
        component; an edge A -> B exists iff an original edge crosses from A
        to B. Components are created in topological order of the condensation.
        """
        from fcalattice.dgraph.dag import DAGraph

        _, finish_order = self.depth_first_search()
        component_of: Dict[Node[T], int] = {}
        components: List[List[Node[T]]] = []
        for root in reversed(finish_order):
            if root in component_of:
                continue
            index = len(components)
            members = [root]
            component_of[root] = index
            stack = [root]
            while stack:
                node = stack.pop()
                for predecessor in self._predecessors[node]:
                    if predecessor not in component_of:
                        component_of[predecessor] = index
                        members.append(predecessor)
                        stack.append(predecessor)
            components.append(members)

        condensation: DAGraph[frozenset, Any] = DAGraph()
        component_nodes = [Node(frozenset(members)) for members in components]
        for node in component_nodes:
            condensation.add_node(node)
        for edge in self.edges:
            source = component_of[edge.source]
            target = component_of[edge.target]
            if source != target:
                condensation.add_edge(component_nodes[source], component_nodes[target])
        return condensation

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def save(self, path: str) -> None:
        """Write this graph to ``path`` in dot format."""
        from fcalattice.dgraph.io.dot import save_dot

        save_dot(self, path)

    def __str__(self) -> str:
        nodes = "".join(f"{node}," for node in self.nodes)
        edges = "".join(f"{edge}," for edge in self.edges)
        return (
            f"{self.number_of_nodes()} Nodes: {{{nodes}}}\n"
            f"{self.number_of_edges()} Edges: {{{edges}}}\n"
        )
