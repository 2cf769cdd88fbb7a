"""
Lattice Layer
=============

A lattice is held as a :class:`DAGraph` whose edges x -> y read x < y. The
graph may be a Hasse diagram or any edge set with the same reachability;
order queries go through reachability and irreducibles are computed on a
reduced copy, so either form works.

Derived structures (irreducibles, closures, tables, rule bases) never mutate
the underlying graph. The only state kept besides the graph is the
dependency graph, computed on first request and cached until explicitly
cleared.

Absence is reported with ``None``: a pair without meet, a lattice without a
unique top.
"""

from __future__ import annotations

from collections import deque
from typing import (
    Any,
    Deque,
    FrozenSet,
    Generic,
    Iterable,
    List,
    Optional,
    Set,
    TypeVar,
)

from fcalattice.context.concept import Concept
from fcalattice.context.formal_context import FormalContext
from fcalattice.dgraph.dag import DAGraph
from fcalattice.dgraph.directed_graph import DirectedGraph
from fcalattice.elements.edge import Edge
from fcalattice.elements.node import Node
from fcalattice.elements.ordering import item_key
from fcalattice.lattice.arrow_relation import Arrow, ArrowRelation
from fcalattice.lattice.dependency import (
    association_basis,
    canonical_direct_basis,
    compute_dependency_graph,
)
from fcalattice.logger import lattice_logger
from fcalattice.logger.formatting import format_family, format_set
from fcalattice.rule.implicational_system import ImplicationalSystem
from fcalattice.rule.rule import Rule

T = TypeVar("T")
E = TypeVar("E")


class Lattice(Generic[T, E]):
    __slots__ = ("_graph", "_dependency_graph")

    def __init__(self, graph: Optional[DAGraph[T, E]] = None) -> None:
        self._graph: DAGraph[T, E] = graph if graph is not None else DAGraph()
        self._dependency_graph: Optional[DirectedGraph[T, Set[FrozenSet[Node[T]]]]] = None

    @classmethod
    def from_graph(cls, graph: DirectedGraph[T, E]) -> "Lattice[T, E]":
        """
        Build a lattice on a copy of ``graph``.

        Raises:
            CyclicGraphError: If ``graph`` contains a cycle.
        """
        return cls(DAGraph.from_graph(graph))

    @property
    def graph(self) -> DAGraph[T, E]:
        return self._graph

    # ------------------------------------------------------------------
    # Graph delegation
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> List[Node[T]]:
        return self._graph.nodes

    @property
    def edges(self) -> List[Edge[T, E]]:
        return self._graph.edges

    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    def add_node(self, node: Node[T]) -> bool:
        return self._graph.add_node(node)

    def remove_node(self, node: Node[T]) -> bool:
        return self._graph.remove_node(node)

    def add_edge(self, source: Node[T], target: Node[T], content: Optional[E] = None) -> bool:
        return self._graph.add_edge(source, target, content)

    def remove_edge(self, source: Node[T], target: Node[T]) -> bool:
        return self._graph.remove_edge(source, target)

    def contains_edge(self, source: Node[T], target: Node[T]) -> bool:
        return self._graph.contains_edge(source, target)

    def get_node_by_content(self, content: Any) -> Optional[Node[T]]:
        return self._graph.get_node_by_content(content)

    def successor_nodes(self, node: Node[T]) -> List[Node[T]]:
        return self._graph.successor_nodes(node)

    def predecessor_nodes(self, node: Node[T]) -> List[Node[T]]:
        return self._graph.predecessor_nodes(node)

    def majorants(self, node: Node[T]) -> List[Node[T]]:
        return self._graph.majorants(node)

    def minorants(self, node: Node[T]) -> List[Node[T]]:
        return self._graph.minorants(node)

    def is_acyclic(self) -> bool:
        return self._graph.is_acyclic()

    def save(self, path: str) -> None:
        self._graph.save(path)

    def copy(self) -> "Lattice[T, E]":
        """Copy of the graph; the dependency graph cache is not carried over."""
        return Lattice(self._graph.copy())

    def __str__(self) -> str:
        return str(self._graph)

    # ------------------------------------------------------------------
    # Order
    # ------------------------------------------------------------------

    def upset(self, node: Node[T]) -> FrozenSet[Node[T]]:
        """``node`` and everything above it."""
        return frozenset(self._graph.majorants(node)) | {node}

    def downset(self, node: Node[T]) -> FrozenSet[Node[T]]:
        """``node`` and everything below it."""
        return frozenset(self._graph.minorants(node)) | {node}

    def hasse_diagram(self) -> DAGraph[T, E]:
        """Throwaway copy reduced reflexively and transitively."""
        hasse = self._graph.copy()
        hasse.reflexive_reduction()
        hasse.transitive_reduction()
        return hasse

    def is_lattice(self) -> bool:
        """Acyclic, a meet for every pair of nodes and a unique maximal node. Cubic."""
        if not self.is_acyclic():
            return False
        nodes = self.nodes
        for x in nodes:
            for y in nodes:
                if self.meet(x, y) is None:
                    return False
        return len(self._graph.maximals()) == 1

    def top(self) -> Optional[Node[T]]:
        maximals = self._graph.maximals()
        return maximals[0] if len(maximals) == 1 else None

    def bottom(self) -> Optional[Node[T]]:
        minimals = self._graph.minimals()
        return minimals[0] if len(minimals) == 1 else None

    def meet(self, x: Node[T], y: Node[T]) -> Optional[Node[T]]:
        """Greatest common lower bound of ``x`` and ``y``, or ``None``."""
        common = self.downset(x) & self.downset(y)
        maximals = self._graph.subgraph_by_nodes(common).maximals()
        return maximals[0] if len(maximals) == 1 else None

    def join(self, x: Node[T], y: Node[T]) -> Optional[Node[T]]:
        """Least common upper bound of ``x`` and ``y``, or ``None``."""
        common = self.upset(x) & self.upset(y)
        minimals = self._graph.subgraph_by_nodes(common).minimals()
        return minimals[0] if len(minimals) == 1 else None

    # ------------------------------------------------------------------
    # Irreducibles
    # ------------------------------------------------------------------

    def join_irreducibles(self) -> List[Node[T]]:
        """Nodes with exactly one lower cover."""
        hasse = self.hasse_diagram()
        return [node for node in hasse.nodes if len(hasse.predecessor_nodes(node)) == 1]

    def meet_irreducibles(self) -> List[Node[T]]:
        """Nodes with exactly one upper cover."""
        hasse = self.hasse_diagram()
        return [node for node in hasse.nodes if len(hasse.successor_nodes(node)) == 1]

    def join_irreducibles_of(self, node: Node[T]) -> List[Node[T]]:
        """Join-irreducibles below or equal to ``node``."""
        below = self.downset(node)
        return [j for j in self.join_irreducibles() if j in below]

    def meet_irreducibles_of(self, node: Node[T]) -> List[Node[T]]:
        """Meet-irreducibles above or equal to ``node``."""
        above = self.upset(node)
        return [m for m in self.meet_irreducibles() if m in above]

    def join_irreducibles_subgraph(self) -> DAGraph[T, E]:
        return self._graph.subgraph_by_nodes(self.join_irreducibles())

    def meet_irreducibles_subgraph(self) -> DAGraph[T, E]:
        return self._graph.subgraph_by_nodes(self.meet_irreducibles())

    def irreducibles_subgraph(self) -> DAGraph[T, E]:
        return self._graph.subgraph_by_nodes(
            set(self.join_irreducibles()) | set(self.meet_irreducibles())
        )

    def is_atomistic(self) -> bool:
        """True iff the join-irreducibles are exactly the atoms."""
        bottom = self.bottom()
        atoms = self.hasse_diagram().successor_nodes(bottom) if bottom is not None else []
        return set(atoms) == set(self.join_irreducibles())

    def is_coatomistic(self) -> bool:
        """True iff the meet-irreducibles are exactly the coatoms."""
        top = self.top()
        coatoms = self.hasse_diagram().predecessor_nodes(top) if top is not None else []
        return set(coatoms) == set(self.meet_irreducibles())

    # ------------------------------------------------------------------
    # Isomorphic closed-set lattices
    # ------------------------------------------------------------------

    def _relabelled(self, label) -> "Lattice[Any, Any]":
        """A lattice with the same edges whose nodes carry ``label(node)``."""
        lattice: Lattice[Any, Any] = Lattice()
        image = {node: Node(label(node)) for node in self.nodes}
        for node in self.nodes:
            lattice.add_node(image[node])
        for edge in self.edges:
            lattice.add_edge(image[edge.source], image[edge.target])
        return lattice

    def join_closure_lattice(self) -> "Lattice[FrozenSet[Node[T]], Any]":
        """Isomorphic lattice whose nodes carry the join-irreducibles below them."""
        joins = set(self.join_irreducibles())
        return self._relabelled(lambda node: frozenset(joins & self.downset(node)))

    def meet_closure_lattice(self) -> "Lattice[FrozenSet[Node[T]], Any]":
        """Isomorphic lattice whose nodes carry the meet-irreducibles above them."""
        meets = set(self.meet_irreducibles())
        return self._relabelled(lambda node: frozenset(meets & self.upset(node)))

    def irreducible_closure(self) -> "Lattice[Concept, Any]":
        """Isomorphic lattice whose nodes carry (join-irreducibles below, meet-irreducibles above)."""
        joins = set(self.join_irreducibles())
        meets = set(self.meet_irreducibles())
        return self._relabelled(
            lambda node: Concept(joins & self.downset(node), meets & self.upset(node))
        )

    # ------------------------------------------------------------------
    # Closures of node sets
    # ------------------------------------------------------------------

    def _binary_closure(self, nodes: Iterable[Node[T]], operation) -> FrozenSet[Node[T]]:
        # every pair of the result has been combined once
        result: Set[Node[T]] = set()
        pending: List[Node[T]] = sorted(set(nodes))
        while pending:
            current = pending.pop()
            if current in result:
                continue
            for other in list(result):
                combined = operation(current, other)
                if combined is not None and combined not in result:
                    pending.append(combined)
            result.add(current)
        return frozenset(result)

    def join_closure(self, nodes: Iterable[Node[T]]) -> FrozenSet[Node[T]]:
        """Smallest superset of ``nodes`` closed under existing joins."""
        return self._binary_closure(nodes, self.join)

    def meet_closure(self, nodes: Iterable[Node[T]]) -> FrozenSet[Node[T]]:
        """Smallest superset of ``nodes`` closed under existing meets."""
        return self._binary_closure(nodes, self.meet)

    def full_closure(self, nodes: Iterable[Node[T]]) -> FrozenSet[Node[T]]:
        """Smallest sublattice containing ``nodes``."""
        result = frozenset(nodes)
        previous = -1
        while previous != len(result):
            previous = len(result)
            result = self.meet_closure(self.join_closure(result))
        return result

    def hybrid_generators(self) -> List[FrozenSet[Node[T]]]:
        """
        All smallest node families whose full closure is the whole lattice.

        Every generating family contains the doubly irreducible nodes, so the
        search starts from that set and grows families by one node per
        breadth-first level. Once a generating family of size k is found,
        the remaining families of size k are still tested but no longer
        extended.
        """
        joins = set(self.join_irreducibles())
        start = frozenset(m for m in self.meet_irreducibles() if m in joins)
        size = self.number_of_nodes()
        nodes = self.nodes

        if not lattice_logger.disabled:
            lattice_logger.section("Hybrid generators")
            lattice_logger.result("Doubly irreducible", format_set(start))

        generators: List[FrozenSet[Node[T]]] = []
        best: Optional[int] = None
        queue: Deque[FrozenSet[Node[T]]] = deque([start])
        seen: Set[FrozenSet[Node[T]]] = {start}
        while queue:
            family = queue.popleft()
            if best is not None and len(family) > best:
                break
            if len(self.full_closure(family)) == size:
                generators.append(family)
                best = len(family)
                continue
            if best is not None:
                continue
            for node in nodes:
                if node in family:
                    continue
                extended = family | {node}
                if extended not in seen:
                    seen.add(extended)
                    queue.append(extended)

        if not lattice_logger.disabled:
            lattice_logger.result("Generators", format_family(generators))
            lattice_logger.end_section()
        return sorted(generators, key=item_key)

    # ------------------------------------------------------------------
    # Tables and implicational systems
    # ------------------------------------------------------------------

    def get_table(self) -> FormalContext:
        """
        Reduced context of the lattice: meet-irreducibles as objects,
        join-irreducibles as attributes, (m, j) incident iff j <= m.
        """
        joins = self.join_irreducibles()
        meets = self.meet_irreducibles()
        table = FormalContext(meets, joins)
        for m in meets:
            below = self.downset(m)
            for j in joins:
                if j in below:
                    table.add_incidence(m, j)
        return table

    def get_implicational_system(self) -> ImplicationalSystem:
        """
        Implications between join-irreducibles read from the family of their
        closed sets (the join-irreducibles below each node).

        For every closed set X and join-irreducible j whose union P is not
        closed, the rule P -> (smallest closed superset of P) - P is added.
        The result is made right-maximal.
        """
        joins = self.join_irreducibles()
        join_set = set(joins)
        family = {frozenset(join_set & self.downset(node)) for node in self.nodes}
        system = ImplicationalSystem(joins)
        for closed in sorted(family, key=item_key):
            for j in joins:
                premise = closed | {j}
                if premise in family:
                    continue
                supersets = [member for member in family if premise <= member]
                if not supersets:
                    continue
                smallest = frozenset.intersection(*supersets)
                system.add_rule(Rule(premise, smallest - premise))
        system.make_right_maximal()
        return system

    # ------------------------------------------------------------------
    # Dependency graph and bases
    # ------------------------------------------------------------------

    def get_dependency_graph(self) -> DirectedGraph[T, Set[FrozenSet[Node[T]]]]:
        """
        Dependency graph over the join-irreducibles, computed once and cached.

        An edge j1 -> j2 is valued by the inclusion-minimal witness sets X of
        join-irreducibles such that j1 <= j2 v (join of X) while j1 is not
        below the join of X nor below j2.
        """
        if self._dependency_graph is None:
            self._dependency_graph = compute_dependency_graph(self)
        return self._dependency_graph

    def has_dependency_graph(self) -> bool:
        return self._dependency_graph is not None

    def set_dependency_graph(
        self, graph: Optional[DirectedGraph[T, Set[FrozenSet[Node[T]]]]]
    ) -> None:
        self._dependency_graph = graph

    def clear_dependency_graph(self) -> None:
        self._dependency_graph = None

    def get_canonical_direct_basis(self) -> ImplicationalSystem:
        return canonical_direct_basis(self)

    def get_minimal_generators(self) -> List[FrozenSet[Node[T]]]:
        """Distinct premises of the canonical direct basis."""
        premises = {rule.premise for rule in self.get_canonical_direct_basis()}
        return sorted(premises, key=item_key)

    def get_association_basis(
        self, context: FormalContext, support: float = 0.0, confidence: float = 0.0
    ) -> ImplicationalSystem:
        return association_basis(self, context, support, confidence)

    # ------------------------------------------------------------------
    # Congruence normality
    # ------------------------------------------------------------------

    def get_arrow_relation(self) -> ArrowRelation:
        return ArrowRelation(self)

    def is_cn(self) -> bool:
        """
        Test congruence normality (obtainable by repeated doubling of convex sets).

        Steps are the connected components of the double arrow relation. The
        lattice is CN iff inside every step each pair is related by ↕ or by
        no arrow at all, and the graph on steps induced by the single arrows
        (m -> j for j ↗ m, j -> m for j ↙ m) is acyclic.
        """
        arrows = self.get_arrow_relation()
        table = arrows.double_arrow_table()

        steps: List[tuple] = []
        remaining = arrows.joins
        while remaining:
            step_joins = {remaining[0]}
            step_meets: Set[Node[T]] = set()
            size = -1
            while size != len(step_joins) + len(step_meets):
                size = len(step_joins) + len(step_meets)
                for j in list(step_joins):
                    step_meets |= table.intent(j)
                for m in list(step_meets):
                    step_joins |= table.extent(m)
            steps.append((frozenset(step_joins), frozenset(step_meets)))
            remaining = [j for j in remaining if j not in step_joins]

        for step_joins, step_meets in steps:
            if not step_meets:
                return False
            for j in step_joins:
                for m in step_meets:
                    if arrows.get_arrow(j, m) not in (Arrow.UP_DOWN, Arrow.CIRC):
                        return False

        step_of_join = {j: i for i, (joins, _) in enumerate(steps) for j in joins}
        step_of_meet = {m: i for i, (_, meets) in enumerate(steps) for m in meets}
        step_nodes = [Node(i) for i in range(len(steps))]
        phi: DirectedGraph[int, Any] = DirectedGraph(step_nodes)
        for edge in arrows.edges:
            j, m = edge.source, edge.target
            if j not in step_of_join or m not in step_of_meet:
                continue
            if edge.content is Arrow.UP:
                phi.add_edge(step_nodes[step_of_meet[m]], step_nodes[step_of_join[j]])
            elif edge.content is Arrow.DOWN:
                phi.add_edge(step_nodes[step_of_join[j]], step_nodes[step_of_meet[m]])
        return phi.is_acyclic()
