"""
Dependency graph of a lattice and the rule bases read from it.

The dependency graph has the join-irreducibles as nodes. An edge j1 -> j2
carries the family of inclusion-minimal sets X of join-irreducibles that
witness j1 <= j2 v (join of X) while j1 is neither below j2 nor below the
join of X. Each witness gives one rule X + {j2} -> {j1} of the canonical
direct basis.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterable, Optional, Set

from fcalattice.context.concept import Concept
from fcalattice.context.formal_context import FormalContext
from fcalattice.dgraph.directed_graph import DirectedGraph
from fcalattice.elements.node import Node
from fcalattice.logger import lattice_logger
from fcalattice.logger.formatting import format_family
from fcalattice.rule.implicational_system import ImplicationalSystem
from fcalattice.rule.rule import AssociationRule, Rule

if TYPE_CHECKING:
    from fcalattice.lattice.lattice import Lattice

Witnesses = Set[FrozenSet[Node[Any]]]


def _least(
    candidates: FrozenSet[Node[Any]], upsets: Dict[Node[Any], FrozenSet[Node[Any]]]
) -> Optional[Node[Any]]:
    for candidate in candidates:
        if candidates <= upsets[candidate]:
            return candidate
    return None


def _add_minimal(family: Witnesses, witness: FrozenSet[Node[Any]]) -> bool:
    """Insert ``witness`` keeping ``family`` an antichain of minimal sets."""
    if any(member <= witness for member in family):
        return False
    family.difference_update([member for member in family if witness < member])
    family.add(witness)
    return True


def compute_dependency_graph(lattice: "Lattice[Any, Any]") -> DirectedGraph[Any, Witnesses]:
    joins = lattice.join_irreducibles()
    nodes = lattice.nodes
    upsets = {node: lattice.upset(node) for node in nodes}
    downsets = {node: lattice.downset(node) for node in nodes}

    # a witness is the set of maximal join-irreducibles below x
    witness_of: Dict[Node[Any], FrozenSet[Node[Any]]] = {}
    for x in nodes:
        below = [j for j in joins if j in downsets[x]]
        witness_of[x] = frozenset(
            j for j in below if not any(k != j and j in downsets[k] for k in below)
        )

    if not lattice_logger.disabled:
        lattice_logger.section("Dependency graph")
        lattice_logger.result("Join-irreducibles", len(joins))

    graph: DirectedGraph[Any, Witnesses] = DirectedGraph(joins)
    for j1 in joins:
        for j2 in joins:
            if j1 == j2:
                continue
            for x in nodes:
                if x in upsets[j1] or x in upsets[j2]:
                    continue
                joined = _least(upsets[j2] & upsets[x], upsets)
                if joined is None or joined not in upsets[j1]:
                    continue
                edge = graph.get_edge(j1, j2)
                if edge is None:
                    graph.add_edge(j1, j2, set())
                    edge = graph.get_edge(j1, j2)
                _add_minimal(edge.content, witness_of[x])

    if not lattice_logger.disabled:
        for edge in graph.edges:
            lattice_logger.info(f"{edge.source} -> {edge.target}: {format_family(edge.content)}")
        lattice_logger.end_section()
    return graph


def canonical_direct_basis(lattice: "Lattice[Any, Any]") -> ImplicationalSystem:
    """
    The canonical direct basis over the join-irreducibles, compacted.

    Every dependency edge j1 -> j2 with witness X yields X + {j2} -> {j1}.
    """
    graph = lattice.get_dependency_graph()
    basis = ImplicationalSystem(graph.nodes)
    for edge in graph.edges:
        for witness in edge.content:
            basis.add_rule(Rule(witness | {edge.target}, {edge.source}))
    basis.make_compact()
    return basis


def _item_attributes(item: Any, context: FormalContext) -> FrozenSet[Any]:
    """
    Context attributes an item stands for.

    An item registered as an attribute stands for itself (e.g. a
    join-irreducible node in the lattice's own table). Otherwise a node is
    read through its content.
    """
    if context.contains_attribute(item):
        return frozenset([item])
    content = item.content if isinstance(item, Node) else item
    if isinstance(content, Concept):
        return content.intent_in(context)
    if isinstance(content, (set, frozenset)):
        return frozenset(content)
    return frozenset([content])


def _attributes_of(items: Iterable[Any], context: FormalContext) -> FrozenSet[Any]:
    result: FrozenSet[Any] = frozenset()
    for item in items:
        result |= _item_attributes(item, context)
    return result


def association_basis(
    lattice: "Lattice[Any, Any]",
    context: FormalContext,
    support: float = 0.0,
    confidence: float = 0.0,
) -> ImplicationalSystem:
    """
    Exact and approximate rules over the attributes of ``context``.

    Each premise of the canonical direct basis is closed in the context. When
    the closed set is frequent (support above ``support``), one approximate
    rule is emitted per immediate successor whose confidence exceeds
    ``confidence``, and the exact rule is kept with confidence 1. Rules with
    equal premise, support and confidence are then merged.
    """
    total = context.number_of_objects()
    exact = canonical_direct_basis(lattice)
    basis = ImplicationalSystem(context.attributes)

    if not lattice_logger.disabled:
        lattice_logger.section("Association basis")
        lattice_logger.result("Exact rules", len(exact))

    for rule in exact:
        premise = _attributes_of(rule.premise, context)
        closed = context.closure(premise)
        closed_size = context.extent_size(closed)
        rule_support = closed_size / total if total else 0.0
        if rule_support <= support:
            continue
        for successor in Concept(intent=closed).immediate_successors(context):
            successor_size = context.extent_size(successor)
            rule_confidence = successor_size / closed_size
            conclusion = successor - premise
            if rule_confidence > confidence and conclusion:
                basis.add_rule(
                    AssociationRule(
                        premise, conclusion, successor_size / total, rule_confidence
                    )
                )
        conclusion = _attributes_of(rule.conclusion, context) - premise
        if conclusion:
            basis.add_rule(AssociationRule(premise, conclusion, rule_support, 1.0))

    basis.make_compact_association()
    if not lattice_logger.disabled:
        lattice_logger.result("Association rules", len(basis))
        lattice_logger.end_section()
    return basis
