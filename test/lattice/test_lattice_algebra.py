"""
Order-theoretic operations on small reference lattices.

Fixtures (see conftest): chain 0 < 1 < 2, Boolean 2^2, N5 (pentagon) and
M3 (diamond). Each fixture is a (lattice, nodes-by-name) pair.
"""

from itertools import combinations

import pytest
from hypothesis import given, settings, strategies as st

from fcalattice.context import FormalContext
from fcalattice.dgraph import DirectedGraph
from fcalattice.elements import Node
from fcalattice.exceptions import CyclicGraphError
from fcalattice.lattice import Lattice


def names(nodes):
    return {node.content for node in nodes}


def smallest_generating_families(lattice):
    """Every family of minimum size whose full closure is the whole lattice, by exhaustion."""
    nodes = lattice.nodes
    everything = set(nodes)
    for size in range(len(nodes) + 1):
        found = {
            frozenset(family)
            for family in combinations(nodes, size)
            if lattice.full_closure(family) == everything
        }
        if found:
            return found
    return set()


@st.composite
def small_contexts(draw):
    """A context over three attributes and up to five objects."""
    attributes = ["p", "q", "r"]
    rows = draw(st.lists(st.sets(st.sampled_from(attributes)), max_size=5))
    context = FormalContext(range(len(rows)), attributes)
    for obj, intent in enumerate(rows):
        context.add_incidences(obj, intent)
    return context


class TestBasicOrder:
    def test_top_and_bottom(self, boolean):
        lattice, n = boolean
        assert lattice.top() is n["1"]
        assert lattice.bottom() is n["0"]

    def test_meet_and_join(self, boolean):
        lattice, n = boolean
        assert lattice.meet(n["a"], n["b"]) is n["0"]
        assert lattice.join(n["a"], n["b"]) is n["1"]
        assert lattice.join(n["a"], n["1"]) is n["1"]
        assert lattice.meet(n["a"], n["0"]) is n["0"]

    @pytest.mark.parametrize("fixture", ["chain", "boolean", "pentagon", "diamond"])
    def test_meet_and_join_are_idempotent(self, fixture, request):
        lattice, _ = request.getfixturevalue(fixture)
        for node in lattice.nodes:
            assert lattice.meet(node, node) is node
            assert lattice.join(node, node) is node

    @pytest.mark.parametrize("fixture", ["chain", "boolean", "pentagon", "diamond"])
    def test_reference_lattices_are_lattices(self, fixture, request):
        lattice, _ = request.getfixturevalue(fixture)
        assert lattice.is_lattice()

    def test_missing_join_is_none(self, lattice_builder):
        lattice, n = lattice_builder(["0", "x", "y"], [("0", "x"), ("0", "y")])
        assert lattice.join(n["x"], n["y"]) is None
        assert lattice.top() is None
        assert lattice.bottom() is n["0"]
        assert not lattice.is_lattice()

    def test_ambiguous_meet_is_none(self, lattice_builder):
        # two incomparable lower bounds, no greatest one
        lattice, n = lattice_builder(
            ["p", "q", "x", "y", "1"],
            [("p", "x"), ("p", "y"), ("q", "x"), ("q", "y"), ("x", "1"), ("y", "1")],
        )
        assert lattice.meet(n["x"], n["y"]) is None

    def test_empty_lattice(self):
        lattice = Lattice()
        assert lattice.top() is None
        assert lattice.bottom() is None
        assert lattice.join_irreducibles() == []

    def test_from_graph_rejects_cycles(self):
        a, b = Node(), Node()
        graph = DirectedGraph([a, b])
        graph.add_edge(a, b)
        graph.add_edge(b, a)
        with pytest.raises(CyclicGraphError):
            Lattice.from_graph(graph)

    def test_delegates_to_graph(self, chain):
        lattice, n = chain
        assert lattice.number_of_nodes() == 3
        assert lattice.number_of_edges() == 2
        assert lattice.successor_nodes(n["0"]) == [n["1"]]
        assert lattice.majorants(n["0"]) == [n["1"], n["2"]]
        assert lattice.get_node_by_content("2") is n["2"]
        assert str(lattice) == str(lattice.graph)


class TestIrreducibles:
    def test_chain(self, chain):
        lattice, _ = chain
        assert names(lattice.join_irreducibles()) == {"1", "2"}
        assert names(lattice.meet_irreducibles()) == {"0", "1"}

    def test_boolean(self, boolean):
        lattice, _ = boolean
        assert names(lattice.join_irreducibles()) == {"a", "b"}
        assert names(lattice.meet_irreducibles()) == {"a", "b"}

    def test_pentagon(self, pentagon):
        lattice, _ = pentagon
        assert names(lattice.join_irreducibles()) == {"a", "b", "c"}
        assert names(lattice.meet_irreducibles()) == {"a", "b", "c"}

    def test_closed_graph_gives_same_irreducibles(self, pentagon):
        lattice, _ = pentagon
        expected = lattice.join_irreducibles()
        lattice.graph.transitive_closure()
        lattice.graph.reflexive_closure()
        assert lattice.join_irreducibles() == expected
        assert lattice.meet_irreducibles() == expected

    def test_irreducibles_do_not_mutate_graph(self, pentagon):
        lattice, _ = pentagon
        before = lattice.edges
        lattice.join_irreducibles()
        lattice.meet_irreducibles()
        assert lattice.edges == before

    def test_irreducibles_of_a_node(self, pentagon):
        lattice, n = pentagon
        assert names(lattice.join_irreducibles_of(n["c"])) == {"a", "c"}
        assert names(lattice.meet_irreducibles_of(n["a"])) == {"a", "c"}
        assert lattice.join_irreducibles_of(n["0"]) == []

    def test_irreducible_subgraphs(self, pentagon):
        lattice, n = pentagon
        subgraph = lattice.join_irreducibles_subgraph()
        assert names(subgraph.nodes) == {"a", "b", "c"}
        assert subgraph.contains_edge(n["a"], n["c"])
        assert names(lattice.irreducibles_subgraph().nodes) == {"a", "b", "c"}
        assert names(lattice.meet_irreducibles_subgraph().nodes) == {"a", "b", "c"}

    def test_atomistic(self, boolean, pentagon, diamond, chain):
        assert boolean[0].is_atomistic()
        assert boolean[0].is_coatomistic()
        assert diamond[0].is_atomistic()
        assert not pentagon[0].is_atomistic()
        assert not pentagon[0].is_coatomistic()
        assert not chain[0].is_atomistic()


class TestClosures:
    def test_join_and_meet_closure(self, boolean):
        lattice, n = boolean
        assert lattice.join_closure([n["a"], n["b"]]) == {n["a"], n["b"], n["1"]}
        assert lattice.meet_closure([n["a"], n["b"]]) == {n["a"], n["b"], n["0"]}

    def test_full_closure_is_smallest_sublattice(self, boolean):
        lattice, n = boolean
        assert lattice.full_closure([n["a"], n["b"]]) == set(lattice.nodes)
        assert lattice.full_closure([n["a"]]) == {n["a"]}

    def test_join_closure_of_pairwise_joins(self, pentagon):
        lattice, n = pentagon
        closure = lattice.join_closure([n["a"], n["b"], n["c"]])
        assert closure == {n["a"], n["b"], n["c"], n["1"]}

    def test_closure_of_empty_set(self, chain):
        lattice, _ = chain
        assert lattice.full_closure([]) == frozenset()

    def test_isomorphic_closed_set_lattices(self, boolean):
        lattice, n = boolean
        joins = lattice.join_closure_lattice()
        assert joins.number_of_edges() == lattice.number_of_edges()
        contents = {node.content for node in joins.nodes}
        assert contents == {
            frozenset(),
            frozenset({n["a"]}),
            frozenset({n["b"]}),
            frozenset({n["a"], n["b"]}),
        }
        meets = lattice.meet_closure_lattice()
        assert meets.top().content == frozenset()

    def test_irreducible_closure_carries_concepts(self, boolean):
        lattice, n = boolean
        closure = lattice.irreducible_closure()
        top = closure.top().content
        assert top.extent == frozenset({n["a"], n["b"]})
        assert top.intent == frozenset()
        assert closure.is_lattice()


class TestHybridGenerators:
    def test_boolean(self, boolean):
        lattice, n = boolean
        assert lattice.hybrid_generators() == [frozenset({n["a"], n["b"]})]

    def test_pentagon(self, pentagon):
        lattice, n = pentagon
        assert lattice.hybrid_generators() == [frozenset({n["a"], n["b"], n["c"]})]

    def test_chain_needs_every_node(self, chain):
        lattice, _ = chain
        assert lattice.hybrid_generators() == [frozenset(lattice.nodes)]

    def test_single_node(self, lattice_builder):
        lattice, n = lattice_builder(["x"], [])
        assert lattice.hybrid_generators() == [frozenset({n["x"]})]

    def test_generators_generate(self, diamond):
        lattice, _ = diamond
        for family in lattice.hybrid_generators():
            assert lattice.full_closure(family) == set(lattice.nodes)

    def test_cube_has_several_smallest_families(self):
        # contranominal scale: every subset of {p, q, r} is closed
        context = FormalContext(["p", "q", "r"], ["p", "q", "r"])
        for obj in context.objects:
            context.add_incidences(obj, [a for a in context.attributes if a != obj])
        lattice = context.closed_set_lattice()
        assert lattice.number_of_nodes() == 8

        generators = lattice.hybrid_generators()
        by_intent = {node.content.intent: node for node in lattice.nodes}
        atoms = frozenset(by_intent[frozenset({a})] for a in "pqr")
        coatoms = frozenset(by_intent[frozenset("pqr") - {a}] for a in "pqr")
        assert atoms in generators
        assert coatoms in generators
        assert all(len(family) == 3 for family in generators)
        assert set(generators) == smallest_generating_families(lattice)

    @given(small_contexts())
    @settings(max_examples=30, deadline=None)
    def test_matches_exhaustive_search(self, context):
        lattice = context.closed_set_lattice()
        generators = lattice.hybrid_generators()
        assert len(generators) == len(set(generators))
        assert set(generators) == smallest_generating_families(lattice)


class TestCongruenceNormality:
    def test_chain_is_cn(self, chain):
        assert chain[0].is_cn()

    def test_boolean_is_cn(self, boolean):
        assert boolean[0].is_cn()

    def test_pentagon_is_cn(self, pentagon):
        assert pentagon[0].is_cn()

    def test_diamond_is_not_cn(self, diamond):
        assert not diamond[0].is_cn()
