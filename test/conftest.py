import logging

import pytest

from fcalattice.context.formal_context import FormalContext
from fcalattice.elements.node import Node
from fcalattice.lattice.lattice import Lattice
from fcalattice.logger import lattice_logger


def pytest_configure(config):
    """Set up test environment before tests run."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Enable lattice algorithm tracing
    lattice_logger.disabled = False


def build_lattice(names, covers):
    """Lattice over fresh nodes named ``names`` with the given (lower, upper) covers."""
    nodes = {name: Node(name) for name in names}
    lattice = Lattice()
    for node in nodes.values():
        lattice.add_node(node)
    for lower, upper in covers:
        lattice.add_edge(nodes[lower], nodes[upper])
    return lattice, nodes


@pytest.fixture
def lattice_builder():
    return build_lattice


@pytest.fixture
def chain():
    """0 < 1 < 2"""
    return build_lattice(["0", "1", "2"], [("0", "1"), ("1", "2")])


@pytest.fixture
def boolean():
    """The four element Boolean lattice 0 < a, b < 1."""
    return build_lattice(
        ["0", "a", "b", "1"], [("0", "a"), ("0", "b"), ("a", "1"), ("b", "1")]
    )


@pytest.fixture
def pentagon():
    """N5: 0 < a < c < 1 and 0 < b < 1."""
    return build_lattice(
        ["0", "a", "b", "c", "1"],
        [("0", "a"), ("a", "c"), ("c", "1"), ("0", "b"), ("b", "1")],
    )


@pytest.fixture
def diamond():
    """M3: three atoms a, b, c between 0 and 1."""
    return build_lattice(
        ["0", "a", "b", "c", "1"],
        [("0", "a"), ("0", "b"), ("0", "c"), ("a", "1"), ("b", "1"), ("c", "1")],
    )


@pytest.fixture
def animals():
    """Small object/attribute context used across context and rule tests."""
    context = FormalContext(
        ["duck", "eagle", "frog", "dog"],
        ["flies", "swims", "feathers", "legs"],
    )
    context.add_incidences("duck", ["flies", "swims", "feathers", "legs"])
    context.add_incidences("eagle", ["flies", "feathers", "legs"])
    context.add_incidences("frog", ["swims", "legs"])
    context.add_incidences("dog", ["legs"])
    return context
