"""
fcalattice: directed graphs, lattices and formal concept analysis.
"""

from fcalattice.elements import Edge, Node
from fcalattice.dgraph import DAGraph, DirectedGraph
from fcalattice.context import Concept, FormalContext
from fcalattice.lattice import Arrow, ArrowRelation, Lattice
from fcalattice.rule import AssociationRule, ImplicationalSystem, Rule
from fcalattice.config import RuleMiningConfig

__all__ = [
    "Node",
    "Edge",
    "DirectedGraph",
    "DAGraph",
    "Concept",
    "FormalContext",
    "Arrow",
    "ArrowRelation",
    "Lattice",
    "Rule",
    "AssociationRule",
    "ImplicationalSystem",
    "RuleMiningConfig",
]
