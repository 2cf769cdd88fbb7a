from fcalattice.lattice.arrow_relation import Arrow, ArrowRelation
from fcalattice.lattice.lattice import Lattice

__all__ = ["Arrow", "ArrowRelation", "Lattice"]
