from fcalattice.dgraph.directed_graph import DirectedGraph
from fcalattice.dgraph.dag import DAGraph

__all__ = ["DirectedGraph", "DAGraph"]
