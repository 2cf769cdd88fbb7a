from fcalattice.elements.node import Node
from fcalattice.elements.edge import Edge
from fcalattice.elements.ordering import item_key, sorted_items

__all__ = ["Node", "Edge", "item_key", "sorted_items"]
