from fcalattice.dgraph.io.dot import save_dot, to_dot, write_dot

__all__ = ["save_dot", "to_dot", "write_dot"]
