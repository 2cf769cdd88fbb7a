from fcalattice.context.concept import Concept
from fcalattice.context.formal_context import FormalContext

__all__ = ["Concept", "FormalContext"]
