from fcalattice.context.io.burmeister import BurmeisterSerializer
from fcalattice.context.io.fimi import FIMISerializer
from fcalattice.context.io.registry import ContextIORegistry, default_registry

__all__ = [
    "BurmeisterSerializer",
    "FIMISerializer",
    "ContextIORegistry",
    "default_registry",
]
