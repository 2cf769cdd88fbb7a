from fcalattice.context.categorical.model import (
    CategoricalAttribute,
    CategoricalModel,
    CategoricalValue,
)
from fcalattice.context.categorical.storage import CategoricalStorage

__all__ = [
    "CategoricalAttribute",
    "CategoricalModel",
    "CategoricalValue",
    "CategoricalStorage",
]
