"""
Categorical models: an ordered list of attributes, each with an ordered list
of values. Every value has a global index used by :class:`CategoricalStorage`.

Once a storage has been created from a model, the model is instantiated and
no attribute or value can be added anymore.
"""

from __future__ import annotations

from typing import Any, List

from fcalattice.exceptions import ModelLockedError


class CategoricalModel:
    def __init__(self) -> None:
        self._attributes: List[CategoricalAttribute] = []
        self._instantiated = False

    @property
    def attributes(self) -> List["CategoricalAttribute"]:
        return list(self._attributes)

    def is_instantiated(self) -> bool:
        return self._instantiated

    def instantiate(self) -> "CategoricalModel":
        self._instantiated = True
        return self

    def add_attribute(self) -> "CategoricalAttribute":
        self._check_open()
        attribute = CategoricalAttribute(self)
        self._attributes.append(attribute)
        return attribute

    def size_attributes(self) -> int:
        return len(self._attributes)

    def size_values(self) -> int:
        return sum(attribute.size() for attribute in self._attributes)

    def _check_open(self) -> None:
        if self._instantiated:
            raise ModelLockedError("Categorical model is already instantiated")

    def _offset(self, attribute: "CategoricalAttribute") -> int:
        offset = 0
        for candidate in self._attributes:
            if candidate is attribute:
                return offset
            offset += candidate.size()
        raise ValueError("Attribute does not belong to this model")


class CategoricalAttribute:
    def __init__(self, model: CategoricalModel) -> None:
        self._model = model
        self._values: List[CategoricalValue] = []

    @property
    def model(self) -> CategoricalModel:
        return self._model

    @property
    def values(self) -> List["CategoricalValue"]:
        return list(self._values)

    def add_value(self, content: Any) -> "CategoricalValue":
        self._model._check_open()
        value = CategoricalValue(self, content)
        self._values.append(value)
        return value

    def size(self) -> int:
        return len(self._values)

    def index(self) -> int:
        return self._model.attributes.index(self)

    def __str__(self) -> str:
        return f"A{self.index()}"


class CategoricalValue:
    def __init__(self, attribute: CategoricalAttribute, content: Any) -> None:
        self._attribute = attribute
        self.content = content

    @property
    def attribute(self) -> CategoricalAttribute:
        return self._attribute

    @property
    def model(self) -> CategoricalModel:
        return self._attribute.model

    def index(self) -> int:
        """Global position of this value among all values of the model."""
        return self.model._offset(self._attribute) + self._attribute.values.index(self)

    def __str__(self) -> str:
        return str(self.content)
