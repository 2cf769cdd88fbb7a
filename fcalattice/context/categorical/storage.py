"""Bit-vector storage of a subset of the values of a categorical model."""

from __future__ import annotations

import numpy as np

from fcalattice.context.categorical.model import CategoricalModel, CategoricalValue
from fcalattice.exceptions import ModelMismatchError

VALUE_MISMATCH = "The categorical value is not in the model of the storage"
MODEL_MISMATCH = "Categorical storages must share the same model"


class CategoricalStorage:
    """
    One boolean per value of the model, all set at creation.

    Creating a storage instantiates its model. Every operation returns the
    storage itself so calls can be chained.
    """

    def __init__(self, model: CategoricalModel) -> None:
        self._model = model.instantiate()
        self._values = np.ones(model.size_values(), dtype=bool)

    @property
    def model(self) -> CategoricalModel:
        return self._model

    def _index(self, value: CategoricalValue) -> int:
        if value.model is not self._model:
            raise ModelMismatchError(VALUE_MISMATCH)
        return value.index()

    def _check(self, storage: "CategoricalStorage") -> None:
        if storage._model is not self._model:
            raise ModelMismatchError(MODEL_MISMATCH)

    def get(self, value: CategoricalValue) -> bool:
        return bool(self._values[self._index(value)])

    def set(self, value: CategoricalValue, truth: bool) -> "CategoricalStorage":
        self._values[self._index(value)] = truth
        return self

    def reduce(self, value: CategoricalValue, truth: bool) -> "CategoricalStorage":
        index = self._index(value)
        self._values[index] = truth and self._values[index]
        return self

    def extend(self, value: CategoricalValue, truth: bool) -> "CategoricalStorage":
        index = self._index(value)
        self._values[index] = truth or self._values[index]
        return self

    def intersection(self, storage: "CategoricalStorage") -> "CategoricalStorage":
        self._check(storage)
        self._values &= storage._values
        return self

    def union(self, storage: "CategoricalStorage") -> "CategoricalStorage":
        self._check(storage)
        self._values |= storage._values
        return self

    def __str__(self) -> str:
        attributes = []
        for attribute in self._model.attributes:
            held = [str(value) for value in attribute.values if self.get(value)]
            attributes.append("[" + ", ".join(held) + "]")
        return "[" + ", ".join(attributes) + "]"
