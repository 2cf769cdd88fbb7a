import pytest

from fcalattice.context.categorical import CategoricalModel, CategoricalStorage
from fcalattice.exceptions import ModelLockedError, ModelMismatchError


@pytest.fixture
def colours_and_sizes():
    model = CategoricalModel()
    colour = model.add_attribute()
    red = colour.add_value("red")
    green = colour.add_value("green")
    size = model.add_attribute()
    small = size.add_value("small")
    medium = size.add_value("medium")
    large = size.add_value("large")
    return model, {
        "red": red,
        "green": green,
        "small": small,
        "medium": medium,
        "large": large,
    }


class TestCategoricalModel:
    def test_sizes(self, colours_and_sizes):
        model, _ = colours_and_sizes
        assert model.size_attributes() == 2
        assert model.size_values() == 5

    def test_global_value_indices(self, colours_and_sizes):
        _, v = colours_and_sizes
        assert v["red"].index() == 0
        assert v["green"].index() == 1
        assert v["small"].index() == 2
        assert v["large"].index() == 4

    def test_attribute_rendering(self, colours_and_sizes):
        model, v = colours_and_sizes
        assert [str(attribute) for attribute in model.attributes] == ["A0", "A1"]
        assert str(v["medium"]) == "medium"
        assert v["medium"].attribute is model.attributes[1]

    def test_storage_locks_model(self, colours_and_sizes):
        model, _ = colours_and_sizes
        assert not model.is_instantiated()
        CategoricalStorage(model)
        assert model.is_instantiated()
        with pytest.raises(ModelLockedError):
            model.add_attribute()
        with pytest.raises(ModelLockedError):
            model.attributes[0].add_value("blue")


class TestCategoricalStorage:
    def test_starts_full(self, colours_and_sizes):
        model, v = colours_and_sizes
        storage = CategoricalStorage(model)
        assert all(storage.get(value) for value in v.values())
        assert str(storage) == "[[red, green], [small, medium, large]]"

    def test_set_reduce_extend(self, colours_and_sizes):
        model, v = colours_and_sizes
        storage = CategoricalStorage(model)
        assert storage.set(v["red"], False) is storage
        assert not storage.get(v["red"])

        storage.extend(v["red"], False)
        assert not storage.get(v["red"])
        storage.extend(v["red"], True)
        assert storage.get(v["red"])

        storage.reduce(v["small"], True)
        assert storage.get(v["small"])
        storage.reduce(v["small"], False)
        assert not storage.get(v["small"])
        assert str(storage) == "[[red, green], [medium, large]]"

    def test_intersection_and_union(self, colours_and_sizes):
        model, v = colours_and_sizes
        first = CategoricalStorage(model).set(v["red"], False).set(v["small"], False)
        second = CategoricalStorage(model).set(v["green"], False)

        union = CategoricalStorage(model).set(v["red"], False).union(second)
        assert union.get(v["red"])
        assert union.get(v["green"])

        first.intersection(second)
        assert str(first) == "[[], [medium, large]]"

    def test_foreign_value(self, colours_and_sizes):
        model, _ = colours_and_sizes
        other = CategoricalModel()
        stranger = other.add_attribute().add_value("x")
        storage = CategoricalStorage(model)
        with pytest.raises(ModelMismatchError):
            storage.get(stranger)
        with pytest.raises(ModelMismatchError):
            storage.set(stranger, True)

    def test_foreign_storage(self, colours_and_sizes):
        model, _ = colours_and_sizes
        other = CategoricalModel()
        other.add_attribute().add_value("x")
        with pytest.raises(ModelMismatchError):
            CategoricalStorage(model).union(CategoricalStorage(other))
