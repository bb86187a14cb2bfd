import pytest

from ws4sqlite_client.exc import InvalidArgumentError
from ws4sqlite_client.parameters import MapBuilder, freeze_parameter_map, to_parameter_map


class TestMapBuilder:
    def test_add_is_fluent(self):
        builder = MapBuilder()
        assert builder.add("id", 1) is builder

    def test_build(self):
        assert MapBuilder().add("id", 1).add("val", "a").build() == {
            "id": 1,
            "val": "a",
        }

    def test_duplicate_name_overwrites(self):
        assert MapBuilder().add("id", 1).add("id", 2).build() == {"id": 2}

    def test_none_value_is_allowed(self):
        assert MapBuilder().add("val", None).build() == {"val": None}

    @pytest.mark.parametrize("name", [None, ""])
    def test_invalid_name_fails(self, name):
        with pytest.raises(InvalidArgumentError):
            MapBuilder().add(name, 1)

    def test_build_returns_a_copy(self):
        builder = MapBuilder().add("id", 1)
        built = builder.build()
        builder.add("id", 2)
        assert built == {"id": 1}


class TestToParameterMap:
    def test_from_mapping_copies(self):
        source = {"id": 1}
        result = to_parameter_map(source)
        assert result == source
        assert result is not source

    def test_from_map_builder(self):
        assert to_parameter_map(MapBuilder().add("id", 1)) == {"id": 1}

    @pytest.mark.parametrize("values", [None, [("id", 1)], "id=1"])
    def test_rejects_non_mappings(self, values):
        with pytest.raises(InvalidArgumentError):
            to_parameter_map(values)

    def test_rejects_non_string_keys(self):
        with pytest.raises(InvalidArgumentError):
            to_parameter_map({1: "a"})


class TestFreezeParameterMap:
    def test_is_read_only_and_detached(self):
        source = {"id": 1}
        frozen = freeze_parameter_map(source)

        with pytest.raises(TypeError):
            frozen["id"] = 2
        source["id"] = 3

        assert dict(frozen) == {"id": 1}

    def test_rejects_invalid_maps(self):
        with pytest.raises(InvalidArgumentError):
            freeze_parameter_map({"": 1})
