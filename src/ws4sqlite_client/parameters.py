import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

from ws4sqlite_client.exc import InvalidArgumentError

logger = logging.getLogger(__name__)

TAllowedParameterValue = Union[str, int, float, bool, None]

ParameterMap = Dict[str, Any]


class MapBuilder:
    """
    Simple builder for the maps passed to `RequestBuilder.with_values`.

    Usage:
        builder.with_values(MapBuilder().add("key", "value").add("num", 2))
        # final call to .build() is optional

    Adding the same name twice overwrites the previous value.
    """

    def __init__(self):
        self._map: ParameterMap = {}

    def add(self, name: str, value: TAllowedParameterValue) -> "MapBuilder":
        if not name:
            raise InvalidArgumentError("Cannot specify a null or empty parameter name")
        self._map[name] = value
        return self

    def build(self) -> ParameterMap:
        """Returns a copy of the map that was built."""
        return dict(self._map)

    def __len__(self):
        return len(self._map)

    def __repr__(self):
        return f"MapBuilder({self._map!r})"


def to_parameter_map(values: Union[MapBuilder, Mapping[str, Any]]) -> ParameterMap:
    """Copy a MapBuilder or a plain mapping into a detached ParameterMap."""
    if values is None:
        raise InvalidArgumentError("Cannot specify a null argument")
    if isinstance(values, MapBuilder):
        return values.build()
    if not isinstance(values, Mapping):
        raise InvalidArgumentError(
            f"Parameter values must be a mapping or a MapBuilder, got {type(values).__name__}"
        )
    for name in values:
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"Invalid parameter name: {name!r}")
    return dict(values)


def freeze_parameter_map(values: Union[MapBuilder, Mapping[str, Any]]) -> Mapping[str, Any]:
    """Read-only, detached copy of a parameter map, as held by finalized requests."""
    return MappingProxyType(to_parameter_map(values))
