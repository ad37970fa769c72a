"""
Converters turn the raw decoded JSON value of one configuration key into a
typed value.

A converter is anything with ``responsible_key``, ``data_class`` and
``convert(value)``. ConfigurationConverter provides ``convert`` by validating
the raw value against ``data_class`` with pydantic, so most converters only
declare the two attributes:

    class WallConverter(ConfigurationConverter):
        responsible_key = "tweetwall"
        data_class = WallConfig

Installed distributions can contribute converters through the
``tweetwall.config_converters`` entry-point group; see discover_converters().
"""

from __future__ import annotations
from importlib.metadata import entry_points
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Protocol, runtime_checkable

from pydantic import TypeAdapter

from .errors import DuplicateConverterError
from ..logging_setup import get_logger

log = get_logger("tweetwall.config.converters")

ENTRY_POINT_GROUP = "tweetwall.config_converters"


@runtime_checkable
class Converter(Protocol):
    responsible_key: str
    data_class: Any

    def convert(self, value: Any) -> Any: ...


class ConfigurationConverter:
    responsible_key: str = ""
    data_class: Any = object

    def __init__(self) -> None:
        self._adapter: Optional[TypeAdapter] = None

    def convert(self, value: Any) -> Any:
        if self._adapter is None:
            self._adapter = TypeAdapter(self.data_class)
        return self._adapter.validate_python(value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.responsible_key!r} data_class={getattr(self.data_class, '__name__', self.data_class)}>"


def converter_for(key: str, data_class: Any) -> ConfigurationConverter:
    """Build a pydantic-backed converter for ``key`` without subclassing."""
    conv = ConfigurationConverter()
    conv.responsible_key = key
    conv.data_class = data_class
    return conv


class ConverterRegistry(Mapping[str, Converter]):
    """Immutable key -> converter mapping; at most one converter per key."""

    def __init__(self, converters: Iterable[Converter] = ()) -> None:
        self._converters: Dict[str, Converter] = {}
        for conv in converters:
            key = conv.responsible_key
            if key in self._converters:
                log.error("Duplicate converter for key %r: %r, %r", key, self._converters[key], conv)
                raise DuplicateConverterError(key, self._converters[key], conv)
            self._converters[key] = conv
            log.debug("Registered converter %r for key %r", conv, key)

    def __getitem__(self, key: str) -> Converter:
        return self._converters[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)

    def __repr__(self) -> str:
        return f"ConverterRegistry({sorted(self._converters)})"


def discover_converters(group: str = ENTRY_POINT_GROUP) -> ConverterRegistry:
    """
    Load every converter advertised under the entry-point ``group``.

    An entry point may reference a converter class (instantiated without
    arguments) or a ready converter instance.
    """
    found = []
    for ep in entry_points(group=group):
        obj = ep.load()
        conv = obj() if isinstance(obj, type) else obj
        log.info("Discovered converter %r from entry point %r", conv, ep.name)
        found.append(conv)
    return ConverterRegistry(found)
