"""
Configuration store of data enabling influence into the configuration of the
application.

ConfigStore discovers tweetwallConfig.json (and an optional custom file) in
package resources and on the filesystem, merges all documents and runs the
registered converters over the result. Construct one and pass it down, or use
get_instance() for the process-wide default.
"""

from __future__ import annotations
import threading
import types
from pathlib import Path
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    overload,
)

from .converters import Converter, ConverterRegistry, discover_converters
from .errors import ConverterError, NotFoundError, TypeMismatchError
from .merge import merge_map
from .sources import discover_documents
from ..logging_setup import get_logger
from ..settings import STANDARD_CONFIG_FILENAME, Settings

log = get_logger("tweetwall.config.store")

T = TypeVar("T")

DEFAULT_RESOURCE_PACKAGES = ("tweetwall.resources",)

_MISSING: Any = object()

_SECRET_MARKERS = ("secret", "password", "token", "key", "passwd")


def _looks_secret(key: Any) -> bool:
    lowered = str(key).lower()
    return any(s in lowered for s in _SECRET_MARKERS)


def _masked(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: "***" if _looks_secret(k) else _masked(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_masked(v) for v in value]
    return value


def _redact(key: str, value: Any) -> str:
    """Printable form of a top-level value with secret-looking keys masked at any depth."""
    if _looks_secret(key):
        return "***"
    return repr(_masked(value))


def _instance_check(data_type: Any) -> Any:
    """Class or tuple of classes isinstance() accepts for ``data_type``."""
    origin = get_origin(data_type)
    if origin is Union or origin is types.UnionType:
        return tuple(get_origin(arg) or arg for arg in get_args(data_type))
    return origin or data_type


class ConfigStore:
    """
    Merged configuration data.

    The mapping is built once by load() and replaced wholesale on reload();
    it is never mutated in place.
    """

    def __init__(
        self,
        converters: Union[ConverterRegistry, Iterable[Converter], None] = None,
        *,
        custom_filename: Optional[str] = None,
        standard_filename: str = STANDARD_CONFIG_FILENAME,
        resource_packages: Sequence[str] = DEFAULT_RESOURCE_PACKAGES,
        home_dir: Optional[Path] = None,
        work_dir: Optional[Path] = None,
        autoload: bool = True,
    ) -> None:
        self._lock = threading.RLock()
        self._load_lock = threading.Lock()
        self._data: Dict[str, Any] = {}
        self._converters = (
            converters if isinstance(converters, ConverterRegistry)
            else ConverterRegistry(converters or ())
        )
        self.standard_filename = standard_filename
        if custom_filename == standard_filename:
            custom_filename = None
        self.custom_filename = custom_filename
        self.resource_packages = tuple(resource_packages)
        self.home_dir = Path(home_dir) if home_dir is not None else Path.home()
        self.work_dir = Path(work_dir) if work_dir is not None else Path.cwd()

        if autoload:
            self.load()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        converters: Union[ConverterRegistry, Iterable[Converter], None] = None,
        **kwargs: Any,
    ) -> "ConfigStore":
        """Build a store from process settings; converters default to the installed plugins."""
        if converters is None:
            converters = discover_converters()
        return cls(
            converters,
            custom_filename=settings.config_filename,
            home_dir=settings.home_dir,
            work_dir=settings.work_dir,
            **kwargs,
        )

    @property
    def converters(self) -> ConverterRegistry:
        return self._converters

    # loading
    def _merge_file(self, result: Dict[str, Any], filename: str) -> Dict[str, Any]:
        for doc in discover_documents(filename, self.resource_packages, self.home_dir, self.work_dir):
            result = merge_map(result, doc.data)
        return result

    def _convert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        result = dict(data)
        for key, conv in self._converters.items():
            log.info("Processing key '%s' with converter %r", key, conv)
            if key not in data:
                continue
            try:
                result[key] = conv.convert(data[key])
            except Exception as e:
                log.error("Converter %r failed for key '%s': %s", conv, key, e)
                raise ConverterError(key, conv) from e
        return result

    def load(self) -> None:
        """
        (Re)load all configuration documents; on failure the current data is kept.

        Concurrent loads run one after another, so a slow load cannot install
        its data over that of a load that read the files later. Readers are
        not blocked while a load is running.
        """
        with self._load_lock:
            log.info("loading configuration data")
            data = self._merge_file({}, self.standard_filename)
            if self.custom_filename is not None:
                data = self._merge_file(data, self.custom_filename)
            data = self._convert(data)

            log.info("Configurations:")
            for key, value in data.items():
                log.info("'%s' -> '%s'", key, _redact(key, value))

            with self._lock:
                self._data = data

    reload = load

    def _current(self) -> Dict[str, Any]:
        with self._lock:
            return self._data

    # accessors
    def get(self, key: str, default: Any = _MISSING) -> Any:
        """
        Return the value stored under ``key``.

        Without ``default`` an absent key raises NotFoundError, otherwise
        ``default`` is returned.
        """
        data = self._current()
        if key in data:
            return data[key]
        if default is _MISSING:
            raise NotFoundError(key)
        return default

    @overload
    def get_typed(self, key: str, data_type: Type[T]) -> T: ...

    @overload
    def get_typed(self, key: str, data_type: Type[T], default: T) -> T: ...

    def get_typed(self, key: str, data_type: Any, default: Any = _MISSING) -> Any:
        """
        Like get(), but the value must be an instance of ``data_type``.

        Without ``default`` an absent key raises NotFoundError and a value of
        another type raises TypeMismatchError. With ``default`` both cases
        return ``default``.
        """
        data = self._current()
        if key not in data:
            if default is _MISSING:
                raise NotFoundError(key)
            return default
        value = data[key]
        check = _instance_check(data_type)
        if not isinstance(value, check):
            if default is _MISSING:
                raise TypeMismatchError(key, data_type, type(value))
            log.warning(
                "Configuration for '%s' is of type %s, not %s; using default",
                key, type(value).__name__, getattr(data_type, "__name__", data_type),
            )
            return default
        return value

    def get_optional(self, key: str) -> Optional[Any]:
        return self.get(key, None)

    def get_typed_optional(self, key: str, data_type: Type[T]) -> Optional[T]:
        return self.get_typed(key, data_type, None)

    def snapshot(self) -> MappingProxyType:
        """Read-only view of the current configuration mapping."""
        return MappingProxyType(self._current())

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._current()

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._current()))

    def __len__(self) -> int:
        return len(self._current())

    def __repr__(self) -> str:
        return f"<ConfigStore keys={sorted(self._current())}>"


_instance: Optional[ConfigStore] = None
_instance_lock = threading.Lock()


def get_instance() -> ConfigStore:
    """Return the process-wide store, building it from Settings on first use."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = ConfigStore.from_settings(Settings())
        return _instance


def reset_instance() -> None:
    """Forget the process-wide store so the next get_instance() rebuilds it."""
    global _instance
    with _instance_lock:
        _instance = None
