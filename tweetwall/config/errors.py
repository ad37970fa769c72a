from __future__ import annotations

from typing import Any, Optional


class ConfigError(Exception):
    """Base configuration exception."""


class ConfigSourceError(ConfigError):
    """Raised when a discovered configuration document cannot be read or parsed."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        msg = f"{source} either does not contain a valid JSON object or has an invalid structure!"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class DuplicateConverterError(ConfigError):
    """Raised when two converters claim the same configuration key."""

    def __init__(self, key: str, first: Any, second: Any) -> None:
        self.key = key
        self.converters = (first, second)
        super().__init__(
            "At most one converter may be registered to convert configuration data of a "
            f"specific key, but the following converters are registered for key '{key}': "
            f"[{first!r}, {second!r}]"
        )


class UnsupportedMergeError(ConfigError):
    """Raised when two values for the same key have shapes that cannot be merged."""

    def __init__(self, key: str, previous_type: type, next_type: type) -> None:
        self.key = key
        self.previous_type = previous_type
        self.next_type = next_type
        super().__init__(
            f"Merging type {previous_type.__name__} with {next_type.__name__} "
            f"is not supported (key '{key}')!"
        )


class ConverterError(ConfigError):
    """Raised when a registered converter fails to convert the value of its key."""

    def __init__(self, key: str, converter: Any) -> None:
        self.key = key
        self.converter = converter
        super().__init__(f"Converter {converter!r} failed to convert configuration key '{key}'")


class NotFoundError(ConfigError, KeyError):
    """Raised when a non-defaulting accessor is called for an absent key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Configuration for '{key}' does not exist")

    def __str__(self) -> str:
        return str(self.args[0])


class TypeMismatchError(ConfigError, TypeError):
    """Raised when a stored value is not an instance of the requested type."""

    def __init__(self, key: str, expected: Any, actual: Optional[type]) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        expected_name = getattr(expected, "__name__", repr(expected))
        actual_name = getattr(actual, "__name__", repr(actual))
        super().__init__(
            f"Configuration for '{key}' is of type {actual_name}, not {expected_name}"
        )
