"""
Configuration package: discovery, merge and conversion of tweetwallConfig.json.
"""

from .converters import ConfigurationConverter, ConverterRegistry, converter_for, discover_converters
from .errors import (
    ConfigError,
    ConfigSourceError,
    ConverterError,
    DuplicateConverterError,
    NotFoundError,
    TypeMismatchError,
    UnsupportedMergeError,
)
from .merge import ValueKind, classify, merge_map
from .store import ConfigStore, get_instance, reset_instance

__all__ = [
    "ConfigStore",
    "get_instance",
    "reset_instance",
    "ConfigurationConverter",
    "ConverterRegistry",
    "converter_for",
    "discover_converters",
    "merge_map",
    "classify",
    "ValueKind",
    "ConfigError",
    "ConfigSourceError",
    "ConverterError",
    "DuplicateConverterError",
    "NotFoundError",
    "TypeMismatchError",
    "UnsupportedMergeError",
]
