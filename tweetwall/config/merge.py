"""
Merge logic for configuration documents.

Every document found during a load is folded into the previous result with
merge_map(). Values are classified into a small set of kinds first, the
merge decision is then made on the pair of kinds:

    SCALAR  str, int, float, bool, None
    OBJECT  any Mapping (JSON object)
    ARRAY   list or tuple (JSON array)
    OTHER   everything else (e.g. already converted domain objects)

Strategy:
- key missing on one side -> the present side wins
- at least one side SCALAR -> the later document wins
- both sides OBJECT -> merged recursively
- everything else is rejected with UnsupportedMergeError
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import UnsupportedMergeError
from ..logging_setup import get_logger

log = get_logger("tweetwall.config.merge")

_MISSING = object()


class ValueKind(Enum):
    SCALAR = "scalar"
    OBJECT = "object"
    ARRAY = "array"
    OTHER = "other"


def classify(value: Any) -> ValueKind:
    """Return the kind of a decoded configuration value."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return ValueKind.SCALAR
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.OTHER


def merge_map(
    previous: Optional[Mapping[str, Any]],
    next: Optional[Mapping[str, Any]],
    *,
    path: str = "",
) -> Dict[str, Any]:
    """
    Merge ``next`` on top of ``previous``.

    Args:
        previous: result of the documents folded so far (may be empty)
        next: the document loaded after ``previous``
        path: dotted key path of the maps being merged, used in errors

    Returns:
        A new dict; neither input is mutated.

    Raises:
        ValueError: ``next`` is None
        UnsupportedMergeError: a key holds values that cannot be combined
    """
    if next is None:
        raise ValueError(f"{path or 'Parameter'} next must not be None!")

    if not previous:
        return dict(next)

    result: Dict[str, Any] = {}
    for key in list(previous.keys()) + [k for k in next.keys() if k not in previous]:
        key_path = f"{path}.{key}" if path else str(key)
        result[key] = merge_value(key_path, previous.get(key, _MISSING), next.get(key, _MISSING))
    return result


def merge_value(key: str, previous: Any, next: Any) -> Any:
    """Combine the two values found for ``key``; see the module docstring."""
    if previous is _MISSING:
        return next
    if next is _MISSING:
        return previous

    p_kind = classify(previous)
    n_kind = classify(next)

    if p_kind is ValueKind.SCALAR or n_kind is ValueKind.SCALAR:
        if previous != next:
            log.debug("Key '%s' overridden by later source", key)
        return next
    if p_kind is ValueKind.OBJECT and n_kind is ValueKind.OBJECT:
        return merge_map(previous, next, path=key)

    raise UnsupportedMergeError(key, type(previous), type(next))
