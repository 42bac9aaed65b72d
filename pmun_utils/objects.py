"""Object (dict) helpers: cloning, merging, path access and key/value mapping."""

import json
import re
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from datetime import date
from numbers import Number
from typing import Any, TypeVar
from urllib.parse import quote
from uuid import UUID

from pmun_utils.predicates import is_plain_object, is_primitive

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
R = TypeVar("R")

_MISSING = object()

# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~"
_QUERY_SAFE = "!*'()"


def has_own_prop(obj: Any, prop: str) -> bool:
    """True when `prop` is a key of a mapping or an instance attribute of an object."""
    if isinstance(obj, Mapping):
        return prop in obj
    return prop in getattr(obj, "__dict__", {})


def deep_clone(value: Any) -> Any:
    """
    Recursively copy a value.

    Dicts, lists, tuples and sets are rebuilt with cloned members; dates are
    copied; compiled patterns, numbers and UUIDs are immutable and shared.
    Any other object with instance attributes, held in `__dict__` or declared
    `__slots__`, becomes a plain dict of cloned attributes, so its
    class and methods are not carried over. Primitives are returned as-is.

    Example:
        >>> original = {"a": [1, {"b": 2}]}
        >>> copy = deep_clone(original)
        >>> copy == original, copy["a"] is original["a"]
        (True, False)
    """
    if is_primitive(value) or isinstance(value, (re.Pattern, Number, UUID)):
        return value
    if isinstance(value, date):
        return value.replace()
    if isinstance(value, Mapping):
        return {key: deep_clone(item) for key, item in value.items()}
    if isinstance(value, list):
        return [deep_clone(item) for item in value]
    if isinstance(value, tuple):
        return tuple(deep_clone(item) for item in value)
    if isinstance(value, frozenset):
        return frozenset(deep_clone(item) for item in value)
    if isinstance(value, set):
        return {deep_clone(item) for item in value}
    if callable(value):
        return value
    attributes = _attributes(value)
    if attributes is None:
        return value
    return {key: deep_clone(item) for key, item in attributes.items()}


def _attributes(value: Any) -> dict[str, Any] | None:
    """Instance attributes from `__dict__` and any declared `__slots__`."""
    attributes = getattr(value, "__dict__", None)
    slots: list[str] = []
    for cls in type(value).__mro__:
        declared = cls.__dict__.get("__slots__", ())
        slots.extend([declared] if isinstance(declared, str) else declared)
    if attributes is None and not slots:
        return None
    found = dict(attributes or {})
    for name in slots:
        if name not in ("__dict__", "__weakref__") and hasattr(value, name):
            found.setdefault(name, getattr(value, name))
    return found


def _step(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key, _MISSING)
    if isinstance(current, str) or (
        isinstance(current, Sequence) and not is_primitive(current)
    ):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return _MISSING
        return current[index] if 0 <= index < len(current) else _MISSING
    if is_primitive(current):
        return _MISSING
    return getattr(current, key, _MISSING)


def get(obj: Any, path: str | Sequence[str], default: Any = None) -> Any:
    """
    Read a nested value by dotted path.

    Mapping keys, list and string indexes and object attributes are all
    followed. Scalars have no properties to follow.
    The default is returned as soon as the path breaks.

    Example:
        >>> get({"a": {"b": [10, 20]}}, "a.b.1")
        20
        >>> get({"a": None}, "a.b", "n/a")
        'n/a'
    """
    keys = path.split(".") if isinstance(path, str) else path
    current = obj
    for key in keys:
        if current is None:
            return default
        current = _step(current, key)
        if current is _MISSING:
            return default
    return current


def pick(obj: Mapping[K, V], keys: Iterable[K]) -> dict[K, V]:
    return {key: obj[key] for key in keys if key in obj}


def omit(obj: Mapping[K, V], keys: Iterable[K]) -> dict[K, V]:
    dropped = set(keys)
    return {key: value for key, value in obj.items() if key not in dropped}


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def object_to_query_string(params: Mapping[str, Any]) -> str:
    """
    Encode a mapping as a URL query string (without the leading "?").

    None values are skipped, lists repeat the key, nested mappings are sent
    as JSON, and booleans as ``true``/``false``. Keys and values are
    percent-encoded like JavaScript's ``encodeURIComponent``.

    Example:
        >>> object_to_query_string({"q": "a b", "tag": ["x", "y"], "page": None})
        'q=a%20b&tag=x&tag=y'
    """
    pairs: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        name = quote(str(key), safe=_QUERY_SAFE)
        items = value if isinstance(value, (list, tuple)) else [value]
        for item in items:
            pairs.append(f"{name}={quote(_query_value(item), safe=_QUERY_SAFE)}")
    return "&".join(pairs)


def merge(*objects: Mapping[Any, Any] | None) -> dict[Any, Any]:
    """Shallow-merge mappings left to right; later keys win and None is skipped."""
    result: dict[Any, Any] = {}
    for obj in objects:
        if obj is not None:
            result.update(obj)
    return result


def deep_merge(*objects: Any) -> dict[Any, Any]:
    """
    Merge plain dicts recursively, left to right.

    Nested plain dicts are merged key by key; every other value, lists
    included, replaces what came before and is deep-cloned so the result
    shares nothing with the inputs. Arguments that are not plain dicts are
    ignored.

    Example:
        >>> deep_merge({"a": {"x": 1}, "l": [1]}, {"a": {"y": 2}, "l": [2]})
        {'a': {'x': 1, 'y': 2}, 'l': [2]}
    """
    result: dict[Any, Any] = {}
    for obj in objects:
        if not is_plain_object(obj):
            continue
        for key, source in obj.items():
            target = result.get(key)
            if is_plain_object(source) and is_plain_object(target):
                result[key] = deep_merge(target, source)
            else:
                result[key] = deep_clone(source)
    return result


def filter_object_by_keys(
    original: Mapping[str, Any],
    keys: Iterable[str],
    key_mapping: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """
    Keep only `keys` from a mapping, optionally renaming them.

    Example:
        >>> filter_object_by_keys({"id": 1, "name": "a", "x": 0}, ["id", "name"], {"name": "label"})
        {'id': 1, 'label': 'a'}
    """
    key_mapping = key_mapping or {}
    result: dict[str, Any] = {}
    for key in keys:
        if key in original:
            result[key_mapping.get(key) or key] = original[key]
    return result


def map_keys(
    obj: Mapping[K, V], fn: Callable[[V, K, Mapping[K, V]], Hashable]
) -> dict[Any, V]:
    """Rebuild a mapping with keys from ``fn(value, key, obj)``."""
    return {fn(value, key, obj): value for key, value in obj.items()}


def map_values(
    obj: Mapping[K, V], fn: Callable[[V, K, Mapping[K, V]], R]
) -> dict[K, R]:
    """Rebuild a mapping with values from ``fn(value, key, obj)``."""
    return {key: fn(value, key, obj) for key, value in obj.items()}


def invert(obj: Mapping[Any, Any]) -> dict[str, Any]:
    """Swap keys and values; values are stringified and later keys win."""
    return {str(value): key for key, value in obj.items()}
