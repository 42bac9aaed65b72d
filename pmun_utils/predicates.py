"""Runtime type predicates.

Each predicate answers a single question about a value's type or shape and
never raises. They are the building blocks the other helper modules use to
dispatch on their inputs.
"""

import inspect
import math
import re
from collections.abc import Mapping, Set
from datetime import date
from typing import Any, TypeGuard

_PRIMITIVES = (str, bytes, int, float, complex, bool)

_MOBILE_PHONE = re.compile(r"1[3-9][0-9]{9}")


def is_string(val: Any) -> TypeGuard[str]:
    return isinstance(val, str)


def is_number(val: Any) -> TypeGuard[int | float]:
    """True for ints and floats, excluding booleans and NaN."""
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return False
    return not math.isnan(val)


def is_boolean(val: Any) -> TypeGuard[bool]:
    return isinstance(val, bool)


def is_function(val: Any) -> bool:
    """True for anything callable, classes included."""
    return callable(val)


def is_class(val: Any) -> TypeGuard[type]:
    """True for classes, built-in types included.

    Example:
        >>> is_class(dict)
        True
        >>> is_class(len)
        False
    """
    return inspect.isclass(val)


def is_object(val: Any) -> bool:
    """True for non-null, non-primitive, non-callable values."""
    if val is None or isinstance(val, _PRIMITIVES):
        return False
    return not callable(val)


def is_array(val: Any) -> TypeGuard[list[Any]]:
    return isinstance(val, list)


def is_date(val: Any) -> TypeGuard[date]:
    """True for `date` and `datetime` instances."""
    return isinstance(val, date)


def is_regexp(val: Any) -> TypeGuard[re.Pattern[Any]]:
    return isinstance(val, re.Pattern)


def is_promise(val: Any) -> bool:
    """True for awaitables: coroutines, tasks and futures."""
    return inspect.isawaitable(val)


def is_map(val: Any) -> TypeGuard[Mapping[Any, Any]]:
    return isinstance(val, Mapping)


def is_set(val: Any) -> TypeGuard[Set[Any]]:
    return isinstance(val, Set)


def is_primitive(val: Any) -> bool:
    return val is None or isinstance(val, _PRIMITIVES)


def is_none(val: Any) -> TypeGuard[None]:
    return val is None


def is_empty_object(val: Any) -> bool:
    """True for objects that carry no keys or attributes."""
    if not is_object(val):
        return False
    if isinstance(val, (Mapping, Set, list, tuple)):
        return len(val) == 0
    return not getattr(val, "__dict__", None)


def is_empty(val: Any) -> bool:
    """
    Return True when a value holds nothing worth using.

    Empty means None, a blank (whitespace-only) string, an empty list or tuple,
    or an object without keys. Zero and False are values, not emptiness.

    Example:
        >>> is_empty("   ")
        True
        >>> is_empty(0)
        False
    """
    if val is None:
        return True
    if isinstance(val, str):
        return len(val.strip()) == 0
    if isinstance(val, (list, tuple)):
        return len(val) == 0
    if is_object(val):
        return is_empty_object(val)
    return False


def is_nan(val: Any) -> bool:
    return isinstance(val, float) and math.isnan(val)


def is_plain_object(val: Any) -> TypeGuard[dict[Any, Any]]:
    """True only for plain dicts (subclasses such as OrderedDict excluded)."""
    return type(val) is dict


def is_mobile_phone(val: Any) -> bool:
    """
    Check whether a value is a mainland-China mobile number.

    Accepts strings or integers of exactly 11 digits starting with 1 followed
    by 3-9. Formatting characters (spaces, dashes) are rejected.
    """
    if isinstance(val, bool):
        return False
    if isinstance(val, int):
        val = str(val)
    if not isinstance(val, str):
        return False
    return _MOBILE_PHONE.fullmatch(val) is not None
