"""List helpers: dedup, chunking, grouping, option lists and tree transforms."""

import random
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from pmun_utils.config import resolve_locale
from pmun_utils.locales import Locale
from pmun_utils.predicates import is_primitive

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

Node = dict[str, Any]


def _strict_equal(a: Any, b: Any) -> bool:
    # Primitives compare by value (True and 1 are different); anything else by identity
    if is_primitive(a) and is_primitive(b):
        return a == b and isinstance(a, bool) == isinstance(b, bool)
    return a is b


def _identity_key(item: Any) -> Hashable:
    if is_primitive(item):
        return (isinstance(item, bool), item)
    return ("ref", id(item))


def remove(items: Iterable[T], item: T) -> list[T]:
    """Return a new list without any element strictly equal to `item`."""
    return [candidate for candidate in items if not _strict_equal(candidate, item)]


def unique(items: Iterable[T]) -> list[T]:
    """
    Drop duplicates, keeping the first occurrence of each element.

    Primitives are compared by value, other objects by identity.

    Example:
        >>> unique([1, 2, 2, "2", 1])
        [1, 2, '2']
    """
    seen: set[Hashable] = set()
    result: list[T] = []
    for item in items:
        key = _identity_key(item)
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """
    Split a sequence into lists of `size` elements; the last may be shorter.

    A non-positive size returns the whole sequence as a single chunk.

    Example:
        >>> chunk([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 3)
        [[1, 2, 3], [4, 5, 6], [7, 8, 9], [10]]
    """
    if size <= 0:
        return [list(items)]
    return [list(items[index : index + size]) for index in range(0, len(items), size)]


def first(items: Sequence[T]) -> T | None:
    return items[0] if items else None


def last(items: Sequence[T]) -> T | None:
    return items[-1] if items else None


def shuffle(items: Iterable[T]) -> list[T]:
    """Return a shuffled copy; the input is left untouched."""
    result = list(items)
    random.shuffle(result)
    return result


def sample(items: Sequence[T]) -> T | None:
    """Return a random element, or None for an empty sequence."""
    if not items:
        return None
    return random.choice(items)


def is_equal(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """True when both sequences have the same length and strictly equal elements."""
    if len(a) != len(b):
        return False
    return all(_strict_equal(x, y) for x, y in zip(a, b))


def group_by(items: Iterable[T], key_fn: Callable[[T], K]) -> dict[K, list[T]]:
    """
    Group elements by the key `key_fn` returns, preserving input order.

    Example:
        >>> group_by([1, 2, 3, 4], lambda n: "even" if n % 2 == 0 else "odd")
        {'odd': [1, 3], 'even': [2, 4]}
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key_fn(item), []).append(item)
    return groups


def append_universal_option(
    options: Iterable[Mapping[str, Any]],
    *,
    name: str = "label",
    value_key: str = "value",
    value: Any = "",
    label: str | None = None,
    locale: str | Locale | None = None,
) -> list[dict[str, Any]]:
    """
    Prepend an "All" option to a select-box option list.

    Args:
        options: Existing options, each a mapping
        name: Key holding the display text
        value_key: Key holding the option value
        value: Value of the "All" option
        label: Display text; defaults to the locale's word for "All"
        locale: Locale for the default label

    Example:
        >>> append_universal_option([{"label": "Open", "value": 1}])
        [{'label': 'All', 'value': ''}, {'label': 'Open', 'value': 1}]
    """
    if label is None:
        label = resolve_locale(locale).all_option_label
    universal = {name: label, value_key: value}
    return [universal, *(dict(option) for option in options)]


def rename_tree_nodes(
    tree: Iterable[Mapping[str, Any]],
    rename_map: Mapping[str, str],
    children_key: str = "children",
    delete_old: bool = True,
) -> list[Node]:
    """
    Rename keys on every node of a tree.

    Children are found under `children_key` and renamed recursively; if the
    children key itself is in `rename_map` they move to the new key.

    Args:
        tree: Root nodes
        rename_map: Old key -> new key
        children_key: Key holding child nodes in the input
        delete_old: Drop the old keys (otherwise both are kept)

    Example:
        >>> rename_tree_nodes([{"id": 1, "name": "a", "children": [{"id": 2, "name": "b"}]}],
        ...                   {"id": "value", "name": "label"})
        [{'children': [{'value': 2, 'label': 'b'}], 'value': 1, 'label': 'a'}]
    """
    result: list[Node] = []
    for node in tree:
        renamed: Node = dict(node)
        children = node.get(children_key)
        if isinstance(children, list):
            renamed[children_key] = rename_tree_nodes(
                children, rename_map, children_key, delete_old
            )
        for old, new in rename_map.items():
            if old not in renamed:
                continue
            value = renamed.pop(old) if delete_old else renamed[old]
            renamed[new] = value
        result.append(renamed)
    return result


def transform_tree(
    tree: Iterable[Mapping[str, Any]],
    fn: Callable[[Node], Node],
    children_key: str = "children",
) -> list[Node]:
    """
    Map every node of a tree through `fn`, depth first.

    Children are transformed before their parent, so `fn` receives a copy
    of the node whose children are already converted.
    """
    result: list[Node] = []
    for node in tree:
        copied: Node = dict(node)
        children = node.get(children_key)
        if isinstance(children, list):
            copied[children_key] = transform_tree(children, fn, children_key)
        result.append(fn(copied))
    return result


def array_to_object(items: Iterable[Mapping[str, Any]], key: str) -> dict[Any, Any]:
    """
    Index a list of mappings by one of their fields.

    Items whose field is missing or falsy are skipped; later items win.

    Example:
        >>> array_to_object([{"id": "a", "n": 1}, {"id": "", "n": 2}], "id")
        {'a': {'id': 'a', 'n': 1}}
    """
    return {item[key]: item for item in items if item.get(key)}
