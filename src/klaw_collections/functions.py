"""Callback factories for collection transformations.

Every factory takes the parameters of one operation and returns a plain
callback. Callbacks passed to ``apply`` receive the whole collection and return
something ``create`` accepts (usually a dict); the others map single values.
Factories hold no shared state, so their callbacks can be reused freely.

Example:
    ```python
    from klaw_collections import ArrayCollection, functions

    people = ArrayCollection.create([{'name': 'ada'}, {'name': 'bob'}])
    people.apply(functions.index_by(lambda person: person['name'])).to_array()
    # {'ada': {'name': 'ada'}, 'bob': {'name': 'bob'}}
    ```
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from klaw_collections._logging import get_logger
from klaw_collections.protocols import Enumerable
from klaw_collections.values import invoke_member, is_empty_like, pick_member

__all__ = [
    'flat_map',
    'flatten',
    'group_by',
    'index_by',
    'invoke',
    'is_empty_like',
    'is_not_empty_like',
    'pick',
    'sort_by',
    'sort_with',
    'unique',
    'with_accumulator_key',
    'with_key',
]

logger = get_logger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _requires_positional(callback: Callable[..., Any], count: int) -> bool:
    """Check whether a callback requires at least ``count`` positional arguments.

    Optional parameters do not count: ``round(number, ndigits=None)`` must not
    receive a key as ``ndigits``. ``*args`` accepts any count.
    """
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return False

    required = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in _POSITIONAL and parameter.default is inspect.Parameter.empty:
            required += 1
    return required >= count


def with_key(callback: Callable[..., Any]) -> Callable[[Any, Any], Any]:
    """Adapt a ``(value)`` or ``(value, key)`` callback to always take both.

    Callables whose signature cannot be inspected (many builtins) get the
    value only. A second parameter with a default is not a key slot.
    """
    if _requires_positional(callback, 2):
        return callback

    @functools.wraps(callback)
    def value_only(value: Any, key: Any) -> Any:
        return callback(value)

    return value_only


def with_accumulator_key(callback: Callable[..., Any]) -> Callable[[Any, Any, Any], Any]:
    """Adapt a reducer ``(accumulator, value)`` or ``(accumulator, value, key)``."""
    if _requires_positional(callback, 3):
        return callback

    @functools.wraps(callback)
    def without_key(accumulator: Any, value: Any, key: Any) -> Any:
        return callback(accumulator, value)

    return without_key


def is_not_empty_like(value: Any) -> bool:
    """Complement of `is_empty_like`."""
    return not is_empty_like(value)


def _is_spliceable(value: Any) -> bool:
    """Nested containers flattened by one level; text is never split."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray))


def _spliced_values(value: Any) -> Iterable[Any]:
    if isinstance(value, Enumerable):
        return value.to_array().values()
    if isinstance(value, Mapping):
        return value.values()
    return value


def _append_flattened(results: list[Any], value: Any) -> None:
    if _is_spliceable(value):
        results.extend(_spliced_values(value))
    else:
        results.append(value)


# Whole-collection callbacks (for apply)


def flat_map(callback: Callable[..., Any]) -> Callable[[Enumerable], list[Any]]:
    """Map ``callback(value, key)`` and splice each result into one sequence."""
    call = with_key(callback)

    def apply_flat_map(collection: Enumerable) -> list[Any]:
        results: list[Any] = []
        for key, value in collection.to_array().items():
            _append_flattened(results, call(value, key))
        return results

    return apply_flat_map


def index_by(callback: Callable[..., Any]) -> Callable[[Enumerable], dict[Any, Any]]:
    """Rekey values by ``callback(value, key)``; later values win collisions."""
    call = with_key(callback)

    def apply_index_by(collection: Enumerable) -> dict[Any, Any]:
        return {call(value, key): value for key, value in collection.to_array().items()}

    return apply_index_by


def group_by(
    callback: Callable[..., Any],
    creator: Callable[[Any], Enumerable],
) -> Callable[[Enumerable], dict[Any, Enumerable]]:
    """Bucket entries by ``callback(value, key)``.

    Each bucket keeps the original keys and is built with ``creator``.
    """
    call = with_key(callback)

    def apply_group_by(collection: Enumerable) -> dict[Any, Enumerable]:
        buckets: dict[Any, dict[Any, Any]] = {}
        for key, value in collection.to_array().items():
            buckets.setdefault(call(value, key), {})[key] = value
        logger.debug('group_by', groups=len(buckets))
        return {group: creator(entries) for group, entries in buckets.items()}

    return apply_group_by


def flatten() -> Callable[[Enumerable], list[Any]]:
    """Splice nested containers one level deep; other values pass through."""

    def apply_flatten(collection: Enumerable) -> list[Any]:
        results: list[Any] = []
        for value in collection.to_array().values():
            _append_flattened(results, value)
        return results

    return apply_flatten


def _strict_equals(left: Any, right: Any) -> bool:
    return type(left) is type(right) and (left is right or left == right)


def _loose_equals(left: Any, right: Any) -> bool:
    if left == right:
        return True
    # numeric strings compare equal to numbers of the same value
    for text, number in ((left, right), (right, left)):
        if isinstance(text, str) and isinstance(number, (int, float)) and not isinstance(number, bool):
            try:
                return float(text) == number
            except ValueError:
                return False
    return False


def unique(strict: bool = True) -> Callable[[Enumerable], dict[Any, Any] | list[Any]]:
    """Drop repeated values, keeping first occurrences.

    Strict mode compares type and value and keeps the surviving keys. Loose
    mode also treats numeric strings as equal to numbers and reindexes.
    """
    equals = _strict_equals if strict else _loose_equals

    def apply_unique(collection: Enumerable) -> dict[Any, Any] | list[Any]:
        kept: dict[Any, Any] = {}
        for key, value in collection.to_array().items():
            if not any(equals(seen, value) for seen in kept.values()):
                kept[key] = value
        if strict:
            return kept
        return list(kept.values())

    return apply_unique


def sort_with(comparator: Callable[[Any, Any], int]) -> Callable[[Enumerable], dict[Any, Any]]:
    """Order entries by a three-way ``comparator(a, b)``, keeping keys.

    The sort is stable: entries that compare equal keep their order.
    """
    sort_key = functools.cmp_to_key(comparator)

    def apply_sort_with(collection: Enumerable) -> dict[Any, Any]:
        entries = sorted(collection.to_array().items(), key=lambda entry: sort_key(entry[1]))
        return dict(entries)

    return apply_sort_with


def sort_by(metric: Callable[[Any], Any]) -> Callable[[Enumerable], dict[Any, Any]]:
    """Order entries ascending by ``metric(value)``, keeping keys. Stable."""

    def apply_sort_by(collection: Enumerable) -> dict[Any, Any]:
        entries = sorted(collection.to_array().items(), key=lambda entry: metric(entry[1]))
        return dict(entries)

    return apply_sort_by


# Per-value callbacks (for map)


def pick(key: Any) -> Callable[[Any], Any]:
    """Read ``key`` out of each value; see `pick_member`."""

    def pick_key(value: Any) -> Any:
        return pick_member(value, key)

    return pick_key


def invoke(method: str) -> Callable[[Any], Any]:
    """Call the zero-argument ``method`` on each value."""

    def invoke_method(value: Any) -> Any:
        return invoke_member(value, method)

    return invoke_method
