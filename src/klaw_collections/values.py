"""Value-level rules shared by the collection operations.

- `is_empty_like`: the enumerated emptiness rule used by the default
  predicates of ``filter`` and ``filter_not``.
- `pick_member`: read a key out of a container or an attribute off an object.
- `invoke_member`: call a zero-argument method on a value.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Sized
from typing import Any

from klaw_collections.errors import MissingMemberError
from klaw_collections.protocols import Enumerable
from klaw_collections.typeclass import typeclass

__all__ = ['invoke_member', 'is_empty_like', 'pick_member']


# Emptiness


@typeclass
def is_empty_like(value: Any) -> bool:
    """Return True for values that count as empty.

    Empty values are None, False, numeric zero, the empty string and bytes,
    and any sized container (including collections) with no entries.
    Everything else, objects included, is non-empty.
    """
    return False


@is_empty_like.instance(type(None))
def _none_is_empty(value: None) -> bool:
    return True


@is_empty_like.instance(bool)
def _bool_is_empty(value: bool) -> bool:
    return value is False


@is_empty_like.instance(int, float, complex)
def _number_is_empty(value: complex) -> bool:
    return value == 0


@is_empty_like.instance(str, bytes)
def _text_is_empty(value: str | bytes) -> bool:
    return len(value) == 0


@is_empty_like.instance(Enumerable)
def _enumerable_is_empty(value: Enumerable) -> bool:
    return value.count() == 0


@is_empty_like.instance(Sized)
def _sized_is_empty(value: Sized) -> bool:
    return len(value) == 0


# Member access


@typeclass
def pick_member(value: Any, key: Any) -> Any:
    """Read ``key`` from ``value``.

    Mappings and collections are indexed by key, sequences by position (or
    by attribute name for str keys), and any other object by attribute name.

    Raises:
        MissingMemberError: The value has no such key or attribute.
    """
    return _pick_attribute(value, key)


def _pick_attribute(value: Any, key: Any) -> Any:
    if isinstance(key, str) and hasattr(value, key):
        return getattr(value, key)
    raise MissingMemberError.for_value(key, value)


@pick_member.instance(Enumerable)
def _pick_from_enumerable(value: Enumerable, key: Any) -> Any:
    return _pick_from_mapping(value.to_array(), key)


@pick_member.instance(Mapping)
def _pick_from_mapping(value: Mapping[Any, Any], key: Any) -> Any:
    if key not in value:
        raise MissingMemberError.for_value(key, value)
    return value[key]


@pick_member.instance(Sequence)
def _pick_from_sequence(value: Sequence[Any], key: Any) -> Any:
    # named fields, as on namedtuples
    if isinstance(key, str):
        return _pick_attribute(value, key)
    if isinstance(key, bool) or not isinstance(key, int) or not -len(value) <= key < len(value):
        raise MissingMemberError.for_value(key, value)
    return value[key]


def invoke_member(value: Any, method: str) -> Any:
    """Call the zero-argument method ``method`` on ``value``.

    Raises:
        MissingMemberError: The value has no callable member of that name.
    """
    member = getattr(value, method, None)
    if member is None or not callable(member):
        raise MissingMemberError.for_value(method, value)
    return member()
