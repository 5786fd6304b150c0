"""ArrayEnumerable: an immutable ordered key-value container with read primitives."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Self

from klaw_collections.functions import with_accumulator_key, with_key
from klaw_collections.protocols import Enumerable

__all__ = ['ArrayEnumerable']


class ArrayEnumerable(Enumerable):
    """Enumerable backed by an insertion-ordered dict.

    The dict is copied on construction and never handed out; `to_array`
    returns a fresh copy each time.

    Example:
        ```python
        letters = ArrayEnumerable({0: 'a', 'x': 'b'})
        letters.first()   # 'a'
        letters.find(lambda value, key: key == 'x')   # 'b'
        letters.reduce(lambda acc, value: acc + value, '')   # 'ab'
        ```
    """

    __slots__ = ('_elements',)

    def __init__(self, elements: dict[Any, Any] | None = None) -> None:
        self._elements: dict[Any, Any] = dict(elements) if elements else {}

    def to_array(self) -> dict[Any, Any]:
        return dict(self._elements)

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Iterate over ``(key, value)`` entries in order."""
        return iter(self._elements.items())

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements.values())

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._elements!r})'

    def count(self) -> int:
        return len(self._elements)

    def first(self) -> Any:
        return next(iter(self._elements.values()), None)

    def last(self) -> Any:
        return next(reversed(self._elements.values()), None)

    def find(self, predicate: Callable[..., Any]) -> Any:
        call = with_key(predicate)
        for key, value in self._elements.items():
            if call(value, key):
                return value
        return None

    def exists(self, predicate: Callable[..., Any]) -> bool:
        call = with_key(predicate)
        return any(call(value, key) for key, value in self._elements.items())

    def for_all(self, predicate: Callable[..., Any]) -> bool:
        call = with_key(predicate)
        return all(call(value, key) for key, value in self._elements.items())

    def count_all(self, predicate: Callable[..., Any]) -> int:
        call = with_key(predicate)
        return sum(1 for key, value in self._elements.items() if call(value, key))

    def reduce(self, callback: Callable[..., Any], initial: Any = None) -> Any:
        """Fold ``callback(accumulator, value, key)``; the key is optional."""
        call = with_accumulator_key(callback)
        accumulator = initial
        for key, value in self._elements.items():
            accumulator = call(accumulator, value, key)
        return accumulator

    def tap(self, callback: Callable[[Any], Any]) -> Self:
        callback(self)
        return self

    def each(self, callback: Callable[..., Any]) -> Self:
        call = with_key(callback)
        for key, value in self._elements.items():
            call(value, key)
        return self
