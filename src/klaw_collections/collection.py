"""ArrayCollection: eager, immutable transformations over an ordered dict.

Every transformation builds a new instance through ``type(self).create``, so
subclasses stay closed under transformation. The combination operations keep
three distinct key rules:

- `concatenate`: values only, reindexed left then right.
- `union`: keys kept on both sides; ``other`` wins and leads the order.
- `merge`: int keys renumbered across both sides; str keys overwritten in place.

Example:
    ```python
    a = ArrayCollection.create({0: 'a', 'x': 'b'})
    b = ArrayCollection.create({0: 'c', 'x': 'd'})

    a.union(b).to_array()        # {0: 'c', 'x': 'd'}
    a.merge(b).to_array()        # {0: 'a', 'x': 'd', 1: 'c'}
    a.concatenate(b).to_array()  # {0: 'a', 1: 'b', 2: 'c', 3: 'd'}
    ```
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Callable, ItemsView, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Self

from klaw_collections import functions
from klaw_collections.enumerable import ArrayEnumerable
from klaw_collections.errors import NotACollectionError
from klaw_collections.protocols import Collection, Enumerable

if TYPE_CHECKING:
    from klaw_collections.view import CollectionView

__all__ = ['ArrayCollection', 'require_collection']

_EXHAUSTED = object()


def require_collection(operation: str, other: Any) -> Collection:
    """Check a combination operand at the call boundary."""
    if not isinstance(other, Collection):
        raise NotACollectionError.for_value(operation, other)
    return other


def _to_elements(elements: Any) -> dict[Any, Any]:
    """Normalize ``create`` input into a fresh ordered dict."""
    if elements is None:
        return {}
    if isinstance(elements, Enumerable):
        return elements.to_array()
    if isinstance(elements, Mapping):
        return dict(elements)
    if isinstance(elements, ItemsView):
        return dict(elements)
    if isinstance(elements, Iterator):
        return _from_iterator(elements)
    if isinstance(elements, Iterable) and not isinstance(elements, (str, bytes, bytearray)):
        return dict(enumerate(elements))
    raise NotACollectionError.for_value('create', elements)


def _is_pair(item: Any) -> bool:
    return isinstance(item, tuple) and len(item) == 2


def _from_iterator(elements: Iterator[Any]) -> dict[Any, Any]:
    """Read an iterator as ``(key, value)`` pairs when it starts with one, else as values."""
    first = next(elements, _EXHAUSTED)
    if first is _EXHAUSTED:
        return {}
    chained = itertools.chain([first], elements)
    if not _is_pair(first):
        return dict(enumerate(chained))

    results: dict[Any, Any] = {}
    for item in chained:
        if not _is_pair(item):
            raise NotACollectionError.for_value('create', item)
        key, value = item
        results[key] = value
    return results


def _next_index(elements: dict[Any, Any]) -> int:
    """Next free integer key: one past the largest int key, never below 0."""
    int_keys = [key for key in elements if isinstance(key, int) and not isinstance(key, bool)]
    return max(max(int_keys) + 1, 0) if int_keys else 0


class ArrayCollection(ArrayEnumerable, Collection):
    """Immutable collection over an insertion-ordered dict.

    Build instances with `create`, which accepts a mapping, another
    collection, an iterator of ``(key, value)`` pairs, or any other iterable of
    values (keyed ``0..n-1``). An iterator counts as pairs when its first item
    is a 2-tuple.
    """

    __slots__ = ()

    @classmethod
    def create(cls, elements: Any = None) -> Self:
        """Build a collection of this class from array-like or pair input.

        Raises:
            NotACollectionError: ``elements`` is not iterable (or is text), or
                a pair iterator yields something other than a pair.
        """
        return cls(_to_elements(elements))

    @classmethod
    def get_creator(cls) -> Callable[[Any], Self]:
        """Return `create` bound to this class, as a plain callable."""
        return cls.create

    def view(self) -> CollectionView:
        """Return a lazy view; transformations on it are recorded until forced."""
        from klaw_collections.view import CollectionView

        return CollectionView(self, type(self).get_creator())

    def apply(self, callback: Callable[[Any], Any]) -> Self:
        """Run ``callback(self)`` and wrap its result with `create`."""
        return type(self).create(callback(self))

    # Transformations

    def take(self, number: int) -> Self:
        """First ``number`` entries, keys kept; ``number <= 0`` gives empty."""
        if number <= 0:
            return type(self).create({})
        entries = list(self._elements.items())[:number]
        return type(self).create(dict(entries))

    def filter(self, predicate: Callable[..., Any] | None = None) -> Self:
        """Keep entries where ``predicate(value, key)`` holds.

        Without a predicate, keeps the values that are not empty-like.
        """
        call = functions.with_key(predicate if predicate is not None else functions.is_not_empty_like)
        return type(self).create({key: value for key, value in self._elements.items() if call(value, key)})

    def filter_not(self, predicate: Callable[..., Any] | None = None) -> Self:
        """Keep entries where ``predicate(value, key)`` fails.

        Without a predicate, keeps exactly the empty-like values, so
        ``filter()`` and ``filter_not()`` split the entries between them.
        """
        call = functions.with_key(predicate if predicate is not None else functions.is_not_empty_like)
        return type(self).create({key: value for key, value in self._elements.items() if not call(value, key)})

    def partition(self, predicate: Callable[..., Any]) -> Self:
        """Two-element collection: ``[filter(predicate), filter_not(predicate)]``."""
        return type(self).create([self.filter(predicate), self.filter_not(predicate)])

    def map(self, callback: Callable[..., Any]) -> Self:
        """Replace each value with ``callback(value, key)``, keys kept."""
        call = functions.with_key(callback)
        keys = list(self._elements)
        values = list(self._elements.values())
        results: dict[Any, Any] = {}
        for index in range(len(keys)):
            results[keys[index]] = call(values[index], keys[index])
        return type(self).create(results)

    def pick(self, key: Any) -> Self:
        """Read ``key`` from every value, keys kept.

        Raises:
            MissingMemberError: A value lacks the key; nothing is returned.
        """
        return self.map(functions.pick(key))

    def invoke(self, method: str) -> Self:
        """Call the zero-argument ``method`` on every value, keys kept.

        Raises:
            MissingMemberError: A value has no such method.
        """
        return self.map(functions.invoke(method))

    def flat_map(self, callback: Callable[..., Any]) -> Self:
        return self.apply(functions.flat_map(callback))

    def index_by(self, callback: Callable[..., Any]) -> Self:
        return self.apply(functions.index_by(callback))

    def group_by(self, callback: Callable[..., Any]) -> Self:
        return self.apply(functions.group_by(callback, type(self).get_creator()))

    def flatten(self) -> Self:
        return self.apply(functions.flatten())

    def unique(self, strict: bool = True) -> Self:
        return self.apply(functions.unique(strict))

    def sort_with(self, comparator: Callable[[Any, Any], int]) -> Self:
        return self.apply(functions.sort_with(comparator))

    def sort_by(self, metric: Callable[[Any], Any]) -> Self:
        return self.apply(functions.sort_by(metric))

    # Reindexing transformations

    def values(self) -> Self:
        return type(self).create(list(self._elements.values()))

    def keys(self) -> Self:
        return type(self).create(list(self._elements))

    def rest(self) -> Self:
        """Everything but the first entry, reindexed from 0."""
        return type(self).create(list(self._elements.values())[1:])

    def reverse(self) -> Self:
        """Entries in reverse order, reindexed from 0."""
        return type(self).create(list(reversed(self._elements.values())))

    # Combination

    def concatenate(self, other: Collection) -> Self:
        """Values of self then values of ``other``, reindexed from 0."""
        right = require_collection('concatenate', other).to_array()
        return type(self).create([*self._elements.values(), *right.values()])

    def union(self, other: Collection) -> Self:
        """Entries of ``other`` followed by entries of self whose keys it lacks."""
        results = require_collection('union', other).to_array()
        for key, value in self._elements.items():
            if key not in results:
                results[key] = value
        return type(self).create(results)

    def merge(self, other: Collection) -> Self:
        """Int keys renumbered across both sides; str keys of ``other`` overwrite."""
        right = require_collection('merge', other).to_array()
        results: dict[Any, Any] = {}
        index = 0
        for source in (self._elements, right):
            for key, value in source.items():
                if isinstance(key, int):
                    results[index] = value
                    index += 1
                else:
                    results[key] = value
        return type(self).create(results)

    def add(self, value: Any, key: Any = None) -> Self:
        """Append ``value`` under ``key``, or under the next integer key."""
        results = self.to_array()
        results[_next_index(results) if key is None else key] = value
        return type(self).create(results)

    # Aggregates

    def min(self) -> Any:
        return self._apply_or_none(min)

    def max(self) -> Any:
        return self._apply_or_none(max)

    def sum(self) -> Any:
        return self._apply_or_none(sum)

    def product(self) -> Any:
        return self._apply_or_none(math.prod)

    def _apply_or_none(self, aggregate: Callable[[Iterable[Any]], Any]) -> Any:
        if not self._elements:
            return None
        return aggregate(self._elements.values())

    def is_empty(self) -> bool:
        return self.count() == 0
