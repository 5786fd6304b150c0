"""Capability contracts: Enumerable and Collection abstract interfaces.

`Enumerable` is the read side: traversal and terminal reductions. `Collection`
adds the transformations, every one of which returns a new collection. A lazy
view implements `Collection` too; its transformations are recorded rather than
executed, and its Enumerable calls force it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

__all__ = ['Collection', 'Enumerable']


class Enumerable(ABC):
    """Read-only traversal over an ordered key-value container.

    Callbacks documented as ``(value, key)`` may take just the value.
    """

    @abstractmethod
    def to_array(self) -> dict[Any, Any]:
        """Return a snapshot of the entries as a plain insertion-ordered dict."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of entries."""
        ...

    @abstractmethod
    def first(self) -> Any:
        """First value, or None when empty."""
        ...

    @abstractmethod
    def last(self) -> Any:
        """Last value, or None when empty."""
        ...

    @abstractmethod
    def find(self, predicate: Callable[..., Any]) -> Any:
        """First value satisfying ``predicate(value, key)``, or None."""
        ...

    @abstractmethod
    def exists(self, predicate: Callable[..., Any]) -> bool:
        """True if any entry satisfies ``predicate(value, key)``."""
        ...

    @abstractmethod
    def for_all(self, predicate: Callable[..., Any]) -> bool:
        """True if every entry satisfies ``predicate(value, key)``."""
        ...

    @abstractmethod
    def count_all(self, predicate: Callable[..., Any]) -> int:
        """Number of entries satisfying ``predicate(value, key)``."""
        ...

    @abstractmethod
    def reduce(self, callback: Callable[..., Any], initial: Any = None) -> Any:
        """Fold ``callback(accumulator, value, key)`` over the entries."""
        ...

    @abstractmethod
    def tap(self, callback: Callable[[Any], Any]) -> Any:
        """Call ``callback(self)`` for its side effects and return self."""
        ...

    @abstractmethod
    def each(self, callback: Callable[..., Any]) -> Any:
        """Call ``callback(value, key)`` for every entry and return self."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[Any]: ...

    def __len__(self) -> int:
        return self.count()


class Collection(Enumerable):
    """Immutable collection: every transformation returns a new collection."""

    @abstractmethod
    def view(self) -> Collection:
        """Return a lazy view over this collection."""
        ...

    @abstractmethod
    def apply(self, callback: Callable[[Any], Any]) -> Collection: ...

    @abstractmethod
    def take(self, number: int) -> Collection: ...

    @abstractmethod
    def rest(self) -> Collection: ...

    @abstractmethod
    def filter(self, predicate: Callable[..., Any] | None = None) -> Collection: ...

    @abstractmethod
    def filter_not(self, predicate: Callable[..., Any] | None = None) -> Collection: ...

    @abstractmethod
    def partition(self, predicate: Callable[..., Any]) -> Collection: ...

    @abstractmethod
    def map(self, callback: Callable[..., Any]) -> Collection: ...

    @abstractmethod
    def flat_map(self, callback: Callable[..., Any]) -> Collection: ...

    @abstractmethod
    def index_by(self, callback: Callable[..., Any]) -> Collection: ...

    @abstractmethod
    def group_by(self, callback: Callable[..., Any]) -> Collection: ...

    @abstractmethod
    def pick(self, key: Any) -> Collection: ...

    @abstractmethod
    def invoke(self, method: str) -> Collection: ...

    @abstractmethod
    def flatten(self) -> Collection: ...

    @abstractmethod
    def unique(self, strict: bool = True) -> Collection: ...

    @abstractmethod
    def sort_with(self, comparator: Callable[[Any, Any], int]) -> Collection: ...

    @abstractmethod
    def sort_by(self, metric: Callable[[Any], Any]) -> Collection: ...

    @abstractmethod
    def reverse(self) -> Collection: ...

    @abstractmethod
    def concatenate(self, other: Collection) -> Collection: ...

    @abstractmethod
    def union(self, other: Collection) -> Collection: ...

    @abstractmethod
    def merge(self, other: Collection) -> Collection: ...

    @abstractmethod
    def add(self, value: Any, key: Any = None) -> Collection: ...

    @abstractmethod
    def values(self) -> Collection: ...

    @abstractmethod
    def keys(self) -> Collection: ...

    @abstractmethod
    def min(self) -> Any: ...

    @abstractmethod
    def max(self) -> Any: ...

    @abstractmethod
    def sum(self) -> Any: ...

    @abstractmethod
    def product(self) -> Any: ...

    @abstractmethod
    def is_empty(self) -> bool: ...
