"""Lazy collection views.

A `CollectionView` records transformation calls instead of running them. Each
recorded call is a `PendingOp` node in an immutable singly linked list, so
extending a view is O(1) and never touches the base collection. Any read
(``count``, ``first``, ``reduce``, iteration...) or an explicit `force` replays
the list in order against a fresh copy of the base and returns the concrete
result.

Example:
    ```python
    numbers = ArrayCollection.create([1, 2, 3, 4])
    pipeline = numbers.view().map(lambda x: x * 2).filter(lambda x: x > 4)

    pipeline.pending_operations()
    # (('map', (<lambda>,)), ('filter', (<lambda>,)))
    pipeline.to_array()
    # {2: 6, 3: 8}
    ```

Forcing is not cached unless ``memoize_views`` is enabled in the library
configuration; forcing a view twice replays the chain twice.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Self

import msgspec

from klaw_collections._config import get_config
from klaw_collections._logging import get_logger
from klaw_collections.collection import require_collection
from klaw_collections.protocols import Collection

__all__ = ['CollectionView', 'PendingOp']

logger = get_logger(__name__)


class PendingOp(msgspec.Struct, frozen=True):
    """One recorded transformation call, linked to the call before it.

    Attributes:
        name: Collection method name.
        args: Positional arguments of the call.
        previous: The node recorded before this one, or None for the first.
    """

    name: str
    args: tuple[Any, ...] = ()
    previous: PendingOp | None = None

    def chain(self) -> tuple[PendingOp, ...]:
        """All nodes up to and including this one, oldest first."""
        nodes: list[PendingOp] = []
        node: PendingOp | None = self
        while node is not None:
            nodes.append(node)
            node = node.previous
        return tuple(reversed(nodes))


class CollectionView(Collection):
    """Deferred pipeline over a base collection.

    Attributes:
        _base: The collection the pipeline starts from.
        _creator: Factory producing the concrete collection type on force.
        _pending: Most recent recorded call, or None when nothing is pending.
    """

    __slots__ = ('_base', '_creator', '_forced', '_pending')

    def __init__(
        self,
        base: Collection,
        creator: Callable[[Any], Collection],
        pending: PendingOp | None = None,
    ) -> None:
        self._base = base
        self._creator = creator
        self._pending = pending
        self._forced: Collection | None = None

    def _defer(self, name: str, *args: Any) -> CollectionView:
        return type(self)(self._base, self._creator, PendingOp(name, args, self._pending))

    def pending_operations(self) -> tuple[tuple[str, tuple[Any, ...]], ...]:
        """Recorded ``(name, args)`` calls in the order they will be replayed."""
        if self._pending is None:
            return ()
        return tuple((node.name, node.args) for node in self._pending.chain())

    def is_pending(self) -> bool:
        """True while at least one transformation is waiting to be replayed."""
        return self._pending is not None

    def force(self) -> Collection:
        """Replay the recorded calls against the base and return the result."""
        if self._forced is not None:
            return self._forced

        nodes = self._pending.chain() if self._pending is not None else ()
        logger.debug('collection_view.force', operations=len(nodes), base=type(self._base).__name__)

        collection = self._creator(self._base)
        for node in nodes:
            collection = getattr(collection, node.name)(*node.args)

        if get_config().memoize_views:
            self._forced = collection
        return collection

    def view(self) -> Self:
        return self

    def __repr__(self) -> str:
        names = [name for name, _ in self.pending_operations()]
        return f'{type(self).__name__}(base={self._base!r}, pending={names!r})'

    # Transformations: recorded

    def apply(self, callback: Callable[[Any], Any]) -> CollectionView:
        return self._defer('apply', callback)

    def take(self, number: int) -> CollectionView:
        return self._defer('take', number)

    def rest(self) -> CollectionView:
        return self._defer('rest')

    def filter(self, predicate: Callable[..., Any] | None = None) -> CollectionView:
        return self._defer('filter', predicate)

    def filter_not(self, predicate: Callable[..., Any] | None = None) -> CollectionView:
        return self._defer('filter_not', predicate)

    def partition(self, predicate: Callable[..., Any]) -> CollectionView:
        return self._defer('partition', predicate)

    def map(self, callback: Callable[..., Any]) -> CollectionView:
        return self._defer('map', callback)

    def flat_map(self, callback: Callable[..., Any]) -> CollectionView:
        return self._defer('flat_map', callback)

    def index_by(self, callback: Callable[..., Any]) -> CollectionView:
        return self._defer('index_by', callback)

    def group_by(self, callback: Callable[..., Any]) -> CollectionView:
        return self._defer('group_by', callback)

    def pick(self, key: Any) -> CollectionView:
        return self._defer('pick', key)

    def invoke(self, method: str) -> CollectionView:
        return self._defer('invoke', method)

    def flatten(self) -> CollectionView:
        return self._defer('flatten')

    def unique(self, strict: bool = True) -> CollectionView:
        return self._defer('unique', strict)

    def sort_with(self, comparator: Callable[[Any, Any], int]) -> CollectionView:
        return self._defer('sort_with', comparator)

    def sort_by(self, metric: Callable[[Any], Any]) -> CollectionView:
        return self._defer('sort_by', metric)

    def reverse(self) -> CollectionView:
        return self._defer('reverse')

    def concatenate(self, other: Collection) -> CollectionView:
        return self._defer('concatenate', require_collection('concatenate', other))

    def union(self, other: Collection) -> CollectionView:
        return self._defer('union', require_collection('union', other))

    def merge(self, other: Collection) -> CollectionView:
        return self._defer('merge', require_collection('merge', other))

    def add(self, value: Any, key: Any = None) -> CollectionView:
        return self._defer('add', value, key)

    def values(self) -> CollectionView:
        return self._defer('values')

    def keys(self) -> CollectionView:
        return self._defer('keys')

    # Reads: force first

    def to_array(self) -> dict[Any, Any]:
        return self.force().to_array()

    def items(self) -> Iterator[tuple[Any, Any]]:
        return iter(self.force().to_array().items())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.force())

    def count(self) -> int:
        return self.force().count()

    def first(self) -> Any:
        return self.force().first()

    def last(self) -> Any:
        return self.force().last()

    def find(self, predicate: Callable[..., Any]) -> Any:
        return self.force().find(predicate)

    def exists(self, predicate: Callable[..., Any]) -> bool:
        return self.force().exists(predicate)

    def for_all(self, predicate: Callable[..., Any]) -> bool:
        return self.force().for_all(predicate)

    def count_all(self, predicate: Callable[..., Any]) -> int:
        return self.force().count_all(predicate)

    def reduce(self, callback: Callable[..., Any], initial: Any = None) -> Any:
        return self.force().reduce(callback, initial)

    def tap(self, callback: Callable[[Any], Any]) -> Collection:
        return self.force().tap(callback)

    def each(self, callback: Callable[..., Any]) -> Collection:
        return self.force().each(callback)

    def min(self) -> Any:
        return self.force().min()

    def max(self) -> Any:
        return self.force().max()

    def sum(self) -> Any:
        return self.force().sum()

    def product(self) -> Any:
        return self.force().product()

    def is_empty(self) -> bool:
        return self.force().is_empty()
