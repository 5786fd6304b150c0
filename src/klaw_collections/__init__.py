"""klaw-collections: immutable ordered key-value collections for the Klaw ecosystem.

Eager `ArrayCollection` transformations with exact key semantics for
concatenate/union/merge, plus lazy `CollectionView` pipelines that record
calls and replay them when read.

Flat imports (preferred):
    from klaw_collections import ArrayCollection, CollectionView
    from klaw_collections import Collection, Enumerable
    from klaw_collections import functions

Example:
    ```python
    from klaw_collections import ArrayCollection

    numbers = ArrayCollection.create([3, 1, 2])
    numbers.sum()                                   # 6
    numbers.view().map(lambda x: x * 2).to_array()  # {0: 6, 1: 2, 2: 4}
    ```
"""

from klaw_collections import functions

# Configuration
from klaw_collections._config import CollectionsConfig, get_config, init, reset_config
from klaw_collections._logging import configure_logging, get_logger

# Collections
from klaw_collections.collection import ArrayCollection
from klaw_collections.enumerable import ArrayEnumerable

# Errors
from klaw_collections.errors import (
    CollectionError,
    MissingMember,
    MissingMemberError,
    NotACollection,
    NotACollectionError,
)

# Contracts
from klaw_collections.protocols import Collection, Enumerable

# Typeclass
from klaw_collections.typeclass import typeclass
from klaw_collections.view import CollectionView, PendingOp

__all__ = [
    'ArrayCollection',
    'ArrayEnumerable',
    'Collection',
    'CollectionError',
    'CollectionView',
    'CollectionsConfig',
    'Enumerable',
    'MissingMember',
    'MissingMemberError',
    'NotACollection',
    'NotACollectionError',
    'PendingOp',
    'configure_logging',
    'functions',
    'get_config',
    'get_logger',
    'init',
    'reset_config',
    'typeclass',
]
