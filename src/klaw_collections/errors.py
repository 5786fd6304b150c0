"""Collection error types.

Each error comes in two variants. The exception variant is what collection
operations raise. The frozen msgspec struct variant is the exported,
serializable form of the same error: callers that return errors as values or
ship them over the wire convert with ``to_struct()`` and back with
``to_exception()``. Nothing inside the package builds structs itself.
"""

from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    'CollectionError',
    'MissingMember',
    'MissingMemberError',
    'NotACollection',
    'NotACollectionError',
]


class CollectionError(Exception):
    """Base exception for klaw-collections errors.

    Attributes:
        message: A human-readable description of the error.
        code: An error code for programmatic handling.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: str | None = code

    def __str__(self) -> str:
        if self.code:
            return f'[{self.code}] {self.message}'
        return self.message


# --- Capability Errors ---


class NotACollection(msgspec.Struct, frozen=True, gc=False):
    """Value lacks the Collection capability - struct variant."""

    operation: str
    type_name: str

    def to_exception(self) -> NotACollectionError:
        """Convert to exception for raise-based code."""
        return NotACollectionError(self.operation, self.type_name)


class NotACollectionError(CollectionError, TypeError):
    """Value lacks the Collection capability - exception variant."""

    def __init__(self, operation: str, type_name: str) -> None:
        self.operation = operation
        self.type_name = type_name
        super().__init__(f'{operation}() expects a Collection, got {type_name}', code='NOT_A_COLLECTION')

    @classmethod
    def for_value(cls, operation: str, value: Any) -> NotACollectionError:
        """Build the error for an offending value."""
        return cls(operation, type(value).__name__)

    def to_struct(self) -> NotACollection:
        """Convert to struct for Result-based code."""
        return NotACollection(self.operation, self.type_name)


# --- Lookup Errors ---


class MissingMember(msgspec.Struct, frozen=True, gc=False):
    """Value has no such key, attribute or method - struct variant."""

    member: str
    type_name: str

    def to_exception(self) -> MissingMemberError:
        """Convert to exception for raise-based code."""
        return MissingMemberError(self.member, self.type_name)


class MissingMemberError(CollectionError, LookupError):
    """Value has no such key, attribute or method - exception variant."""

    def __init__(self, member: str, type_name: str) -> None:
        self.member = member
        self.type_name = type_name
        super().__init__(f'{type_name} value has no member {member!r}', code='MISSING_MEMBER')

    @classmethod
    def for_value(cls, member: Any, value: Any) -> MissingMemberError:
        """Build the error for an offending value."""
        return cls(str(member), type(value).__name__)

    def to_struct(self) -> MissingMember:
        """Convert to struct for Result-based code."""
        return MissingMember(self.member, self.type_name)
