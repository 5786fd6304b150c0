"""Typeclass utilities for ad-hoc polymorphism."""

from klaw_collections.typeclass.core import NoInstanceError, TypeClass, typeclass

__all__ = [
    'NoInstanceError',
    'TypeClass',
    'typeclass',
]
