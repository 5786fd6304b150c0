"""Pytest configuration for klaw-collections tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from klaw_collections import ArrayCollection, reset_config

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Reset library configuration and its environment around each test."""
    for name in ('KLAW_COLLECTIONS_LOG_LEVEL', 'KLAW_COLLECTIONS_JSON_LOGS', 'KLAW_COLLECTIONS_MEMOIZE_VIEWS'):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def mixed() -> ArrayCollection:
    """Collection with both int and str keys."""
    return ArrayCollection.create({0: 'a', 'x': 'b'})


@pytest.fixture
def other_mixed() -> ArrayCollection:
    """Second mixed-key collection colliding on both keys of `mixed`."""
    return ArrayCollection.create({0: 'c', 'x': 'd'})
