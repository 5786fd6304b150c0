"""Library configuration: CollectionsConfig and initialization."""

from __future__ import annotations

import os
from dataclasses import dataclass

from klaw_collections._logging import configure_logging, get_logger

__all__ = [
    'CollectionsConfig',
    'get_config',
    'init',
    'reset_config',
]

logger = get_logger(__name__)

_TRUE_VALUES = frozenset({'1', 'true', 'yes', 'on'})
_FALSE_VALUES = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class CollectionsConfig:
    """Configuration for klaw-collections.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Render logs as JSON (True) or console text (False).
        memoize_views: Cache the forced collection on each lazy view.
    """

    log_level: str | None = None
    json_logs: bool = True
    memoize_views: bool = False


# Global configuration (set by init())
_config: CollectionsConfig | None = None


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.environ.get(name, '').strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    logger.warning('unknown_env_flag', variable=name, value=raw, default=default)
    return default


def init(
    log_level: str | None = None,
    json_logs: bool | None = None,
    memoize_views: bool | None = None,
) -> CollectionsConfig:
    """Initialize klaw-collections with the given configuration.

    Unset arguments are read from ``KLAW_COLLECTIONS_LOG_LEVEL``,
    ``KLAW_COLLECTIONS_JSON_LOGS`` and ``KLAW_COLLECTIONS_MEMOIZE_VIEWS``.

    Returns:
        The CollectionsConfig that was set.

    Example:
        ```python
        from klaw_collections import init

        init(log_level='DEBUG', memoize_views=True)
        ```
    """
    global _config  # noqa: PLW0603

    if log_level is None:
        log_level = os.environ.get('KLAW_COLLECTIONS_LOG_LEVEL') or None
    if json_logs is None:
        json_logs = _env_flag('KLAW_COLLECTIONS_JSON_LOGS', True)
    if memoize_views is None:
        memoize_views = _env_flag('KLAW_COLLECTIONS_MEMOIZE_VIEWS', False)

    _config = CollectionsConfig(
        log_level=log_level,
        json_logs=json_logs,
        memoize_views=memoize_views,
    )

    if log_level is not None:
        configure_logging(log_level, json_output=json_logs)

    return _config


def get_config() -> CollectionsConfig:
    """Get the current configuration, initializing defaults on first use."""
    if _config is None:
        return init()
    return _config


def reset_config() -> None:
    """Forget the current configuration; the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
