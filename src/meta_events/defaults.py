"""Process-wide defaults: one registry, one sink list, one default version.

Set these once at startup, before the first event is fired. Trackers read a
snapshot at construction, so changing the defaults later only affects
trackers created afterwards. ``reset_defaults()`` exists for test isolation.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .definition import Registry, load_definitions
from .exceptions import InvalidConfigError, NoDefaultRegistryError
from .sinks import LoggingSink, Sink, validate_sink, validate_sinks

if TYPE_CHECKING:
    from .config import MetaEventsConfig

logger = logging.getLogger(__name__)

_UNSET: Any = object()

_lock = threading.Lock()
_registry: Optional[Registry] = None
_sinks: tuple[Sink, ...] = ()
_version: Optional[int] = None


def configure_defaults(
    registry: Optional[Registry] = _UNSET,
    sinks: Optional[Iterable[Sink]] = _UNSET,
    default_version: Optional[int] = _UNSET,
) -> None:
    """Replace any of the process defaults. Omitted arguments are left as is."""
    global _registry, _sinks, _version
    if default_version is not _UNSET and default_version is not None:
        if isinstance(default_version, bool) or not isinstance(default_version, int) or default_version < 1:
            raise InvalidConfigError("default_version", default_version, "must be a positive integer")
    new_sinks = validate_sinks(sinks or ()) if sinks is not _UNSET else _UNSET
    with _lock:
        if registry is not _UNSET:
            _registry = registry
        if new_sinks is not _UNSET:
            _sinks = new_sinks
        if default_version is not _UNSET:
            _version = default_version


def add_default_sink(sink: Sink) -> None:
    global _sinks
    validate_sink(sink)
    with _lock:
        _sinks = _sinks + (sink,)


def default_registry() -> Registry:
    registry = _registry
    if registry is None:
        raise NoDefaultRegistryError()
    return registry


def has_default_registry() -> bool:
    return _registry is not None


def default_sinks() -> tuple[Sink, ...]:
    return _sinks


def default_version() -> Optional[int]:
    return _version


def reset_defaults() -> None:
    """Forget every default. Intended for tests."""
    global _registry, _sinks, _version
    with _lock:
        _registry = None
        _sinks = ()
        _version = None


def configure_from_config(config: "MetaEventsConfig") -> Optional[Registry]:
    """Install defaults described by a loaded configuration.

    Loads ``config.definitions_file`` (when set) as the default registry and
    installs a :class:`LoggingSink` when ``config.log_events`` is on.

    Returns:
        The loaded registry, or None if no definitions file is configured.
    """
    registry = None
    if config.definitions_file:
        registry = load_definitions(config.definitions_file)
        configure_defaults(registry=registry)

    sinks: list[Sink] = []
    if config.log_events:
        sinks.append(LoggingSink(level=logging.getLevelName(config.log_level)))
    configure_defaults(sinks=sinks, default_version=config.default_version)

    logger.debug(
        "Configured defaults: registry=%s, sinks=%d, default_version=%s",
        "loaded" if registry is not None else "unchanged",
        len(sinks),
        config.default_version,
    )
    return registry
