"""Tracker: fire declared events with flattened properties.

A tracker is bound at construction to one registry version, a set of
implicit properties and a list of sinks, and is effectively immutable after
that. Create one per logical scope (a request, a job run) and fire events
through it::

    tracker = Tracker(1, implicit_properties={"plan": "pro"}, sinks=[sink])
    tracker.event("user", "signed_up", {"user": {"age": 27}})
    # sink.track("ab1_user_signed_up", {"plan": "pro", "user_age": 27})
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from . import defaults
from .definition import Registry, Version
from .exceptions import UnknownVersionError
from .properties import Scalar, expand_properties
from .sinks import Sink, dispatch, validate_sinks

logger = logging.getLogger(__name__)


class Tracker:
    """Runtime facade over one registry version."""

    def __init__(
        self,
        version: Optional[int] = None,
        *,
        registry: Optional[Registry] = None,
        implicit_properties: Optional[Mapping[str, Any]] = None,
        sinks: Optional[Iterable[Sink]] = None,
        distinct_id: Any = None,
        ip: Optional[str] = None,
    ):
        """
        Args:
            version: Version number to bind to. Defaults to the configured
                default version, else the highest declared version.
            registry: Registry to resolve events in. Defaults to the
                process default registry.
            implicit_properties: Properties added to every event; explicit
                properties win on top-level key collision.
            sinks: Sinks to dispatch to. Defaults to a snapshot of the
                process default sinks.
            distinct_id: Added to implicit properties as ``distinct_id``.
            ip: Added to implicit properties as ``ip``.

        Raises:
            NoDefaultRegistryError: no registry given and none configured
            UnknownVersionError: the version is not declared
            InvalidSinkError: a sink has no callable ``track``
        """
        self._registry = registry if registry is not None else defaults.default_registry()
        self._version = self._bind_version(version)

        implicit: dict[str, Any] = {}
        if distinct_id is not None:
            implicit["distinct_id"] = distinct_id
        if ip is not None:
            implicit["ip"] = ip
        implicit.update(implicit_properties or {})
        self._implicit = MappingProxyType(implicit)

        self._sinks = validate_sinks(sinks) if sinks is not None else defaults.default_sinks()

    def _bind_version(self, number: Optional[int]) -> Version:
        if number is None:
            number = defaults.default_version()
        if number is None:
            latest = self._registry.latest_version
            if latest is None:
                raise UnknownVersionError(0, [])
            return latest
        return self._registry.version(number)

    # ── Read-only state ───────────────────────────────────────────

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def version(self) -> Version:
        return self._version

    @property
    def implicit_properties(self) -> Mapping[str, Any]:
        return self._implicit

    @property
    def sinks(self) -> tuple[Sink, ...]:
        return self._sinks

    # ── Operations ────────────────────────────────────────────────

    def event(
        self,
        category_name: str,
        event_name: str,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Fire an event to every sink.

        Lookup and expansion run before any sink is called, so a failure
        there dispatches nothing. Sinks are called in order; the first sink
        that raises aborts the dispatch and its exception propagates as is.

        Raises:
            UnknownCategoryError, UnknownEventError: undeclared event
            RetiredEventError: event, category or version is retired
            PropertyExportError, UnsupportedPropertyTypeError: bad properties
        """
        _, name = self._version.fetch_event(category_name, event_name)
        flat = expand_properties(self._implicit, properties)
        logger.debug("Dispatching %s to %d sink(s)", name, len(self._sinks))
        dispatch(self._sinks, name, flat)

    def effective_properties(self, properties: Optional[Mapping[str, Any]] = None) -> dict[str, Scalar]:
        """Flattened implicit + explicit properties, without firing anything."""
        return expand_properties(self._implicit, properties)

    def __repr__(self) -> str:
        return (
            f"Tracker(version={self._version.number}, "
            f"implicit={list(self._implicit)}, sinks={len(self._sinks)})"
        )
