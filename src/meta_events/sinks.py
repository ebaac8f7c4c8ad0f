"""Sinks: collaborators that receive fully qualified, flattened events.

A sink is anything with ``track(event_name, properties)``. Vendor clients
usually qualify as-is or with a thin adapter; this module ships two sinks
for tests and local debugging.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence, runtime_checkable

from .exceptions import InvalidSinkError
from .logging_config import get_logger
from .properties import Scalar

logger = get_logger("sinks")


@runtime_checkable
class Sink(Protocol):
    """Receives one event at a time. Must tolerate concurrent calls."""

    def track(self, event_name: str, properties: Mapping[str, Scalar]) -> None:
        ...


def validate_sink(sink: Any) -> Sink:
    if not callable(getattr(sink, "track", None)):
        raise InvalidSinkError(sink)
    return sink


def validate_sinks(sinks: Iterable[Any]) -> tuple[Sink, ...]:
    return tuple(validate_sink(s) for s in sinks)


def dispatch(sinks: Sequence[Sink], event_name: str, properties: Mapping[str, Scalar]) -> None:
    """Call ``track`` on each sink in order.

    First failure aborts: an exception from a sink propagates unchanged and
    the sinks after it are not called. Each sink gets its own copy of the
    properties so one sink cannot alter what the next one sees.
    """
    for sink in sinks:
        sink.track(event_name, dict(properties))


@dataclass(frozen=True)
class TrackedEvent:
    event_name: str
    properties: dict[str, Scalar]


class RecordingSink:
    """Keeps every tracked event in memory, in arrival order."""

    def __init__(self):
        self._lock = threading.Lock()
        self._events: list[TrackedEvent] = []

    def track(self, event_name: str, properties: Mapping[str, Scalar]) -> None:
        with self._lock:
            self._events.append(TrackedEvent(event_name, dict(properties)))

    @property
    def events(self) -> list[TrackedEvent]:
        with self._lock:
            return list(self._events)

    def named(self, event_name: str) -> list[TrackedEvent]:
        return [e for e in self.events if e.event_name == event_name]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class LoggingSink:
    """Mirrors events to a logger, one line per event."""

    def __init__(self, logger_: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger_ or logger
        self.level = level

    def track(self, event_name: str, properties: Mapping[str, Scalar]) -> None:
        rendered = ", ".join(f"{k}={v!r}" for k, v in properties.items())
        self.logger.log(self.level, "event %s {%s}", event_name, rendered)
