"""Immutable event definition tree: Registry -> Version -> Category -> Event.

Nodes are created only by :class:`~meta_events.definition.builder.DefinitionsBuilder`
and never change afterwards, so a registry can be shared freely between
threads once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional

from ..exceptions import (
    RetiredEventError,
    UnknownCategoryError,
    UnknownEventError,
    UnknownVersionError,
)

_EMPTY: Mapping = MappingProxyType({})


def qualified_event_name(global_prefix: str, version: int, category: str, event: str) -> str:
    """External event name: ``{prefix}{version}_{category}_{event}``."""
    return f"{global_prefix}{version}_{category}_{event}"


@dataclass(frozen=True)
class Note:
    """A timestamped, attributed entry in an event's change log."""

    at: datetime
    author: str
    text: str


@dataclass(frozen=True)
class Event:
    """A single declared event.

    Attributes:
        name: Identifier, unique within its category
        introduced: When the event was introduced
        description: What the event means (never empty)
        qualified_name: External name sent to sinks
        retired_at: Set when the event may no longer be fired
        notes: Change log, in declaration order
    """

    name: str
    introduced: datetime
    description: str
    qualified_name: str
    retired_at: Optional[datetime] = None
    notes: tuple[Note, ...] = ()

    @property
    def is_retired(self) -> bool:
        return self.retired_at is not None


@dataclass(frozen=True)
class Category:
    """A named group of events within a version."""

    name: str
    retired_at: Optional[datetime] = None
    events: Mapping[str, Event] = field(default_factory=lambda: _EMPTY)

    @property
    def is_retired(self) -> bool:
        return self.retired_at is not None

    def event(self, name: str, version: int = 0) -> Event:
        try:
            return self.events[name]
        except KeyError:
            raise UnknownEventError(version, self.name, name) from None


@dataclass(frozen=True)
class Version:
    """A numbered namespace of categories.

    ``prefix`` is the part of every qualified name contributed by the
    registry prefix and this version's number.
    """

    number: int
    introduced: datetime
    prefix: str
    retired_at: Optional[datetime] = None
    categories: Mapping[str, Category] = field(default_factory=lambda: _EMPTY)

    @property
    def is_retired(self) -> bool:
        return self.retired_at is not None

    def category(self, name: str) -> Category:
        try:
            return self.categories[name]
        except KeyError:
            raise UnknownCategoryError(self.number, name) from None

    def fetch_event(self, category_name: str, event_name: str) -> tuple[Event, str]:
        """Resolve an event in this version, refusing retired ones.

        Retirement is checked on the event, then its category, then this
        version. Any retired-at value counts, whatever its date.
        """
        category = self.category(category_name)
        event = category.event(event_name, self.number)
        name = event.qualified_name
        if event.retired_at is not None:
            raise RetiredEventError(name, "event", event.retired_at)
        if category.retired_at is not None:
            raise RetiredEventError(name, "category", category.retired_at)
        if self.retired_at is not None:
            raise RetiredEventError(name, "version", self.retired_at)
        return event, name


@dataclass(frozen=True)
class Registry:
    """The complete, immutable set of event definitions."""

    global_prefix: str = ""
    versions: Mapping[int, Version] = field(default_factory=lambda: _EMPTY)

    def version(self, number: int) -> Version:
        try:
            return self.versions[number]
        except (KeyError, TypeError):
            raise UnknownVersionError(number, list(self.versions)) from None

    @property
    def latest_version(self) -> Optional[Version]:
        if not self.versions:
            return None
        return self.versions[max(self.versions)]

    def fetch_event(
        self, version_number: int, category_name: str, event_name: str
    ) -> tuple[Event, str]:
        return self.version(version_number).fetch_event(category_name, event_name)

    def iter_events(self):
        """Yield ``(version, category, event)`` for every declared event."""
        for version in self.versions.values():
            for category in version.categories.values():
                for event in category.events.values():
                    yield version, category, event


def resolve_event(
    registry: Registry, version_number: int, category_name: str, event_name: str
) -> tuple[Event, str]:
    """Look up an event and return it with its qualified name.

    Pure: never logs and never mutates.

    Raises:
        UnknownVersionError, UnknownCategoryError, UnknownEventError:
            when a path segment is not declared.
        RetiredEventError: when the event, its category or its version
            is retired.
    """
    return registry.fetch_event(version_number, category_name, event_name)
