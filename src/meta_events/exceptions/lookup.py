"""Lookup-time exceptions: raised when resolving an event to fire.

These reject a single call. The registry itself is unaffected.
"""

from datetime import datetime
from typing import List, Optional

from .base import MetaEventsError


class EventLookupError(MetaEventsError):
    """Base class for errors raised while resolving an event."""

    pass


class UnknownVersionError(EventLookupError):
    """Raised when a version number is not declared in the registry."""

    def __init__(self, number: int, known: Optional[List[int]] = None):
        details = {"version": str(number)}
        if known is not None:
            details["known"] = ", ".join(str(n) for n in known) or "none"
        super().__init__(f"Unknown version: {number}", details=details)
        self.number = number
        self.known = known or []


class UnknownCategoryError(EventLookupError):
    """Raised when a category is not declared in a version."""

    def __init__(self, version: int, name: str):
        super().__init__(
            f"Unknown category {name!r} in version {version}",
            details={"version": str(version), "category": name},
        )
        self.version = version
        self.name = name


class UnknownEventError(EventLookupError):
    """Raised when an event is not declared in a category."""

    def __init__(self, version: int, category: str, name: str):
        super().__init__(
            f"Unknown event {name!r} in category {category!r}",
            details={"version": str(version), "category": category, "event": name},
        )
        self.version = version
        self.category = category
        self.name = name


class RetiredEventError(EventLookupError):
    """Raised when firing an event whose event, category or version is retired.

    Attributes:
        qualified_name: External name the event would have been sent under
        scope: Which node carried the retirement: "event", "category" or "version"
        retired_at: The retirement timestamp recorded on that node
    """

    def __init__(self, qualified_name: str, scope: str, retired_at: datetime):
        super().__init__(
            f"Event {qualified_name} cannot be fired: its {scope} was retired",
            details={"scope": scope, "retired_at": retired_at.isoformat()},
        )
        self.qualified_name = qualified_name
        self.scope = scope
        self.retired_at = retired_at
