"""Build-time exceptions: raised while the definitions builder runs.

Any of these aborts the whole build; a registry is either fully valid or
never produced.
"""

from typing import Any, Optional

from .base import MetaEventsError


class DefinitionError(MetaEventsError):
    """Base class for errors raised while building event definitions."""

    pass


class DuplicateVersionError(DefinitionError):
    """Raised when a version number is declared twice."""

    def __init__(self, number: int):
        super().__init__(
            f"Version {number} is already declared",
            details={"version": str(number)},
        )
        self.number = number


class DuplicateCategoryError(DefinitionError):
    """Raised when a category name is declared twice within one version."""

    def __init__(self, version: int, name: str):
        super().__init__(
            f"Category {name!r} is already declared in version {version}",
            details={"version": str(version), "category": name},
        )
        self.version = version
        self.name = name


class DuplicateEventError(DefinitionError):
    """Raised when an event name is declared twice within one category."""

    def __init__(self, version: int, category: str, name: str):
        super().__init__(
            f"Event {name!r} is already declared in category {category!r}",
            details={"version": str(version), "category": category, "event": name},
        )
        self.version = version
        self.category = category
        self.name = name


class MissingDescriptionError(DefinitionError):
    """Raised when an event is declared without a description."""

    def __init__(self, category: str, name: str):
        super().__init__(
            f"Event {name!r} in category {category!r} must have a description",
            details={"category": category, "event": name},
        )
        self.category = category
        self.name = name


class InvalidTimestampError(DefinitionError):
    """Raised when a timestamp-like value cannot be parsed."""

    def __init__(self, field_name: str, value: Any, reason: Optional[str] = None):
        details = {"field": field_name, "value": repr(value)}
        if reason:
            details["reason"] = reason
        super().__init__(f"Invalid timestamp for {field_name}: {value!r}", details=details)
        self.field_name = field_name
        self.value = value
        self.reason = reason


class InvalidDefinitionError(DefinitionError):
    """Raised when a definition is malformed (bad name, bad document shape...)."""

    def __init__(self, reason: str, location: Optional[str] = None):
        details = {"reason": reason}
        if location:
            details["location"] = location
        super().__init__(f"Invalid event definition: {reason}", details=details)
        self.reason = reason
        self.location = location


class InvalidScopeError(DefinitionError):
    """Raised when an instruction is given in a scope where it is not allowed."""

    def __init__(self, instruction: str, scope: Optional[str], reason: Optional[str] = None):
        scope_name = scope or "top level"
        details = {"instruction": instruction, "scope": scope_name}
        if reason:
            details["reason"] = reason
        super().__init__(f"Cannot {instruction} at {scope_name}", details=details)
        self.instruction = instruction
        self.scope = scope


class InvalidNoteContextError(InvalidScopeError):
    """Raised when a note is added outside of an event scope."""

    def __init__(self, scope: Optional[str]):
        super().__init__("add a note", scope, reason="notes belong to events")
