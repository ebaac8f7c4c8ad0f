"""Event definitions: the immutable registry and the builder that produces it."""

from .builder import DefinitionsBuilder
from .loader import apply_document, load_definitions
from .models import (
    Category,
    Event,
    Note,
    Registry,
    Version,
    qualified_event_name,
    resolve_event,
)
from .timestamps import parse_timestamp

__all__ = [
    "DefinitionsBuilder",
    "load_definitions",
    "apply_document",
    "Registry",
    "Version",
    "Category",
    "Event",
    "Note",
    "qualified_event_name",
    "resolve_event",
    "parse_timestamp",
]
