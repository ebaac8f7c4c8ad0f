"""Exception hierarchy for meta-events."""

from .base import MetaEventsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidSinkError,
    NoDefaultRegistryError,
)
from .definition import (
    DefinitionError,
    DuplicateCategoryError,
    DuplicateEventError,
    DuplicateVersionError,
    InvalidDefinitionError,
    InvalidNoteContextError,
    InvalidScopeError,
    InvalidTimestampError,
    MissingDescriptionError,
)
from .lookup import (
    EventLookupError,
    RetiredEventError,
    UnknownCategoryError,
    UnknownEventError,
    UnknownVersionError,
)
from .properties import (
    PropertyError,
    PropertyExportError,
    UnsupportedPropertyTypeError,
)

__all__ = [
    "MetaEventsError",
    "DefinitionError",
    "DuplicateVersionError",
    "DuplicateCategoryError",
    "DuplicateEventError",
    "MissingDescriptionError",
    "InvalidTimestampError",
    "InvalidDefinitionError",
    "InvalidScopeError",
    "InvalidNoteContextError",
    "EventLookupError",
    "UnknownVersionError",
    "UnknownCategoryError",
    "UnknownEventError",
    "RetiredEventError",
    "PropertyError",
    "PropertyExportError",
    "UnsupportedPropertyTypeError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidSinkError",
    "NoDefaultRegistryError",
]
