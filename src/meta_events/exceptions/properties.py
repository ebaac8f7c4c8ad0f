"""Expansion-time exceptions: raised while flattening event properties."""

from typing import Optional

from .base import MetaEventsError


class PropertyError(MetaEventsError):
    """Base class for errors raised while expanding properties."""

    pass


class PropertyExportError(PropertyError):
    """Raised when an object's ``to_event_properties()`` fails."""

    def __init__(self, key: str, error: BaseException):
        super().__init__(
            f"Exporting event properties for {key!r} failed",
            details={"key": key, "error": f"{type(error).__name__}: {error}"},
        )
        self.key = key
        self.error = error


class UnsupportedPropertyTypeError(PropertyError):
    """Raised when a property value is neither scalar, mapping nor exportable,
    or when a mapping nests itself."""

    def __init__(self, key: str, value_type: type, reason: Optional[str] = None):
        details = {"key": key, "type": value_type.__name__}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Unsupported value for property {key!r}: {value_type.__name__}",
            details=details,
        )
        self.key = key
        self.value_type = value_type
        self.reason = reason
