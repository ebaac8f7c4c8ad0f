"""Configuration exceptions: settings, sinks and process defaults."""

from typing import Any

from .base import MetaEventsError


class ConfigurationError(MetaEventsError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidSinkError(ConfigurationError):
    """Raised when a sink does not expose a callable ``track``."""

    def __init__(self, sink: Any):
        super().__init__(
            f"Sink {sink!r} has no callable track()",
            details={"type": type(sink).__name__},
        )
        self.sink = sink


class NoDefaultRegistryError(ConfigurationError):
    """Raised when a tracker needs the default registry but none is configured."""

    def __init__(self):
        super().__init__(
            "No event registry given and no default registry configured",
            details={"hint": "call meta_events.configure_defaults(registry=...)"},
        )
