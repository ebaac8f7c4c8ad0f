"""Root of the meta-events exception tree."""

from typing import Any, Dict, Optional


class MetaEventsError(Exception):
    """Base exception for all meta-events errors.

    ``details`` holds the structured context of the failure (version number,
    category, key...). Values are stored as text so the error renders and
    logs the same way whatever the caller passed in.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {k: str(v) for k, v in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({rendered})"
