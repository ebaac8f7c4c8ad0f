"""Scalar property values: the only leaf types a sink ever receives."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

Scalar = Union[None, bool, int, float, Decimal, str, datetime, date, time]


class ScalarKind(Enum):
    """Kinds of scalar property values."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    TIMESTAMP = "timestamp"


def scalar_kind(value: Any) -> Optional[ScalarKind]:
    """Classify ``value``, or return None if it is not a scalar.

    Enum members are not scalars here; :func:`normalize_scalar` turns them
    into text first.
    """
    if value is None:
        return ScalarKind.NULL
    if isinstance(value, Enum):
        return None
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ScalarKind.BOOLEAN
    if isinstance(value, int):
        return ScalarKind.INTEGER
    if isinstance(value, float):
        return ScalarKind.FLOAT
    if isinstance(value, Decimal):
        return ScalarKind.DECIMAL
    if isinstance(value, str):
        return ScalarKind.TEXT
    if isinstance(value, (datetime, date, time)):
        return ScalarKind.TIMESTAMP
    return None


def is_scalar(value: Any) -> bool:
    return scalar_kind(normalize_scalar(value)) is not None


def normalize_scalar(value: Any) -> Any:
    """Normalize text-like atomic values to plain ``str``.

    ``str`` subclasses become ``str``; enum members become their value when
    it is text, else their name. Everything else is returned unchanged.
    """
    if isinstance(value, Enum):
        return str(value.value) if isinstance(value.value, str) else value.name
    if isinstance(value, str) and type(value) is not str:
        return str.__str__(value)
    return value
