"""Flatten nested event properties into a single-level scalar map.

Merging happens at the top level only: an explicit key replaces the implicit
value under the same key wholesale, sub-structure included. Nested mappings
are then flattened by joining keys with ``_``, outermost first::

    >>> expand_properties({"x": 1}, {"user": {"age": 27, "plan": {"tier": "pro"}}})
    {'x': 1, 'user_age': 27, 'user_plan_tier': 'pro'}

Traversal follows insertion order (merge source first, then each nested
mapping depth first), and when two paths flatten to the same key the later
one wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from ..exceptions import PropertyExportError, UnsupportedPropertyTypeError
from .scalars import Scalar, normalize_scalar, scalar_kind

SEPARATOR = "_"


@runtime_checkable
class Exportable(Protocol):
    """An object that can describe itself as event properties."""

    def to_event_properties(self) -> Mapping[str, Any]:
        ...


def expand_properties(
    implicit: Optional[Mapping[Any, Any]] = None,
    explicit: Optional[Mapping[Any, Any]] = None,
) -> dict[str, Scalar]:
    """Merge implicit and explicit properties and flatten the result.

    Args:
        implicit: Ambient properties (e.g. bound to a tracker)
        explicit: Properties given for one event; win on key collision

    Returns:
        A new dict of flattened key -> scalar value. Inputs are not mutated.

    Raises:
        PropertyExportError: if ``to_event_properties()`` raises or returns
            something other than a mapping
        UnsupportedPropertyTypeError: for sequences and other non-scalar,
            non-mapping, non-exportable values
    """
    # key -> (value, id of the source mapping it came from)
    merged: dict[str, tuple[Any, int]] = {}
    for source in (implicit, explicit):
        if source:
            for key, value in source.items():
                merged[property_key(key)] = (value, id(source))

    out: dict[str, Scalar] = {}
    for key, (value, source_id) in merged.items():
        _expand_into(out, key, value, frozenset((source_id,)))
    return out


def flatten_properties(properties: Mapping[Any, Any]) -> dict[str, Scalar]:
    """Flatten a single property mapping."""
    return expand_properties(None, properties)


def property_key(key: Any) -> str:
    if isinstance(key, (str, Enum)):
        return normalize_scalar(key)
    return str(key)


def _expand_into(out: dict[str, Scalar], key: str, value: Any, path: frozenset) -> None:
    """Flatten ``value`` under ``key``.

    ``path`` holds the ids of the mappings and exportables currently being
    expanded; meeting one of them again means the structure contains itself.
    """
    value = normalize_scalar(value)
    if scalar_kind(value) is not None:
        out[key] = value
        return

    exported = False
    export = getattr(value, "to_event_properties", None)
    if callable(export) and not isinstance(value, type):
        if id(value) in path:
            raise PropertyExportError(key, ValueError("exported properties contain the object itself"))
        path = path | {id(value)}
        try:
            value = export()
        except Exception as e:
            raise PropertyExportError(key, e) from e
        if not isinstance(value, Mapping):
            raise PropertyExportError(
                key, TypeError(f"to_event_properties() returned {type(value).__name__}, not a mapping")
            )
        exported = True

    if isinstance(value, Mapping):
        if id(value) in path:
            if exported:
                raise PropertyExportError(key, ValueError("exported properties contain themselves"))
            raise UnsupportedPropertyTypeError(key, type(value), reason="mapping contains itself")
        path = path | {id(value)}
        for inner_key, inner_value in value.items():
            _expand_into(out, f"{key}{SEPARATOR}{property_key(inner_key)}", inner_value, path)
        return

    raise UnsupportedPropertyTypeError(key, type(value))
