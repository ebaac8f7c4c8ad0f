"""Property expansion: merge implicit/explicit properties and flatten them."""

from .expander import (
    SEPARATOR,
    Exportable,
    expand_properties,
    flatten_properties,
    property_key,
)
from .scalars import Scalar, ScalarKind, is_scalar, normalize_scalar, scalar_kind

__all__ = [
    "expand_properties",
    "flatten_properties",
    "property_key",
    "Exportable",
    "SEPARATOR",
    "Scalar",
    "ScalarKind",
    "scalar_kind",
    "is_scalar",
    "normalize_scalar",
]
