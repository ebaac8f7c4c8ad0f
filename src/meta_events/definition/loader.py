"""Load event definitions from a TOML document.

Document layout::

    global_prefix = "ab"

    [[versions]]
    number = 1
    introduced = 2014-02-04

    [[versions.categories]]
    name = "user"

    [[versions.categories.events]]
    name = "signed_up"
    introduced = 2014-02-04
    description = "A user created a new account."
    notes = [{ at = 2014-03-01, author = "jdoe", text = "Also fires for invites." }]

Every table is walked in document order and replayed as builder
instructions, so all of the builder's checks apply.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Union

from ..exceptions import InvalidDefinitionError
from .builder import DefinitionsBuilder
from .models import Registry

logger = logging.getLogger(__name__)

_ROOT_KEYS = {"global_prefix", "versions"}
_VERSION_KEYS = {"number", "introduced", "retired_at", "categories"}
_CATEGORY_KEYS = {"name", "retired_at", "events"}
_EVENT_KEYS = {"name", "introduced", "description", "retired_at", "notes"}
_NOTE_KEYS = {"at", "author", "text"}

DefinitionsSource = Union[str, Path, Mapping[str, Any]]


def load_definitions(source: DefinitionsSource) -> Registry:
    """Build a Registry from a TOML file path or an already-parsed mapping.

    Raises:
        InvalidDefinitionError: if the file is missing, unparsable or has
            the wrong shape
        DefinitionError: any builder failure (duplicates, bad timestamps...)
    """
    if isinstance(source, Mapping):
        document = source
    else:
        document = read_definitions_file(Path(source))

    builder = DefinitionsBuilder()
    apply_document(builder, document)
    return builder.build()


def read_definitions_file(path: Path) -> dict:
    """Parse a TOML definitions file."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    if not path.is_file():
        raise InvalidDefinitionError("definitions file not found", location=str(path))

    logger.info("Loading event definitions from %s", path)
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise InvalidDefinitionError(f"invalid TOML: {e}", location=str(path)) from e


def apply_document(builder: DefinitionsBuilder, document: Mapping[str, Any]) -> None:
    """Replay a parsed definitions document onto ``builder``."""
    _check_keys(document, _ROOT_KEYS, "document")
    if "global_prefix" in document:
        builder.set_global_prefix(document["global_prefix"])

    for i, version in enumerate(_table_list(document, "versions", "document")):
        where = f"versions[{i}]"
        _check_keys(version, _VERSION_KEYS, where)
        builder.open_version(
            _required(version, "number", where),
            _required(version, "introduced", where),
            retired_at=version.get("retired_at"),
        )
        for j, category in enumerate(_table_list(version, "categories", where)):
            cwhere = f"{where}.categories[{j}]"
            _check_keys(category, _CATEGORY_KEYS, cwhere)
            builder.open_category(
                _required(category, "name", cwhere),
                retired_at=category.get("retired_at"),
            )
            for k, event in enumerate(_table_list(category, "events", cwhere)):
                _apply_event(builder, event, f"{cwhere}.events[{k}]")
            builder.close_scope()
        builder.close_scope()


def _apply_event(builder: DefinitionsBuilder, event: Mapping[str, Any], where: str) -> None:
    _check_keys(event, _EVENT_KEYS, where)
    builder.declare_event(
        _required(event, "name", where),
        _required(event, "introduced", where),
        event.get("description", ""),
        retired_at=event.get("retired_at"),
    )
    for n, note in enumerate(_table_list(event, "notes", where)):
        nwhere = f"{where}.notes[{n}]"
        _check_keys(note, _NOTE_KEYS, nwhere)
        builder.add_note(
            _required(note, "at", nwhere),
            _required(note, "author", nwhere),
            _required(note, "text", nwhere),
        )
    builder.close_scope()


# ---------------------------------------------------------------------------
# Shape checks
# ---------------------------------------------------------------------------


def _check_keys(table: Any, allowed: set, where: str) -> None:
    if not isinstance(table, Mapping):
        raise InvalidDefinitionError(f"expected a table, got {type(table).__name__}", location=where)
    unknown = sorted(str(k) for k in table if k not in allowed)
    if unknown:
        raise InvalidDefinitionError(f"unknown keys: {', '.join(unknown)}", location=where)


def _required(table: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in table:
        raise InvalidDefinitionError(f"missing required key {key!r}", location=where)
    return table[key]


def _table_list(table: Mapping[str, Any], key: str, where: str) -> list:
    value = table.get(key, [])
    if not isinstance(value, list):
        raise InvalidDefinitionError(f"{key!r} must be an array of tables", location=where)
    return value
