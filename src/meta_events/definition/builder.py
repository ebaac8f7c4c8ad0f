"""Definitions builder: turns declare/retire/note instructions into a Registry.

The builder keeps a stack of open scopes (version, category, event). Each
instruction is checked against the innermost scope and the draft tree; the
first failure poisons the builder so a partially declared tree can never be
built.

Two ways to drive it:

    builder = DefinitionsBuilder()
    builder.set_global_prefix("ab")
    builder.open_version(1, "2014-02-04")
    builder.open_category("user")
    builder.declare_event("signed_up", "2014-02-04", "User created an account")
    builder.add_note("2014-03-01", "jdoe", "Also fires for invites")
    builder.close_scope()
    ...

or with context managers:

    with builder.version(1, "2014-02-04"):
        with builder.category("user"):
            builder.event("signed_up", "2014-02-04", "User created an account")
            with builder.event("logged_in", "2014-02-04", "User logged in"):
                builder.add_note("2014-03-01", "jdoe", "Counts SSO logins too")
    registry = builder.build()
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from functools import wraps
from types import MappingProxyType
from typing import Any, Optional, Union

from ..exceptions import (
    DefinitionError,
    DuplicateCategoryError,
    DuplicateEventError,
    DuplicateVersionError,
    InvalidDefinitionError,
    InvalidNoteContextError,
    InvalidScopeError,
    MissingDescriptionError,
)
from .models import Category, Event, Note, Registry, Version, qualified_event_name
from .timestamps import parse_timestamp

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


# ---------------------------------------------------------------------------
# Mutable drafts, frozen by build()
# ---------------------------------------------------------------------------


@dataclass
class _EventDraft:
    name: str
    introduced: datetime
    description: str
    retired_at: Optional[datetime] = None
    notes: list[Note] = field(default_factory=list)
    kind: str = "event"


@dataclass
class _CategoryDraft:
    name: str
    version_number: int
    retired_at: Optional[datetime] = None
    events: dict[str, _EventDraft] = field(default_factory=dict)
    kind: str = "category"


@dataclass
class _VersionDraft:
    number: int
    introduced: datetime
    retired_at: Optional[datetime] = None
    categories: dict[str, _CategoryDraft] = field(default_factory=dict)
    kind: str = "version"


_Draft = Union[_VersionDraft, _CategoryDraft, _EventDraft]


def _instruction(method):
    """Poison the builder if the wrapped instruction fails."""

    @wraps(method)
    def wrapper(self: "DefinitionsBuilder", *args, **kwargs):
        self._ensure_usable()
        try:
            return method(self, *args, **kwargs)
        except DefinitionError:
            self._failed = True
            raise

    return wrapper


class _Scope:
    """Context manager returned by the sugar methods.

    The node is already declared (and its scope closed) when this object is
    created; entering re-opens it so notes and children can be added, and
    leaving closes it again. A scope can be entered once, right where it was
    declared and before anything else is declared.
    """

    def __init__(self, builder: "DefinitionsBuilder", draft: _Draft, parent: Optional[_Draft]):
        self._builder = builder
        self._draft = draft
        self._parent = parent
        self._entered = False

    def __enter__(self) -> "DefinitionsBuilder":
        self._builder._reenter(self)
        return self._builder

    def __exit__(self, exc_type, exc, tb) -> None:
        stack = self._builder._stack
        if stack and stack[-1] is self._draft:
            stack.pop()


class DefinitionsBuilder:
    """Single-pass builder for an immutable :class:`Registry`."""

    def __init__(self, global_prefix: str = ""):
        self._global_prefix = ""
        self._versions: dict[int, _VersionDraft] = {}
        self._stack: list[_Draft] = []
        self._last_declared: Optional[_Draft] = None
        self._failed = False
        self._built = False
        if global_prefix:
            self.set_global_prefix(global_prefix)

    # ── State ─────────────────────────────────────────────────────

    @property
    def current_scope(self) -> Optional[str]:
        """Kind of the innermost open scope, or None at top level."""
        return self._stack[-1].kind if self._stack else None

    def _ensure_usable(self) -> None:
        if self._built:
            raise InvalidDefinitionError("builder has already produced a registry")
        if self._failed:
            raise InvalidDefinitionError("a previous instruction failed; build aborted")

    def _require_scope(self, kind: Optional[str], instruction: str) -> Any:
        if self.current_scope != kind:
            raise InvalidScopeError(instruction, self.current_scope, reason=f"requires {kind or 'top level'}")
        return self._stack[-1] if self._stack else None

    # ── Instructions ──────────────────────────────────────────────

    @_instruction
    def set_global_prefix(self, prefix: str) -> None:
        """Set the prefix prepended to every qualified name. Last write wins."""
        if not isinstance(prefix, str):
            raise InvalidDefinitionError(f"global prefix must be text, got {type(prefix).__name__}")
        self._global_prefix = prefix

    @_instruction
    def open_version(
        self,
        number: int,
        introduced_at: Any,
        retired_at: Any = None,
    ) -> None:
        self._require_scope(None, "open a version")
        if isinstance(number, bool) or not isinstance(number, int) or number < 1:
            raise InvalidDefinitionError(f"version number must be a positive integer, got {number!r}")
        if number in self._versions:
            raise DuplicateVersionError(number)
        draft = _VersionDraft(
            number=number,
            introduced=parse_timestamp(introduced_at, "introduced_at"),
            retired_at=_optional_timestamp(retired_at),
        )
        self._versions[number] = draft
        self._last_declared = draft
        self._stack.append(draft)

    @_instruction
    def open_category(self, name: str, retired_at: Any = None) -> None:
        version: _VersionDraft = self._require_scope("version", "open a category")
        _check_identifier(name, "category name", f"version {version.number}")
        if name in version.categories:
            raise DuplicateCategoryError(version.number, name)
        draft = _CategoryDraft(
            name=name,
            version_number=version.number,
            retired_at=_optional_timestamp(retired_at),
        )
        version.categories[name] = draft
        self._last_declared = draft
        self._stack.append(draft)

    @_instruction
    def declare_event(
        self,
        name: str,
        introduced_at: Any,
        description: str,
        retired_at: Any = None,
    ) -> None:
        category: _CategoryDraft = self._require_scope("category", "declare an event")
        _check_identifier(name, "event name", f"category {category.name}")
        if not isinstance(description, str) or not description.strip():
            raise MissingDescriptionError(category.name, name)
        if name in category.events:
            raise DuplicateEventError(category.version_number, category.name, name)
        draft = _EventDraft(
            name=name,
            introduced=parse_timestamp(introduced_at, "introduced_at"),
            description=description.strip(),
            retired_at=_optional_timestamp(retired_at),
        )
        category.events[name] = draft
        self._last_declared = draft
        self._stack.append(draft)

    @_instruction
    def add_note(self, timestamp: Any, author: str, text: str) -> None:
        if self.current_scope != "event":
            raise InvalidNoteContextError(self.current_scope)
        event: _EventDraft = self._stack[-1]
        event.notes.append(
            Note(
                at=parse_timestamp(timestamp, "note.timestamp"),
                author=str(author),
                text=str(text),
            )
        )

    @_instruction
    def retire(self, timestamp: Any) -> None:
        """Mark the innermost open scope retired."""
        if not self._stack:
            raise InvalidScopeError("retire", None, reason="no open scope")
        self._stack[-1].retired_at = parse_timestamp(timestamp, "retired_at")

    @_instruction
    def close_scope(self) -> None:
        if not self._stack:
            raise InvalidScopeError("close a scope", None, reason="no open scope")
        self._stack.pop()

    # ── Context-manager sugar ─────────────────────────────────────

    def version(self, number: int, introduced_at: Any, retired_at: Any = None) -> _Scope:
        self.open_version(number, introduced_at, retired_at=retired_at)
        return self._detach()

    def category(self, name: str, retired_at: Any = None) -> _Scope:
        self.open_category(name, retired_at=retired_at)
        return self._detach()

    def event(
        self,
        name: str,
        introduced_at: Any,
        description: str,
        retired_at: Any = None,
    ) -> _Scope:
        self.declare_event(name, introduced_at, description, retired_at=retired_at)
        return self._detach()

    def _detach(self) -> _Scope:
        draft = self._stack.pop()
        return _Scope(self, draft, self._stack[-1] if self._stack else None)

    @_instruction
    def _reenter(self, scope: _Scope) -> None:
        draft = scope._draft
        if draft.kind == "version":
            what = f"re-enter version {draft.number}"
        else:
            what = f"re-enter {draft.kind} {draft.name!r}"
        parent_on_top = self._stack[-1] is scope._parent if self._stack else scope._parent is None
        if scope._entered:
            raise InvalidScopeError(what, self.current_scope, reason="scope already entered")
        if not parent_on_top or self._last_declared is not draft:
            raise InvalidScopeError(
                what,
                self.current_scope,
                reason="only the node just declared can be entered",
            )
        scope._entered = True
        self._stack.append(draft)

    # ── Build ─────────────────────────────────────────────────────

    def build(self) -> Registry:
        """Freeze the declared definitions into an immutable Registry.

        Raises:
            InvalidScopeError: if scopes are still open
            InvalidDefinitionError: if an earlier instruction failed or the
                builder has already built
        """
        self._ensure_usable()
        if self._stack:
            self._failed = True
            raise InvalidScopeError("build", self.current_scope, reason="scopes are still open")

        prefix = self._global_prefix
        versions = {}
        event_count = 0
        category_count = 0
        for number, vdraft in self._versions.items():
            categories = {}
            for cname, cdraft in vdraft.categories.items():
                events = {
                    ename: Event(
                        name=ename,
                        introduced=edraft.introduced,
                        description=edraft.description,
                        qualified_name=qualified_event_name(prefix, number, cname, ename),
                        retired_at=edraft.retired_at,
                        notes=tuple(edraft.notes),
                    )
                    for ename, edraft in cdraft.events.items()
                }
                event_count += len(events)
                categories[cname] = Category(
                    name=cname,
                    retired_at=cdraft.retired_at,
                    events=MappingProxyType(events),
                )
            category_count += len(categories)
            versions[number] = Version(
                number=number,
                introduced=vdraft.introduced,
                prefix=f"{prefix}{number}_",
                retired_at=vdraft.retired_at,
                categories=MappingProxyType(categories),
            )

        self._built = True
        logger.debug(
            "Built event registry: %d versions, %d categories, %d events",
            len(versions),
            category_count,
            event_count,
        )
        return Registry(global_prefix=prefix, versions=MappingProxyType(versions))


def _optional_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return parse_timestamp(value, "retired_at")


def _check_identifier(name: Any, what: str, location: str) -> None:
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise InvalidDefinitionError(f"{what} must be an identifier, got {name!r}", location=location)
