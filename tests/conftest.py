"""Shared test fixtures for meta-events tests."""

import pytest

from meta_events import reset_defaults
from meta_events.definition import DefinitionsBuilder
from meta_events.sinks import RecordingSink

SAMPLE_TOML = """\
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
notes = [
  { at = 2014-03-01, author = "jdoe", text = "Also fires for invites." },
]

[[versions.categories.events]]
name = "logged_in_with_facebook"
introduced = 2014-02-04
description = "User logged in using Facebook."
retired_at = 2014-06-01

[[versions]]
number = 2
introduced = "2015-01-10"

[[versions.categories]]
name = "user"

[[versions.categories.events]]
name = "signed_up"
introduced = "2015-01-10"
description = "A user created a new account (v2 properties)."
"""


@pytest.fixture(autouse=True)
def _isolated_defaults():
    """Every test starts and ends without process defaults."""
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def builder():
    return DefinitionsBuilder()


@pytest.fixture
def registry():
    """Prefix ``ab``; version 1 with user.signed_up and a retired facebook login."""
    b = DefinitionsBuilder(global_prefix="ab")
    with b.version(1, "2014-02-04"):
        with b.category("user"):
            with b.event("signed_up", "2014-02-04", "A user created a new account."):
                b.add_note("2014-03-01", "jdoe", "Also fires for invites.")
            b.event(
                "logged_in_with_facebook",
                "2014-02-04",
                "User logged in using Facebook.",
                retired_at="2014-06-01",
            )
    return b.build()


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def definitions_file(tmp_path):
    path = tmp_path / "events.toml"
    path.write_text(SAMPLE_TOML, encoding="utf-8")
    return path
