"""Tests for loading definitions from TOML documents."""

from datetime import datetime

import pytest

from meta_events.definition import apply_document, load_definitions
from meta_events.definition.loader import read_definitions_file
from meta_events.exceptions import (
    DuplicateEventError,
    DuplicateVersionError,
    InvalidDefinitionError,
    MissingDescriptionError,
    RetiredEventError,
)


class TestLoadFile:
    def test_loads_sample(self, definitions_file):
        registry = load_definitions(definitions_file)
        assert registry.global_prefix == "ab"
        assert list(registry.versions) == [1, 2]

    def test_toml_dates_and_strings(self, definitions_file):
        registry = load_definitions(str(definitions_file))
        assert registry.version(1).introduced == datetime(2014, 2, 4)
        assert registry.version(2).introduced == datetime(2015, 1, 10)

    def test_notes(self, definitions_file):
        registry = load_definitions(definitions_file)
        event = registry.version(1).category("user").event("signed_up")
        assert [(n.at, n.author, n.text) for n in event.notes] == [
            (datetime(2014, 3, 1), "jdoe", "Also fires for invites.")
        ]

    def test_retired_event(self, definitions_file):
        registry = load_definitions(definitions_file)
        with pytest.raises(RetiredEventError):
            registry.fetch_event(1, "user", "logged_in_with_facebook")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidDefinitionError) as exc:
            load_definitions(tmp_path / "nope.toml")
        assert "not found" in exc.value.reason

    def test_bad_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("versions = [[[", encoding="utf-8")
        with pytest.raises(InvalidDefinitionError) as exc:
            load_definitions(path)
        assert exc.value.__cause__ is not None


class TestLoadMapping:
    def _doc(self, **event_overrides):
        event = {"name": "signed_up", "introduced": "2014-02-04", "description": "desc"}
        event.update(event_overrides)
        return {
            "global_prefix": "ab",
            "versions": [
                {
                    "number": 1,
                    "introduced": "2014-02-04",
                    "categories": [{"name": "user", "events": [event]}],
                }
            ],
        }

    def test_minimal_document(self):
        registry = load_definitions(self._doc())
        assert registry.fetch_event(1, "user", "signed_up")[1] == "ab1_user_signed_up"

    def test_empty_document(self):
        registry = load_definitions({})
        assert dict(registry.versions) == {}

    def test_missing_description(self):
        doc = self._doc()
        del doc["versions"][0]["categories"][0]["events"][0]["description"]
        with pytest.raises(MissingDescriptionError):
            load_definitions(doc)

    def test_duplicate_event(self):
        doc = self._doc()
        events = doc["versions"][0]["categories"][0]["events"]
        events.append(dict(events[0]))
        with pytest.raises(DuplicateEventError):
            load_definitions(doc)

    def test_duplicate_version(self):
        doc = self._doc()
        doc["versions"].append({"number": 1, "introduced": "2015-01-01"})
        with pytest.raises(DuplicateVersionError):
            load_definitions(doc)

    def test_unknown_key(self):
        with pytest.raises(InvalidDefinitionError) as exc:
            load_definitions(self._doc(colour="blue"))
        assert "colour" in exc.value.reason
        assert exc.value.location == "versions[0].categories[0].events[0]"

    def test_missing_required_key(self):
        doc = self._doc()
        del doc["versions"][0]["number"]
        with pytest.raises(InvalidDefinitionError) as exc:
            load_definitions(doc)
        assert "number" in exc.value.reason

    def test_wrong_shape(self):
        with pytest.raises(InvalidDefinitionError):
            load_definitions({"versions": {"number": 1}})

    def test_document_is_not_mutated(self):
        doc = self._doc(notes=[{"at": "2014-03-01", "author": "a", "text": "t"}])
        before = repr(doc)
        load_definitions(doc)
        assert repr(doc) == before


class TestLowLevel:
    def test_read_file_returns_raw_document(self, definitions_file):
        document = read_definitions_file(definitions_file)
        assert document["global_prefix"] == "ab"
        assert [v["number"] for v in document["versions"]] == [1, 2]

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(InvalidDefinitionError):
            read_definitions_file(tmp_path / "absent.toml")

    def test_read_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[[versions]\n", encoding="utf-8")
        with pytest.raises(InvalidDefinitionError):
            read_definitions_file(path)

    def test_apply_onto_existing_builder(self, builder):
        builder.set_global_prefix("zz")
        apply_document(
            builder,
            {
                "versions": [
                    {
                        "number": 3,
                        "introduced": "2016-01-01",
                        "categories": [
                            {
                                "name": "cart",
                                "events": [
                                    {"name": "emptied", "introduced": "2016-01-01", "description": "Cart cleared."}
                                ],
                            }
                        ],
                    }
                ]
            },
        )
        registry = builder.build()
        assert registry.fetch_event(3, "cart", "emptied")[1] == "zz3_cart_emptied"
