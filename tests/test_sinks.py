"""Tests for the bundled sinks and the sink protocol."""

import logging
import threading

import pytest

from meta_events.exceptions import InvalidSinkError
from meta_events.sinks import LoggingSink, RecordingSink, Sink, dispatch, validate_sink


class TestRecordingSink:
    def test_records_in_order(self):
        sink = RecordingSink()
        sink.track("a", {"x": 1})
        sink.track("b", {})
        assert [e.event_name for e in sink.events] == ["a", "b"]
        assert sink.events[0].properties == {"x": 1}

    def test_copies_properties(self):
        sink = RecordingSink()
        props = {"x": 1}
        sink.track("a", props)
        props["x"] = 2
        assert sink.events[0].properties == {"x": 1}

    def test_named_and_clear(self):
        sink = RecordingSink()
        sink.track("a", {})
        sink.track("b", {})
        sink.track("a", {"n": 2})
        assert len(sink.named("a")) == 2
        sink.clear()
        assert len(sink) == 0

    def test_concurrent_tracking(self):
        sink = RecordingSink()

        def worker():
            for i in range(200):
                sink.track("e", {"i": i})

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(sink) == 800

    def test_is_a_sink(self):
        assert isinstance(RecordingSink(), Sink)


class TestLoggingSink:
    def test_logs_event(self, caplog):
        sink = LoggingSink()
        with caplog.at_level(logging.INFO, logger="meta_events.sinks"):
            sink.track("ab1_user_signed_up", {"user_age": 27})
        assert "ab1_user_signed_up" in caplog.text
        assert "user_age=27" in caplog.text

    def test_custom_logger_and_level(self, caplog):
        custom = logging.getLogger("analytics.audit")
        sink = LoggingSink(custom, level=logging.WARNING)
        with caplog.at_level(logging.WARNING, logger="analytics.audit"):
            sink.track("e", {})
        assert caplog.records[0].levelno == logging.WARNING
        assert caplog.records[0].name == "analytics.audit"


class TestValidateSink:
    def test_accepts_duck_typed(self):
        class Vendor:
            def track(self, name, props):
                pass

        sink = Vendor()
        assert validate_sink(sink) is sink

    @pytest.mark.parametrize("bad", [object(), "sink", type("NoCall", (), {"track": 1})()])
    def test_rejects(self, bad):
        with pytest.raises(InvalidSinkError):
            validate_sink(bad)


class TestDispatch:
    def test_each_sink_gets_own_copy(self):
        seen = []

        class Capture:
            def track(self, name, props):
                seen.append(props)

        a, b = Capture(), Capture()
        dispatch([a, b], "e", {"x": 1})
        assert seen[0] == seen[1] == {"x": 1}
        assert seen[0] is not seen[1]
