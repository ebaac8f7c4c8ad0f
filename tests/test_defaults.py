"""Tests for process-wide defaults."""

import pytest

from meta_events import add_default_sink, configure_defaults, configure_from_config, reset_defaults
from meta_events import defaults
from meta_events.config import MetaEventsConfig
from meta_events.exceptions import InvalidConfigError, InvalidSinkError, NoDefaultRegistryError
from meta_events.sinks import LoggingSink, RecordingSink


class TestConfigureDefaults:
    def test_starts_empty(self):
        assert not defaults.has_default_registry()
        assert defaults.default_sinks() == ()
        assert defaults.default_version() is None
        with pytest.raises(NoDefaultRegistryError):
            defaults.default_registry()

    def test_partial_updates(self, registry, recording_sink):
        configure_defaults(registry=registry)
        configure_defaults(sinks=[recording_sink])
        assert defaults.default_registry() is registry
        assert defaults.default_sinks() == (recording_sink,)

    def test_add_default_sink(self):
        a, b = RecordingSink(), RecordingSink()
        add_default_sink(a)
        add_default_sink(b)
        assert defaults.default_sinks() == (a, b)

    def test_rejects_bad_sink(self):
        with pytest.raises(InvalidSinkError):
            configure_defaults(sinks=[42])
        with pytest.raises(InvalidSinkError):
            add_default_sink("nope")

    @pytest.mark.parametrize("version", [0, -2, True, "1"])
    def test_rejects_bad_version(self, version):
        with pytest.raises(InvalidConfigError):
            configure_defaults(default_version=version)

    def test_reset(self, registry, recording_sink):
        configure_defaults(registry=registry, sinks=[recording_sink], default_version=1)
        reset_defaults()
        assert not defaults.has_default_registry()
        assert defaults.default_sinks() == ()
        assert defaults.default_version() is None


class TestConfigureFromConfig:
    def test_loads_definitions_and_logging_sink(self, definitions_file):
        config = MetaEventsConfig(definitions_file=str(definitions_file), default_version=1, log_events=True)
        registry = configure_from_config(config)
        assert defaults.default_registry() is registry
        assert defaults.default_version() == 1
        (sink,) = defaults.default_sinks()
        assert isinstance(sink, LoggingSink)

    def test_without_definitions(self):
        assert configure_from_config(MetaEventsConfig()) is None
        assert not defaults.has_default_registry()
        assert defaults.default_sinks() == ()
