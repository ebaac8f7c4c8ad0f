"""Tests for configuration loading."""

from pathlib import Path

import pytest

from meta_events.config import MetaEventsConfig, load_config
from meta_events.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and config files."""
    for key in ("DEFINITIONS_FILE", "DEFAULT_VERSION", "LOG_EVENTS", "LOG_LEVEL", "VERBOSITY"):
        monkeypatch.delenv(f"META_EVENTS_{key}", raising=False)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


class TestMetaEventsConfig:
    def test_defaults(self):
        config = MetaEventsConfig()
        assert config.definitions_file is None
        assert config.default_version is None
        assert config.log_events is False
        assert config.log_level == "INFO"
        assert config.verbosity == "normal"

    def test_log_level_normalized(self):
        assert MetaEventsConfig(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"default_version": 0},
            {"default_version": True},
            {"default_version": "2"},
            {"log_events": "yes"},
            {"log_level": "LOUD"},
            {"verbosity": "chatty"},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidConfigError):
            MetaEventsConfig(**kwargs)


class TestLoadConfig:
    def test_no_sources(self):
        assert load_config() == MetaEventsConfig()

    def test_project_file(self, tmp_path):
        (tmp_path / "meta-events.toml").write_text('definitions_file = "events.toml"\ndefault_version = 2\n')
        config = load_config()
        assert config.default_version == 2
        assert config.definitions_file == str(tmp_path / "events.toml")

    def test_explicit_file_overrides_project(self, tmp_path):
        (tmp_path / "meta-events.toml").write_text("default_version = 2\n")
        explicit = tmp_path / "custom.toml"
        explicit.write_text("default_version = 3\n")
        assert load_config(config_file=explicit).default_version == 3

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("default_version = = 1")
        with pytest.raises(ConfigurationError):
            load_config(config_file=bad)

    def test_unknown_key(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("colour = 'blue'\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=bad)

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("META_EVENTS_DEFAULT_VERSION", "4")
        monkeypatch.setenv("META_EVENTS_LOG_EVENTS", "yes")
        monkeypatch.setenv("META_EVENTS_LOG_LEVEL", "warning")
        config = load_config()
        assert config.default_version == 4
        assert config.log_events is True
        assert config.log_level == "WARNING"

    def test_bad_env_var(self, monkeypatch):
        monkeypatch.setenv("META_EVENTS_DEFAULT_VERSION", "four")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("META_EVENTS_DEFAULT_VERSION", "4")
        assert load_config(default_version=5).default_version == 5

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("META_EVENTS_DEFAULT_VERSION", "4")
        assert load_config(default_version=None).default_version == 4

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"
