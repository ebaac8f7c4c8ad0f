"""Configuration loading and management for meta-events.

Configuration sources are merged in priority order:
    1. Defaults (defined in MetaEventsConfig)
    2. Global config (~/.meta-events.toml)
    3. Project config (./meta-events.toml)
    4. Explicit config file
    5. Environment variables (META_EVENTS_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(default_version=2, log_events=True)
    >>> config.default_version
    2
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_VERBOSITIES = ("quiet", "normal", "verbose")

CONFIG_FILENAME = "meta-events.toml"
ENV_PREFIX = "META_EVENTS_"


@dataclass(frozen=True)
class MetaEventsConfig:
    """Settings for loading definitions and installing process defaults.

    Attributes:
        definitions_file: TOML definitions document to load as the default registry
        default_version: Version trackers bind to when none is given
        log_events: Install a LoggingSink among the default sinks
        log_level: Level name the LoggingSink logs events at
        verbosity: Logging verbosity for the CLI
    """

    definitions_file: Optional[str] = None
    default_version: Optional[int] = None
    log_events: bool = False
    log_level: str = "INFO"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.default_version is not None:
            if isinstance(self.default_version, bool) or not isinstance(self.default_version, int):
                raise InvalidConfigError("default_version", self.default_version, "must be an integer")
            if self.default_version < 1:
                raise InvalidConfigError("default_version", self.default_version, "must be at least 1")

        if not isinstance(self.log_events, bool):
            raise InvalidConfigError("log_events", self.log_events, "must be true or false")

        if str(self.log_level).upper() not in _LOG_LEVELS:
            raise InvalidConfigError("log_level", self.log_level, f"must be one of {', '.join(_LOG_LEVELS)}")
        object.__setattr__(self, "log_level", str(self.log_level).upper())

        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError("verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITIES)}")

        if self.definitions_file is not None:
            object.__setattr__(self, "definitions_file", str(self.definitions_file))


def load_config(config_file: Optional[Path] = None, **overrides) -> MetaEventsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides; None values are ignored

    Returns:
        Validated MetaEventsConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_config_file(global_config))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_config_file(project_config))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_config_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(MetaEventsConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            details={"known": ", ".join(sorted(known))},
        )

    return MetaEventsConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from META_EVENTS_* environment variables.

    Supported environment variables:
        META_EVENTS_DEFINITIONS_FILE: path
        META_EVENTS_DEFAULT_VERSION: int
        META_EVENTS_LOG_EVENTS: bool (true/false/1/0/yes/no)
        META_EVENTS_LOG_LEVEL: DEBUG/INFO/WARNING/ERROR/CRITICAL
        META_EVENTS_VERBOSITY: quiet/normal/verbose
    """
    result: dict[str, Any] = {}

    value = os.environ.get(f"{ENV_PREFIX}DEFINITIONS_FILE")
    if value:
        result["definitions_file"] = value

    value = os.environ.get(f"{ENV_PREFIX}DEFAULT_VERSION")
    if value:
        try:
            result["default_version"] = int(value)
        except ValueError:
            raise InvalidConfigError(f"{ENV_PREFIX}DEFAULT_VERSION", value, "must be an integer")

    value = os.environ.get(f"{ENV_PREFIX}LOG_EVENTS")
    if value:
        result["log_events"] = _parse_bool(f"{ENV_PREFIX}LOG_EVENTS", value)

    value = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
    if value:
        result["log_level"] = value

    value = os.environ.get(f"{ENV_PREFIX}VERBOSITY")
    if value:
        result["verbosity"] = value.lower()

    return result


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise InvalidConfigError(key, value, "must be a boolean")


def _load_config_file(path: Path) -> dict:
    """Load a TOML config file, resolving ``definitions_file`` against its directory."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    definitions = data.get("definitions_file")
    if isinstance(definitions, str) and not Path(definitions).is_absolute():
        data["definitions_file"] = str(path.parent / definitions)
    return data
