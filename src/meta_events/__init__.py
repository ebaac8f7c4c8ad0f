"""
meta-events - Versioned, documented analytics events

Declare every analytics event once, in a versioned registry that keeps its
history (introduction dates, change notes, retirements), then fire events
through a Tracker that flattens nested properties into stable, prefixed
scalar keys and hands them to your sinks.
"""

__version__ = "0.1.0"

from .defaults import (
    add_default_sink,
    configure_defaults,
    configure_from_config,
    reset_defaults,
)
from .definition import DefinitionsBuilder, Registry, load_definitions
from .properties import expand_properties
from .sinks import LoggingSink, RecordingSink, Sink
from .tracker import Tracker

__all__ = [
    "Tracker",  # Main entry point
    "DefinitionsBuilder",
    "load_definitions",
    "Registry",
    "expand_properties",
    "Sink",
    "RecordingSink",
    "LoggingSink",
    "configure_defaults",
    "configure_from_config",
    "add_default_sink",
    "reset_defaults",
]
