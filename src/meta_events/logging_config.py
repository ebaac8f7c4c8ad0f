"""Logging setup for the meta-events CLI and host applications.

Library modules log through ``logging.getLogger(__name__)`` and never
install handlers themselves. Whoever owns the process (the ``meta-events``
CLI, or your application) calls :func:`setup_logging` once.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "meta_events"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def _file_handler(log_file: str) -> logging.Handler:
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route log records to a rich stderr handler (and optionally a file).

    Args:
        verbose: Show DEBUG records, including per-event dispatch lines
        quiet: Show ERROR records only; wins over ``verbose``
        log_file: Also append plain-text records to this file

    Returns:
        The ``meta_events`` package logger
    """
    level = _level_for(verbose, quiet)

    # Event names and property values are user data, never rich markup.
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_path=verbose,
        )
    ]
    if log_file:
        handlers.append(_file_handler(log_file))

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``meta_events`` namespace (``"sinks"`` -> ``meta_events.sinks``)."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
