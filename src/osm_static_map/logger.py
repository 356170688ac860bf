"""Logging setup for the static map builder.

Library modules only create loggers with ``logging.getLogger(__name__)``; the
Streamlit app calls `configure_logging` once to route them to stdout.
"""

import logging
import sys

from .config import LoggingSettings, get_settings
from .exceptions import InvalidArgument

PACKAGE_LOGGER = "osm_static_map"

# Streamlit and its file watcher log every rerun at INFO
QUIET_LOGGERS = ("streamlit", "watchdog")


def configure_logging(settings: LoggingSettings | None = None, level: str | None = None) -> int:
    """Send package logs to stdout at the configured level.

    Args:
        settings: Logging settings. Taken from the global settings when omitted.
        level: Optional level name overriding ``settings.level``.

    Returns:
        The numeric level applied to the package logger.

    Raises:
        InvalidArgument: If the level name is unknown.
    """
    settings = settings or get_settings().logging
    level_name = (level or settings.level).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        raise InvalidArgument(f"unknown logging level {level_name!r}")

    logging.basicConfig(
        level=log_level,
        format=settings.format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logging.getLogger(__name__).debug("Logging configured with level: %s", level_name)
    return log_level
