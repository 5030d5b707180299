"""Logger tree setup for the xcode_cloud_trigger package."""

import logging
import sys
from typing import Optional, TextIO

from xcode_cloud_trigger.utils.logging.default import Logger
from xcode_cloud_trigger.utils.logging.redaction import RedactionFilter, extra_fields

ROOT_LOGGER_NAME = "xcode_cloud_trigger"

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_HANDLER_MARKER = "_xcode_cloud_trigger_handler"


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = extra_fields(record)
        if extra:
            rendered = " ".join(f"{key}={value!r}" for key, value in extra.items())
            line = f"{line} | {rendered}"
        return line


def get_logger(name: str, request_context: Optional[dict] = None) -> Logger:
    """Return the redacting Logger wrapper for ``name``."""
    return Logger(name, request_context)


def configure_logging(
    enabled: bool = False,
    level: str = "INFO",
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure the package logger tree.

    When disabled the tree is silenced entirely. When enabled a single stream
    handler is attached (replacing one installed by a previous call) with the
    context formatter and the redaction filter.

    Args:
        enabled: Whether log output is produced at all
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR)
        stream: Target stream, stderr by default

    Returns:
        The configured package logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)

    if not enabled:
        root.setLevel(logging.CRITICAL + 1)
        root.propagate = False
        return root

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    handler.addFilter(RedactionFilter())
    setattr(handler, _HANDLER_MARKER, True)

    root.addHandler(handler)
    root.setLevel(numeric_level)
    root.propagate = False
    return root
