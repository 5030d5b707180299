"""
Credential Redaction

Scrubs bearer tokens out of anything that reaches a log record. The project
Logger runs every message and extra payload through these helpers, and
RedactionFilter covers records emitted through plain stdlib loggers.
"""

import logging
import re
from typing import Any, Dict, Mapping

REDACTED = "***"

SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization"})

BEARER_TOKEN_PATTERN = re.compile(r"(Bearer\s+)[^\s\"',;}\]]+", re.IGNORECASE)

# Attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def redact_text(text: str) -> str:
    """Replace the token part of any ``Bearer <token>`` occurrence."""
    return BEARER_TOKEN_PATTERN.sub(rf"\g<1>{REDACTED}", text)


def redact_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``headers`` with credential-bearing values masked."""
    return {
        key: REDACTED if key.lower() in SENSITIVE_HEADERS else redact_value(value)
        for key, value in headers.items()
    }


def redact_value(value: Any) -> Any:
    """Recursively redact strings inside dicts, lists and tuples."""
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, Mapping):
        return redact_headers(value)
    if isinstance(value, (list, tuple)):
        return type(value)(redact_value(item) for item in value)
    return value


class RedactionFilter(logging.Filter):
    """Logging filter that rewrites records so no bearer token is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_text(record.getMessage())
        record.args = None

        for key, value in list(record.__dict__.items()):
            if key not in _STANDARD_RECORD_ATTRS:
                setattr(record, key, redact_value(value))

        return True


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect the ``extra`` attributes attached to a record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS
    }
