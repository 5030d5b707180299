"""
API Event Sinks

Receivers for the request/response/body events emitted by the request
dispatcher. Events are advisory: the dispatcher never lets a sink alter
control flow.
"""

from abc import ABC
from typing import Any, Dict, Mapping, Optional

from xcode_cloud_trigger.utils.logging.config import get_logger
from xcode_cloud_trigger.utils.logging.redaction import redact_headers


class ApiEventSink(ABC):
    """Base event sink; every hook is a no-op unless overridden."""

    def on_request(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        body: Optional[Any] = None
    ) -> None:
        pass

    def on_response(
        self,
        status_code: int,
        duration_ms: int,
        headers: Mapping[str, str]
    ) -> None:
        pass

    def on_body(self, data: Any) -> None:
        pass


class LoggingApiEventSink(ApiEventSink):
    """Event sink that writes API traffic to the package logger at DEBUG."""

    def __init__(self, name: str = "xcode_cloud_trigger.api"):
        self.logger = get_logger(name)

    def on_request(self, method, path, headers, body=None):
        extra: Dict[str, Any] = {
            "method": method,
            "path": path,
            "headers": redact_headers(headers),
        }
        if body is not None:
            extra["body"] = body
        self.logger.debug(f"API Request: {method} {path}", extra)

    def on_response(self, status_code, duration_ms, headers):
        self.logger.debug(
            f"Response status: {status_code} ({duration_ms}ms)",
            {
                "status_code": status_code,
                "duration_ms": duration_ms,
                "headers": redact_headers(headers),
            },
        )

    def on_body(self, data):
        self.logger.debug("Response data", {"data": data})
