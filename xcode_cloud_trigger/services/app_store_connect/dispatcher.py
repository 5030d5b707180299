"""
App Store Connect Request Dispatcher

Issues authenticated requests against the App Store Connect API and turns
non-success statuses into classified exceptions. The dispatcher is built
once per trigger invocation and passed explicitly to every resolver.
"""

import json
import time
from typing import Any, Dict, Optional

import httpx

from xcode_cloud_trigger.core.config import settings
from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    ApiConnectionException,
    UnexpectedResponseException,
    classify_api_error,
)
from xcode_cloud_trigger.models.schemas.app_store_connect import ApiCredentials
from xcode_cloud_trigger.utils.logging import get_logger
from xcode_cloud_trigger.utils.logging.api_events import ApiEventSink
from xcode_cloud_trigger.utils.logging.redaction import redact_headers

logger = get_logger(__name__)


class RequestDispatcher:
    """
    Single-request HTTP client for App Store Connect.

    Features:
    - Bearer authentication and JSON content type on every request
    - Exactly one round trip per call, no retries
    - Response body parsed regardless of status
    - Status-code based error classification
    - Optional event sink for request/response/body events

    Instances hold the credentials and sink for one invocation and are not
    meant to be shared between concurrent runs.
    """

    def __init__(
        self,
        credentials: ApiCredentials,
        event_sink: Optional[ApiEventSink] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.credentials = credentials
        self.event_sink = event_sink
        self.base_url = (base_url or settings.APP_STORE_CONNECT_BASE_URL).rstrip("/")
        self.transport = transport

    def _create_headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.credentials.authorization_header(),
            "Content-Type": "application/json",
        }

    async def send(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        context: Optional[str] = None
    ) -> Any:
        """
        Dispatch one request and return its parsed JSON body.

        Args:
            path: Path (and query) relative to the API base URL
            method: HTTP method
            body: JSON payload, if any
            context: Resource name used in the 404 error message

        Returns:
            Parsed response body

        Raises:
            AuthenticationException: On 401
            AuthorizationException: On 403
            ResourceNotFoundException: On 404
            ConflictException: On 409
            UnknownApiException: On any other non-success status
            UnexpectedResponseException: If a success body is not JSON
            ApiConnectionException: If no response was received
        """
        headers = self._create_headers()
        self._emit("on_request", method, path, redact_headers(headers), body)

        start_time = time.monotonic()
        async with httpx.AsyncClient(
            base_url=self.base_url, transport=self.transport
        ) as client:
            try:
                response = await client.request(
                    method,
                    path,
                    headers=headers,
                    content=json.dumps(body) if body is not None else None,
                )
            except httpx.RequestError as e:
                logger.error(f"Request to App Store Connect failed: {method} {path}: {e}")
                raise ApiConnectionException(method, path, e)

        duration_ms = int((time.monotonic() - start_time) * 1000)
        self._emit(
            "on_response", response.status_code, duration_ms, redact_headers(response.headers)
        )

        data, parse_error = self._parse_body(response)
        self._emit("on_body", data)

        if not response.is_success:
            error = classify_api_error(
                response.status_code, response.reason_phrase, context, data
            )
            logger.warning(
                f"App Store Connect returned {response.status_code} for {method} {path}",
                {"error_code": error.error_code},
            )
            raise error

        if parse_error is not None:
            raise UnexpectedResponseException(
                f"Invalid JSON in response to {method} {path}",
                details={"parse_error": parse_error},
            )

        return data

    @staticmethod
    def _parse_body(response: httpx.Response):
        """Parse the body as JSON; empty bodies parse to None."""
        if not response.content:
            return None, None
        try:
            return response.json(), None
        except ValueError as e:
            return None, str(e)

    def _emit(self, hook: str, *args) -> None:
        if self.event_sink is None:
            return
        try:
            getattr(self.event_sink, hook)(*args)
        except Exception as e:
            logger.warning(f"API event sink failed in {hook}: {e}")
