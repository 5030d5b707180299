"""
App Store Connect Exception Hierarchy

Error taxonomy for the build trigger pipeline. HTTP failures are classified
strictly by status code; local failures (missing parameters, unmatched
branches, malformed payloads) get their own subclasses.
"""

from typing import Optional, Dict, Any, List
from datetime import datetime, timezone


class AppStoreConnectException(Exception):
    """Base exception for all build trigger errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }

    def __str__(self) -> str:
        return self.message


# ============================================================================
# LOCAL ERRORS
# ============================================================================

class ParameterValidationException(AppStoreConnectException):
    """Raised when a required parameter is missing or empty."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="PARAMETER_VALIDATION_ERROR",
            details={"parameter": parameter}
        )
        self.parameter = parameter


# ============================================================================
# HTTP STATUS ERRORS
# ============================================================================

class AuthenticationException(AppStoreConnectException):
    """Raised on HTTP 401."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Authentication failed. Please check your API token",
            error_code="AUTHENTICATION_ERROR",
            status_code=401,
            details=details
        )


class AuthorizationException(AppStoreConnectException):
    """Raised on HTTP 403."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Authorization failed. Please check your permissions",
            error_code="AUTHORIZATION_ERROR",
            status_code=403,
            details=details
        )


class ResourceNotFoundException(AppStoreConnectException):
    """Raised on HTTP 404 for the resource named by ``context``."""

    def __init__(
        self,
        context: Optional[str] = None,
        message: Optional[str] = None,
        status_code: Optional[int] = 404,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message or f"{context or 'Resource'} not found",
            error_code="NOT_FOUND_ERROR",
            status_code=status_code,
            details=details
        )
        self.context = context


class GitReferenceNotFoundException(ResourceNotFoundException):
    """Raised when no eligible branch reference matches the requested name."""

    def __init__(self, branch_name: str, available_branches: List[str]):
        listed = ", ".join(available_branches) if available_branches else "none"
        super().__init__(
            context="Git reference",
            message=(
                f"No matching git reference found for branch '{branch_name}'. "
                f"Available branches: {listed}"
            ),
            status_code=None,
            details={
                "branch_name": branch_name,
                "available_branches": available_branches
            }
        )
        self.error_code = "GIT_REFERENCE_NOT_FOUND_ERROR"
        self.branch_name = branch_name
        self.available_branches = available_branches


class ConflictException(AppStoreConnectException):
    """Raised on HTTP 409."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=(
                "Conflict occurred. The request conflicts with another request "
                "or the current state"
            ),
            error_code="CONFLICT_ERROR",
            status_code=409,
            details=details
        )


class UnknownApiException(AppStoreConnectException):
    """Raised on any other non-success status."""

    def __init__(
        self,
        status_text: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"API request failed: {status_text}",
            error_code="UNKNOWN_API_ERROR",
            status_code=status_code,
            details=details
        )
        self.status_text = status_text


class UnexpectedResponseException(UnknownApiException):
    """Raised when a successful response does not have the expected shape."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status_text=message, details=details)
        self.message = message
        self.args = (message,)
        self.error_code = "UNEXPECTED_RESPONSE_ERROR"


# ============================================================================
# TRANSPORT ERRORS
# ============================================================================

class ApiConnectionException(AppStoreConnectException):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, method: str, path: str, cause: Optional[Exception] = None):
        super().__init__(
            message=f"Failed to reach App Store Connect API: {cause}",
            error_code="API_CONNECTION_ERROR",
            details={
                "method": method,
                "path": path,
                "cause": str(cause) if cause else None
            }
        )
        self.__cause__ = cause


# ============================================================================
# CLASSIFICATION
# ============================================================================

def classify_api_error(
    status_code: int,
    status_text: str,
    context: Optional[str] = None,
    data: Any = None
) -> AppStoreConnectException:
    """
    Map a non-success HTTP status to its exception.

    Only the status code decides the exception type; the parsed body is kept
    in ``details`` for debugging.

    Args:
        status_code: HTTP status of the response
        status_text: Reason phrase of the response
        context: Human-readable resource name used in 404 messages
        data: Parsed response body, if any

    Returns:
        The exception instance to raise
    """
    details = {"status_text": status_text, "response": data}

    if status_code == 401:
        return AuthenticationException(details=details)
    if status_code == 403:
        return AuthorizationException(details=details)
    if status_code == 404:
        return ResourceNotFoundException(context=context, details=details)
    if status_code == 409:
        return ConflictException(details=details)
    return UnknownApiException(status_text, status_code=status_code, details=details)
