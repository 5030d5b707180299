"""
Build Trigger Exceptions

Public exception types raised by the App Store Connect client and the
build trigger pipeline.
"""

from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    AppStoreConnectException,
    ParameterValidationException,
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    GitReferenceNotFoundException,
    ConflictException,
    UnknownApiException,
    UnexpectedResponseException,
    ApiConnectionException,
    classify_api_error,
)

__all__ = [
    "AppStoreConnectException",
    "ParameterValidationException",
    "AuthenticationException",
    "AuthorizationException",
    "ResourceNotFoundException",
    "GitReferenceNotFoundException",
    "ConflictException",
    "UnknownApiException",
    "UnexpectedResponseException",
    "ApiConnectionException",
    "classify_api_error",
]
