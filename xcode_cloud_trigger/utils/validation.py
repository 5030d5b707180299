"""
Validation Utilities

Precondition checks shared by the App Store Connect resolvers and the
build trigger service. All checks run before any network call.
"""

from typing import Any, Iterable, Mapping

from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    ParameterValidationException,
)


def require_value(value: Any, label: str) -> None:
    """Raise ParameterValidationException when ``value`` is missing or blank.

    Args:
        value: Value to check
        label: Human-readable name used in the error message

    Raises:
        ParameterValidationException: If value is None, empty or whitespace only
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ParameterValidationException(f"{label} is required", parameter=label)


def require_parameters(params: Mapping[str, Any], names: Iterable[str]) -> None:
    """Check that every name in ``names`` is present and non-empty in ``params``.

    Names are checked in order, so the error always reports the first
    missing parameter.

    Raises:
        ParameterValidationException: Naming the first missing parameter
    """
    for name in names:
        value = params.get(name)
        if hasattr(value, "get_secret_value"):
            value = value.get_secret_value()
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ParameterValidationException(
                f"Required parameter '{name}' is not provided", parameter=name
            )
