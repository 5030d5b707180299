"""Helpers for following App Store Connect ``links.next`` pagination."""

from typing import Any, Optional

from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    UnexpectedResponseException,
)


def next_page_link(data: Any) -> Optional[str]:
    """Return the absolute ``links.next`` URL of a collection page, if any."""
    if not isinstance(data, dict):
        return None
    links = data.get("links") or {}
    return links.get("next") or None


def derive_next_request(next_link: Optional[str], base_url: str) -> Optional[str]:
    """
    Turn an absolute next-page link into a request path relative to the API.

    App Store Connect returns ``links.next`` as a full URL that repeats the
    API origin; the dispatcher expects the path and query relative to it.

    Args:
        next_link: Value of ``links.next``, possibly None
        base_url: API origin the dispatcher is bound to

    Returns:
        Relative path+query for the next request, or None when there is no
        next page

    Raises:
        UnexpectedResponseException: If the link points outside ``base_url``
    """
    if not next_link:
        return None

    prefix = base_url.rstrip("/")
    if next_link.startswith("/"):
        return next_link
    if not next_link.startswith(prefix):
        raise UnexpectedResponseException(
            f"Pagination link does not belong to the API origin: {next_link}",
            details={"next_link": next_link, "base_url": base_url},
        )

    relative = next_link[len(prefix):]
    if relative and relative[0] not in "/?":
        raise UnexpectedResponseException(
            f"Pagination link does not belong to the API origin: {next_link}",
            details={"next_link": next_link, "base_url": base_url},
        )
    if not relative.startswith("/"):
        relative = "/" + relative
    return relative
