"""
Global test configuration and fixtures for the build trigger tests.

Provides sample App Store Connect payloads and a recording mock transport so
no test ever reaches the real API.
"""

from typing import Any, Dict, List, Optional

import httpx
import pytest

from xcode_cloud_trigger.models.schemas.app_store_connect import ApiCredentials
from xcode_cloud_trigger.services.app_store_connect import RequestDispatcher

BASE_URL = "https://api.appstoreconnect.apple.com/v1"


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def api_token() -> str:
    """Sample App Store Connect token."""
    return "tok_secret_1234567890"


@pytest.fixture
def mock_api():
    """
    Factory for an httpx.MockTransport that replays responses in order.

    Every request seen is appended to ``transport.requests``; running out of
    queued responses fails the test.
    """
    def factory(*responses: httpx.Response) -> httpx.MockTransport:
        queue = list(responses)
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if not queue:
                raise AssertionError(f"Unexpected request: {request.method} {request.url}")
            return queue.pop(0)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory


@pytest.fixture
def make_dispatcher(api_token, base_url):
    """Build a RequestDispatcher bound to a mock transport."""
    def factory(transport: httpx.MockTransport, event_sink=None) -> RequestDispatcher:
        return RequestDispatcher(
            ApiCredentials(token=api_token),
            event_sink=event_sink,
            base_url=base_url,
            transport=transport,
        )

    return factory


@pytest.fixture
def repository_payload() -> Dict[str, Any]:
    """Response of GET /ciWorkflows/{id}/repository."""
    return {
        "data": {
            "type": "scmRepositories",
            "id": "R1",
            "attributes": {
                "repositoryName": "App",
                "ownerName": "Acme",
            },
        }
    }


@pytest.fixture
def git_reference():
    """Factory for a single scmGitReferences resource object."""
    def factory(
        ref_id: str,
        name: str,
        kind: str = "BRANCH",
        is_deleted: bool = False,
        canonical_name: Optional[str] = None
    ) -> Dict[str, Any]:
        if canonical_name is None:
            prefix = "refs/heads/" if kind == "BRANCH" else "refs/tags/"
            canonical_name = f"{prefix}{name}"
        return {
            "type": "scmGitReferences",
            "id": ref_id,
            "attributes": {
                "kind": kind,
                "name": name,
                "canonicalName": canonical_name,
                "isDeleted": is_deleted,
            },
        }

    return factory


@pytest.fixture
def reference_page():
    """Factory for a gitReferences collection page."""
    def factory(entries: List[Dict[str, Any]], next_link: Optional[str] = None) -> Dict[str, Any]:
        links = {"self": f"{BASE_URL}/scmRepositories/R1/gitReferences"}
        if next_link:
            links["next"] = next_link
        return {"data": entries, "links": links}

    return factory


@pytest.fixture
def build_run_payload() -> Dict[str, Any]:
    """Response of POST /ciBuildRuns."""
    return {
        "data": {
            "type": "ciBuildRuns",
            "id": "B1",
            "attributes": {"number": 42, "executionProgress": "PENDING"},
        }
    }


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo configure_logging() side effects between tests."""
    import logging

    package_logger = logging.getLogger("xcode_cloud_trigger")
    saved = (package_logger.level, package_logger.propagate, list(package_logger.handlers))
    yield
    package_logger.setLevel(saved[0])
    package_logger.propagate = saved[1]
    package_logger.handlers[:] = saved[2]
