"""
Tests for BuildTriggerService

End-to-end trigger scenarios against a mocked App Store Connect API, step
ordering and short-circuiting, parameter validation and log redaction.
"""

import logging

import httpx
import pytest

from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    AuthenticationException,
    GitReferenceNotFoundException,
    ParameterValidationException,
)
from xcode_cloud_trigger.models.schemas.app_store_connect import TriggerParameters
from xcode_cloud_trigger.services.build_trigger import BuildTriggerService, trigger

BASE_URL = "https://api.appstoreconnect.apple.com/v1"


@pytest.fixture
def trigger_params():
    return {
        "appstore-connect-token": "tok",
        "xcode-cloud-workflow-id": "W1",
        "git-branch-name": "main",
    }


@pytest.fixture
def make_service(base_url):
    def factory(transport, event_sink=None):
        return BuildTriggerService(event_sink=event_sink, base_url=base_url, transport=transport)

    return factory


class TestTriggerEndToEnd:

    @pytest.mark.asyncio
    async def test_successful_trigger(
        self, mock_api, make_service, trigger_params, repository_payload,
        git_reference, reference_page, build_run_payload
    ):
        transport = mock_api(
            httpx.Response(200, json=repository_payload),
            httpx.Response(200, json=reference_page([git_reference("G1", "main")])),
            httpx.Response(201, json=build_run_payload),
        )

        result = await make_service(transport).trigger(trigger_params)

        assert result.model_dump(by_alias=True) == {
            "buildId": "B1",
            "buildNumber": 42,
            "gitReferenceId": "G1",
        }
        paths = [(request.method, request.url.path) for request in transport.requests]
        assert paths == [
            ("GET", "/v1/ciWorkflows/W1/repository"),
            ("GET", "/v1/scmRepositories/R1/gitReferences"),
            ("POST", "/v1/ciBuildRuns"),
        ]
        assert all(request.headers["Authorization"] == "Bearer tok" for request in transport.requests)

    @pytest.mark.asyncio
    async def test_unknown_branch_never_creates_build(
        self, mock_api, make_service, trigger_params, repository_payload, git_reference, reference_page
    ):
        transport = mock_api(
            httpx.Response(200, json=repository_payload),
            httpx.Response(200, json=reference_page([git_reference("G2", "develop")])),
        )

        with pytest.raises(GitReferenceNotFoundException) as exc_info:
            await make_service(transport).trigger(trigger_params)

        assert exc_info.value.available_branches == ["develop"]
        assert "develop" in str(exc_info.value)
        assert len(transport.requests) == 2
        assert all(request.url.path != "/v1/ciBuildRuns" for request in transport.requests)

    @pytest.mark.asyncio
    async def test_workflow_failure_stops_pipeline(self, mock_api, make_service, trigger_params):
        transport = mock_api(httpx.Response(401, json={"errors": []}))

        with pytest.raises(AuthenticationException):
            await make_service(transport).trigger(trigger_params)

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_accepts_trigger_parameters_model(
        self, mock_api, make_service, repository_payload, git_reference, reference_page, build_run_payload
    ):
        transport = mock_api(
            httpx.Response(200, json=repository_payload),
            httpx.Response(200, json=reference_page([git_reference("G1", "main")])),
            httpx.Response(201, json=build_run_payload),
        )
        params = TriggerParameters(token="tok", workflow_id="W1", branch_name="main")

        result = await make_service(transport).trigger(params)

        assert result.build_id == "B1"
        assert result.git_reference_id == "G1"

    @pytest.mark.asyncio
    async def test_module_level_trigger(
        self, mock_api, trigger_params, base_url, repository_payload, git_reference, reference_page, build_run_payload
    ):
        transport = mock_api(
            httpx.Response(200, json=repository_payload),
            httpx.Response(200, json=reference_page([git_reference("G1", "main")])),
            httpx.Response(201, json=build_run_payload),
        )

        result = await trigger(trigger_params, base_url=base_url, transport=transport)

        assert result.build_number == 42


class TestParameterValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "missing",
        ["appstore-connect-token", "xcode-cloud-workflow-id", "git-branch-name"],
    )
    async def test_missing_parameter_is_named(self, mock_api, make_service, trigger_params, missing):
        transport = mock_api()
        params = dict(trigger_params)
        del params[missing]

        with pytest.raises(ParameterValidationException) as exc_info:
            await make_service(transport).trigger(params)

        assert str(exc_info.value) == f"Required parameter '{missing}' is not provided"
        assert exc_info.value.parameter == missing
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_empty_parameter_is_missing(self, mock_api, make_service, trigger_params):
        transport = mock_api()
        trigger_params["git-branch-name"] = ""

        with pytest.raises(ParameterValidationException) as exc_info:
            await make_service(transport).trigger(trigger_params)

        assert "git-branch-name" in str(exc_info.value)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_non_string_parameter_is_a_validation_error(self, mock_api, make_service, trigger_params):
        transport = mock_api()
        trigger_params["xcode-cloud-workflow-id"] = 123

        with pytest.raises(ParameterValidationException) as exc_info:
            await make_service(transport).trigger(trigger_params)

        assert exc_info.value.parameter == "xcode-cloud-workflow-id"
        assert "xcode-cloud-workflow-id" in str(exc_info.value)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_first_missing_parameter_is_reported(self, mock_api, make_service):
        with pytest.raises(ParameterValidationException) as exc_info:
            await make_service(mock_api()).trigger({})

        assert exc_info.value.parameter == "appstore-connect-token"


class TestFailureLogging:

    @pytest.mark.asyncio
    async def test_error_is_logged_redacted_and_reraised(self, mock_api, make_service, caplog):
        transport = mock_api(httpx.Response(403, json={"errors": []}))
        params = {
            "appstore-connect-token": "super-secret-token",
            "xcode-cloud-workflow-id": "W1",
            "git-branch-name": "main",
        }

        with caplog.at_level(logging.ERROR, logger="xcode_cloud_trigger"):
            with pytest.raises(Exception) as exc_info:
                await make_service(transport).trigger(params)

        assert type(exc_info.value).__name__ == "AuthorizationException"
        error_records = [record for record in caplog.records if record.levelno == logging.ERROR]
        assert error_records
        assert error_records[-1].parameters["appstore-connect-token"] == "***"
        assert "super-secret-token" not in caplog.text
