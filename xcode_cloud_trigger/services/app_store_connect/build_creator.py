"""Create Xcode Cloud build runs."""

from typing import Any, Dict

from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    UnexpectedResponseException,
)
from xcode_cloud_trigger.models.schemas.app_store_connect import BuildRun
from xcode_cloud_trigger.services.app_store_connect.dispatcher import RequestDispatcher
from xcode_cloud_trigger.utils.validation import require_value


def build_run_request_body(workflow_id: str, reference_id: str) -> Dict[str, Any]:
    """Relationship-graph payload for ``POST /ciBuildRuns``."""
    return {
        "data": {
            "type": "ciBuildRuns",
            "attributes": {},
            "relationships": {
                "workflow": {
                    "data": {"type": "ciWorkflows", "id": workflow_id},
                },
                "sourceBranchOrTag": {
                    "data": {"type": "scmGitReferences", "id": reference_id},
                },
            },
        }
    }


class BuildCreator:
    def __init__(self, dispatcher: RequestDispatcher):
        self.dispatcher = dispatcher

    async def create(self, workflow_id: str, reference_id: str) -> BuildRun:
        """
        Start a build of ``workflow_id`` on the given git reference.

        Returns:
            The id and number assigned by App Store Connect

        Raises:
            ParameterValidationException: If an argument is empty
            ConflictException: If App Store Connect rejects the build with 409
        """
        require_value(workflow_id, "Workflow ID")
        require_value(reference_id, "Git reference ID")

        data = await self.dispatcher.send(
            "/ciBuildRuns",
            method="POST",
            body=build_run_request_body(workflow_id, reference_id),
            context="Build",
        )

        resource = data.get("data") if isinstance(data, dict) else None
        if not resource or not resource.get("id"):
            raise UnexpectedResponseException(
                "Build creation response did not include a build id",
                details={"response": data},
            )

        attributes = resource.get("attributes") or {}
        return BuildRun(id=str(resource["id"]), number=attributes.get("number"))
