"""Resolve an Xcode Cloud workflow to the repository it builds."""

from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    UnexpectedResponseException,
)
from xcode_cloud_trigger.models.schemas.app_store_connect import Repository, Workflow
from xcode_cloud_trigger.services.app_store_connect.dispatcher import RequestDispatcher
from xcode_cloud_trigger.utils.logging import get_logger
from xcode_cloud_trigger.utils.validation import require_value

logger = get_logger(__name__)


class WorkflowResolver:
    def __init__(self, dispatcher: RequestDispatcher):
        self.dispatcher = dispatcher

    async def resolve(self, workflow_id: str) -> Workflow:
        """
        Fetch the repository associated with ``workflow_id``.

        Raises:
            ParameterValidationException: If workflow_id is empty
            ResourceNotFoundException: If the workflow does not exist
            UnexpectedResponseException: If the response has no repository
        """
        require_value(workflow_id, "Workflow ID")

        data = await self.dispatcher.send(
            f"/ciWorkflows/{workflow_id}/repository",
            context="Workflow Repository",
        )

        resource = data.get("data") if isinstance(data, dict) else None
        if not resource or not resource.get("id"):
            raise UnexpectedResponseException(
                f"Workflow {workflow_id} response did not include a repository",
                details={"response": data},
            )

        attributes = resource.get("attributes") or {}
        repository = Repository(
            id=str(resource["id"]),
            name=attributes.get("repositoryName"),
            owner=attributes.get("ownerName"),
        )
        logger.debug(f"Workflow {workflow_id} builds repository {repository.id}")

        return Workflow(id=workflow_id, repository=repository)
