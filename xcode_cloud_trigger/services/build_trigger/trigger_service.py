"""
Build Trigger Service

Drives the full trigger sequence: workflow → git reference → build run.
Each step runs only after the previous one succeeded; any failure is logged
with a redacted parameter snapshot and re-raised unchanged.
"""

from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from xcode_cloud_trigger.core.config import REQUIRED_PARAMETERS
from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    ParameterValidationException,
)
from xcode_cloud_trigger.models.schemas.app_store_connect import (
    ApiCredentials,
    TriggerParameters,
    TriggerResult,
)
from xcode_cloud_trigger.services.app_store_connect import (
    BuildCreator,
    GitReferenceResolver,
    RequestDispatcher,
    WorkflowResolver,
)
from xcode_cloud_trigger.utils.logging import get_logger
from xcode_cloud_trigger.utils.logging.api_events import ApiEventSink
from xcode_cloud_trigger.utils.validation import require_parameters

logger = get_logger(__name__)

ParamsInput = Union[TriggerParameters, Mapping[str, Any]]


class BuildTriggerService:
    """
    Trigger Xcode Cloud builds by workflow id and branch name.

    The service owns no client state between calls: every ``trigger`` builds
    its own dispatcher from the supplied credentials and hands it to the
    resolvers explicitly.
    """

    def __init__(
        self,
        event_sink: Optional[ApiEventSink] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.event_sink = event_sink
        self.base_url = base_url
        self.transport = transport

    @staticmethod
    def validate_parameters(params: ParamsInput) -> TriggerParameters:
        """
        Check required parameters and return them as TriggerParameters.

        Raises:
            ParameterValidationException: Naming the first missing or
                malformed parameter
        """
        if isinstance(params, TriggerParameters):
            params = {
                "appstore-connect-token": params.token,
                "xcode-cloud-workflow-id": params.workflow_id,
                "git-branch-name": params.branch_name,
            }

        require_parameters(params, REQUIRED_PARAMETERS)
        try:
            return TriggerParameters.model_validate(
                {name: params[name] for name in REQUIRED_PARAMETERS}
            )
        except ValidationError as e:
            error = e.errors()[0]
            name = str(error["loc"][0]) if error.get("loc") else "parameters"
            raise ParameterValidationException(
                f"Invalid parameter '{name}': {error['msg']}", parameter=name
            ) from e

    def _create_dispatcher(self, parameters: TriggerParameters) -> RequestDispatcher:
        return RequestDispatcher(
            ApiCredentials(token=parameters.token),
            event_sink=self.event_sink,
            base_url=self.base_url,
            transport=self.transport,
        )

    async def trigger(self, params: ParamsInput) -> TriggerResult:
        """
        Start a build of a workflow on a branch.

        Args:
            params: Mapping keyed by the stable parameter names
                (``appstore-connect-token``, ``xcode-cloud-workflow-id``,
                ``git-branch-name``) or a TriggerParameters instance

        Returns:
            TriggerResult with build id, build number and git reference id

        Raises:
            ParameterValidationException: If a required parameter is missing
            AppStoreConnectException: Any classified API failure, unchanged
        """
        try:
            parameters = self.validate_parameters(params)
        except ParameterValidationException as e:
            logger.error(f"Build trigger failed: {e}")
            raise

        snapshot = parameters.redacted()
        log = logger.bind(workflow_id=parameters.workflow_id, branch=parameters.branch_name)

        try:
            dispatcher = self._create_dispatcher(parameters)

            log.info("Getting workflow information...")
            workflow = await WorkflowResolver(dispatcher).resolve(parameters.workflow_id)
            log.info(
                "Using repository",
                {
                    "repository_name": workflow.repository.name,
                    "repository_owner": workflow.repository.owner,
                },
            )

            log.info(f"Finding git reference for branch '{parameters.branch_name}'...")
            reference_id = await GitReferenceResolver(dispatcher).resolve(
                workflow.repository.id, parameters.branch_name
            )
            log.info("Using git reference", {"git_reference_id": reference_id})

            log.info("Starting Xcode Cloud build...")
            build = await BuildCreator(dispatcher).create(parameters.workflow_id, reference_id)
            log.info(
                "Build successfully triggered",
                {
                    "build_number": build.number,
                    "repository_name": workflow.repository.name,
                },
            )

        except Exception as e:
            log.error(
                f"Build trigger failed: {type(e).__name__}: {e}",
                {"parameters": snapshot},
            )
            raise

        return TriggerResult(
            build_id=build.id,
            build_number=build.number,
            git_reference_id=reference_id,
        )


async def trigger(params: ParamsInput, **kwargs) -> TriggerResult:
    """One-shot helper: build a BuildTriggerService and run ``trigger``."""
    return await BuildTriggerService(**kwargs).trigger(params)
