"""
App Store Connect Services Package

Provides the App Store Connect API client pieces used to trigger Xcode Cloud
builds.
"""

from xcode_cloud_trigger.services.app_store_connect.dispatcher import RequestDispatcher
from xcode_cloud_trigger.services.app_store_connect.workflow_resolver import WorkflowResolver
from xcode_cloud_trigger.services.app_store_connect.git_reference_resolver import (
    GitReferenceResolver,
    eligible_branches,
    find_branch_reference,
)
from xcode_cloud_trigger.services.app_store_connect.build_creator import (
    BuildCreator,
    build_run_request_body,
)
from xcode_cloud_trigger.services.app_store_connect.pagination import derive_next_request

__all__ = [
    # Transport
    "RequestDispatcher",
    "derive_next_request",
    # Resolvers
    "WorkflowResolver",
    "GitReferenceResolver",
    "eligible_branches",
    "find_branch_reference",
    # Build creation
    "BuildCreator",
    "build_run_request_body",
]
