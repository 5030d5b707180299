"""
Git Reference Resolver

Pages through every git reference of an SCM repository and picks the active
branch reference that matches a branch name.
"""

from typing import Iterable, List, Optional

from xcode_cloud_trigger.core.config import settings
from xcode_cloud_trigger.exceptions.app_store_connect_exceptions import (
    GitReferenceNotFoundException,
)
from xcode_cloud_trigger.models.schemas.app_store_connect import GitReference
from xcode_cloud_trigger.services.app_store_connect.dispatcher import RequestDispatcher
from xcode_cloud_trigger.services.app_store_connect.pagination import (
    derive_next_request,
    next_page_link,
)
from xcode_cloud_trigger.utils.logging import get_logger
from xcode_cloud_trigger.utils.validation import require_value

logger = get_logger(__name__)


def eligible_branches(references: Iterable[GitReference]) -> List[GitReference]:
    """Keep BRANCH references that are not deleted, preserving page order."""
    return [reference for reference in references if reference.is_active_branch]


def find_branch_reference(
    references: Iterable[GitReference],
    branch_name: str
) -> Optional[GitReference]:
    """
    Return the first eligible reference matching ``branch_name``.

    Matching is exact on ``name`` or on ``canonicalName`` against
    ``refs/heads/<branch_name>``. When the API reports more than one match,
    the first one in page order wins; the result therefore depends on the
    order in which pages were fetched.
    """
    for reference in eligible_branches(references):
        if reference.matches_branch(branch_name):
            return reference
    return None


class GitReferenceResolver:
    """
    Resolve a branch name to a git reference id.

    All pages are fetched sequentially and accumulated before matching. The
    accumulator is local to one call.
    """

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        page_limit: Optional[int] = None
    ):
        self.dispatcher = dispatcher
        self.page_limit = page_limit or settings.GIT_REFERENCES_PAGE_LIMIT

    async def list_references(self, repository_id: str) -> List[GitReference]:
        """
        Fetch every git reference of ``repository_id`` across all pages.

        Args:
            repository_id: SCM repository id

        Returns:
            References in page order
        """
        require_value(repository_id, "Repository ID")

        references: List[GitReference] = []
        path: Optional[str] = (
            f"/scmRepositories/{repository_id}/gitReferences?limit={self.page_limit}"
        )
        pages = 0

        while path:
            data = await self.dispatcher.send(path, context="Git reference")
            pages += 1

            entries = data.get("data") if isinstance(data, dict) else None
            references.extend(GitReference.from_api(entry) for entry in entries or [])

            path = derive_next_request(next_page_link(data), self.dispatcher.base_url)

        logger.debug(
            f"Fetched {len(references)} git references for repository {repository_id} "
            f"in {pages} page(s)"
        )
        return references

    async def resolve(self, repository_id: str, branch_name: str) -> str:
        """
        Return the id of the active branch reference named ``branch_name``.

        Raises:
            ParameterValidationException: If an argument is empty
            GitReferenceNotFoundException: If no eligible reference matches;
                the message lists the available branches
        """
        require_value(repository_id, "Repository ID")
        require_value(branch_name, "Branch name")

        references = await self.list_references(repository_id)
        reference = find_branch_reference(references, branch_name)

        if reference is None:
            available = sorted(
                branch.name for branch in eligible_branches(references) if branch.name
            )
            raise GitReferenceNotFoundException(branch_name, available)

        return reference.id
