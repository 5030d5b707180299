"""
App Store Connect Models

Pydantic schemas for the resources the build trigger reads and creates, plus
the input/output contract of the trigger operation.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

BRANCH_REF_PREFIX = "refs/heads/"


class ApiCredentials(BaseModel):
    """Bearer token used to authenticate against App Store Connect."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr

    def authorization_header(self) -> str:
        return f"Bearer {self.token.get_secret_value()}"


class Repository(BaseModel):
    """SCM repository attached to a workflow."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    owner: Optional[str] = None


class Workflow(BaseModel):
    """Xcode Cloud workflow and its repository."""

    model_config = ConfigDict(frozen=True)

    id: str
    repository: Repository


class GitReferenceKind(str, Enum):
    """Kinds of SCM git references."""
    BRANCH = "BRANCH"
    TAG = "TAG"


class GitReference(BaseModel):
    """Single entry of a repository's git reference collection."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: Optional[str] = None
    name: Optional[str] = None
    canonical_name: Optional[str] = None
    is_deleted: bool = False

    @classmethod
    def from_api(cls, entry: Any) -> "GitReference":
        """Build from a raw ``scmGitReferences`` resource object.

        Null or malformed entries yield a reference with no kind, which is
        never eligible for matching.
        """
        if not isinstance(entry, dict):
            entry = {}
        attributes = entry.get("attributes")
        if not isinstance(attributes, dict):
            attributes = {}
        return cls(
            id=str(entry.get("id") or ""),
            kind=attributes.get("kind"),
            name=attributes.get("name"),
            canonical_name=attributes.get("canonicalName"),
            is_deleted=bool(attributes.get("isDeleted", False)),
        )

    @property
    def is_active_branch(self) -> bool:
        return self.kind == GitReferenceKind.BRANCH.value and not self.is_deleted

    def matches_branch(self, branch_name: str) -> bool:
        """Exact match on name, or on the canonical ``refs/heads/`` form."""
        return (
            self.name == branch_name
            or self.canonical_name == f"{BRANCH_REF_PREFIX}{branch_name}"
        )


class BuildRun(BaseModel):
    """Build run created by App Store Connect."""

    model_config = ConfigDict(frozen=True)

    id: str
    number: Optional[int] = None


class TriggerParameters(BaseModel):
    """Validated inputs of a trigger invocation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    token: SecretStr = Field(..., alias="appstore-connect-token")
    workflow_id: str = Field(..., alias="xcode-cloud-workflow-id", min_length=1)
    branch_name: str = Field(..., alias="git-branch-name", min_length=1)

    def redacted(self) -> Dict[str, str]:
        """Parameter snapshot that is safe to log."""
        return {
            "appstore-connect-token": "***",
            "xcode-cloud-workflow-id": self.workflow_id,
            "git-branch-name": self.branch_name,
        }


class TriggerResult(BaseModel):
    """Identifiers of a successfully triggered build."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    build_id: str = Field(..., alias="buildId")
    build_number: Optional[int] = Field(None, alias="buildNumber")
    git_reference_id: str = Field(..., alias="gitReferenceId")
