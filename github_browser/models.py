"""Typed records for GitHub REST API payloads.

These models map directly to the JSON objects GitHub returns, using the
API's own snake_case field names. Fields the client never reads are simply
ignored on input. Required fields are the ones a payload cannot sensibly
lack; a body missing them (``{}`` included) fails validation and is treated
as "no usable data" by the client.

API Reference: https://docs.github.com/en/rest
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthState(str, Enum):
    """Authentication lifecycle of a client instance.

    Attributes:
        UNAUTHENTICATED: Initial state; credentials are blank and no bearer
                         header is set.
        AUTHENTICATED: A token exchange succeeded; the bearer header is set
                       on the shared channel for every later call.
    """

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class ClientCredentials(BaseModel):
    """OAuth application credentials held by one client instance.

    Both fields stay empty until ``exchange_code_for_token`` stores the
    values it was called with.
    """

    client_id: str = ""
    client_secret: str = Field(default="", repr=False)

    @property
    def is_empty(self) -> bool:
        """Whether neither credential has been set."""
        return not self.client_id and not self.client_secret


class GitHubModel(BaseModel):
    """Base for records decoded from GitHub responses."""

    model_config = ConfigDict(extra="ignore")


class User(GitHubModel):
    """GitHub user account.

    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login")
    id: int = Field(..., description="Unique user identifier")
    node_id: Optional[str] = None
    avatar_url: Optional[str] = None
    url: Optional[str] = None
    html_url: Optional[str] = None
    type: Optional[str] = Field(None, description="'User', 'Organization' or 'Bot'")
    site_admin: bool = False
    name: Optional[str] = None
    company: Optional[str] = None
    blog: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    public_repos: Optional[int] = None
    followers: Optional[int] = None
    following: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Repository(GitHubModel):
    """GitHub repository.

    API Reference: https://docs.github.com/en/rest/repos/repos
    """

    id: int
    name: str
    full_name: str = Field(..., description="Repository path as 'owner/name'")
    owner: Optional[User] = None
    private: bool = False
    html_url: Optional[str] = None
    description: Optional[str] = None
    fork: bool = False
    url: Optional[str] = None
    homepage: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    default_branch: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None


class SearchRepositoriesResult(GitHubModel):
    """Response of ``GET /search/repositories``."""

    total_count: int
    incomplete_results: bool = False
    items: list[Repository] = Field(default_factory=list)


class Label(GitHubModel):
    """Issue label."""

    id: Optional[int] = None
    name: str
    color: Optional[str] = Field(None, description="Hex color without leading #")
    description: Optional[str] = None
    default: bool = False


class Milestone(GitHubModel):
    """Issue milestone."""

    id: Optional[int] = None
    number: int
    title: str
    state: Optional[str] = None
    description: Optional[str] = None


class Issue(GitHubModel):
    """GitHub issue.

    The issues endpoint also returns pull requests; those carry a
    ``pull_request`` object.

    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    id: Optional[int] = None
    number: int
    title: str
    body: Optional[str] = None
    state: Optional[str] = Field(None, description="'open' or 'closed'")
    url: Optional[str] = None
    html_url: Optional[str] = None
    comments_url: Optional[str] = None
    user: Optional[User] = None
    labels: list[Label] = Field(default_factory=list)
    assignee: Optional[User] = None
    assignees: list[User] = Field(default_factory=list)
    milestone: Optional[Milestone] = None
    comments: int = 0
    locked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    pull_request: Optional[dict[str, Any]] = None

    @property
    def is_pull_request(self) -> bool:
        """Whether this entry is a pull request rather than a plain issue."""
        return self.pull_request is not None


class IssuesCollection(GitHubModel):
    """Wrapper around the JSON array returned by the issues endpoint."""

    issues: list[Issue] = Field(default_factory=list)


class CreateIssueResponse(Issue):
    """The issue GitHub returns after ``POST /repos/{owner}/{repo}/issues``."""


class Comment(GitHubModel):
    """Issue comment.

    API Reference: https://docs.github.com/en/rest/issues/comments
    """

    id: int
    url: str
    html_url: str
    body: str
    user: Optional[User] = Field(..., description="Author; null for deleted accounts")
    created_at: datetime
    updated_at: datetime


class RequestPayload(BaseModel):
    """Base for JSON request bodies sent to GitHub."""

    def to_json(self) -> str:
        """Serialize the body, leaving out fields that are None."""
        return self.model_dump_json(exclude_none=True)


class NewComment(RequestPayload):
    """Write-only payload for creating a comment."""

    body: str


class CreateIssueRequest(RequestPayload):
    """Payload for ``POST /repos/{owner}/{repo}/issues``.

    Attributes:
        title: Issue title.
        body: Issue body in markdown.
        assignee: Login to assign; omitted from the payload when unset.
        milestone: Milestone number; omitted from the payload when unset.
        labels: Label names to apply.
    """

    title: str
    body: Optional[str] = None
    assignee: Optional[str] = None
    milestone: Optional[int] = None
    labels: list[str] = Field(default_factory=list)
