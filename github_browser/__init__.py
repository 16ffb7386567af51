"""Async client for a subset of the GitHub REST API.

This package provides:
- OAuth authorization-code exchange and bearer-token management
- Authenticated user lookup
- Repository search and fetch
- Issue and issue comment listing and creation
- Typed response records with lenient or strict decoding
"""

from github_browser.client import GitHubClient
from github_browser.codec import DecodeResult, decode
from github_browser.config import ClientSettings, get_settings
from github_browser.errors import (
    ForbiddenError,
    GitHubAPIError,
    GitHubClientError,
    GitHubTransportError,
    NotAuthenticatedError,
    NotFoundError,
    ResponseDecodeError,
    TokenExchangeError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from github_browser.models import (
    AuthState,
    ClientCredentials,
    Comment,
    CreateIssueRequest,
    CreateIssueResponse,
    Issue,
    IssuesCollection,
    Label,
    Milestone,
    NewComment,
    Repository,
    SearchRepositoriesResult,
    User,
)

__all__ = [
    "AuthState",
    "ClientCredentials",
    "ClientSettings",
    "Comment",
    "CreateIssueRequest",
    "CreateIssueResponse",
    "DecodeResult",
    "ForbiddenError",
    "GitHubAPIError",
    "GitHubClient",
    "GitHubClientError",
    "GitHubTransportError",
    "Issue",
    "IssuesCollection",
    "Label",
    "Milestone",
    "NewComment",
    "NotAuthenticatedError",
    "NotFoundError",
    "Repository",
    "ResponseDecodeError",
    "SearchRepositoriesResult",
    "TokenExchangeError",
    "UnauthorizedError",
    "User",
    "UnprocessableEntityError",
    "decode",
    "get_settings",
]
