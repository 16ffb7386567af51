"""Async GitHub REST API client.

This module provides the GitHubClient class, which wraps one shared
``httpx.AsyncClient`` and exposes typed operations for:
- Exchanging an OAuth authorization code for a bearer token
- Looking up the authenticated user
- Searching and fetching repositories
- Listing and creating issues
- Listing and creating issue comments
- Listing OAuth grants

Every operation issues exactly one HTTP request. There is no retry, no
pagination and no rate-limit handling.

Failure policy:
- Non-2xx responses and transport failures always raise
  (``GitHubAPIError`` and subclasses).
- Bodies that do not decode into the expected record yield ``None`` in
  lenient mode (the default) and raise ``ResponseDecodeError`` otherwise.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from github_browser.codec import decode
from github_browser.config import ClientSettings
from github_browser.errors import (
    GitHubTransportError,
    NotAuthenticatedError,
    error_for_status,
)
from github_browser.log_filters import install_secret_filter
from github_browser.models import (
    AuthState,
    ClientCredentials,
    Comment,
    CreateIssueRequest,
    CreateIssueResponse,
    Issue,
    IssuesCollection,
    NewComment,
    Repository,
    SearchRepositoriesResult,
    User,
)
from github_browser.urls import (
    build_api_url,
    build_query_string,
    mask_secrets,
    parse_token_response,
)


logger = logging.getLogger(__name__)


class GitHubClient:
    """Async client for a subset of the GitHub REST API.

    A client starts UNAUTHENTICATED. ``exchange_code_for_token`` stores the
    OAuth application credentials on this instance, sets the bearer token as
    a default header on the shared channel and moves it to AUTHENTICATED.
    Several independently authenticated clients can live in one process.

    Attributes:
        settings: Endpoint, header and behaviour configuration.
        credentials: OAuth application credentials, blank until exchange.
        auth_state: Current authentication state.

    Example:
        >>> async with GitHubClient() as client:
        ...     await client.exchange_code_for_token("id", "secret", "code")
        ...     user = await client.get_authenticated_user()
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            settings: Client configuration. Defaults to ``ClientSettings()``,
                      which reads GITHUB_BROWSER_* environment variables.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
        """
        self.settings = settings or ClientSettings()
        self.credentials = ClientCredentials()
        self.auth_state = AuthState.UNAUTHENTICATED
        self._token: Optional[str] = None
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        install_secret_filter()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the shared HTTP client, creating it if necessary.

        Returns:
            The httpx AsyncClient instance.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._default_headers(),
                timeout=self.settings.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    @property
    def is_authenticated(self) -> bool:
        """Whether a token exchange has succeeded on this instance."""
        return self.auth_state is AuthState.AUTHENTICATED

    def _default_headers(self) -> Dict[str, str]:
        """Headers carried by every request on the shared channel."""
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def _request_headers(self, has_body: bool = False) -> Dict[str, str]:
        """Headers added to each data request.

        Args:
            has_body: Whether the request carries a JSON body.

        Returns:
            Dictionary of HTTP headers.
        """
        headers = {
            "Accept": self.settings.accept_media_type,
            "User-Agent": self.settings.user_agent,
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - close the client."""
        await self.close()

    # -------------------------------------------------------------------------
    # Request plumbing
    # -------------------------------------------------------------------------

    def _check_authenticated(self, operation: str) -> None:
        """Warn about, or reject, a data call made before token exchange.

        Raises:
            NotAuthenticatedError: If ``require_authentication`` is set.
        """
        if self.is_authenticated:
            return
        if self.settings.require_authentication:
            raise NotAuthenticatedError(operation)
        logger.warning(
            "Data call before token exchange; credentials will be blank",
            extra={"operation": operation},
        )

    def _api_url(
        self,
        operation: str,
        path: str,
        queries: Optional[Mapping[str, Optional[object]]] = None,
    ) -> str:
        self._check_authenticated(operation)
        return build_api_url(
            self.settings.api_base_url,
            path,
            queries,
            self.credentials,
            inject_credentials=self.settings.inject_credentials,
        )

    async def _send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        """Send one request and enforce a successful status.

        Args:
            method: HTTP method.
            url: Absolute request URL, credentials included.
            headers: Per-request headers.
            content: Optional request body.

        Returns:
            The successful HTTP response.

        Raises:
            GitHubTransportError: If no response was received.
            GitHubAPIError: If the response status is not 2xx.
        """
        safe_url = mask_secrets(url)
        try:
            response = await self.client.request(
                method=method,
                url=url,
                headers=headers,
                content=content,
            )
        except httpx.RequestError as e:
            logger.error(
                "GitHub request failed before a response",
                extra={"method": method, "url": safe_url, "error": str(e)},
            )
            raise GitHubTransportError(
                message=f"Request failed: {e}",
                request_url=safe_url,
            ) from e

        if not response.is_success:
            error_body = response.text
            logger.error(
                "GitHub API error",
                extra={
                    "status_code": response.status_code,
                    "url": safe_url,
                    "method": method,
                    "response_body": error_body[:500],
                },
            )
            raise error_for_status(
                response.status_code,
                response_body=error_body,
                request_url=safe_url,
            )

        return response

    async def _get_text(self, url: str) -> str:
        response = await self._send("GET", url, headers=self._request_headers())
        return response.text

    async def _post_text(self, url: str, payload: str) -> str:
        response = await self._send(
            "POST",
            url,
            headers=self._request_headers(has_body=True),
            content=payload,
        )
        return response.text

    def _decode(self, target: Any, text: str) -> Any:
        """Decode a body, applying the configured decode-failure policy."""
        return decode(target, text).unwrap(lenient=self.settings.lenient_decoding)

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def exchange_code_for_token(
        self,
        client_id: str,
        client_secret: str,
        code: str,
    ) -> None:
        """Exchange a one-time OAuth code for a bearer token.

        POSTs the credentials and code as query parameters with an empty
        body. On success the credentials are stored on this instance, the
        token becomes the default ``Authorization`` header, and the client
        is AUTHENTICATED. Calling it again replaces token and credentials.

        Args:
            client_id: OAuth application client ID.
            client_secret: OAuth application client secret.
            code: Single-use authorization code.

        Raises:
            GitHubAPIError: If the token endpoint returns a non-2xx status.
            TokenExchangeError: If the body holds no usable token.
        """
        credentials = ClientCredentials(
            client_id=client_id,
            client_secret=client_secret,
        )
        query = build_query_string(
            {"client_id": client_id, "client_secret": client_secret, "code": code},
            credentials,
            inject_credentials=False,
        )
        url = self.settings.oauth_token_url + query

        logger.info("Exchanging OAuth code for token", extra={"client_id": client_id})

        response = await self._send("POST", url, content="")
        token = parse_token_response(response.text)

        self.credentials = credentials
        self._token = token
        self.client.headers["Authorization"] = f"Bearer {token}"
        self.auth_state = AuthState.AUTHENTICATED

        logger.info("OAuth token exchange succeeded", extra={"client_id": client_id})

    # -------------------------------------------------------------------------
    # Users and repositories
    # -------------------------------------------------------------------------

    async def get_authenticated_user(self) -> Optional[User]:
        """Get the user the bearer token belongs to.

        Returns:
            The user, or None if the body does not decode.
        """
        url = self._api_url("get_authenticated_user", "user")
        text = await self._get_text(url)
        return self._decode(User, text)

    async def search_repositories(self, query: str) -> Optional[SearchRepositoriesResult]:
        """Search repositories.

        Args:
            query: GitHub search syntax, e.g. ``"httpx language:python"``.

        Returns:
            Search result with total count and matching repositories, or None.
        """
        logger.debug("Searching repositories", extra={"query": query})

        url = self._api_url("search_repositories", "search/repositories", {"q": query})
        text = await self._get_text(url)
        return self._decode(SearchRepositoriesResult, text)

    async def get_repository(self, full_repository_name: str) -> Optional[Repository]:
        """Get a repository.

        Args:
            full_repository_name: The ``owner/name`` form, not the bare name.

        Returns:
            The repository, or None.
        """
        url = self._api_url("get_repository", f"repos/{full_repository_name}")
        text = await self._get_text(url)
        return self._decode(Repository, text)

    # -------------------------------------------------------------------------
    # Issues and comments
    # -------------------------------------------------------------------------

    async def list_repository_issues(
        self,
        full_repository_name: str,
    ) -> Optional[IssuesCollection]:
        """List a repository's issues, open and closed alike.

        Args:
            full_repository_name: Repository as ``owner/name``.

        Returns:
            The issues wrapped in an IssuesCollection, or None.
        """
        url = self._api_url(
            "list_repository_issues",
            f"repos/{full_repository_name}/issues",
            {"state": "all"},
        )
        text = await self._get_text(url)
        issues = self._decode(List[Issue], text)
        if issues is None:
            return None
        return IssuesCollection(issues=issues)

    async def list_issue_comments(
        self,
        full_repository_name: str,
        issue_number: int,
    ) -> Optional[List[Comment]]:
        """List the comments on an issue.

        Args:
            full_repository_name: Repository as ``owner/name``.
            issue_number: Issue number within the repository.

        Returns:
            The comments, or None.
        """
        url = self._api_url(
            "list_issue_comments",
            f"repos/{full_repository_name}/issues/{issue_number}/comments",
        )
        text = await self._get_text(url)
        return self._decode(List[Comment], text)

    async def create_issue(
        self,
        full_repository_name: str,
        issue: CreateIssueRequest,
    ) -> Optional[CreateIssueResponse]:
        """Create an issue.

        Args:
            full_repository_name: Repository as ``owner/name``.
            issue: Title, body, optional assignee and milestone, labels.

        Returns:
            The created issue, or None.

        Raises:
            GitHubAPIError: If GitHub rejects the request.
        """
        logger.info(
            "Creating issue",
            extra={
                "repository": full_repository_name,
                "title": issue.title,
                "labels": issue.labels,
            },
        )

        url = self._api_url("create_issue", f"repos/{full_repository_name}/issues")
        text = await self._post_text(url, issue.to_json())
        result = self._decode(CreateIssueResponse, text)

        if result is not None:
            logger.info(
                "Issue created",
                extra={"repository": full_repository_name, "issue_number": result.number},
            )
        return result

    async def create_issue_comment(
        self,
        full_repository_name: str,
        issue_number: int,
        comment: str,
    ) -> Optional[Comment]:
        """Create a comment on an issue.

        Args:
            full_repository_name: Repository as ``owner/name``.
            issue_number: Issue number to comment on.
            comment: Comment body in markdown.

        Returns:
            The created comment, or None.

        Raises:
            GitHubAPIError: If GitHub rejects the request.
        """
        logger.info(
            "Creating comment on issue",
            extra={
                "repository": full_repository_name,
                "issue_number": issue_number,
                "body_length": len(comment),
            },
        )

        url = self._api_url(
            "create_issue_comment",
            f"repos/{full_repository_name}/issues/{issue_number}/comments",
        )
        payload = NewComment(body=comment).to_json()
        text = await self._post_text(url, payload)
        return self._decode(Comment, text)

    # -------------------------------------------------------------------------
    # Grants
    # -------------------------------------------------------------------------

    async def list_grants(self) -> str:
        """List the OAuth grants of the application.

        Returns:
            The raw response text, unparsed.
        """
        url = self._api_url("list_grants", "applications/grants")
        return await self._get_text(url)
