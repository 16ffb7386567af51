"""Exception hierarchy for the GitHub browser client.

HTTP status and transport failures always propagate to the caller as
``GitHubAPIError`` subclasses. Decode failures only surface as
``ResponseDecodeError`` when lenient decoding is switched off; otherwise the
client collapses them to ``None``.
"""

from typing import Optional


class GitHubClientError(Exception):
    """Base class for every error raised by this package."""


class GitHubAPIError(GitHubClientError):
    """Raised when a GitHub API request fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the response.
        response_body: Response body from GitHub API.
        request_url: The URL that was requested, with secrets masked.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url
        super().__init__(message)


class UnauthorizedError(GitHubAPIError):
    """Raised on 401 responses (missing or rejected bearer token)."""


class ForbiddenError(GitHubAPIError):
    """Raised on 403 responses."""


class NotFoundError(GitHubAPIError):
    """Raised on 404 responses."""


class UnprocessableEntityError(GitHubAPIError):
    """Raised on 422 responses, e.g. an issue payload GitHub rejects."""


class GitHubTransportError(GitHubAPIError):
    """Raised when the request never produced a response.

    Wraps ``httpx.RequestError`` (connection refused, DNS failure, timeout).
    The original exception is available as ``__cause__``.
    """


class TokenExchangeError(GitHubClientError):
    """Raised when the OAuth token response cannot be turned into a token.

    Attributes:
        reason: Short description of what was wrong with the body.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Could not read access token from response: {reason}")


class ResponseDecodeError(GitHubClientError):
    """Raised in strict decoding mode when a body does not match its record.

    Attributes:
        target: Name of the type the body was decoded into.
        detail: Validation error text.
        body_excerpt: First characters of the offending body.
    """

    def __init__(self, target: str, detail: str, body_excerpt: str = ""):
        self.target = target
        self.detail = detail
        self.body_excerpt = body_excerpt
        super().__init__(f"Could not decode response as {target}: {detail}")


class NotAuthenticatedError(GitHubClientError):
    """Raised when a data call is made before the token exchange.

    Only raised when the client is configured with
    ``require_authentication=True``.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"{operation} called before exchange_code_for_token; "
            "no credentials or bearer token are set"
        )


_STATUS_ERRORS = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    422: UnprocessableEntityError,
}


def error_for_status(
    status_code: int,
    response_body: Optional[str] = None,
    request_url: Optional[str] = None,
) -> GitHubAPIError:
    """Build the most specific ``GitHubAPIError`` for an HTTP status.

    Args:
        status_code: Non-success HTTP status code.
        response_body: Raw response text.
        request_url: Masked request URL.

    Returns:
        An exception instance ready to be raised.
    """
    error_class = _STATUS_ERRORS.get(status_code, GitHubAPIError)
    return error_class(
        message=f"GitHub API error: {status_code}",
        status_code=status_code,
        response_body=response_body,
        request_url=request_url,
    )
