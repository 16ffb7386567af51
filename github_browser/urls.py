"""URL and query-string construction, plus OAuth token response parsing.

Query strings are built as ``?key=value&key=value&``: pairs in insertion
order, each terminated by ``&``. GitHub tolerates the trailing separator.
Unless disabled, the instance's ``client_id`` and ``client_secret`` are
appended to every query string, whether or not the endpoint needs them.
"""

import re
from typing import Mapping, Optional
from urllib.parse import quote, unquote_plus

from github_browser.errors import TokenExchangeError
from github_browser.models import ClientCredentials


_SECRET_PATTERN = re.compile(
    r'((?:^|[?&])(?:client_secret|code|access_token)=)[^&\s"]*'
)
MASK = "***"


def _encode(value: Optional[object]) -> str:
    if value is None:
        return ""
    return quote(str(value), safe="")


def build_query_string(
    queries: Optional[Mapping[str, Optional[object]]],
    credentials: ClientCredentials,
    inject_credentials: bool = True,
) -> str:
    """Build a query string, appending client credentials.

    Args:
        queries: Endpoint query parameters, emitted in insertion order.
                 None values become empty strings.
        credentials: Credentials appended after the endpoint parameters.
        inject_credentials: Set False to leave the credentials out.

    Returns:
        The query string including the leading ``?``.
    """
    pairs = dict(queries or {})
    if inject_credentials:
        pairs["client_id"] = credentials.client_id
        pairs["client_secret"] = credentials.client_secret

    parts = ["?"]
    for key, value in pairs.items():
        parts.append(f"{key}={_encode(value)}&")
    return "".join(parts)


def build_api_url(
    base_url: str,
    path: str,
    queries: Optional[Mapping[str, Optional[object]]],
    credentials: ClientCredentials,
    inject_credentials: bool = True,
) -> str:
    """Join the base URL and a relative API path and append the query string.

    Args:
        base_url: API base, with or without trailing slash.
        path: Relative path such as ``repos/octocat/Hello-World``.
        queries: Endpoint query parameters.
        credentials: Credentials to inject.
        inject_credentials: Whether to inject them.

    Returns:
        Absolute request URL.
    """
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    return url + build_query_string(queries, credentials, inject_credentials)


def mask_secrets(url: str) -> str:
    """Replace client_secret, code and access_token values so the text can be logged."""
    return _SECRET_PATTERN.sub(rf"\g<1>{MASK}", url)


def parse_token_response(text: str) -> str:
    """Extract the bearer token from an OAuth token response body.

    GitHub answers the code exchange with a form-encoded body such as
    ``access_token=abc123&scope=&token_type=bearer``; the first pair's value
    is the token. A rejected code still comes back with status 200 and a
    body starting with ``error=``.

    Args:
        text: Raw response body.

    Returns:
        The access token.

    Raises:
        TokenExchangeError: If no token can be read from the body.
    """
    first_pair = text.strip().split("&")[0]
    if not first_pair:
        raise TokenExchangeError("empty response body")

    key, sep, value = first_pair.partition("=")
    if not sep:
        raise TokenExchangeError(f"expected key=value pair, got {key[:40]!r}")
    if key == "error":
        raise TokenExchangeError(f"provider returned error {unquote_plus(value)!r}")

    token = unquote_plus(value)
    if not token:
        raise TokenExchangeError("token value is empty")
    return token
