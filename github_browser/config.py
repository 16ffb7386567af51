"""Client configuration using pydantic-settings.

This module defines the ClientSettings class that reads configuration from
environment variables with the GITHUB_BROWSER_ prefix. Every field has a
default, so ``ClientSettings()`` works without any environment set up.

OAuth client credentials are deliberately not part of the settings: they are
supplied to ``GitHubClient.exchange_code_for_token`` and held by that one
client instance.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_BASE_URL = "https://api.github.com/"
DEFAULT_OAUTH_TOKEN_URL = "https://github.com/login/oauth/access_token"
DEFAULT_ACCEPT_MEDIA_TYPE = "application/vnd.github.v3+json"
DEFAULT_USER_AGENT = "GitHub-Browser/1.0"


class ClientSettings(BaseSettings):
    """GitHub browser client configuration.

    All environment variables are prefixed with GITHUB_BROWSER_
    (e.g., GITHUB_BROWSER_USER_AGENT).
    """

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_BROWSER_",
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------
    # Base URL every data request is built from
    api_base_url: str = DEFAULT_API_BASE_URL

    # OAuth authorization-code exchange endpoint (outside the API base URL)
    oauth_token_url: str = DEFAULT_OAUTH_TOKEN_URL

    # -------------------------------------------------------------------------
    # Request headers
    # -------------------------------------------------------------------------
    accept_media_type: str = DEFAULT_ACCEPT_MEDIA_TYPE

    # Product/version string sent as User-Agent
    user_agent: str = DEFAULT_USER_AGENT

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------
    timeout_seconds: float = 30.0

    # -------------------------------------------------------------------------
    # Behaviour switches
    # -------------------------------------------------------------------------
    # Append client_id/client_secret to every data request query string
    inject_credentials: bool = True

    # Collapse response decode failures to None instead of raising
    lenient_decoding: bool = True

    # Reject data calls made before the token exchange
    require_authentication: bool = False

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("api_base_url", "oauth_token_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that endpoint URLs are absolute http(s) URLs."""
        if not v or not v.strip():
            raise ValueError("endpoint URL cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint URL must start with http:// or https://")
        return v

    @field_validator("accept_media_type", "user_agent")
    @classmethod
    def validate_header_value(cls, v: str) -> str:
        """Validate that header values are not empty."""
        if not v or not v.strip():
            raise ValueError("header value cannot be empty")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that the timeout is positive."""
        if v <= 0:
            raise ValueError("timeout_seconds must be positive")
        return v


def get_settings() -> ClientSettings:
    """Create and return ClientSettings instance.

    Returns:
        ClientSettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If an environment override is invalid.
    """
    return ClientSettings()
