"""Tests for client settings loading and validation."""

import pytest
from pydantic import ValidationError

from github_browser.config import ClientSettings, get_settings


class TestClientSettings:
    def test_defaults(self):
        settings = ClientSettings()

        assert settings.api_base_url == "https://api.github.com/"
        assert settings.oauth_token_url == "https://github.com/login/oauth/access_token"
        assert settings.accept_media_type == "application/vnd.github.v3+json"
        assert settings.user_agent == "GitHub-Browser/1.0"
        assert settings.timeout_seconds == 30.0
        assert settings.inject_credentials is True
        assert settings.lenient_decoding is True
        assert settings.require_authentication is False

    def test_load_from_env(self, monkeypatch):
        monkeypatch.setenv("GITHUB_BROWSER_API_BASE_URL", "https://ghe.example.com/api/v3/")
        monkeypatch.setenv("GITHUB_BROWSER_USER_AGENT", "Test-Agent/0.1")
        monkeypatch.setenv("GITHUB_BROWSER_LENIENT_DECODING", "false")

        settings = get_settings()

        assert settings.api_base_url == "https://ghe.example.com/api/v3/"
        assert settings.user_agent == "Test-Agent/0.1"
        assert settings.lenient_decoding is False

    @pytest.mark.parametrize("url", ["", "api.github.com", "ftp://api.github.com"])
    def test_invalid_base_url(self, url):
        with pytest.raises(ValidationError):
            ClientSettings(api_base_url=url)

    def test_invalid_token_url(self):
        with pytest.raises(ValidationError):
            ClientSettings(oauth_token_url="github.com/login/oauth/access_token")

    @pytest.mark.parametrize("field", ["accept_media_type", "user_agent"])
    def test_blank_header_value(self, field):
        with pytest.raises(ValidationError):
            ClientSettings(**{field: "  "})

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_non_positive_timeout(self, timeout):
        with pytest.raises(ValidationError):
            ClientSettings(timeout_seconds=timeout)
