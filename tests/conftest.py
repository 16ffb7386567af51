"""Shared fixtures: canned GitHub payloads and a mock-transport client factory."""

import os
from typing import Callable, List

import httpx
import pytest

from github_browser.client import GitHubClient
from github_browser.config import ClientSettings


TOKEN_URL = "https://github.com/login/oauth/access_token"
TOKEN_BODY = "access_token=abc123&scope=&token_type=bearer"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GITHUB_BROWSER_* variables from the host out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("GITHUB_BROWSER_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def user_payload():
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "site_admin": False,
        "name": "monalisa octocat",
        "public_repos": 2,
        "created_at": "2008-01-14T04:33:35Z",
    }


@pytest.fixture
def repository_payload(user_payload):
    return {
        "id": 1296269,
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "owner": user_payload,
        "private": False,
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "This your first repo!",
        "language": "Python",
        "stargazers_count": 80,
        "open_issues_count": 2,
        "default_branch": "main",
    }


@pytest.fixture
def issue_payloads(user_payload):
    return [
        {
            "id": 10,
            "number": 1347,
            "title": "Found a bug",
            "body": "I'm having a problem with this.",
            "state": "open",
            "user": user_payload,
            "labels": [{"id": 208045946, "name": "bug", "color": "f29513"}],
            "comments": 2,
        },
        {
            "id": 11,
            "number": 1348,
            "title": "Old bug",
            "body": None,
            "state": "closed",
            "user": user_payload,
            "labels": [],
            "closed_at": "2011-04-22T13:33:48Z",
        },
    ]


@pytest.fixture
def comment_payload(user_payload):
    return {
        "id": 1,
        "url": "https://api.github.com/repos/octocat/Hello-World/issues/comments/1",
        "html_url": "https://github.com/octocat/Hello-World/issues/1347#issuecomment-1",
        "body": "Me too",
        "user": user_payload,
        "created_at": "2011-04-14T16:00:49Z",
        "updated_at": "2011-04-14T16:00:49Z",
    }


@pytest.fixture
def make_client():
    """Build a client whose requests are answered by ``handler`` and recorded.

    Token exchange requests are answered with ``TOKEN_BODY`` unless the
    handler is asked for them via ``handle_token=True``.
    """

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        handle_token: bool = False,
        **settings,
    ):
        requests: List[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if not handle_token and str(request.url).startswith(TOKEN_URL):
                return httpx.Response(200, text=TOKEN_BODY)
            return handler(request)

        client = GitHubClient(
            settings=ClientSettings(**settings),
            transport=httpx.MockTransport(recording),
        )
        return client, requests

    return factory
