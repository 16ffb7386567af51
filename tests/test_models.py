"""Tests for the typed GitHub records."""

import json

import pytest
from pydantic import ValidationError

from github_browser.models import (
    ClientCredentials,
    Comment,
    CreateIssueRequest,
    CreateIssueResponse,
    Issue,
    NewComment,
    Repository,
    SearchRepositoriesResult,
    User,
)


class TestClientCredentials:
    def test_empty_by_default(self):
        credentials = ClientCredentials()
        assert credentials.is_empty
        assert credentials.client_id == ""

    def test_secret_hidden_from_repr(self):
        credentials = ClientCredentials(client_id="A", client_secret="s3cret")
        assert "s3cret" not in repr(credentials)
        assert not credentials.is_empty


class TestRecords:
    def test_user_fields(self, user_payload):
        user = User.model_validate(user_payload)

        assert user.login == "octocat"
        assert user.type == "User"
        assert user.created_at.year == 2008

    def test_user_requires_login_and_id(self):
        with pytest.raises(ValidationError):
            User.model_validate({})

    def test_repository_with_owner(self, repository_payload):
        repository = Repository.model_validate(repository_payload)

        assert repository.full_name == "octocat/Hello-World"
        assert repository.owner.id == 1
        assert repository.forks_count == 0

    def test_search_result(self, repository_payload):
        result = SearchRepositoriesResult.model_validate(
            {"total_count": 40, "incomplete_results": True, "items": [repository_payload]}
        )

        assert result.total_count == 40
        assert result.incomplete_results
        assert result.items[0].name == "Hello-World"

    def test_issue_pull_request_flag(self, issue_payloads):
        issue = Issue.model_validate(issue_payloads[0])
        pull = Issue.model_validate({**issue_payloads[0], "pull_request": {"url": "x"}})

        assert not issue.is_pull_request
        assert pull.is_pull_request

    def test_create_issue_response_is_issue(self, issue_payloads):
        created = CreateIssueResponse.model_validate(issue_payloads[0])

        assert isinstance(created, Issue)
        assert created.labels[0].color == "f29513"

    def test_comment(self, comment_payload):
        comment = Comment.model_validate(comment_payload)

        assert comment.body == "Me too"
        assert comment.updated_at.month == 4

    def test_comment_requires_user_key(self, comment_payload):
        payload = {k: v for k, v in comment_payload.items() if k != "user"}

        with pytest.raises(ValidationError):
            Comment.model_validate(payload)

    def test_comment_user_may_be_null(self, comment_payload):
        comment = Comment.model_validate({**comment_payload, "user": None})
        assert comment.user is None


class TestPayloads:
    @pytest.mark.parametrize("text", ["", "hello", "a&b=c", "ünïcode"])
    def test_new_comment_serializes_body_only(self, text):
        assert json.loads(NewComment(body=text).to_json()) == {"body": text}

    def test_create_issue_omits_unset_optionals(self):
        payload = json.loads(CreateIssueRequest(title="Found a bug").to_json())
        assert payload == {"title": "Found a bug", "labels": []}

    def test_create_issue_full(self):
        request = CreateIssueRequest(
            title="Found a bug",
            body="Details",
            assignee="octocat",
            milestone=1,
            labels=["bug", "ui"],
        )

        payload = json.loads(request.to_json())

        assert payload == {
            "title": "Found a bug",
            "body": "Details",
            "assignee": "octocat",
            "milestone": 1,
            "labels": ["bug", "ui"],
        }
