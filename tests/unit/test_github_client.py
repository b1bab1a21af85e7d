"""Unit tests for the GitHub label client (mocked PyGithub and HTTP)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import requests
from github import GithubException
from github.Repository import Repository

from ai_issue_labeler.github.client import GitHubLabelClient, Label, LabelAlreadyExistsError


def _client(repo: Mock | None = None, session: Mock | None = None) -> GitHubLabelClient:
    session = session or Mock(spec=requests.Session)
    session.headers = {}
    return GitHubLabelClient(
        token="test-token",
        repository="octo-org/octo-repo",
        repo=repo or Mock(spec=Repository),
        session=session,
    )


def _gh_label(name: str, color: str = "ededed", description: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(name=name, color=color, description=description)


def test_client_requires_token_and_repository() -> None:
    with pytest.raises(ValueError, match="token"):
        GitHubLabelClient(token="", repository="o/r", repo=Mock(spec=Repository))
    with pytest.raises(ValueError, match="repository"):
        GitHubLabelClient(token="t", repository="", repo=Mock(spec=Repository))


def test_list_labels_maps_repository_labels() -> None:
    repo = Mock(spec=Repository)
    repo.get_labels.return_value = [
        _gh_label("bug", "d73a4a", "Broken"),
        _gh_label("docs", description=""),
    ]

    labels = _client(repo=repo).list_labels()

    assert labels == [
        Label(name="bug", color="d73a4a", description="Broken"),
        Label(name="docs", color="ededed", description=None),
    ]


def test_create_label_returns_created_label() -> None:
    repo = Mock(spec=Repository)
    repo.create_label.return_value = _gh_label("feature", "abcdef", "new stuff")

    label = _client(repo=repo).create_label(name="feature", color="abcdef", description="new stuff")

    assert label == Label(name="feature", color="abcdef", description="new stuff")
    repo.create_label.assert_called_once_with(
        name="feature", color="abcdef", description="new stuff"
    )


def test_create_label_maps_already_exists_conflict() -> None:
    repo = Mock(spec=Repository)
    repo.create_label.side_effect = GithubException(
        422,
        {
            "message": "Validation Failed",
            "errors": [{"resource": "Label", "code": "already_exists", "field": "name"}],
        },
        None,
    )

    with pytest.raises(LabelAlreadyExistsError) as excinfo:
        _client(repo=repo).create_label(name="feature", color="abcdef", description="d")

    assert excinfo.value.name == "feature"


def test_create_label_reraises_other_validation_errors() -> None:
    repo = Mock(spec=Repository)
    repo.create_label.side_effect = GithubException(
        422,
        {"message": "Validation Failed", "errors": [{"code": "invalid", "field": "color"}]},
        None,
    )

    with pytest.raises(GithubException):
        _client(repo=repo).create_label(name="feature", color="zzzzzz", description="d")


def test_create_label_reraises_permission_errors() -> None:
    repo = Mock(spec=Repository)
    repo.create_label.side_effect = GithubException(403, {"message": "Forbidden"}, None)

    with pytest.raises(GithubException):
        _client(repo=repo).create_label(name="feature", color="abcdef", description="d")


def test_attach_labels_posts_to_issue_labels_endpoint() -> None:
    session = Mock(spec=requests.Session)
    response = Mock(spec=requests.Response)
    response.json.return_value = [{"name": "bug"}, {"name": "feature"}, {"name": "older"}]
    session.post.return_value = response

    applied = _client(session=session).attach_labels(issue_number=42, names=["bug", "feature"])

    assert applied == ["bug", "feature", "older"]
    session.post.assert_called_once_with(
        "https://api.github.com/repos/octo-org/octo-repo/issues/42/labels",
        json={"labels": ["bug", "feature"]},
        timeout=30,
    )
    response.raise_for_status.assert_called_once()


def test_attach_labels_propagates_http_errors() -> None:
    session = Mock(spec=requests.Session)
    response = Mock(spec=requests.Response)
    response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
    session.post.return_value = response

    with pytest.raises(requests.HTTPError):
        _client(session=session).attach_labels(issue_number=42, names=["bug"])


def test_attach_labels_validates_arguments() -> None:
    client = _client()

    with pytest.raises(ValueError):
        client.attach_labels(issue_number=42, names=[])
    with pytest.raises(ValueError):
        client.attach_labels(issue_number=0, names=["bug"])


def test_session_carries_auth_headers() -> None:
    session = Mock(spec=requests.Session)
    session.headers = {}

    GitHubLabelClient(
        token="test-token",
        repository="octo-org/octo-repo",
        repo=Mock(spec=Repository),
        session=session,
    )

    assert session.headers["Authorization"] == "Bearer test-token"
    assert session.headers["Accept"] == "application/vnd.github+json"
