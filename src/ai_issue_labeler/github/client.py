"""GitHub label store client.

This intentionally wraps PyGithub to keep GitHub calls out of the labeling logic and
make tests easy. Label listing and creation go through PyGithub; attaching labels to an
issue uses the REST endpoint directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Label:
    """A repository label. Identity is the case-folded name."""

    name: str
    color: str
    description: str | None = None

    @property
    def key(self) -> str:
        return self.name.casefold()


class LabelAlreadyExistsError(Exception):
    """Raised when the store rejects a label create because the name is taken.

    This usually means another run created the label between our listing and our
    create call.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Label already exists: {name!r}")
        self.name = name


def _is_already_exists(exc: GithubException) -> bool:
    if exc.status != 422:
        return False
    data = exc.data if isinstance(exc.data, dict) else {}
    errors = data.get("errors")
    if isinstance(errors, list):
        for err in errors:
            if isinstance(err, dict) and err.get("code") == "already_exists":
                return True
    return "already_exists" in str(exc)


class GitHubLabelClient:
    """Small wrapper around PyGithub for the label operations a labeling run needs."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository
        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "ai-issue-labeler",
            }
        )

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=base_url)

        self._repo = self._github.get_repo(repository)
        logger.info(
            "Authenticated with GitHub and connected to repository", extra={"repo": repository}
        )

    def _issues_url(self, *, issue_number: int, suffix: str = "") -> str:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        if suffix and not suffix.startswith("/"):
            suffix = "/" + suffix
        return f"{self._rest_base_url}/repos/{self._repository_name}/issues/{issue_number}{suffix}"

    def list_labels(self) -> list[Label]:
        """Return every label defined in the repository."""

        labels = [
            Label(name=label.name, color=label.color, description=label.description or None)
            for label in self._repo.get_labels()
        ]
        logger.debug(
            "Listed repository labels",
            extra={"repo": self._repository_name, "count": len(labels)},
        )
        return labels

    def create_label(self, *, name: str, color: str, description: str | None) -> Label:
        """Create a label.

        Raises:
            LabelAlreadyExistsError: if a label with this name (in any casing) exists.
            GithubException: for any other API failure.
        """

        try:
            if description:
                created = self._repo.create_label(name=name, color=color, description=description)
            else:
                created = self._repo.create_label(name=name, color=color)
        except GithubException as e:
            if _is_already_exists(e):
                raise LabelAlreadyExistsError(name) from e
            raise

        logger.debug("Created label", extra={"label": created.name, "color": created.color})
        return Label(
            name=created.name,
            color=created.color,
            description=created.description or None,
        )

    def attach_labels(self, *, issue_number: int, names: list[str]) -> list[str]:
        """Add labels to an issue, keeping any labels it already has.

        Returns:
            The names of all labels on the issue after the update.
        """

        if not names:
            raise ValueError("names must not be empty")

        url = self._issues_url(issue_number=issue_number, suffix="labels")
        resp = self._session.post(url, json={"labels": names}, timeout=30)
        resp.raise_for_status()

        payload: Any = resp.json()
        applied: list[str] = []
        if isinstance(payload, list):
            for item in payload:
                if isinstance(item, dict) and isinstance(item.get("name"), str):
                    applied.append(item["name"])
        return applied

    def close(self) -> None:
        """Release HTTP resources."""

        self._session.close()
        if self._github is not None:
            self._github.close()
