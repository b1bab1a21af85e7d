"""Run-boundary input: the issue a labeling run acts on.

The triggering event payload is read exactly once, here, and turned into an
explicit :class:`IssueContext`. Nothing downstream looks at the raw payload.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IssueContext:
    """The issue fields a labeling run needs."""

    owner: str
    repo: str
    number: int
    title: str
    body: str | None = None

    @property
    def repository(self) -> str:
        """Return the repository name ("owner/repo")."""

        return f"{self.owner}/{self.repo}"


def split_repository(repository: str) -> tuple[str, str]:
    """Split "owner/repo" into its parts."""

    parts = repository.strip().split("/")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise ValueError(f"Repository must be in the form 'owner/repo': {repository!r}")
    return parts[0].strip(), parts[1].strip()


def issue_context_from_payload(
    payload: dict[str, Any], *, repository: str | None = None
) -> IssueContext | None:
    """Build an :class:`IssueContext` from an Actions event payload.

    Returns None when the event carries no issue (e.g. a push or schedule event).
    The repository falls back to `payload.repository.full_name` when not given.
    """

    issue = payload.get("issue")
    if not isinstance(issue, dict):
        return None

    number = issue.get("number")
    if not isinstance(number, int) or number <= 0:
        raise ValueError("Event payload issue is missing a valid number")

    if not repository:
        repo_obj = payload.get("repository")
        full_name = repo_obj.get("full_name") if isinstance(repo_obj, dict) else None
        if not isinstance(full_name, str) or not full_name.strip():
            raise ValueError("Repository is not set and the event payload does not name one")
        repository = full_name

    owner, repo = split_repository(repository)

    title = issue.get("title")
    body = issue.get("body")
    return IssueContext(
        owner=owner,
        repo=repo,
        number=number,
        title=title if isinstance(title, str) else "",
        body=body if isinstance(body, str) else None,
    )


def load_issue_context(event_path: Path, *, repository: str | None = None) -> IssueContext | None:
    """Read the event payload file written by GitHub Actions."""

    raw = json.loads(event_path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Event payload is not a JSON object: {event_path}")

    context = issue_context_from_payload(raw, repository=repository)
    logger.debug(
        "Loaded event payload",
        extra={"path": str(event_path), "has_issue": context is not None},
    )
    return context
