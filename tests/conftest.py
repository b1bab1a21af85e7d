"""Test configuration and fixtures."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from ai_issue_labeler.config import LLMConfig
from ai_issue_labeler.event import IssueContext
from ai_issue_labeler.github.client import GitHubLabelClient, Label
from ai_issue_labeler.labeling.colors import FixedColorGenerator

_SETTINGS_ENV_VARS = (
    "LABELER_GITHUB_TOKEN",
    "LABELER_MAX_EXISTING_LABELS",
    "LABELER_MAX_NEW_LABELS",
    "LABELER_LABEL_COLOR",
    "LABELER_STRUCTURED_OUTPUT",
    "LABELER_LLM_PROVIDER",
    "LABELER_LLM_OPENAI_API_KEY",
    "LABELER_LLM_OPENAI_MODEL",
    "LABELER_LLM_LLAMA_MODEL_PATH",
    "OPENAI_API_KEY",
    "GITHUB_BASE_URL",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_OUTPUT",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Isolate settings from the developer's environment and `.env`."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def llm_config() -> LLMConfig:
    """Provide a test LLM configuration."""
    return LLMConfig(
        provider="openai",
        openai_api_key="test-key",
        openai_model="gpt-4o-mini",
    )


@pytest.fixture
def inventory() -> list[Label]:
    return [
        Label(name="bug", color="d73a4a", description="Something isn't working"),
        Label(name="docs", color="0075ca", description=None),
    ]


@pytest.fixture
def colors() -> FixedColorGenerator:
    return FixedColorGenerator("abcdef")


@pytest.fixture
def label_client(inventory: list[Label]) -> Mock:
    """A label store that lists `inventory` and creates whatever it is asked to."""
    client = Mock(spec=GitHubLabelClient)
    client.list_labels.return_value = list(inventory)

    def _create(*, name: str, color: str, description: str | None) -> Label:
        return Label(name=name, color=color, description=description)

    client.create_label.side_effect = _create
    client.attach_labels.side_effect = lambda *, issue_number, names: list(names)
    return client


@pytest.fixture
def issue() -> IssueContext:
    return IssueContext(
        owner="octo-org",
        repo="octo-repo",
        number=42,
        title="Crash when saving settings",
        body="The app crashes every time I press save.",
    )
