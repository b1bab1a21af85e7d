"""Unit tests for prompt construction."""

from __future__ import annotations

import pytest

from ai_issue_labeler.github.client import Label
from ai_issue_labeler.labeling.prompt import (
    NO_BODY_PLACEHOLDER,
    NO_LABELS_NOTICE,
    SUGGESTION_SCHEMA,
    build_prompt,
    render_label_catalogue,
)


def test_catalogue_lists_names_and_descriptions(inventory: list[Label]) -> None:
    catalogue = render_label_catalogue(inventory)

    assert "You should strongly prefer these" in catalogue
    assert '- Name: "bug", Description: "Something isn\'t working"' in catalogue
    assert '- Name: "docs", Description: "No description"' in catalogue


def test_catalogue_for_empty_inventory() -> None:
    assert render_label_catalogue([]) == NO_LABELS_NOTICE


def test_prompt_contains_issue_and_bounds(inventory: list[Label]) -> None:
    prompt = build_prompt(
        title="Crash on save",
        body="Stack trace attached",
        labels=inventory,
        max_existing_labels=4,
        max_new_labels=1,
    )

    assert '- Title: "Crash on save"' in prompt
    assert '- Body: "Stack trace attached"' in prompt
    assert "Suggest up to 4 existing labels" in prompt
    assert "maximum of 1 new labels" in prompt
    assert "naming convention" in prompt
    assert "valid JSON array of objects" in prompt
    assert '- Name: "bug"' in prompt


def test_prompt_uses_defaults() -> None:
    prompt = build_prompt(title="t", body="b", labels=[])

    assert "Suggest up to 5 existing labels" in prompt
    assert "maximum of 2 new labels" in prompt


@pytest.mark.parametrize("body", [None, "", "   \n"])
def test_prompt_substitutes_missing_body(body: str | None) -> None:
    prompt = build_prompt(title="t", body=body, labels=[])

    assert f'- Body: "{NO_BODY_PLACEHOLDER}"' in prompt


def test_prompt_announces_empty_inventory() -> None:
    prompt = build_prompt(title="t", body="b", labels=[])

    assert NO_LABELS_NOTICE.strip() in prompt
    assert "You should strongly prefer these" not in prompt


def test_prompt_forbids_new_labels_when_limit_is_zero(inventory: list[Label]) -> None:
    prompt = build_prompt(title="t", body="b", labels=inventory, max_new_labels=0)

    assert "Do NOT Suggest New Labels" in prompt
    assert "maximum of" not in prompt


def test_prompt_rejects_invalid_bounds() -> None:
    with pytest.raises(ValueError):
        build_prompt(title="t", body="b", labels=[], max_existing_labels=0)
    with pytest.raises(ValueError):
        build_prompt(title="t", body="b", labels=[], max_new_labels=-1)


def test_schema_requires_only_name() -> None:
    assert SUGGESTION_SCHEMA["type"] == "array"
    assert SUGGESTION_SCHEMA["items"]["required"] == ["name"]
