"""Prompt construction for label suggestion.

The prompt carries the issue, a catalogue of the repository's existing labels, and
an explicit JSON output contract. It strongly steers the model towards existing
labels; new labels are a last resort and must follow the repository's naming
convention.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ai_issue_labeler.github.client import Label

DEFAULT_MAX_EXISTING_LABELS = 5
DEFAULT_MAX_NEW_LABELS = 2

NO_BODY_PLACEHOLDER = "No description provided."
NO_LABELS_NOTICE = "No existing labels found in the project.\n"

SUGGESTION_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "description": {"type": "string"},
        },
        "required": ["name"],
    },
}

_EXAMPLE_OUTPUT = """[
  { "name": "bug" },
  { "name": "documentation" },
  { "name": "scope:organization", "description": "Task related to the project's organization and management." }
]"""


def render_label_catalogue(labels: Sequence[Label]) -> str:
    """Render existing labels as name/description lines for the prompt."""

    if not labels:
        return NO_LABELS_NOTICE

    lines = [
        "Here is a list of all existing labels in the project. You should strongly prefer these:"
    ]
    for label in labels:
        description = label.description or "No description"
        lines.append(f'- Name: "{label.name}", Description: "{description}"')
    return "\n".join(lines) + "\n"


def build_prompt(
    *,
    title: str,
    body: str | None,
    labels: Sequence[Label],
    max_existing_labels: int = DEFAULT_MAX_EXISTING_LABELS,
    max_new_labels: int = DEFAULT_MAX_NEW_LABELS,
) -> str:
    """Build the label-suggestion prompt for one issue."""

    if max_existing_labels <= 0:
        raise ValueError("max_existing_labels must be a positive integer")
    if max_new_labels < 0:
        raise ValueError("max_new_labels must not be negative")

    issue_body = body if body and body.strip() else NO_BODY_PLACEHOLDER

    if max_new_labels == 0:
        new_label_rules = (
            "3.  **Do NOT Suggest New Labels:** Only use labels from the existing list.\n"
        )
    else:
        new_label_rules = (
            "3.  **Suggest New Labels (Only if Absolutely Necessary):**\n"
            "    - You may only suggest a new label if no combination of existing labels can "
            "accurately categorize the issue.\n"
            "    - Do NOT create a new label that is just a minor variation of an existing one.\n"
            "    - Before creating a new label, you MUST analyze the naming convention and style "
            "of existing labels (e.g., 'type: area', 'status: in-progress', 'priority: high'). "
            "New labels MUST follow these established patterns.\n"
            f"    - You may suggest a maximum of {max_new_labels} new labels.\n"
            "    - Every new label object in your response MUST include a 'description' property "
            "that clearly explains its purpose.\n"
        )

    return (
        "You are an expert GitHub issue labeler. Your task is to analyze a GitHub issue and "
        "assign the most appropriate labels based on a list of existing labels from the "
        "repository.\n"
        "\n"
        "**Primary Goal:** Maximize the use of EXISTING labels.\n"
        "\n"
        "**Issue Details:**\n"
        f'- Title: "{title}"\n'
        f'- Body: "{issue_body}"\n'
        "\n"
        "**Available Repository Labels (Name and Description):**\n"
        f"{render_label_catalogue(labels)}"
        "\n"
        "**Instructions:**\n"
        "1.  **Analyze and Match:** Carefully review the issue's title and body. Compare its "
        "content and intent against the list of available repository labels.\n"
        "2.  **Prioritize Existing Labels:** Your main goal is to select the most relevant "
        f"labels from the existing list. Suggest up to {max_existing_labels} existing labels.\n"
        f"{new_label_rules}"
        "4.  **Output Format:** Your response MUST be a valid JSON array of objects. Each object "
        "must have a 'name' key. For NEW labels, it MUST also include a 'description' key. "
        "Do not wrap the JSON in markdown backticks.\n"
        "\n"
        "**Example JSON Output:**\n"
        f"{_EXAMPLE_OUTPUT}\n"
    )
