"""GitHub label store integration."""

from ai_issue_labeler.github.client import GitHubLabelClient, Label, LabelAlreadyExistsError

__all__ = [
    "GitHubLabelClient",
    "Label",
    "LabelAlreadyExistsError",
]
