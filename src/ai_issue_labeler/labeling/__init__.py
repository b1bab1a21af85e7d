"""Label suggestion, parsing and reconciliation."""

from ai_issue_labeler.labeling.colors import (
    ColorGenerator,
    FixedColorGenerator,
    RandomColorGenerator,
)
from ai_issue_labeler.labeling.parser import (
    LabelSuggestion,
    MalformedResponseError,
    Parsed,
    Unparsable,
    parse_response,
    parse_suggestions,
)
from ai_issue_labeler.labeling.prompt import SUGGESTION_SCHEMA, build_prompt
from ai_issue_labeler.labeling.reconciler import (
    CandidateOutcome,
    CandidateStatus,
    LabelOrigin,
    LabelReconciler,
    PlannedLabel,
    ReconciliationResult,
)

__all__ = [
    "SUGGESTION_SCHEMA",
    "CandidateOutcome",
    "CandidateStatus",
    "ColorGenerator",
    "FixedColorGenerator",
    "LabelOrigin",
    "LabelReconciler",
    "LabelSuggestion",
    "MalformedResponseError",
    "Parsed",
    "PlannedLabel",
    "RandomColorGenerator",
    "ReconciliationResult",
    "Unparsable",
    "build_prompt",
    "parse_response",
    "parse_suggestions",
]
