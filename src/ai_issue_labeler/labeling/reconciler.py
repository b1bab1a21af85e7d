"""Reconcile model suggestions against the repository's labels.

For each suggestion, in order:

- a case-insensitive match against the inventory (or a label created earlier in
  the same run) reuses that label's canonical name, with no store call;
- otherwise the label is created. A store "already exists" answer means another
  run won the race and is treated as success. Any other failure drops the
  suggestion and processing continues.

The resulting plan is deduplicated by case-folded name, first occurrence wins.
A single failing suggestion never fails the whole reconciliation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from ai_issue_labeler.github.client import GitHubLabelClient, Label, LabelAlreadyExistsError
from ai_issue_labeler.labeling.colors import ColorGenerator
from ai_issue_labeler.labeling.parser import LabelSuggestion

logger = logging.getLogger(__name__)


class LabelOrigin(str, Enum):
    EXISTING = "existing"
    CREATED = "created"


class CandidateStatus(str, Enum):
    EXISTING = "existing"
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    DUPLICATE = "duplicate"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PlannedLabel:
    name: str
    origin: LabelOrigin


@dataclass(frozen=True, slots=True)
class CandidateOutcome:
    """What happened to one suggestion (diagnostics only)."""

    name: str
    status: CandidateStatus
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    plan: list[PlannedLabel]
    outcomes: list[CandidateOutcome]

    @property
    def names(self) -> list[str]:
        return [planned.name for planned in self.plan]

    @property
    def failures(self) -> list[CandidateOutcome]:
        return [o for o in self.outcomes if o.status is CandidateStatus.FAILED]


def fallback_description(name: str) -> str:
    return f"AI suggested label: {name}"


class LabelReconciler:
    """Turns suggestions into the ordered, deduplicated list of labels to attach."""

    def __init__(self, *, client: GitHubLabelClient, colors: ColorGenerator) -> None:
        self._client = client
        self._colors = colors

    def reconcile(
        self, candidates: Sequence[LabelSuggestion], inventory: Sequence[Label]
    ) -> ReconciliationResult:
        known: dict[str, str] = {label.key: label.name for label in inventory}

        # (planned label, index of its outcome)
        entries: list[tuple[PlannedLabel, int]] = []
        outcomes: list[CandidateOutcome] = []

        for candidate in candidates:
            name = candidate.name.strip()
            if not name:
                continue
            key = name.casefold()

            existing = known.get(key)
            if existing is not None:
                logger.info("Label already exists; adding it", extra={"label": existing})
                outcomes.append(CandidateOutcome(name=existing, status=CandidateStatus.EXISTING))
                entries.append((PlannedLabel(existing, LabelOrigin.EXISTING), len(outcomes) - 1))
                continue

            logger.info("Label does not exist; creating it", extra={"label": name})
            try:
                created = self._client.create_label(
                    name=name,
                    color=self._colors.next_color(),
                    description=candidate.description or fallback_description(name),
                )
            except LabelAlreadyExistsError:
                logger.warning(
                    "Label already existed upon creation attempt; adding it anyway",
                    extra={"label": name},
                )
                known[key] = name
                outcomes.append(CandidateOutcome(name=name, status=CandidateStatus.ALREADY_EXISTS))
                entries.append((PlannedLabel(name, LabelOrigin.EXISTING), len(outcomes) - 1))
                continue
            except Exception as e:
                logger.error("Failed to create label", extra={"label": name, "error": str(e)})
                outcomes.append(
                    CandidateOutcome(name=name, status=CandidateStatus.FAILED, detail=str(e))
                )
                continue

            logger.info("Created label", extra={"label": created.name})
            known[key] = created.name
            outcomes.append(CandidateOutcome(name=created.name, status=CandidateStatus.CREATED))
            entries.append((PlannedLabel(created.name, LabelOrigin.CREATED), len(outcomes) - 1))

        # Final pass: at most one entry per case-folded name, first occurrence wins.
        seen: set[str] = set()
        plan: list[PlannedLabel] = []
        for planned, index in entries:
            key = planned.name.casefold()
            if key in seen:
                outcomes[index] = replace(outcomes[index], status=CandidateStatus.DUPLICATE)
                continue
            seen.add(key)
            plan.append(planned)

        return ReconciliationResult(plan=plan, outcomes=outcomes)
