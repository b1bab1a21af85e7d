"""Labeling run orchestration.

One run labels one issue:

    fetch inventory -> build prompt -> invoke model -> parse -> reconcile -> attach

Fetching the inventory, invoking the model, parsing the reply and attaching labels
can fail the run. Reconciliation never does; it degrades to a smaller label set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ai_issue_labeler.event import IssueContext
from ai_issue_labeler.github.client import GitHubLabelClient, Label
from ai_issue_labeler.labeling.colors import ColorGenerator, RandomColorGenerator
from ai_issue_labeler.labeling.parser import MalformedResponseError, parse_suggestions
from ai_issue_labeler.labeling.prompt import (
    DEFAULT_MAX_EXISTING_LABELS,
    DEFAULT_MAX_NEW_LABELS,
    SUGGESTION_SCHEMA,
    build_prompt,
)
from ai_issue_labeler.labeling.reconciler import LabelReconciler, ReconciliationResult
from ai_issue_labeler.llm.provider import LLMProvider
from ai_issue_labeler.state_machine import RunState, transition

logger = logging.getLogger(__name__)


class LabelingFailedError(RuntimeError):
    """A run could not complete; `stage` is the state it failed in."""

    def __init__(self, stage: RunState, message: str) -> None:
        super().__init__(message)
        self.stage = stage


@dataclass(frozen=True, slots=True)
class LabelingOutcome:
    """Result of a completed run."""

    state: RunState
    labels: list[str] = field(default_factory=list)
    reconciliation: ReconciliationResult | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def output(self) -> str:
        """The step output: attached label names, comma-joined."""

        return ",".join(self.labels)


class LabelingOrchestrator:
    """Runs the labeling pipeline for a single issue."""

    def __init__(
        self,
        *,
        client: GitHubLabelClient,
        llm: LLMProvider,
        max_existing_labels: int = DEFAULT_MAX_EXISTING_LABELS,
        max_new_labels: int = DEFAULT_MAX_NEW_LABELS,
        colors: ColorGenerator | None = None,
        use_structured_output: bool = True,
    ) -> None:
        self._client = client
        self._llm = llm
        self._max_existing_labels = max_existing_labels
        self._max_new_labels = max_new_labels
        self._colors = colors
        self._use_structured_output = use_structured_output
        self.state = RunState.START

    def _advance(self, to: RunState) -> None:
        self.state = transition(current=self.state, to=to)
        logger.debug("Run state changed", extra={"state": self.state.value})

    def _fail(self, message: str) -> LabelingFailedError:
        stage = self.state
        self._advance(RunState.FAILED)
        logger.error(message, extra={"stage": stage.value})
        return LabelingFailedError(stage, message)

    def run(self, issue: IssueContext | None) -> LabelingOutcome:
        """Label one issue.

        Raises:
            LabelingFailedError: when the inventory, the model, the reply, or the
                attachment call fails. Parse failures chain the
                :class:`MalformedResponseError` carrying the raw reply.
        """

        self.state = RunState.START

        if issue is None:
            logger.info(
                "This run was triggered by an event that is not related to an issue; exiting"
            )
            self._advance(RunState.DONE)
            return LabelingOutcome(state=self.state)

        log_extra = {"issue_number": issue.number, "repo": issue.repository}
        logger.info(f"Processing issue #{issue.number}: {issue.title}", extra=log_extra)

        self._advance(RunState.FETCHING_INVENTORY)
        logger.info("Fetching existing labels from the repository", extra=log_extra)
        try:
            inventory = self._client.list_labels()
        except Exception as e:
            raise self._fail(f"Failed to fetch repository labels: {e}") from e

        prompt = build_prompt(
            title=issue.title,
            body=issue.body,
            labels=inventory,
            max_existing_labels=self._max_existing_labels,
            max_new_labels=self._max_new_labels,
        )
        self._advance(RunState.PROMPT_READY)

        self._advance(RunState.AWAITING_MODEL)
        logger.info(
            "Sending prompt to AI model", extra={**log_extra, "existing_labels": len(inventory)}
        )
        try:
            response = self._llm.generate(
                prompt,
                response_schema=SUGGESTION_SCHEMA if self._use_structured_output else None,
            )
        except Exception as e:
            raise self._fail(f"AI model request failed: {e}") from e
        logger.info("AI response received", extra={**log_extra, "response": response})

        self._advance(RunState.PARSING_RESPONSE)
        try:
            suggestions = parse_suggestions(response)
        except MalformedResponseError as e:
            raise self._fail(str(e)) from e
        logger.info(
            "Parsed label suggestions",
            extra={**log_extra, "suggestions": [s.name for s in suggestions]},
        )

        self._advance(RunState.RECONCILING)
        reconciler = LabelReconciler(client=self._client, colors=self._color_generator(inventory))
        result = reconciler.reconcile(suggestions, inventory)
        warnings = [f"Dropped label {o.name!r}: {o.detail}" for o in result.failures]

        if not result.plan:
            logger.info("No labels to add to the issue", extra=log_extra)
            self._advance(RunState.DONE)
            return LabelingOutcome(state=self.state, reconciliation=result, warnings=warnings)

        self._advance(RunState.ATTACHING)
        names = result.names
        logger.info(f"Adding labels to issue #{issue.number}: {', '.join(names)}", extra=log_extra)
        try:
            self._client.attach_labels(issue_number=issue.number, names=names)
        except Exception as e:
            raise self._fail(f"Failed to add labels to issue #{issue.number}: {e}") from e

        logger.info(f"Labels successfully added to issue #{issue.number}", extra=log_extra)
        self._advance(RunState.DONE)
        return LabelingOutcome(
            state=self.state, labels=names, reconciliation=result, warnings=warnings
        )

    def _color_generator(self, inventory: list[Label]) -> ColorGenerator:
        if self._colors is not None:
            return self._colors
        return RandomColorGenerator(reserved=[label.color for label in inventory])
