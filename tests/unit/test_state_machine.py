"""Unit tests for the run state machine.

These tests assert that illegal transitions fail loudly.
"""

from __future__ import annotations

import pytest

from ai_issue_labeler.state_machine import (
    ALLOWED_TRANSITIONS,
    IllegalTransitionError,
    RunState,
    transition,
)

HAPPY_PATH = [
    RunState.START,
    RunState.FETCHING_INVENTORY,
    RunState.PROMPT_READY,
    RunState.AWAITING_MODEL,
    RunState.PARSING_RESPONSE,
    RunState.RECONCILING,
    RunState.ATTACHING,
    RunState.DONE,
]


def test_happy_path_is_allowed() -> None:
    state = HAPPY_PATH[0]
    for nxt in HAPPY_PATH[1:]:
        state = transition(current=state, to=nxt)
    assert state is RunState.DONE


def test_transition_rejects_skipping_stages() -> None:
    with pytest.raises(IllegalTransitionError):
        transition(current=RunState.START, to=RunState.AWAITING_MODEL)


def test_reconciling_never_fails() -> None:
    with pytest.raises(IllegalTransitionError):
        transition(current=RunState.RECONCILING, to=RunState.FAILED)


@pytest.mark.parametrize(
    "stage",
    [RunState.FETCHING_INVENTORY, RunState.AWAITING_MODEL, RunState.PARSING_RESPONSE],
)
def test_unrecoverable_stages_can_fail(stage: RunState) -> None:
    assert transition(current=stage, to=RunState.FAILED) is RunState.FAILED


def test_terminal_states_have_no_exits() -> None:
    assert ALLOWED_TRANSITIONS[RunState.DONE] == set()
    assert ALLOWED_TRANSITIONS[RunState.FAILED] == set()
