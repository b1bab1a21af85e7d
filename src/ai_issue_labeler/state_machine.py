from __future__ import annotations

from enum import Enum


class RunState(str, Enum):
    START = "start"
    FETCHING_INVENTORY = "fetching_inventory"
    PROMPT_READY = "prompt_ready"
    AWAITING_MODEL = "awaiting_model"
    PARSING_RESPONSE = "parsing_response"
    RECONCILING = "reconciling"
    ATTACHING = "attaching"
    DONE = "done"
    FAILED = "failed"


# Reconciling never fails the run: it either has labels to attach or finishes empty.
ALLOWED_TRANSITIONS: dict[RunState, set[RunState]] = {
    RunState.START: {RunState.FETCHING_INVENTORY, RunState.DONE},
    RunState.FETCHING_INVENTORY: {RunState.PROMPT_READY, RunState.FAILED},
    RunState.PROMPT_READY: {RunState.AWAITING_MODEL},
    RunState.AWAITING_MODEL: {RunState.PARSING_RESPONSE, RunState.FAILED},
    RunState.PARSING_RESPONSE: {RunState.RECONCILING, RunState.FAILED},
    RunState.RECONCILING: {RunState.ATTACHING, RunState.DONE},
    RunState.ATTACHING: {RunState.DONE, RunState.FAILED},
    RunState.DONE: set(),
    RunState.FAILED: set(),
}


class IllegalTransitionError(ValueError):
    pass


def transition(*, current: RunState, to: RunState) -> RunState:
    allowed = ALLOWED_TRANSITIONS.get(current, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.value} -> {to.value}")
    return to
