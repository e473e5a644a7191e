"""Ticket dialog state: Idle -> DateChosen -> SessionChosen.

The state is a tagged union, so a chosen session can only exist together with
its date.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class DialogStage(str, Enum):
    IDLE = "idle"
    DATE_CHOSEN = "date_chosen"
    SESSION_CHOSEN = "session_chosen"


@dataclass(frozen=True)
class Idle:
    stage = DialogStage.IDLE


@dataclass(frozen=True)
class DateChosen:
    date: str

    stage = DialogStage.DATE_CHOSEN


@dataclass(frozen=True)
class SessionChosen:
    date: str
    session: str

    stage = DialogStage.SESSION_CHOSEN


DialogState = Union[Idle, DateChosen, SessionChosen]

IDLE = Idle()

VALID_TRANSITIONS = {
    DialogStage.IDLE: [DialogStage.IDLE, DialogStage.DATE_CHOSEN],
    DialogStage.DATE_CHOSEN: [DialogStage.IDLE, DialogStage.DATE_CHOSEN, DialogStage.SESSION_CHOSEN],
    DialogStage.SESSION_CHOSEN: [DialogStage.IDLE, DialogStage.DATE_CHOSEN, DialogStage.SESSION_CHOSEN],
}


class InvalidTransitionError(Exception):
    def __init__(self, from_stage: DialogStage, to_stage: DialogStage):
        self.from_stage = from_stage
        self.to_stage = to_stage
        super().__init__(f"Invalid transition: {from_stage.value} -> {to_stage.value}")


def can_transition(from_stage: DialogStage, to_stage: DialogStage) -> bool:
    """Check if transition is valid."""
    return to_stage in VALID_TRANSITIONS.get(from_stage, [])


def _check(state: DialogState, to_stage: DialogStage) -> None:
    if not can_transition(state.stage, to_stage):
        raise InvalidTransitionError(state.stage, to_stage)


def choose_date(state: DialogState, date: str) -> DateChosen:
    """Pick a visit date. Any previously chosen session is dropped."""
    _check(state, DialogStage.DATE_CHOSEN)
    return DateChosen(date=date)


def choose_session(state: DialogState, session: str) -> SessionChosen:
    """Pick a time slot for the already chosen date. Raises InvalidTransitionError from Idle."""
    _check(state, DialogStage.SESSION_CHOSEN)
    return SessionChosen(date=state.date, session=session)


def reset(state: DialogState) -> Idle:
    """Back to the main menu."""
    _check(state, DialogStage.IDLE)
    return IDLE


def selected_date(state: DialogState):
    return getattr(state, "date", None)


def selected_session(state: DialogState):
    return getattr(state, "session", None)
