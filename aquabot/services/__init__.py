from aquabot.services.dialog_state import (
    IDLE,
    DateChosen,
    DialogStage,
    DialogState,
    Idle,
    InvalidTransitionError,
    SessionChosen,
    can_transition,
    choose_date,
    choose_session,
    reset,
)
from aquabot.services.result import Result
