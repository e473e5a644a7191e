import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from aquabot.logging_config import get_logger
from aquabot.services.dialog_state import (
    IDLE,
    DialogState,
    choose_date,
    choose_session,
    reset,
    selected_date,
    selected_session,
)

logger = get_logger("session_store")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Session:
    user_id: int
    state: DialogState = IDLE
    last_activity: datetime = field(default_factory=_utcnow)

    @property
    def selected_date(self) -> Optional[str]:
        return selected_date(self.state)

    @property
    def selected_session(self) -> Optional[str]:
        return selected_session(self.state)


class SessionStore:
    """In-memory per-user dialog sessions.

    Sessions are immutable snapshots; every write swaps the record under a lock,
    so admin readers running in worker threads never see a half-updated session.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._sessions: dict[int, Session] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get(self, user_id: int) -> Session:
        """Return the user's session, creating an Idle one on first access."""
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = Session(user_id=user_id, last_activity=self._clock())
                self._sessions[user_id] = session
                logger.debug(f"Created session for user {user_id}")
            return session

    def apply(self, user_id: int, state: DialogState) -> Session:
        """Commit a dialog state computed by the router."""
        with self._lock:
            session = replace(self.get(user_id), state=state)
            self._sessions[user_id] = session
            return session

    def set_date(self, user_id: int, date: str) -> Session:
        with self._lock:
            return self.apply(user_id, choose_date(self.get(user_id).state, date))

    def set_session(self, user_id: int, session: str) -> Session:
        """Raises InvalidTransitionError when no date has been chosen yet."""
        with self._lock:
            return self.apply(user_id, choose_session(self.get(user_id).state, session))

    def clear(self, user_id: int) -> Session:
        with self._lock:
            return self.apply(user_id, reset(self.get(user_id).state))

    def touch(self, user_id: int) -> Session:
        with self._lock:
            session = replace(self.get(user_id), last_activity=self._clock())
            self._sessions[user_id] = session
            return session

    def snapshot(self) -> list[Session]:
        with self._lock:
            return list(self._sessions.values())

    def online_count(self, window: timedelta = timedelta(minutes=5)) -> int:
        """Users active within the window."""
        threshold = self._clock() - window
        return sum(1 for s in self.snapshot() if s.last_activity > threshold)

    def active_today(self) -> int:
        today = self._clock().date()
        return sum(1 for s in self.snapshot() if s.last_activity.date() == today)
