"""Usage counters and the durable error log read by the admin dashboard.

Recording is fire-and-forget: a database failure is logged and never reaches
the dialog.
"""

import threading
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aquabot.logging_config import get_logger
from aquabot.models import CommandStat, ErrorLog

logger = get_logger("stats_service")

ACTIVITY_WINDOW_HOURS = 24


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _hour_bucket(moment: datetime) -> datetime:
    return moment.replace(minute=0, second=0, microsecond=0)


class StatsService:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._session_factory = session_factory
        self._clock = clock
        self._lock = threading.Lock()
        self._command_usage: Counter = Counter()
        self._hourly_messages: Counter = Counter()
        self._messages_processed = 0
        self._commands_executed = 0
        self.started_at = clock()

    def record_activity(self, user_id: int) -> None:
        with self._lock:
            self._messages_processed += 1
            bucket = _hour_bucket(self._clock())
            self._hourly_messages[bucket] += 1
            oldest = bucket - timedelta(hours=ACTIVITY_WINDOW_HOURS - 1)
            for stale in [b for b in self._hourly_messages if b < oldest]:
                del self._hourly_messages[stale]

    def record_command_usage(self, user_id: int, command: str) -> None:
        command = (command or "unknown").strip().lower() or "unknown"
        with self._lock:
            self._commands_executed += 1
            self._command_usage[command] += 1

        db = self._session_factory()
        try:
            stat = db.query(CommandStat).filter(CommandStat.command_name == command).first()
            if stat is None:
                stat = CommandStat(command_name=command, usage_count=0)
                db.add(stat)
            stat.usage_count = (stat.usage_count or 0) + 1
            stat.updated_at = self._clock()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to persist usage of '{command}' by {user_id}: {e}")
        finally:
            db.close()

    def log_error(
        self,
        message: str,
        user_id: Optional[int] = None,
        command: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        logger.error(message, extra={"context": {"user_id": user_id, "command": command, **(context or {})}})

        db = self._session_factory()
        try:
            db.add(
                ErrorLog(
                    timestamp=self._clock(),
                    error_message=message,
                    user_id=user_id,
                    command=command,
                    additional_data=context,
                )
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to write error record: {e}. Original error: {message}")
        finally:
            db.close()

    def recent_errors(self, limit: int = 10) -> list[ErrorLog]:
        db = self._session_factory()
        try:
            return db.query(ErrorLog).order_by(ErrorLog.timestamp.desc(), ErrorLog.id.desc()).limit(limit).all()
        finally:
            db.close()

    def command_usage(self) -> dict[str, int]:
        with self._lock:
            return dict(self._command_usage)

    def popular_commands(self, limit: int = 5) -> list[tuple[str, int]]:
        with self._lock:
            return self._command_usage.most_common(limit)

    @property
    def messages_processed(self) -> int:
        return self._messages_processed

    @property
    def commands_executed(self) -> int:
        return self._commands_executed

    def hourly_activity(self) -> list[dict[str, Any]]:
        """Message counts for the last 24 hours, oldest first."""
        current = _hour_bucket(self._clock())
        with self._lock:
            buckets = [current - timedelta(hours=offset) for offset in range(ACTIVITY_WINDOW_HOURS - 1, -1, -1)]
            return [{"time": f"{b:%H}:00", "count": self._hourly_messages.get(b, 0)} for b in buckets]

    def uptime(self) -> str:
        elapsed = self._clock() - self.started_at
        hours, remainder = divmod(int(elapsed.total_seconds()), 3600)
        return f"{hours}h {remainder // 60}m"
