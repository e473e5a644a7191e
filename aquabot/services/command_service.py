"""Cache of admin-defined bot commands.

The admin panel edits the bot_commands table; the bot keeps an in-memory copy
and refreshes it when the reload endpoint is hit.
"""

import json
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aquabot.logging_config import get_logger
from aquabot.models import BotCommand
from aquabot.services.intents import normalize

logger = get_logger("command_service")


@dataclass(frozen=True)
class CachedCommand:
    name: str
    triggers: tuple[str, ...]
    response: str
    keyboard: Optional[dict] = None

    def matches(self, text: str) -> bool:
        lower = normalize(text)
        return bool(lower) and (lower == normalize(self.name) or lower in self.triggers)


def parse_keyboard(keyboard_json: Optional[str]) -> Optional[dict]:
    """Decode stored keyboard JSON; broken or empty layouts mean no keyboard."""
    if not keyboard_json or keyboard_json.strip() in ("", "{}"):
        return None
    try:
        keyboard = json.loads(keyboard_json)
    except ValueError:
        logger.warning(f"Ignoring invalid keyboard JSON: {keyboard_json[:100]}")
        return None
    return keyboard if isinstance(keyboard, dict) else None


def _to_cached(command: BotCommand) -> CachedCommand:
    triggers = command.triggers if isinstance(command.triggers, list) else []
    return CachedCommand(
        name=command.name,
        triggers=tuple(normalize(str(t)) for t in triggers if str(t).strip()),
        response=command.response,
        keyboard=parse_keyboard(command.keyboard_json),
    )


class CommandCache:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._commands: tuple[CachedCommand, ...] = ()
        self._lock = threading.Lock()

    @property
    def commands(self) -> tuple[CachedCommand, ...]:
        return self._commands

    def reload(self) -> int:
        """Re-read active commands. On database failure the previous set is kept."""
        db = self._session_factory()
        try:
            rows = db.query(BotCommand).filter(BotCommand.is_active.is_(True)).order_by(BotCommand.id).all()
            commands = tuple(_to_cached(row) for row in rows)
        except SQLAlchemyError as e:
            logger.error(f"Command reload failed: {e}")
            return len(self._commands)
        finally:
            db.close()

        with self._lock:
            self._commands = commands
        logger.info(f"Commands reloaded: {len(commands)}")
        return len(commands)

    def find(self, text: Optional[str]) -> Optional[CachedCommand]:
        for command in self._commands:
            if command.matches(text or ""):
                return command
        return None
