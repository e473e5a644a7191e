from unittest.mock import Mock

from sqlalchemy.exc import OperationalError

from aquabot.models import BotCommand
from aquabot.services.command_service import CachedCommand, CommandCache, parse_keyboard


def _add(session_factory, **fields):
    db = session_factory()
    try:
        db.add(BotCommand(**fields))
        db.commit()
    finally:
        db.close()


class TestParseKeyboard:
    def test_valid(self):
        assert parse_keyboard('{"buttons": []}') == {"buttons": []}

    def test_empty_or_broken(self):
        assert parse_keyboard(None) is None
        assert parse_keyboard("{}") is None
        assert parse_keyboard("{not json") is None
        assert parse_keyboard("[1, 2]") is None


class TestCachedCommand:
    def test_matches_name_and_triggers(self):
        command = CachedCommand(name="Акции", triggers=("скидки",), response="...")
        assert command.matches("акции") is True
        assert command.matches("  СКИДКИ ") is True
        assert command.matches("цены") is False
        assert command.matches("") is False


class TestCommandCache:
    def test_reload_loads_only_active(self, session_factory):
        _add(session_factory, name="акции", triggers=["скидки"], response="Скидка 10%", keyboard_json='{"buttons": []}')
        _add(session_factory, name="старое", triggers=[], response="-", is_active=False)

        cache = CommandCache(session_factory)
        assert cache.reload() == 1

        command = cache.find("Скидки")
        assert command.response == "Скидка 10%"
        assert command.keyboard == {"buttons": []}
        assert cache.find("старое") is None

    def test_reload_picks_up_new_commands(self, session_factory):
        cache = CommandCache(session_factory)
        cache.reload()
        assert cache.find("парковка") is None

        _add(session_factory, name="парковка", triggers=[], response="У входа")
        cache.reload()
        assert cache.find("парковка").response == "У входа"

    def test_reload_failure_keeps_previous_set(self, session_factory):
        _add(session_factory, name="акции", triggers=[], response="Скидка")
        working = CommandCache(session_factory)
        working.reload()

        broken_db = Mock()
        broken_db.query.side_effect = OperationalError("SELECT", {}, Exception("gone"))
        working._session_factory = lambda: broken_db

        assert working.reload() == 1
        assert working.find("акции").response == "Скидка"
        broken_db.close.assert_called_once()
