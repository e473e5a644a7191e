from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from aquabot.config import settings
from aquabot.dependencies import get_command_cache, get_session_store, get_stats_service, get_worker
from aquabot.main import app
from aquabot.models import BotCommand
from aquabot.services.command_service import CommandCache
from aquabot.services.session_store import SessionStore


@pytest.fixture
def client(sink, session_factory):
    store = SessionStore(clock=lambda: datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc))
    app.dependency_overrides[get_stats_service] = lambda: sink
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_command_cache] = lambda: CommandCache(session_factory)
    app.dependency_overrides[get_worker] = lambda: None
    try:
        yield TestClient(app), store
    finally:
        app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        http, _ = client
        response = http.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestStats:
    def test_live_stats(self, client, sink):
        http, store = client
        store.touch(1)
        store.touch(2)
        sink.record_activity(1)

        data = http.get("/stats").json()
        assert data["online_users"] == 2
        assert data["active_today"] == 2
        assert data["messages_processed"] == 1
        assert data["uptime"] == "0h 0m"

    def test_command_stats(self, client, sink):
        http, _ = client
        for command in ("start", "start", "tickets"):
            sink.record_command_usage(1, command)

        data = http.get("/stats/commands").json()
        assert data["total_executed"] == 3
        assert data["popular"][0] == {"command": "start", "count": 2}
        assert data["usage"] == {"start": 2, "tickets": 1}
        assert len(data["hourly_activity"]) == 24


class TestAdmin:
    def test_recent_errors(self, client, sink):
        http, _ = client
        sink.log_error("first", user_id=1, context={"component": "GetSessionsForDate"})
        sink.log_error("second", user_id=2)

        data = http.get("/admin/errors", params={"limit": 1}).json()
        assert len(data) == 1
        assert data[0]["error_message"] == "second"

    def test_reload_commands(self, client, session_factory):
        http, _ = client
        db = session_factory()
        db.add(BotCommand(name="акции", triggers=[], response="Скидка"))
        db.commit()
        db.close()

        response = http.post("/admin/commands/reload")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "commands": 1}

    def test_bot_status_without_worker(self, client):
        http, _ = client
        data = http.get("/admin/bot/status").json()
        assert data["running"] is False
        assert data["descriptor_acquired"] is False
        assert data["processed_updates"] == 0

    def test_admin_token_required_when_configured(self, client, monkeypatch):
        http, _ = client
        monkeypatch.setattr(settings, "admin_token", "secret")

        assert http.get("/admin/errors").status_code == 401
        assert http.get("/admin/errors", headers={"X-Admin-Token": "wrong"}).status_code == 401
        assert http.get("/admin/errors", headers={"X-Admin-Token": "secret"}).status_code == 200
