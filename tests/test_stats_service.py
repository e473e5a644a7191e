from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

from sqlalchemy.exc import OperationalError

from aquabot.models import CommandStat, ErrorLog
from aquabot.services.stats_service import StatsService


class TestCommandUsage:
    def test_counts_in_memory_and_db(self, sink, session_factory):
        sink.record_command_usage(1, "Start")
        sink.record_command_usage(2, "start")
        sink.record_command_usage(2, "tickets")

        assert sink.command_usage() == {"start": 2, "tickets": 1}
        assert sink.commands_executed == 3
        assert sink.popular_commands(1) == [("start", 2)]

        db = session_factory()
        try:
            stats = {row.command_name: row.usage_count for row in db.query(CommandStat).all()}
        finally:
            db.close()
        assert stats == {"start": 2, "tickets": 1}

    def test_empty_command_is_unknown(self, sink):
        sink.record_command_usage(1, "")
        assert sink.command_usage() == {"unknown": 1}

    def test_database_failure_is_swallowed(self):
        db = Mock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("locked"))
        service = StatsService(lambda: db)

        service.record_command_usage(1, "start")

        assert service.command_usage() == {"start": 1}
        db.rollback.assert_called_once()
        db.close.assert_called_once()


class TestErrorLog:
    def test_log_error_persists_record(self, sink):
        sink.log_error("Tariffs request failed", user_id=3, command="select_ticket_category", context={"date": "x"})

        errors = sink.recent_errors(10)
        assert len(errors) == 1
        assert errors[0].error_message == "Tariffs request failed"
        assert errors[0].user_id == 3
        assert errors[0].additional_data == {"date": "x"}

    def test_recent_errors_newest_first(self, session_factory):
        clock = Mock(side_effect=[datetime(2030, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=i) for i in range(4)])
        service = StatsService(session_factory, clock=clock)
        service.log_error("first")
        service.log_error("second")
        service.log_error("third")

        assert [e.error_message for e in service.recent_errors(2)] == ["third", "second"]

    def test_log_error_survives_database_failure(self):
        db = Mock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        service = StatsService(lambda: db)

        service.log_error("boom")

        db.add.assert_called_once()
        assert isinstance(db.add.call_args.args[0], ErrorLog)
        db.rollback.assert_called_once()


class TestActivity:
    def test_hourly_activity_covers_24_hours(self, sink):
        sink.record_activity(1)
        sink.record_activity(2)

        activity = sink.hourly_activity()
        assert len(activity) == 24
        assert activity[-1] == {"time": "12:00", "count": 2}
        assert activity[0]["time"] == "13:00"
        assert sink.messages_processed == 2

    def test_uptime(self, session_factory):
        times = iter([datetime(2030, 1, 1, 10, 0), datetime(2030, 1, 1, 12, 30)])
        service = StatsService(session_factory, clock=lambda: next(times))
        assert service.uptime() == "2h 30m"

    def test_hourly_activity_forgets_older_days(self, session_factory):
        now = [datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)]
        service = StatsService(session_factory, clock=lambda: now[0])
        service.record_activity(1)

        now[0] += timedelta(days=3)
        activity = service.hourly_activity()
        assert activity[-1] == {"time": "12:00", "count": 0}
        assert sum(item["count"] for item in activity) == 0

    def test_hourly_activity_spans_midnight(self, session_factory):
        now = [datetime(2030, 1, 1, 23, 30, tzinfo=timezone.utc)]
        service = StatsService(session_factory, clock=lambda: now[0])
        service.record_activity(1)
        now[0] += timedelta(hours=2)
        service.record_activity(2)

        activity = service.hourly_activity()
        assert activity[-1] == {"time": "01:00", "count": 1}
        assert activity[-3] == {"time": "23:00", "count": 1}
        assert activity[0]["time"] == "02:00"

        now[0] += timedelta(hours=23)
        assert sum(item["count"] for item in service.hourly_activity()) == 1
