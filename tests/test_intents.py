from aquabot.services.intents import (
    Intent,
    classify,
    command_name,
    is_ticket_category_message,
    parse_date,
    strip_marker,
    ticket_category,
)


class TestClassify:
    def test_keywords_case_insensitive(self):
        assert classify("/start") == Intent.START
        assert classify("НАЧАТЬ") == Intent.START
        assert classify("  ℹ️ Информация ") == Intent.INFO
        assert classify("🔙 Назад") == Intent.BACK
        assert classify("🔙 К сеансам") == Intent.BACK_TO_SESSIONS
        assert classify("🔙 В начало") == Intent.BACK_TO_START
        assert classify("🎟 Купить билеты") == Intent.TICKETS
        assert classify("📊 Загруженность") == Intent.LOAD

    def test_working_hours_label_wins_over_time_marker(self):
        assert classify("⏰ Время работы") == Intent.HOURS

    def test_markers(self):
        assert classify("📅 01.01.2030") == Intent.SELECT_DATE
        assert classify("⏰ 14:00") == Intent.SELECT_SESSION

    def test_category_checked_first(self):
        assert classify("👤 Взрослые билеты") == Intent.SELECT_TICKET_CATEGORY
        assert classify("👶") == Intent.SELECT_TICKET_CATEGORY
        assert classify("kids") == Intent.SELECT_TICKET_CATEGORY

    def test_unknown_text(self):
        assert classify("как дела?") == Intent.OTHER
        assert classify("") == Intent.OTHER
        assert classify(None) == Intent.OTHER


class TestCommandName:
    def test_keywords_then_markers_then_category(self):
        assert command_name("⏰ Время работы") == "hours"
        assert command_name("📅 01.01.2030") == "select_date"
        assert command_name("⏰ Детский сеанс") == "select_session"
        assert command_name("👤 Взрослые билеты") == "select_ticket_category"
        assert command_name("привет") == "other"

    def test_empty_text(self):
        assert command_name("") == "unknown"
        assert command_name(None) == "unknown"

    def test_routing_keeps_category_first(self):
        assert classify("⏰ Детский сеанс") == Intent.SELECT_TICKET_CATEGORY


class TestTicketCategory:
    def test_adult_variants(self):
        assert ticket_category("👤 Взрослые") == "adult"
        assert ticket_category("👤") == "adult"
        assert ticket_category("Adult") == "adult"

    def test_everything_else_is_child(self):
        assert ticket_category("👶 Детские билеты") == "child"
        assert ticket_category("child") == "child"

    def test_is_ticket_category_message(self):
        assert is_ticket_category_message("Детские") is True
        assert is_ticket_category_message("билеты") is False
        assert is_ticket_category_message("") is False


class TestDateParsing:
    def test_strip_marker(self):
        assert strip_marker(" 📅 01.01.2030 ", "📅") == "01.01.2030"
        assert strip_marker("⏰ 10:00-12:00", "⏰") == "10:00-12:00"

    def test_parse_date_valid(self):
        assert parse_date("01.01.2030") == "01.01.2030"
        assert parse_date("1.1.2030") == "01.01.2030"

    def test_parse_date_invalid(self):
        assert parse_date("32.01.2030") is None
        assert parse_date("завтра") is None
        assert parse_date("") is None
