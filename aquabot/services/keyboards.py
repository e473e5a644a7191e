"""VK keyboard layouts used by the dialog."""

from datetime import date, timedelta
from typing import Optional

from aquabot.services.intents import DATE_FORMAT, DATE_MARKER, TIME_MARKER

TICKETS_URL = "https://yes35.ru/aquapark/tickets"
DATE_PICKER_DAYS = 5


def text_button(label: str, color: str = "primary") -> dict:
    return {"action": {"type": "text", "label": label}, "color": color}


def link_button(label: str, link: str) -> dict:
    return {"action": {"type": "open_link", "link": link, "label": label}}


def keyboard(rows: list[list[dict]], one_time: bool = False) -> dict:
    return {"one_time": one_time, "inline": False, "buttons": rows}


BACK_BUTTON = text_button("🔙 Назад", "negative")


def main_menu() -> dict:
    return keyboard(
        [
            [
                text_button("ℹ️ Информация", "primary"),
                text_button("🎟 Купить билеты", "positive"),
                text_button("📊 Загруженность", "secondary"),
            ]
        ]
    )


def info_menu() -> dict:
    return keyboard(
        [
            [text_button("⏰ Время работы"), text_button("📞 Контакты")],
            [BACK_BUTTON],
        ]
    )


def welcome() -> dict:
    return keyboard([[text_button("🚀 Начать", "positive")]], one_time=True)


def back() -> dict:
    return keyboard([[BACK_BUTTON]], one_time=True)


def date_picker(today: Optional[date] = None) -> dict:
    """Today and the next four days: three dates in the first row, two in the second."""
    today = today or date.today()
    labels = [
        f"{DATE_MARKER} {(today + timedelta(days=offset)).strftime(DATE_FORMAT)}" for offset in range(DATE_PICKER_DAYS)
    ]
    return keyboard(
        [
            [text_button(label) for label in labels[:3]],
            [text_button(label) for label in labels[3:]],
            [BACK_BUTTON],
        ],
        one_time=True,
    )


def slot_picker(slot_labels: list[str]) -> dict:
    rows = [[text_button(f"{TIME_MARKER} {label}")] for label in slot_labels]
    rows.append([BACK_BUTTON])
    return keyboard(rows, one_time=True)


def category_picker() -> dict:
    return keyboard(
        [
            [text_button("👤 Взрослые билеты", "primary"), text_button("👶 Детские билеты", "positive")],
            [BACK_BUTTON],
        ],
        one_time=True,
    )


def purchase(category: str) -> dict:
    """Tariff screen: buy link, category switch and the two ways back."""
    return keyboard(
        [
            [link_button("🎟 Купить на сайте", TICKETS_URL)],
            [
                text_button("👤 Взрослые", "positive" if category == "adult" else "primary"),
                text_button("👶 Детские", "positive" if category == "child" else "primary"),
            ],
            [text_button("🔙 К сеансам", "secondary"), text_button("🔙 В начало", "negative")],
        ]
    )
