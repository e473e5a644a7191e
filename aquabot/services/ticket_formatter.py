"""Render gateway data (slots, tariffs, park load) into chat text and keyboards."""

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from typing import Optional

from aquabot.schemas.ticketing import ParkLoad, SessionSlot, Tariff
from aquabot.services import keyboards

ADULT_PRICE_CUTOFF = Decimal(1000)
PREMIUM_PRICE = Decimal(2000)


def availability_label(places_free: int) -> str:
    if places_free == 0:
        return "🔴 Нет мест"
    if places_free < 10:
        return "🔴 Мало мест"
    if places_free < 20:
        return "🟡 Средняя загрузка"
    return "🟢 Есть места"


def format_sessions(date: str, slots: list[SessionSlot], today: Optional[date_type] = None) -> tuple[str, dict]:
    if not slots:
        return f"😔 На {date} нет доступных сеансов или все заняты.", keyboards.date_picker(today)

    text = f"🎟 *Доступные сеансы на {date}:*\n\n"
    labels = []
    for slot in slots:
        places_free, places_total = slot.places_free, slot.places_total
        # Gateway omitted both counters: show the slot as open.
        if places_free == 0 and places_total == 0:
            places_free, places_total = 1, 50

        text += f"⏰ *{slot.label}*\n"
        text += f"   Свободно: {places_free}/{places_total} мест\n"
        text += f"   {availability_label(places_free)}\n\n"
        labels.append(slot.label)

    return text, keyboards.slot_picker(labels)


def classify_tariff(name: str, price: Decimal) -> tuple[bool, bool]:
    """Guess (is_adult, is_child) from the tariff name and price.

    Approximate on purpose: tariffs named without a category are decided by the
    price cutoff, so a cheap unnamed adult tariff can land in the child list.
    """
    lower = name.lower()
    is_adult = (
        "взрос" in lower
        or "adult" in lower
        or ("вип" in lower and "дет" not in lower)
        or ("взр" in lower and "дет" not in lower)
        or (price > ADULT_PRICE_CUTOFF and "дет" not in lower)
    )
    is_child = (
        "детск" in lower
        or "child" in lower
        or "kids" in lower
        or "дет" in lower
        or (price < ADULT_PRICE_CUTOFF and "билет" in lower and "взр" not in lower)
    )
    return is_adult, is_child


def filter_tariffs(tariffs: list[Tariff], category: str) -> list[Tariff]:
    seen = set()
    selected = []
    for tariff in tariffs:
        key = f"{tariff.name.lower()}_{tariff.price}"
        if key in seen:
            continue
        seen.add(key)

        is_adult, is_child = classify_tariff(tariff.name, tariff.price)
        if (category == "adult" and is_adult and not is_child) or (category == "child" and is_child and not is_adult):
            selected.append(tariff)
    return selected


def format_ticket_name(name: Optional[str]) -> str:
    if not name:
        return "Стандартный"

    formatted = name
    for old, new in (
        ("Билет", ""),
        ("билет", ""),
        ("Вип", "VIP"),
        ("вип", "VIP"),
        ("весь день", "Весь день"),
        ("взрослый", ""),
        ("детский", ""),
        ("вечерний", "Вечерний"),
        ("утренний", "Утренний"),
        ("  ", " "),
    ):
        formatted = formatted.replace(old, new)
    formatted = formatted.strip()

    if formatted.startswith("VIP"):
        formatted = "VIP" + formatted[3:].strip()

    while "  " in formatted:
        formatted = formatted.replace("  ", " ")

    return formatted or "Стандартный"


def format_price(price: Decimal) -> str:
    if price == price.to_integral_value():
        return str(int(price))
    return f"{price.normalize():f}"


def price_emoji(price: Decimal) -> str:
    if price > PREMIUM_PRICE:
        return "💎"
    if price > ADULT_PRICE_CUTOFF:
        return "⭐"
    return "🎫"


def format_tariffs(date: str, session: str, category: str, tariffs: list[Tariff]) -> tuple[str, dict]:
    if not tariffs:
        return "😔 На выбранную дату нет доступных тарифов", keyboards.back()

    title = "👤 ВЗРОСЛЫЕ БИЛЕТЫ" if category == "adult" else "👶 ДЕТСКИЕ БИЛЕТЫ"
    text = f"🎟 *{title}*\n"
    text += f"⏰ Сеанс: {session}\n"
    text += f"📅 Дата: {date}\n\n"

    selected = filter_tariffs(tariffs, category)
    if not selected:
        text += "😔 Нет доступных билетов этой категории\n"
        text += "💡 Попробуйте выбрать другую категорию"
    else:
        grouped: dict[str, Tariff] = {}
        for tariff in selected:
            grouped.setdefault(format_ticket_name(tariff.name), tariff)
        ordered = sorted(grouped.items(), key=lambda item: item[1].price, reverse=True)

        text += "💰 Стоимость билетов:\n\n"
        for display_name, tariff in ordered:
            text += f"{price_emoji(tariff.price)} *{display_name}*: {format_price(tariff.price)}₽\n"

        text += "\n💡 Примечания:\n"
        text += "• Детский билет - для детей от 4 до 12 лет\n"
        text += "• Дети до 4 лет - бесплатно (с взрослым)\n"
        text += "• VIP билеты включают дополнительные услуги\n"
        text += "• Возможна оплата картой или наличными"

    text += "\n\n🔗 *Купить онлайн:* yes35.ru"
    return text, keyboards.purchase(category)


def load_status(load: int) -> str:
    if load < 30:
        return "🟢 Низкая"
    if load < 60:
        return "🟡 Средняя"
    if load < 85:
        return "🟠 Высокая"
    return "🔴 Очень высокая"


def load_recommendation(load: int) -> str:
    if load < 30:
        return "🌟 Идеальное время для посещения!"
    if load < 50:
        return "👍 Хорошее время, народу немного"
    if load < 70:
        return "⚠️ Средняя загруженность, возможны очереди"
    if load < 85:
        return "📢 Много посетителей, лучше выбрать другое время"
    return "🚫 Очень высокая загруженность, не рекомендуется"


def format_load(data: ParkLoad, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return (
        "📊 Загруженность аквапарка:\n\n"
        f"👥 Количество посетителей: {data.count} чел.\n"
        f"📈 Уровень загруженности: {data.load}%\n"
        f"🏷 Статус: {load_status(data.load)}\n\n"
        f"💡 Рекомендация:\n{load_recommendation(data.load)}\n\n"
        f"🕐 Обновлено: {now:%H:%M}"
    )
