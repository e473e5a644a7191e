"""Static reply copy for the YES center bot."""

WELCOME_TEXT = (
    "🌊 ДОБРО ПОЖАЛОВАТЬ В ЦЕНТР YES!\n\n"
    "Я ваш персональный помощник для организации незабываемого отдыха! 🎯\n\n"
    "🎟 УМНАЯ ПОКУПКА БИЛЕТОВ\n"
    "- Выбор идеальной даты посещения\n"
    "- Подбор сеанса с учетом загруженности\n"
    "- Раздельный просмотр тарифов: взрослые/детские\n"
    "- Прозрачные цены без скрытых комиссий\n"
    "- Мгновенный переход к безопасной оплате онлайн\n\n"
    "📊 ОНЛАЙН-МОНИТОРИНГ ЗАГРУЖЕННОСТИ\n"
    "- Реальная картина посещаемости в реальном времени\n"
    "- Точное количество гостей в аквапарке\n"
    "- Процент заполненности для комфортного планирования\n"
    "- Рекомендации по лучшему времени для визита\n\n"
    "ℹ️ ПОЛНАЯ ИНФОРМАЦИЯ О ЦЕНТРЕ\n"
    "- Актуальное расписание всех зон и аттракционов\n"
    "- Контакты и способы связи с администрацией\n"
    "- Информация о временно закрытых объектах\n"
    "- Все необходимое для комфортного планирования\n\n"
    "🚀 Начните прямо сейчас!\n"
    "Выберите раздел в меню ниже, и я помогу организовать ваш идеальный визит! ✨\n\n"
    "💫 Центр YES - где рождаются воспоминания!"
)

START_TEXT = "Добро пожаловать! Выберите пункт 👇"
MAIN_MENU_TEXT = "Главное меню:"
INFO_MENU_TEXT = "Выберите интересующую информацию 👇"
CHOOSE_DATE_TEXT = "Выберите дату для сеанса:"
DATE_FIRST_TEXT = "Сначала выберите дату 📅"
DATE_AND_SESSION_FIRST_TEXT = "Сначала выберите дату и сеанс 📅"
NOT_UNDERSTOOD_TEXT = "Я вас не понял, попробуйте еще раз 😅"
APOLOGY_TEXT = "Произошла ошибка при обработке запроса. Мы уже работаем над этим! 🛠️"

SESSIONS_ERROR_TEXT = "❌ Ошибка при получении сеансов"
TARIFFS_ERROR_TEXT = "❌ Ошибка при получении тарифов. Попробуйте позже 😔"
LOAD_ERROR_TEXT = "❌ Не удалось получить информацию о загруженности. Попробуйте позже 😔"

WORKING_HOURS_TEXT = (
    "🏢 Режим работы точек Центра YES:\n\n"
    "🌊 Аквапарк\n"
    "⏰ 10:00 - 21:00 │ 📅 Ежедневно\n"
    "💧 Бассейны, горки, сауны\n\n"
    "🍽️ Ресторан\n"
    "⏰ 10:00 - 21:00 │ 📅 Ежедневно\n"
    "🍕 Кухня европейская и азиатская\n\n"
    "🎮 Игровой центр\n"
    "⏰ 10:00 - 18:00 │ 📅 Ежедневно\n"
    "🎯 Автоматы и симуляторы\n\n"
    "🦖 Динопарк\n"
    "⏰ 10:00 - 18:00 │ 📅 Ежедневно\n"
    "🦕 Интерактивные экспонаты\n\n"
    "🏨 Гостиница\n"
    "⏰ Круглосуточно │ 📅 Ежедневно\n"
    "🛏️ Номера различных категорий\n\n"
    "🔴 Временно не работают:\n"
    "• 🧗‍ Веревочный парк\n"
    "• 🧗‍ Скалодром\n"
    "• 🎡 Парк аттракционов\n"
    "• 🍔 MasterBurger\n\n"
    "📞 Уточнить информацию: (8172) 33-06-06"
)

CONTACTS_TEXT = (
    "📞 Контакты Центра YES\n\n"
    "📱 Телефон для связи:\n"
    "• Основной: (8172) 33-06-06\n"
    "• Ресторан: 8-800-200-67-71\n\n"
    "📧 Электронная почта:\n"
    "yes@yes35.ru\n\n"
    "🌐 Мы в соцсетях:\n"
    "ВКонтакте: vk.com/yes35\n"
    "Telegram: t.me/CentreYES35\n"
    "WhatsApp: ссылка в профиле\n\n"
    "⏰ Часы работы call-центра:\n"
    "🕙 09:00 - 22:00"
)


def session_chosen_text(session: str, date: str) -> str:
    return f"🎟 *Сеанс: {session} ({date})*\n\nВыберите категорию билетов:"
