"""Dialog routing: (state, input) -> (state, reply).

Collaborator failures come back as Result values and are turned into static
"try later" replies here; they never escape as exceptions.
"""

from datetime import date, datetime
from typing import Callable, Optional

from aquabot.logging_config import get_logger
from aquabot.schemas.vk import ButtonClicked, NormalizedEvent, OutboundReply, PermissionGranted
from aquabot.services import keyboards, replies
from aquabot.services.command_service import CommandCache
from aquabot.services.dialog_state import (
    DateChosen,
    DialogState,
    Idle,
    SessionChosen,
    choose_date,
    choose_session,
    reset,
)
from aquabot.services.event_normalizer import button_text
from aquabot.services.intents import (
    DATE_MARKER,
    TIME_MARKER,
    Intent,
    classify,
    parse_date,
    strip_marker,
    ticket_category,
)
from aquabot.services.session_store import SessionStore
from aquabot.services.stats_service import StatsService
from aquabot.services.ticket_formatter import format_load, format_sessions, format_tariffs
from aquabot.services.ticketing_service import TicketingService

logger = get_logger("conversation_router")

Transition = tuple[DialogState, OutboundReply]


class ConversationRouter:
    def __init__(
        self,
        store: SessionStore,
        ticketing: TicketingService,
        sink: StatsService,
        commands: Optional[CommandCache] = None,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.ticketing = ticketing
        self.sink = sink
        self.commands = commands
        self._today = today
        self._now = now

    async def handle(self, event: NormalizedEvent) -> OutboundReply:
        if isinstance(event, PermissionGranted):
            return OutboundReply(text=replies.WELCOME_TEXT, keyboard=keyboards.welcome())
        if isinstance(event, ButtonClicked):
            return await self.handle_text(event.user_id, button_text(event))
        return await self.handle_text(event.user_id, event.text or "")

    async def handle_text(self, user_id: int, text: str) -> OutboundReply:
        current = self.store.get(user_id).state
        new_state, reply = await self.transition(current, text, user_id=user_id)
        if new_state != current:
            self.store.apply(user_id, new_state)
            logger.info(f"User {user_id}: {current.stage.value} -> {new_state.stage.value}")
        return reply

    async def transition(self, state: DialogState, text: str, user_id: Optional[int] = None) -> Transition:
        text = (text or "").strip()
        intent = classify(text)

        if intent == Intent.SELECT_TICKET_CATEGORY:
            return state, await self._tariffs(state, text, user_id)

        if intent == Intent.START:
            return state, OutboundReply(text=replies.START_TEXT, keyboard=keyboards.main_menu())
        if intent == Intent.INFO:
            return state, OutboundReply(text=replies.INFO_MENU_TEXT, keyboard=keyboards.info_menu())
        if intent == Intent.HOURS:
            return state, OutboundReply(text=replies.WORKING_HOURS_TEXT)
        if intent == Intent.CONTACTS:
            return state, OutboundReply(text=replies.CONTACTS_TEXT)
        if intent in (Intent.BACK, Intent.BACK_TO_START):
            return reset(state), OutboundReply(text=replies.MAIN_MENU_TEXT, keyboard=keyboards.main_menu())
        if intent == Intent.TICKETS:
            return state, self._date_prompt(replies.CHOOSE_DATE_TEXT)
        if intent == Intent.LOAD:
            return state, await self._park_load(user_id)

        if intent == Intent.BACK_TO_SESSIONS:
            if isinstance(state, (DateChosen, SessionChosen)):
                return choose_date(state, state.date), await self._sessions(state.date, user_id)
            return state, self._date_prompt(replies.CHOOSE_DATE_TEXT)

        if intent == Intent.SELECT_DATE:
            picked = parse_date(strip_marker(text, DATE_MARKER))
            if picked is not None:
                return choose_date(state, picked), await self._sessions(picked, user_id)

        if intent == Intent.SELECT_SESSION:
            session = strip_marker(text, TIME_MARKER)
            if session:
                if isinstance(state, Idle):
                    return state, self._date_prompt(replies.DATE_FIRST_TEXT)
                new_state = choose_session(state, session)
                return new_state, OutboundReply(
                    text=replies.session_chosen_text(session, new_state.date),
                    keyboard=keyboards.category_picker(),
                )

        return state, self._fallback(text)

    def _date_prompt(self, text: str) -> OutboundReply:
        return OutboundReply(text=text, keyboard=keyboards.date_picker(self._today()))

    def _fallback(self, text: str) -> OutboundReply:
        command = self.commands.find(text) if self.commands else None
        if command is not None:
            return OutboundReply(text=command.response, keyboard=command.keyboard)
        return OutboundReply(text=replies.NOT_UNDERSTOOD_TEXT)

    async def _sessions(self, picked: str, user_id: Optional[int]) -> OutboundReply:
        result = await self.ticketing.get_sessions(picked)
        if not result.ok:
            self.sink.log_error(
                f"Sessions request failed: {result.error}",
                user_id=user_id,
                command=Intent.SELECT_DATE.value,
                context={"component": "GetSessionsForDate", "date": picked},
            )
            return self._date_prompt(replies.SESSIONS_ERROR_TEXT)

        text, keyboard = format_sessions(picked, result.value, self._today())
        return OutboundReply(text=text, keyboard=keyboard)

    async def _tariffs(self, state: DialogState, text: str, user_id: Optional[int]) -> OutboundReply:
        if not isinstance(state, SessionChosen):
            return self._date_prompt(replies.DATE_AND_SESSION_FIRST_TEXT)

        category = ticket_category(text)
        result = await self.ticketing.get_tariffs(state.date)
        if not result.ok:
            self.sink.log_error(
                f"Tariffs request failed: {result.error}",
                user_id=user_id,
                command=Intent.SELECT_TICKET_CATEGORY.value,
                context={
                    "component": "GetFormattedTariffs",
                    "date": state.date,
                    "session": state.session,
                    "category": category,
                },
            )
            return OutboundReply(text=replies.TARIFFS_ERROR_TEXT, keyboard=keyboards.back())

        message, keyboard = format_tariffs(state.date, state.session, category, result.value)
        return OutboundReply(text=message, keyboard=keyboard)

    async def _park_load(self, user_id: Optional[int]) -> OutboundReply:
        result = await self.ticketing.get_current_load()
        if not result.ok:
            self.sink.log_error(
                f"Park load request failed: {result.error}",
                user_id=user_id,
                command=Intent.LOAD.value,
                context={"component": "GetParkLoad"},
            )
            return OutboundReply(text=replies.LOAD_ERROR_TEXT)
        return OutboundReply(text=format_load(result.value, self._now()))
