from typing import Any, Optional

from aquabot.logging_config import LoggerAdapter, get_logger
from aquabot.schemas.vk import ButtonClicked, NormalizedEvent, OutboundReply
from aquabot.services import replies
from aquabot.services.conversation_router import ConversationRouter
from aquabot.services.event_normalizer import extract_command, normalize_update
from aquabot.services.session_store import SessionStore
from aquabot.services.stats_service import StatsService
from aquabot.services.vk_service import VkService

logger = get_logger("dispatcher")


class UpdateDispatcher:
    """Runs one raw update through normalizer, router and sender.

    This is the per-event error boundary: whatever goes wrong, the user gets a
    generic apology and the next update is processed normally.
    """

    def __init__(self, vk: VkService, router: ConversationRouter, store: SessionStore, sink: StatsService):
        self.vk = vk
        self.router = router
        self.store = store
        self.sink = sink

    async def dispatch(self, raw_update: Any) -> Optional[OutboundReply]:
        event = normalize_update(raw_update)
        if event is None:
            return None

        log = LoggerAdapter(logger, {"user_id": event.user_id, "kind": event.kind})
        command = "unknown"
        try:
            command = extract_command(event)
            self.store.touch(event.user_id)
            self.sink.record_activity(event.user_id)
            self.sink.record_command_usage(event.user_id, command)
            log.info(f"Incoming {event.kind}: {command}")

            if isinstance(event, ButtonClicked) and event.event_id:
                await self.vk.answer_event(event.event_id, event.user_id, event.peer_id)

            reply = await self.router.handle(event)
        except Exception as e:
            log.error(f"Event processing failed: {e}", exc_info=True)
            self._record_failure(event, command, e)
            reply = OutboundReply(text=replies.APOLOGY_TEXT)

        try:
            sent = await self.vk.send_message(event.user_id, reply.text, reply.keyboard, peer_id=event.peer_id)
        except Exception as e:
            log.error(f"Reply delivery failed: {e}", exc_info=True)
            self._record_failure(event, command, e)
            return reply

        if not sent:
            log.warning("Reply was not delivered")
        return reply

    def _record_failure(self, event: NormalizedEvent, command: str, error: Exception) -> None:
        try:
            self.sink.log_error(
                str(error) or type(error).__name__,
                user_id=event.user_id,
                command=command,
                context={
                    "component": "ProcessUpdate",
                    "text": event.text,
                    "has_selected": self.store.get(event.user_id).selected_date is not None,
                },
            )
        except Exception as e:
            logger.error(f"Failed to record event error for {event.user_id}: {e}")
