"""Process-wide singletons shared by the long-poll worker and the admin routes."""

from functools import lru_cache
from typing import Optional

from aquabot.config import Settings, settings
from aquabot.database import SessionLocal
from aquabot.services.command_service import CommandCache
from aquabot.services.conversation_router import ConversationRouter
from aquabot.services.dispatcher_service import UpdateDispatcher
from aquabot.services.long_poll_service import LongPollWorker
from aquabot.services.session_store import SessionStore
from aquabot.services.stats_service import StatsService
from aquabot.services.ticketing_service import TicketingService
from aquabot.services.vk_service import VkService

_worker: Optional[LongPollWorker] = None


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore()


@lru_cache
def get_stats_service() -> StatsService:
    return StatsService(SessionLocal)


@lru_cache
def get_command_cache() -> CommandCache:
    return CommandCache(SessionLocal)


def get_worker() -> Optional[LongPollWorker]:
    return _worker


def set_worker(worker: Optional[LongPollWorker]) -> None:
    global _worker
    _worker = worker


def build_worker(config: Settings = settings) -> LongPollWorker:
    """Wire VK, ticketing, router and dispatcher into a long-poll worker."""
    store = get_session_store()
    sink = get_stats_service()
    vk = VkService(
        access_token=config.vk_access_token or "",
        group_id=config.vk_group_id,
        api_version=config.vk_api_version,
        base_url=config.vk_api_url,
    )
    ticketing = TicketingService(
        base_url=config.ticketing_api_url,
        site_id=config.ticketing_site_id,
        timeout=config.ticketing_timeout_seconds,
    )
    router = ConversationRouter(store, ticketing, sink, commands=get_command_cache())
    dispatcher = UpdateDispatcher(vk, router, store, sink)
    return LongPollWorker(
        vk,
        dispatcher,
        sink,
        wait=config.long_poll_wait_seconds,
        retry_delay=config.long_poll_retry_seconds,
    )
