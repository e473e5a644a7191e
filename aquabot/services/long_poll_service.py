"""VK Bots Long Poll supervisor.

Owns the poll cursor and feeds each batch to the dispatcher one update at a
time. Transport and decoding failures are logged and retried after a fixed
backoff; only missing credentials stop the worker.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from aquabot.logging_config import get_logger
from aquabot.schemas.vk import LongPollServer
from aquabot.services.dispatcher_service import UpdateDispatcher
from aquabot.services.stats_service import StatsService
from aquabot.services.vk_service import VkService

logger = get_logger("long_poll")


class LongPollWorker:
    def __init__(
        self,
        vk: VkService,
        dispatcher: UpdateDispatcher,
        sink: StatsService,
        wait: int = 25,
        retry_delay: float = 3.0,
    ):
        self.vk = vk
        self.dispatcher = dispatcher
        self.sink = sink
        self.wait = wait
        self.retry_delay = retry_delay
        self.descriptor: Optional[LongPollServer] = None
        self.is_running = False
        self.last_poll_at: Optional[datetime] = None
        self.processed_updates = 0
        self._stop = asyncio.Event()

    def stop(self) -> None:
        self._stop.set()

    def _credentials_missing(self) -> bool:
        if not self.vk.access_token:
            logger.critical("VK access token is not configured; long poll not started")
            return True
        if not self.vk.group_id:
            logger.critical("VK group id is not configured; long poll not started")
            return True
        return False

    async def refresh_descriptor(self) -> bool:
        result = await self.vk.get_long_poll_server()
        if not result.ok:
            self.descriptor = None
            self.sink.log_error(
                f"Long poll server request failed: {result.error}",
                context={"component": "GetLongPollServer", "code": result.error_code},
            )
            return False
        self.descriptor = result.value
        logger.info("Long poll descriptor acquired", extra={"context": {"server": self.descriptor.server}})
        return True

    async def poll_once(self) -> int:
        """One poll round. Returns the number of updates dispatched.

        Transport errors propagate to the caller. The cursor is advanced before
        any update is dispatched, and an update that fails is logged and
        skipped, never replayed.
        """
        if self.descriptor is None and not await self.refresh_descriptor():
            raise ConnectionError("Long poll descriptor unavailable")

        poll = await self.vk.check(self.descriptor, wait=self.wait)
        self.last_poll_at = datetime.now(timezone.utc)

        if poll.ts:
            self.descriptor = self.descriptor.model_copy(update={"ts": poll.ts})

        if poll.failed:
            logger.warning(f"Long poll failed={poll.failed}, refreshing descriptor")
            await self.refresh_descriptor()
            return 0

        for update in poll.updates:
            try:
                await self.dispatcher.dispatch(update)
            except Exception as e:
                # The cursor is already past this batch; the update is not retried.
                logger.error(f"Update dropped: {e}", exc_info=True, extra={"context": {"update": str(update)[:500]}})
            self.processed_updates += 1
        return len(poll.updates)

    async def _backoff(self) -> None:
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=self.retry_delay)
        except asyncio.TimeoutError:
            pass

    async def run(self) -> None:
        if self._credentials_missing():
            self.sink.log_error("VK credentials are not configured", context={"component": "Initialization"})
            return

        self.is_running = True
        logger.info("Long poll started")
        try:
            while not self._stop.is_set():
                try:
                    await self.poll_once()
                except Exception as e:
                    logger.error(f"Long poll iteration failed: {e}")
                    self.sink.log_error(str(e) or type(e).__name__, context={"component": "MainLoop"})
                    await self._backoff()
        except asyncio.CancelledError:
            logger.info("Long poll cancelled")
            raise
        finally:
            self.is_running = False
            logger.info("Long poll stopped")
