import json
import random
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from aquabot.logging_config import get_logger
from aquabot.schemas.vk import LongPollResponse, LongPollServer, LongPollServerResponse
from aquabot.services.result import Result

logger = get_logger("vk_service")


class VkService:
    """Client for the VK community API: long-poll descriptor, polling and outgoing messages."""

    def __init__(
        self,
        access_token: str,
        group_id: Optional[str],
        api_version: str = "5.131",
        base_url: str = "https://api.vk.com/method",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.access_token = access_token
        self.group_id = group_id
        self.api_version = api_version
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth(self) -> dict:
        return {"access_token": self.access_token, "v": self.api_version}

    async def _post_method(self, method: str, data: dict) -> dict:
        """POST a form to a VK method. Raises on transport errors and bad JSON."""
        response = await self._client.post(f"{self.base_url}/{method}", data={**data, **self._auth()})
        response.raise_for_status()
        return response.json()

    async def get_long_poll_server(self) -> Result[LongPollServer]:
        try:
            response = await self._client.get(
                f"{self.base_url}/groups.getLongPollServer",
                params={"group_id": self.group_id, **self._auth()},
            )
            response.raise_for_status()
            body = LongPollServerResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"getLongPollServer failed: {e}")
            return Result.from_exception(e)

        if body.response is None:
            error = body.error or {}
            logger.error(f"getLongPollServer returned error: {error}")
            return Result.failure(str(error.get("error_msg", "empty response")), "vk_error")
        return Result.success(body.response)

    async def check(self, descriptor: LongPollServer, wait: int = 25) -> LongPollResponse:
        """Hold a long-poll request open for up to `wait` seconds.

        Raises httpx.HTTPError on transport failures and ValueError on bodies that
        are not a long-poll response.
        """
        response = await self._client.get(
            descriptor.server,
            params={"act": "a_check", "key": descriptor.key, "ts": descriptor.ts, "wait": wait},
            timeout=wait + 10,
        )
        response.raise_for_status()
        try:
            return LongPollResponse.model_validate(response.json())
        except ValidationError as e:
            raise ValueError(f"Unexpected long-poll body: {e.error_count()} errors") from e

    async def send_message(
        self,
        user_id: int,
        text: str,
        keyboard: Optional[dict[str, Any]] = None,
        peer_id: Optional[int] = None,
    ) -> bool:
        """Send a message; returns False instead of raising when VK refuses or is unreachable."""
        data = {
            "message": text,
            "random_id": str(random.getrandbits(31)),
        }
        if peer_id and peer_id != user_id:
            data["peer_id"] = str(peer_id)
        else:
            data["user_id"] = str(user_id)
        if keyboard:
            data["keyboard"] = json.dumps(keyboard, ensure_ascii=False)

        try:
            body = await self._post_method("messages.send", data)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to send message to {user_id}: {e}")
            return False

        if isinstance(body, dict) and body.get("error"):
            logger.warning(f"VK refused message to {user_id}: {body['error']}")
            return False
        return True

    async def answer_event(self, event_id: str, user_id: int, peer_id: Optional[int] = None) -> bool:
        """Acknowledge a callback button so the client stops its spinner."""
        data = {
            "event_id": event_id,
            "user_id": str(user_id),
            "peer_id": str(peer_id or user_id),
        }
        try:
            body = await self._post_method("messages.sendMessageEventAnswer", data)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to answer event {event_id}: {e}")
            return False
        return not (isinstance(body, dict) and body.get("error"))
