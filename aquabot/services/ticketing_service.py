"""Client for the aqua-park ticketing gateway (sessions, tariffs, current load).

Every call returns a Result; transport errors, bad statuses and unexpected
shapes never raise into the dialog code.
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from aquabot.logging_config import get_logger
from aquabot.schemas.ticketing import ParkLoad, SessionSlot, Tariff, extract_records
from aquabot.services.result import Result

logger = get_logger("ticketing_service")


class TicketingService:
    def __init__(
        self,
        base_url: str,
        site_id: str = "1",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.site_id = site_id
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Result[Any]:
        url = f"{self.base_url}/{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Ticketing request failed: {path}: {e}")
            return Result.from_exception(e)

        if response.status_code >= 400:
            logger.warning(f"Ticketing {path} returned {response.status_code}")
            return Result.failure(
                f"{path} returned HTTP {response.status_code}", "http_error", status_code=response.status_code
            )

        try:
            return Result.success(response.json())
        except ValueError as e:
            logger.warning(f"Ticketing {path} returned invalid JSON: {e}")
            return Result.failure(f"{path} returned invalid JSON", "decode_error", status_code=response.status_code)

    async def get_sessions(self, date: str) -> Result[list[SessionSlot]]:
        result = await self._request("GET", "getSessionsAqua", params={"date": date})
        if not result.ok:
            return result

        slots = []
        for record in extract_records(result.value):
            try:
                slots.append(SessionSlot.model_validate(record))
            except ValidationError:
                logger.warning("Skipping malformed session record", extra={"context": {"record": record}})
        logger.info(f"Loaded {len(slots)} sessions for {date}")
        return Result.success(slots)

    async def get_tariffs(self, date: str) -> Result[list[Tariff]]:
        result = await self._request("GET", "getTariffsAqua", params={"date": date})
        if not result.ok:
            return result

        tariffs = []
        for record in extract_records(result.value):
            try:
                tariffs.append(Tariff.model_validate(record))
            except ValidationError:
                logger.warning("Skipping malformed tariff record", extra={"context": {"record": record}})
        return Result.success(tariffs)

    async def get_current_load(self) -> Result[ParkLoad]:
        result = await self._request("POST", "CurrentLoad", json={"SiteID": self.site_id})
        if not result.ok:
            return result

        if not isinstance(result.value, dict):
            return Result.failure("CurrentLoad returned unexpected shape", "decode_error")
        try:
            return Result.success(ParkLoad.model_validate(result.value))
        except ValidationError as e:
            return Result.failure(f"CurrentLoad validation failed: {e.error_count()} errors", "decode_error")
