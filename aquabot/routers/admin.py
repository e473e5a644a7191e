"""Admin endpoints: error log, command cache reload, worker status."""

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from pydantic import BaseModel, ConfigDict

from aquabot.config import settings
from aquabot.dependencies import get_command_cache, get_session_store, get_stats_service, get_worker
from aquabot.logging_config import get_logger
from aquabot.services.command_service import CommandCache
from aquabot.services.long_poll_service import LongPollWorker
from aquabot.services.session_store import SessionStore
from aquabot.services.stats_service import StatsService

logger = get_logger("admin")

router = APIRouter(prefix="/admin", tags=["admin"])


class ErrorRecordResponse(BaseModel):
    id: int
    timestamp: datetime
    error_message: str
    user_id: Optional[int] = None
    command: Optional[str] = None
    additional_data: Optional[dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)


class ReloadResponse(BaseModel):
    status: str
    commands: int


class BotStatusResponse(BaseModel):
    running: bool
    descriptor_acquired: bool
    last_poll_at: Optional[datetime] = None
    processed_updates: int
    messages_processed: int
    commands_executed: int
    sessions: int


def _require_admin_token(provided: Optional[str]) -> None:
    expected = settings.admin_token
    if not expected:
        return
    if not provided or provided != expected:
        raise HTTPException(status_code=401, detail="Invalid admin token")


@router.get("/errors", response_model=list[ErrorRecordResponse])
def recent_errors(
    limit: int = Query(default=10, ge=1, le=100),
    stats: StatsService = Depends(get_stats_service),
    x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
):
    _require_admin_token(x_admin_token)
    return [ErrorRecordResponse.model_validate(row) for row in stats.recent_errors(limit)]


@router.post("/commands/reload", response_model=ReloadResponse)
def reload_commands(
    commands: CommandCache = Depends(get_command_cache),
    x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
):
    _require_admin_token(x_admin_token)
    count = commands.reload()
    logger.info("Command reload requested", extra={"context": {"commands": count}})
    return ReloadResponse(status="ok", commands=count)


@router.get("/bot/status", response_model=BotStatusResponse)
def bot_status(
    worker: Optional[LongPollWorker] = Depends(get_worker),
    store: SessionStore = Depends(get_session_store),
    stats: StatsService = Depends(get_stats_service),
    x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
):
    _require_admin_token(x_admin_token)
    return BotStatusResponse(
        running=bool(worker and worker.is_running),
        descriptor_acquired=bool(worker and worker.descriptor is not None),
        last_poll_at=worker.last_poll_at if worker else None,
        processed_updates=worker.processed_updates if worker else 0,
        messages_processed=stats.messages_processed,
        commands_executed=stats.commands_executed,
        sessions=len(store),
    )
