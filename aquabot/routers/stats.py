"""Read-only statistics for the admin dashboard."""

from datetime import datetime, timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from aquabot.config import settings
from aquabot.dependencies import get_session_store, get_stats_service
from aquabot.services.session_store import SessionStore
from aquabot.services.stats_service import StatsService

router = APIRouter(prefix="/stats", tags=["stats"])


class LiveStatsResponse(BaseModel):
    online_users: int
    messages_processed: int
    active_today: int
    total_sessions: int
    uptime: str
    started_at: datetime


class CommandCount(BaseModel):
    command: str
    count: int


class HourlyActivity(BaseModel):
    time: str
    count: int


class CommandStatsResponse(BaseModel):
    total_executed: int
    popular: list[CommandCount]
    usage: dict[str, int]
    hourly_activity: list[HourlyActivity]


@router.get("", response_model=LiveStatsResponse)
def live_stats(
    store: SessionStore = Depends(get_session_store),
    stats: StatsService = Depends(get_stats_service),
):
    return LiveStatsResponse(
        online_users=store.online_count(timedelta(minutes=settings.online_window_minutes)),
        messages_processed=stats.messages_processed,
        active_today=store.active_today(),
        total_sessions=len(store),
        uptime=stats.uptime(),
        started_at=stats.started_at,
    )


@router.get("/commands", response_model=CommandStatsResponse)
def command_stats(stats: StatsService = Depends(get_stats_service)):
    return CommandStatsResponse(
        total_executed=stats.commands_executed,
        popular=[CommandCount(command=name, count=count) for name, count in stats.popular_commands(5)],
        usage=stats.command_usage(),
        hourly_activity=[HourlyActivity(**item) for item in stats.hourly_activity()],
    )
