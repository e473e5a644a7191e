import asyncio
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aquabot.config import settings
from aquabot.database import init_db
from aquabot.dependencies import build_worker, get_command_cache, get_worker, set_worker
from aquabot.logging_config import get_logger, setup_logging
from aquabot.routers import admin, stats

setup_logging(settings.log_level)

app = FastAPI(
    title="Aquabot",
    description="VK community bot for the aqua park: tickets, sessions and park load",
    version="0.1.0",
    debug=settings.debug,
)

cors_env = os.environ.get("CORS_ALLOW_ORIGINS", "*")
cors_origins = [origin.strip() for origin in cors_env.split(",") if origin.strip()]
if not cors_origins:
    cors_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(stats.router)
app.include_router(admin.router)

worker_logger = get_logger("bot_worker")
_bot_worker_task: asyncio.Task | None = None


def _is_env_enabled(value: str | None, default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def _is_bot_worker_enabled() -> bool:
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return False
    return _is_env_enabled(os.environ.get("BOT_WORKER_ENABLED"), default=settings.bot_worker_enabled)


@app.on_event("startup")
async def start_bot_worker() -> None:
    global _bot_worker_task
    init_db()
    get_command_cache().reload()
    if not _is_bot_worker_enabled():
        worker_logger.info("Bot worker disabled")
        return
    if _bot_worker_task is None or _bot_worker_task.done():
        worker = build_worker(settings)
        set_worker(worker)
        _bot_worker_task = asyncio.create_task(worker.run())
        worker_logger.info("Bot worker started")


@app.on_event("shutdown")
async def stop_bot_worker() -> None:
    global _bot_worker_task
    worker = get_worker()
    if _bot_worker_task is not None:
        if worker is not None:
            worker.stop()
        _bot_worker_task.cancel()
        try:
            await _bot_worker_task
        except asyncio.CancelledError:
            pass
        _bot_worker_task = None

    if worker is not None:
        await worker.vk.aclose()
        await worker.dispatcher.router.ticketing.aclose()
        set_worker(None)


@app.get("/health")
async def health():
    return {"status": "ok"}
