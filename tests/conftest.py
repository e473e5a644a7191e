from datetime import datetime, timezone

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from aquabot.database import Base
from aquabot.services.session_store import SessionStore
from aquabot.services.stats_service import StatsService
from aquabot.services.ticketing_service import TicketingService

NOW = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def session_factory():
    """In-memory SQLite shared across sessions of one test."""
    import aquabot.models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def store():
    return SessionStore(clock=lambda: NOW)


@pytest.fixture
def sink(session_factory):
    return StatsService(session_factory, clock=lambda: NOW)


@pytest.fixture
def make_ticketing():
    """Build a TicketingService whose HTTP calls go to `handler(request) -> httpx.Response`."""

    def _make(handler) -> TicketingService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return TicketingService("https://gateway.test/v1/aqua", client=client)

    return _make
