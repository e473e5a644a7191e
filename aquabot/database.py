from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from aquabot.config import settings

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=_connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None) -> None:
    """Create tables for the error log, command counters and command definitions."""
    import aquabot.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
