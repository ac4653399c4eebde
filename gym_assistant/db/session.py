"""Database engine and session factory for the local SQLite store."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from gym_assistant.core.config import Settings
from gym_assistant.db.base import Base


def create_db_engine(settings: Settings) -> Engine:
    """Engine bound to the settings' SQLite file (parent directory created on demand)."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return create_engine(
        settings.database_url,
        echo=settings.debug,
        connect_args={"check_same_thread": False},
    )


def create_session_maker(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
    )


def init_db(engine: Engine) -> None:
    """Create missing tables (the store has a single, stable table)."""
    import gym_assistant.models  # noqa: F401 - register all models

    Base.metadata.create_all(engine)
