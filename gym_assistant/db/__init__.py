"""Database package: engine, session, base."""

from gym_assistant.db.session import create_db_engine, create_session_maker, init_db

__all__ = ["create_db_engine", "create_session_maker", "init_db"]
