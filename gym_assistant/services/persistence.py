"""Persistent key-value store: one JSON blob per top-level collection.

``get`` never raises on bad data: an unreadable or unparsable value is logged
and the caller's default is returned. ``set`` writes through synchronously and
commits before returning, so a mutation is durable once the call completes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from gym_assistant.models.store_entry import StoreEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


def _decode(key: str, raw: str | None, default: Any) -> Any:
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.exception("Stored value for %r is not valid JSON; using default", key)
        return default


class SqlKeyValueStore:
    """Key-value store backed by the ``store_entries`` table."""

    def __init__(self, session_maker: sessionmaker[Session]) -> None:
        self._session_maker = session_maker

    def get(self, key: str, default: Any) -> Any:
        try:
            with self._session_maker() as session:
                raw = session.execute(
                    select(StoreEntry.value).where(StoreEntry.key == key)
                ).scalar_one_or_none()
        except SQLAlchemyError:
            logger.exception("Reading %r from the store failed; using default", key)
            return default
        return _decode(key, raw, default)

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        with self._session_maker() as session:
            try:
                entry = session.get(StoreEntry, key)
                if entry is None:
                    session.add(StoreEntry(key=key, value=payload))
                else:
                    entry.value = payload
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                logger.exception("Writing %r to the store failed", key)
                raise
        logger.debug("Persisted %r (%d bytes)", key, len(payload))


class MemoryKeyValueStore:
    """In-process store holding serialized JSON, for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Any) -> Any:
        return _decode(key, self._data.get(key), default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def raw(self, key: str) -> str | None:
        return self._data.get(key)
