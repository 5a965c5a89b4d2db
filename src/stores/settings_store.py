"""Stores for per-restaurant settings records."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, contextmanager
from typing import Callable, Dict, Iterator, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.config import settings
from src.core.error_codes import ConfigurationErrorCode, DatabaseErrorCode
from src.core.exceptions import ConfigurationException, DatabaseException
from src.core.field_definitions import SettingsRecord, SettingValue
from src.core.logger import get_logger
from src.models import RestaurantSettingsRecord
from src.stores.database import database_session

logger = get_logger(__name__)


class SettingsStore(ABC):
    """
    Storage for one flat settings record per restaurant.

    Implementations replace a record wholesale on save, so a reader never
    sees a half-applied update. Writers that read, validate and then save
    must hold lock(restaurant_id) for the whole sequence.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @abstractmethod
    def get(self, restaurant_id: str) -> Optional[SettingsRecord]:
        """Return a copy of the stored record, or None if there is none."""

    @abstractmethod
    def save(
        self, restaurant_id: str, record: Mapping[str, SettingValue]
    ) -> SettingsRecord:
        """Replace the stored record and return a copy of what was stored."""

    @contextmanager
    def lock(self, restaurant_id: str) -> Iterator[None]:
        """Hold the write lock for one restaurant (re-entrant)."""
        with self._locks_guard:
            restaurant_lock = self._locks.setdefault(restaurant_id, threading.RLock())
        with restaurant_lock:
            yield


class InMemorySettingsStore(SettingsStore):
    """Process-local store; records vanish with the process."""

    def __init__(self, initial: Optional[Mapping[str, Mapping[str, SettingValue]]] = None):
        super().__init__()
        self._records: Dict[str, SettingsRecord] = {
            restaurant_id: dict(record) for restaurant_id, record in (initial or {}).items()
        }

    def get(self, restaurant_id: str) -> Optional[SettingsRecord]:
        record = self._records.get(restaurant_id)
        return dict(record) if record is not None else None

    def save(
        self, restaurant_id: str, record: Mapping[str, SettingValue]
    ) -> SettingsRecord:
        self._records[restaurant_id] = dict(record)
        return dict(record)


class DatabaseSettingsStore(SettingsStore):
    """Settings records persisted in the restaurant_settings table."""

    def __init__(
        self,
        session_scope: Callable[[], AbstractContextManager[Session]] = database_session,
    ) -> None:
        super().__init__()
        self._session_scope = session_scope

    def get(self, restaurant_id: str) -> Optional[SettingsRecord]:
        try:
            with self._session_scope() as db:
                row = db.get(RestaurantSettingsRecord, restaurant_id)
                return dict(row.values) if row is not None else None
        except SQLAlchemyError as exc:
            logger.error("Failed to load settings for %s: %s", restaurant_id, exc)
            raise DatabaseException.wrap(
                exc,
                f"Failed to load settings: {restaurant_id}",
                DatabaseErrorCode.QUERY_FAILED,
                restaurant_id=restaurant_id,
            ) from exc

    def save(
        self, restaurant_id: str, record: Mapping[str, SettingValue]
    ) -> SettingsRecord:
        values = dict(record)
        try:
            with self._session_scope() as db:
                row = db.get(RestaurantSettingsRecord, restaurant_id)
                if row is None:
                    db.add(RestaurantSettingsRecord(restaurant_id=restaurant_id, values=values))
                else:
                    # assign a new dict so the JSON column is flagged dirty
                    row.values = values
                db.commit()
                logger.debug("Persisted settings for '%s'", restaurant_id)
                return dict(values)
        except SQLAlchemyError as exc:
            logger.error("Failed to persist settings for %s: %s", restaurant_id, exc)
            raise DatabaseException.wrap(
                exc,
                f"Failed to persist settings: {restaurant_id}",
                DatabaseErrorCode.QUERY_FAILED,
                restaurant_id=restaurant_id,
            ) from exc


def create_settings_store(backend: Optional[str] = None) -> SettingsStore:
    """
    Build the store selected by settings_store__backend.

    Raises:
        ConfigurationException: For an unknown backend name
    """
    backend = backend or settings.settings_store__backend
    if backend == "memory":
        return InMemorySettingsStore()
    if backend == "database":
        return DatabaseSettingsStore()
    raise ConfigurationException(
        f"Unknown settings store backend: {backend}",
        ConfigurationErrorCode.INVALID_CONFIG,
        details={"backend": backend},
    )


__all__ = [
    "DatabaseSettingsStore",
    "InMemorySettingsStore",
    "SettingsStore",
    "create_settings_store",
]
