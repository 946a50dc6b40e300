"""Durable key-value storage backed by a single SQLAlchemy table.

Plays the role browser local storage plays for a single-page app: string keys,
string (JSON) values, last writer wins. ``set_items`` writes several keys in one
transaction so a failure leaves every key untouched.
"""

import logging

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from stockroom.core.errors import StorageUnavailableError
from stockroom.db.base import Base, build_engine, build_session_factory
from stockroom.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class KeyValueStorage:
    def __init__(self, engine: Engine):
        self._engine = engine
        self._session_factory: sessionmaker = build_session_factory(engine)
        try:
            Base.metadata.create_all(engine)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Storage could not be initialised: {e}") from e

    @classmethod
    def from_url(cls, database_url: str) -> "KeyValueStorage":
        return cls(build_engine(database_url))

    def get_item(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                entry = session.get(StorageEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Could not read '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def set_items(self, items: dict[str, str]) -> None:
        """Write all items or none of them."""
        try:
            with self._session_factory.begin() as session:
                for key, value in items.items():
                    entry = session.get(StorageEntry, key)
                    if entry is None:
                        session.add(StorageEntry(key=key, value=value))
                    else:
                        entry.value = value
        except SQLAlchemyError as e:
            logger.warning("Storage write rolled back for keys=%s", list(items))
            raise StorageUnavailableError(f"Could not write {', '.join(items)}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            with self._session_factory.begin() as session:
                entry = session.get(StorageEntry, key)
                if entry is not None:
                    session.delete(entry)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Could not remove '{key}': {e}") from e

    def keys(self) -> list[str]:
        try:
            with self._session_factory() as session:
                return list(session.scalars(select(StorageEntry.key).order_by(StorageEntry.key)))
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Could not list keys: {e}") from e

    def close(self) -> None:
        self._engine.dispose()
