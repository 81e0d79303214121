"""Key-value persistence used for usage rows and poem records."""

import logging
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from codepoet.exceptions import StorageUnavailableError
from codepoet.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> bytes | None: ...

    async def put(self, key: str, value: bytes) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def keys(self, prefix: str) -> list[str]: ...


def _escape_like(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlKeyValueStore:
    """KeyValueStore over the ``kv_entries`` table.

    Each call runs in its own short transaction. Any SQLAlchemy failure is
    raised as StorageUnavailableError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: str) -> bytes | None:
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to read key {key}: {e}")
            raise StorageUnavailableError(f"Failed to read {key}") from e

    async def put(self, key: str, value: bytes) -> None:
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                if entry:
                    entry.value = value
                else:
                    session.add(KeyValueEntry(key=key, value=value))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write key {key}: {e}")
            raise StorageUnavailableError(f"Failed to write {key}") from e

    async def delete(self, key: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete key {key}: {e}")
            raise StorageUnavailableError(f"Failed to delete {key}") from e

    async def keys(self, prefix: str) -> list[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(KeyValueEntry.key)
                    .where(KeyValueEntry.key.like(f"{_escape_like(prefix)}%", escape="\\"))
                    .order_by(KeyValueEntry.key)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list keys with prefix {prefix}: {e}")
            raise StorageUnavailableError(f"Failed to list {prefix}") from e
