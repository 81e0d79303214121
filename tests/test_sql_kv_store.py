"""SqlKeyValueStore against an embedded SQLite database."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from codepoet.db.database import Base
from codepoet.exceptions import StorageUnavailableError
from codepoet.services.storage import SqlKeyValueStore


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    import codepoet.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine) -> SqlKeyValueStore:
    return SqlKeyValueStore(async_sessionmaker(engine, expire_on_commit=False))


async def test_put_get_overwrite_delete(store) -> None:
    assert await store.get("account:1") is None

    await store.put("account:1", b"one")
    await store.put("account:1", b"two")
    assert await store.get("account:1") == b"two"

    await store.delete("account:1")
    assert await store.get("account:1") is None


async def test_keys_by_prefix(store) -> None:
    await store.put("poem:uid-1:a", b"1")
    await store.put("poem:uid-1:b", b"2")
    await store.put("poem:uid-10:c", b"3")
    await store.put("account:uid-1", b"4")

    assert await store.keys("poem:uid-1:") == ["poem:uid-1:a", "poem:uid-1:b"]


async def test_keys_prefix_escapes_like_wildcards(store) -> None:
    await store.put("poem:a_b:1", b"1")
    await store.put("poem:axb:1", b"2")

    assert await store.keys("poem:a_b:") == ["poem:a_b:1"]


async def test_missing_table_is_storage_unavailable(tmp_path) -> None:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    store = SqlKeyValueStore(async_sessionmaker(engine))

    with pytest.raises(StorageUnavailableError):
        await store.get("account:1")

    await engine.dispose()
