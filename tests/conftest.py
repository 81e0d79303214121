"""
Pytest configuration and in-memory collaborators
"""
import asyncio
import os

# Keep logging off disk and the engine away from the real database file
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_codepoet.db")

import pytest

from codepoet.models.account import Account, Tier
from codepoet.models.poem import GenerationRecord, Tombstone
from codepoet.services.generation import GenerationOrchestrator
from codepoet.services.quota import QuotaPolicy
from codepoet.services.storage import PoemStore
from codepoet.services.sync import SyncCoordinator
from codepoet.services.usage import UsageLedger


class InMemoryKeyValueStore:
    """Dict-backed KeyValueStore.

    Set ``fail_on`` to a key prefix to simulate outages, or ``fail_writes_on``
    to fail only puts and deletes under that prefix. ``read_delay`` makes
    every get yield to the event loop first.
    """

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.fail_on: str | None = None
        self.fail_writes_on: str | None = None
        self.read_delay = 0.0
        self.writes = 0

    def _check(self, key: str, writing: bool = False) -> None:
        failing = self.fail_on is not None and key.startswith(self.fail_on)
        if writing and self.fail_writes_on is not None:
            failing = failing or key.startswith(self.fail_writes_on)
        if failing:
            from codepoet.exceptions import StorageUnavailableError

            raise StorageUnavailableError(f"store offline for {key}")

    async def get(self, key: str) -> bytes | None:
        self._check(key)
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        return self.data.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self._check(key, writing=True)
        self.writes += 1
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self._check(key, writing=True)
        self.data.pop(key, None)

    async def keys(self, prefix: str) -> list[str]:
        self._check(prefix)
        return sorted(k for k in self.data if k.startswith(prefix))


class FakeGenerator:
    """Scripted AI collaborator.

    ``outputs`` are returned in order; an Exception instance in the list is
    raised instead. ``delay`` makes each call sleep first.
    """

    def __init__(self, outputs=None, delay: float = 0.0) -> None:
        self.outputs = list(outputs or [])
        self.delay = delay
        self.calls: list[tuple[str, str, str]] = []

    async def submit(self, code, language, style, timeout=None) -> str:
        self.calls.append((code, language, style))
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.outputs.pop(0) if self.outputs else f"A {style} about {language}"
        if isinstance(result, BaseException):
            raise result
        return result


class FakeRemoteStore:
    """In-memory stand-in for the Firestore poem collection."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, GenerationRecord]] = {}
        self.tombstones: dict[str, dict[str, Tombstone]] = {}
        self.fail = False

    def _maybe_fail(self) -> None:
        if self.fail:
            from codepoet.exceptions import StorageUnavailableError

            raise StorageUnavailableError("Cloud storage is unavailable")

    async def list_records(self, account_id: str) -> list[GenerationRecord]:
        self._maybe_fail()
        return list(self.records.get(account_id, {}).values())

    async def list_tombstones(self, account_id: str) -> list[Tombstone]:
        self._maybe_fail()
        return list(self.tombstones.get(account_id, {}).values())

    async def put_record(self, account_id: str, record: GenerationRecord) -> None:
        self._maybe_fail()
        self.records.setdefault(account_id, {})[record.id] = record

    async def put_tombstone(self, account_id: str, tombstone: Tombstone) -> None:
        self._maybe_fail()
        self.records.get(account_id, {}).pop(tombstone.id, None)
        self.tombstones.setdefault(account_id, {})[tombstone.id] = tombstone


class FakeConnectivity:
    def __init__(self, online: bool = True) -> None:
        self.online = online

    async def is_connected(self) -> bool:
        return self.online


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def policy() -> QuotaPolicy:
    return QuotaPolicy(free_daily_limit=5, guest_lifetime_limit=3)


@pytest.fixture
def ledger(kv) -> UsageLedger:
    return UsageLedger(kv)


@pytest.fixture
def poem_store(kv, ledger) -> PoemStore:
    return PoemStore(kv, locks=ledger.locks)


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def remote() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def connectivity() -> FakeConnectivity:
    return FakeConnectivity(online=True)


@pytest.fixture
def sync_coordinator(poem_store, remote, connectivity, kv) -> SyncCoordinator:
    return SyncCoordinator(
        poem_store=poem_store, remote=remote, connectivity=connectivity, kv=kv
    )


@pytest.fixture
def orchestrator(ledger, policy, generator, poem_store, sync_coordinator) -> GenerationOrchestrator:
    return GenerationOrchestrator(
        ledger=ledger,
        policy=policy,
        generator=generator,
        poem_store=poem_store,
        sync_coordinator=sync_coordinator,
        max_code_length=10_000,
        default_timeout=5.0,
    )


def make_record(**overrides) -> GenerationRecord:
    fields = {
        "code": "def add(a, b):\n    return a + b",
        "language": "python",
        "style": "haiku",
        "output": "Two numbers meet here",
    }
    fields.update(overrides)
    return GenerationRecord(**fields)


async def seed_account(ledger: UsageLedger, account_id: str, tier: Tier, **counters) -> Account:
    account = Account(id=account_id, tier=tier, **counters)
    return await ledger.save(account)
