"""Reconciliation between the local poem store and the cloud document store.

Records are immutable apart from ``favorite`` and deletion, so there is no
general last-writer-wins merge:

* records missing on one side are copied to the other (by id)
* a tombstone on either side deletes the record on both
* for ``favorite`` divergence the remote value wins only when its
  ``favorite_updated_at`` is strictly newer; otherwise the local value is
  pushed
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from codepoet.models.account import Account, utcnow
from codepoet.models.poem import GenerationRecord, Tombstone
from codepoet.services.storage.kv_store import KeyValueStore
from codepoet.services.storage.poem_store import PoemStore

logger = logging.getLogger(__name__)


class RemoteRecordStore(Protocol):
    async def list_records(self, account_id: str) -> list[GenerationRecord]: ...

    async def list_tombstones(self, account_id: str) -> list[Tombstone]: ...

    async def put_record(self, account_id: str, record: GenerationRecord) -> None: ...

    async def put_tombstone(self, account_id: str, tombstone: Tombstone) -> None: ...


class Connectivity(Protocol):
    async def is_connected(self) -> bool: ...


class SyncStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    NO_CONNECTIVITY = "no_connectivity"
    GUEST_ACCOUNT = "guest_account"


@dataclass
class SyncResult:
    status: SyncStatus
    reason: SkipReason | None = None
    pulled: int = 0
    pushed: int = 0
    favorites_updated: int = 0
    deleted: int = 0
    synced_at: datetime | None = None

    @classmethod
    def skipped(cls, reason: SkipReason) -> "SyncResult":
        return cls(status=SyncStatus.SKIPPED, reason=reason)

    @property
    def is_skipped(self) -> bool:
        return self.status == SyncStatus.SKIPPED

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "reason": self.reason.value if self.reason else None,
            "pulled": self.pulled,
            "pushed": self.pushed,
            "favorites_updated": self.favorites_updated,
            "deleted": self.deleted,
            "synced_at": self.synced_at.isoformat() if self.synced_at else None,
        }


def last_sync_key(account_id: str) -> str:
    return f"sync:{account_id}:last"


def remote_favorite_wins(local: GenerationRecord, remote: GenerationRecord) -> bool:
    if remote.favorite_updated_at is None:
        return False
    if local.favorite_updated_at is None:
        return True
    return remote.favorite_updated_at > local.favorite_updated_at


class SyncCoordinator:
    def __init__(
        self,
        poem_store: PoemStore,
        remote: RemoteRecordStore,
        connectivity: Connectivity,
        kv: KeyValueStore,
    ):
        self.poem_store = poem_store
        self.remote = remote
        self.connectivity = connectivity
        self.kv = kv

    async def _skip_reason(self, account: Account) -> SkipReason | None:
        if account.is_guest:
            return SkipReason.GUEST_ACCOUNT
        if not await self.connectivity.is_connected():
            return SkipReason.NO_CONNECTIVITY
        return None

    async def reconcile(self, account: Account) -> SyncResult:
        reason = await self._skip_reason(account)
        if reason:
            logger.info(f"Sync skipped for account {account.id}: {reason.value}")
            return SyncResult.skipped(reason)

        account_id = account.id
        result = SyncResult(status=SyncStatus.COMPLETED)

        local = {r.id: r for r in await self.poem_store.list_poems(account_id)}
        local_tombstones = {t.id: t for t in await self.poem_store.tombstones(account_id)}
        remote = {r.id: r for r in await self.remote.list_records(account_id)}
        remote_tombstones = {t.id: t for t in await self.remote.list_tombstones(account_id)}

        # A local tombstone beats a local record with the same id
        for record_id, tombstone in local_tombstones.items():
            if local.pop(record_id, None) is not None:
                await self.poem_store.apply_tombstone(account_id, tombstone)

        for record_id, tombstone in remote_tombstones.items():
            if record_id in local_tombstones:
                continue
            if await self.poem_store.apply_tombstone(account_id, tombstone):
                result.deleted += 1
            local.pop(record_id, None)

        for record_id, tombstone in local_tombstones.items():
            if record_id in remote_tombstones:
                continue
            await self.remote.put_tombstone(account_id, tombstone)
            if remote.pop(record_id, None) is not None:
                result.deleted += 1

        for record_id, record in remote.items():
            if record_id in local_tombstones:
                continue
            if record_id not in local:
                await self.poem_store.save(account_id, record)
                result.pulled += 1
                continue

            mine = local[record_id]
            if mine.favorite == record.favorite and mine.favorite_updated_at == record.favorite_updated_at:
                continue
            if remote_favorite_wins(mine, record):
                await self.poem_store.save(
                    account_id, mine.with_favorite(record.favorite, record.favorite_updated_at)
                )
            else:
                await self.remote.put_record(account_id, mine)
            result.favorites_updated += 1

        for record_id, record in local.items():
            if record_id not in remote and record_id not in remote_tombstones:
                await self.remote.put_record(account_id, record)
                result.pushed += 1

        result.synced_at = utcnow()
        await self.kv.put(last_sync_key(account_id), result.synced_at.isoformat().encode())
        logger.info(
            f"Synced account {account_id}: pulled={result.pulled}, pushed={result.pushed}, "
            f"favorites={result.favorites_updated}, deleted={result.deleted}"
        )
        return result

    async def last_synced_at(self, account_id: str) -> datetime | None:
        raw = await self.kv.get(last_sync_key(account_id))
        return datetime.fromisoformat(raw.decode()) if raw else None

    async def push_record(self, account: Account, record: GenerationRecord) -> bool:
        """Mirror one record. Returns False when the push was skipped."""
        if await self._skip_reason(account):
            return False
        await self.remote.put_record(account.id, record)
        return True

    async def push_deletion(self, account: Account, tombstone: Tombstone) -> bool:
        if await self._skip_reason(account):
            return False
        await self.remote.put_tombstone(account.id, tombstone)
        return True
