"""SyncCoordinator reconciliation between local and cloud poems."""

from datetime import datetime, timedelta, timezone

from codepoet.models.account import Account, Tier
from codepoet.models.poem import Tombstone
from codepoet.services.sync import SkipReason, SyncStatus

from conftest import make_record

FREE = Account(id="uid-1", tier=Tier.FREE)
T0 = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


async def test_offline_reconcile_is_skipped_and_mutates_nothing(
    sync_coordinator, connectivity, kv, remote
) -> None:
    await sync_coordinator.poem_store.save(FREE.id, make_record())
    connectivity.online = False
    before = dict(kv.data)

    result = await sync_coordinator.reconcile(FREE)

    assert result.status == SyncStatus.SKIPPED
    assert result.reason == SkipReason.NO_CONNECTIVITY
    assert kv.data == before
    assert remote.records == {}


async def test_guest_reconcile_is_skipped(sync_coordinator) -> None:
    result = await sync_coordinator.reconcile(Account(id="guest-1", tier=Tier.GUEST))

    assert result.is_skipped
    assert result.reason == SkipReason.GUEST_ACCOUNT


async def test_pull_and_push_missing_records(sync_coordinator, poem_store, remote) -> None:
    local_only = make_record(output="local")
    remote_only = make_record(output="remote")
    await poem_store.save(FREE.id, local_only)
    await remote.put_record(FREE.id, remote_only)

    result = await sync_coordinator.reconcile(FREE)

    assert (result.pulled, result.pushed) == (1, 1)
    assert await poem_store.get(FREE.id, remote_only.id) == remote_only
    assert remote.records[FREE.id][local_only.id] == local_only


async def test_second_reconcile_changes_nothing(sync_coordinator, poem_store, remote) -> None:
    await poem_store.save(FREE.id, make_record())
    await remote.put_record(FREE.id, make_record())
    await sync_coordinator.reconcile(FREE)

    result = await sync_coordinator.reconcile(FREE)

    assert (result.pulled, result.pushed, result.favorites_updated, result.deleted) == (0, 0, 0, 0)


async def test_newer_remote_favorite_wins(sync_coordinator, poem_store, remote) -> None:
    record = make_record()
    await poem_store.save(FREE.id, record.with_favorite(False, T0))
    await remote.put_record(FREE.id, record.with_favorite(True, T0 + timedelta(minutes=5)))

    result = await sync_coordinator.reconcile(FREE)

    local = await poem_store.get(FREE.id, record.id)
    assert result.favorites_updated == 1
    assert local.favorite is True
    assert local.favorite_updated_at == T0 + timedelta(minutes=5)


async def test_older_remote_favorite_loses(sync_coordinator, poem_store, remote) -> None:
    record = make_record()
    await poem_store.save(FREE.id, record.with_favorite(True, T0 + timedelta(minutes=5)))
    await remote.put_record(FREE.id, record.with_favorite(False, T0))

    await sync_coordinator.reconcile(FREE)

    assert (await poem_store.get(FREE.id, record.id)).favorite is True
    assert remote.records[FREE.id][record.id].favorite is True


async def test_equal_timestamps_keep_local(sync_coordinator, poem_store, remote) -> None:
    record = make_record()
    await poem_store.save(FREE.id, record.with_favorite(True, T0))
    await remote.put_record(FREE.id, record.with_favorite(False, T0))

    await sync_coordinator.reconcile(FREE)

    assert (await poem_store.get(FREE.id, record.id)).favorite is True
    assert remote.records[FREE.id][record.id].favorite is True


async def test_remote_tombstone_deletes_local_copy(sync_coordinator, poem_store, remote) -> None:
    record = make_record()
    await poem_store.save(FREE.id, record)
    await remote.put_tombstone(FREE.id, Tombstone(id=record.id))

    result = await sync_coordinator.reconcile(FREE)

    assert result.deleted == 1
    assert await poem_store.get(FREE.id, record.id) is None
    assert remote.records.get(FREE.id, {}) == {}


async def test_local_deletion_is_not_resurrected(sync_coordinator, poem_store, remote) -> None:
    record = make_record()
    await poem_store.save(FREE.id, record)
    await remote.put_record(FREE.id, record)
    await poem_store.delete(FREE.id, record.id)

    result = await sync_coordinator.reconcile(FREE)

    assert result.pulled == 0
    assert result.deleted == 1
    assert await poem_store.get(FREE.id, record.id) is None
    assert record.id in remote.tombstones[FREE.id]


async def test_reimported_deleted_poem_stays_deleted(sync_coordinator, poem_store, remote) -> None:
    record = make_record()
    await poem_store.save(FREE.id, record)
    exported = await poem_store.export_json(FREE.id)
    await poem_store.delete(FREE.id, record.id)

    assert await poem_store.import_json(FREE.id, exported) == 0
    await sync_coordinator.reconcile(FREE)

    assert record.id not in remote.records.get(FREE.id, {})
    assert record.id in remote.tombstones[FREE.id]
    assert await poem_store.get(FREE.id, record.id) is None


async def test_local_tombstone_beats_stray_local_record(sync_coordinator, poem_store, kv, remote) -> None:
    from codepoet.services.storage.poem_store import tombstone_key

    record = make_record()
    await poem_store.save(FREE.id, record)
    await kv.put(tombstone_key(FREE.id, record.id), Tombstone(id=record.id).to_bytes())

    result = await sync_coordinator.reconcile(FREE)

    assert result.pushed == 0
    assert record.id not in remote.records.get(FREE.id, {})
    assert record.id in remote.tombstones[FREE.id]
    assert await poem_store.get(FREE.id, record.id) is None


async def test_reconcile_records_last_sync_time(sync_coordinator) -> None:
    assert await sync_coordinator.last_synced_at(FREE.id) is None

    result = await sync_coordinator.reconcile(FREE)

    assert result.status == SyncStatus.COMPLETED
    assert await sync_coordinator.last_synced_at(FREE.id) == result.synced_at


async def test_push_record_skipped_offline(sync_coordinator, connectivity, remote) -> None:
    connectivity.online = False

    assert await sync_coordinator.push_record(FREE, make_record()) is False
    assert remote.records == {}


async def test_push_deletion(sync_coordinator, remote) -> None:
    record = make_record()
    await remote.put_record(FREE.id, record)

    assert await sync_coordinator.push_deletion(FREE, Tombstone(id=record.id)) is True
    assert record.id not in remote.records[FREE.id]
