"""Local poem storage on top of the key-value store."""

import json
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date

from codepoet.exceptions import InvalidInputError, RecordNotFoundError
from codepoet.models.poem import GenerationRecord, Tombstone
from codepoet.services.storage.kv_store import KeyValueStore
from codepoet.services.usage.account_locks import AccountLocks

logger = logging.getLogger(__name__)


@dataclass
class PoemStatistics:
    total_poems: int
    favorite_style: str | None
    poems_today: int


def poem_key(account_id: str, record_id: str) -> str:
    return f"poem:{account_id}:{record_id}"


def tombstone_key(account_id: str, record_id: str) -> str:
    return f"tombstone:{account_id}:{record_id}"


class PoemStore:
    """Per-account poem records and deletion tombstones.

    Read-modify-write operations take the account lock; pass the ledger's
    ``AccountLocks`` so they queue with usage updates for the same account.
    """

    def __init__(self, kv: KeyValueStore, locks: AccountLocks | None = None):
        self.kv = kv
        self.locks = locks or AccountLocks()

    async def save(self, account_id: str, record: GenerationRecord) -> None:
        await self.kv.put(poem_key(account_id, record.id), record.to_bytes())

    async def get(self, account_id: str, record_id: str) -> GenerationRecord | None:
        raw = await self.kv.get(poem_key(account_id, record_id))
        return GenerationRecord.from_bytes(raw) if raw else None

    async def require(self, account_id: str, record_id: str) -> GenerationRecord:
        record = await self.get(account_id, record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    async def list_poems(
        self,
        account_id: str,
        style: str | None = None,
        favorites_only: bool = False,
        limit: int | None = None,
    ) -> list[GenerationRecord]:
        """Return the account's poems, newest first."""
        records = []
        for key in await self.kv.keys(f"poem:{account_id}:"):
            raw = await self.kv.get(key)
            if raw is None:
                continue
            records.append(GenerationRecord.from_bytes(raw))

        if style:
            records = [r for r in records if r.style.lower() == style.lower()]
        if favorites_only:
            records = [r for r in records if r.favorite]

        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:limit] if limit is not None else records

    async def toggle_favorite(self, account_id: str, record_id: str) -> GenerationRecord:
        async with self.locks.hold(account_id):
            record = await self.require(account_id, record_id)
            updated = record.with_favorite(not record.favorite)
            await self.save(account_id, updated)
        return updated

    async def delete(self, account_id: str, record_id: str) -> Tombstone:
        """Delete a poem and leave a tombstone so sync does not restore it."""
        async with self.locks.hold(account_id):
            await self.require(account_id, record_id)
            tombstone = Tombstone(id=record_id)
            await self.kv.put(tombstone_key(account_id, record_id), tombstone.to_bytes())
            await self.kv.delete(poem_key(account_id, record_id))
        logger.info(f"Deleted poem {record_id} for account {account_id}")
        return tombstone

    async def apply_tombstone(self, account_id: str, tombstone: Tombstone) -> bool:
        """Record a deletion that happened elsewhere. Returns True if a local poem was removed."""
        existed = await self.kv.get(poem_key(account_id, tombstone.id)) is not None
        await self.kv.put(tombstone_key(account_id, tombstone.id), tombstone.to_bytes())
        if existed:
            await self.kv.delete(poem_key(account_id, tombstone.id))
        return existed

    async def is_deleted(self, account_id: str, record_id: str) -> bool:
        return await self.kv.get(tombstone_key(account_id, record_id)) is not None

    async def tombstones(self, account_id: str) -> list[Tombstone]:
        result = []
        for key in await self.kv.keys(f"tombstone:{account_id}:"):
            raw = await self.kv.get(key)
            if raw is not None:
                result.append(Tombstone.from_bytes(raw))
        return result

    async def clear(self, account_id: str) -> int:
        async with self.locks.hold(account_id):
            keys = await self.kv.keys(f"poem:{account_id}:")
            for key in keys:
                record_id = key.rsplit(":", 1)[1]
                await self.kv.put(
                    tombstone_key(account_id, record_id), Tombstone(id=record_id).to_bytes()
                )
                await self.kv.delete(key)
        return len(keys)

    async def statistics(self, account_id: str, today: date | None = None) -> PoemStatistics:
        today = today or date.today()
        records = await self.list_poems(account_id)
        style_counts = Counter(r.style for r in records)
        favorite_style = style_counts.most_common(1)[0][0] if style_counts else None
        return PoemStatistics(
            total_poems=len(records),
            favorite_style=favorite_style,
            poems_today=sum(1 for r in records if r.created_at.date() == today),
        )

    async def export_json(self, account_id: str) -> str:
        records = await self.list_poems(account_id)
        return json.dumps([r.to_dict() for r in records])

    async def import_json(self, account_id: str, payload: str) -> int:
        """Import poems from an export.

        Existing ids are overwritten. Ids that were deleted on this account
        stay deleted and are not counted.
        """
        try:
            items = json.loads(payload)
            records = [GenerationRecord.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            raise InvalidInputError(f"Invalid poem export: {e}") from e

        imported = 0
        for record in records:
            if await self.is_deleted(account_id, record.id):
                logger.debug(f"Skipping import of deleted poem {record.id}")
                continue
            await self.save(account_id, record)
            imported += 1
        logger.info(f"Imported {imported} of {len(records)} poems for account {account_id}")
        return imported
