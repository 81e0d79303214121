"""Cloud poem mirror in Firestore: users/{account_id}/poems/{record_id}"""

import asyncio
import logging

from codepoet.exceptions import StorageUnavailableError
from codepoet.models.poem import GenerationRecord, Tombstone
from codepoet.services.firebase.firebase_config import get_firestore_client

logger = logging.getLogger(__name__)


class FirestoreRecordStore:
    """Poems and tombstones share one collection; tombstones carry ``deleted: true``."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_firestore_client()
        return self._client

    def _collection(self, account_id: str):
        return self.client.collection("users").document(account_id).collection("poems")

    def _stream(self, account_id: str) -> list[dict]:
        return [doc.to_dict() for doc in self._collection(account_id).stream()]

    async def _documents(self, account_id: str) -> list[dict]:
        try:
            return await asyncio.to_thread(self._stream, account_id)
        except Exception as e:
            logger.error(f"Failed to read poems from Firestore for {account_id}: {e}")
            raise StorageUnavailableError("Cloud storage is unavailable") from e

    async def list_records(self, account_id: str) -> list[GenerationRecord]:
        return [
            GenerationRecord.from_dict(doc)
            for doc in await self._documents(account_id)
            if not doc.get("deleted")
        ]

    async def list_tombstones(self, account_id: str) -> list[Tombstone]:
        return [
            Tombstone.from_dict(doc)
            for doc in await self._documents(account_id)
            if doc.get("deleted")
        ]

    async def _set(self, account_id: str, document_id: str, data: dict) -> None:
        document = self._collection(account_id).document(document_id)
        try:
            await asyncio.to_thread(document.set, data)
        except Exception as e:
            logger.error(f"Failed to write {document_id} to Firestore for {account_id}: {e}")
            raise StorageUnavailableError("Cloud storage is unavailable") from e

    async def put_record(self, account_id: str, record: GenerationRecord) -> None:
        await self._set(account_id, record.id, record.to_dict())

    async def put_tombstone(self, account_id: str, tombstone: Tombstone) -> None:
        await self._set(account_id, tombstone.id, tombstone.to_dict())
