"""Per-account serialization for usage mutations."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager


class AccountLocks:
    """Hands out one asyncio.Lock per account id.

    Attempts for the same account queue behind each other; different
    accounts never contend. A lock entry is dropped once nobody holds or
    waits on it.

    Locks are per process, so the app must run as a single worker.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, account_id: str) -> AsyncGenerator[None, None]:
        """Context manager holding the account's lock.

        Example:
            async with account_locks.hold("uid-123"):
                account = await ledger.load("uid-123")
                ...
        """
        lock = self._locks.setdefault(account_id, asyncio.Lock())
        self._users[account_id] = self._users.get(account_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[account_id] -= 1
            if self._users[account_id] == 0:
                del self._users[account_id]
                del self._locks[account_id]

    def is_locked(self, account_id: str) -> bool:
        lock = self._locks.get(account_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
