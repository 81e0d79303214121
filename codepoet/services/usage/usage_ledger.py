"""Usage ledger: persisted per-account generation counters."""

import logging
from datetime import date

from codepoet.exceptions import AccountNotFoundError
from codepoet.models.account import Account, Tier
from codepoet.services.storage.kv_store import KeyValueStore
from codepoet.services.usage.account_locks import AccountLocks

logger = logging.getLogger(__name__)


def account_key(account_id: str) -> str:
    return f"account:{account_id}"


class UsageLedger:
    """Reads and writes Account rows in the key-value store.

    Mutating methods do not lock on their own; callers hold
    ``ledger.locks.hold(account_id)`` around a read-check-write sequence
    so evaluate and commit stay atomic as a pair.
    """

    def __init__(self, kv: KeyValueStore, locks: AccountLocks | None = None):
        self.kv = kv
        self.locks = locks or AccountLocks()

    async def load(self, account_id: str) -> Account:
        raw = await self.kv.get(account_key(account_id))
        if raw is None:
            raise AccountNotFoundError(account_id)
        return Account.from_bytes(raw)

    async def save(self, account: Account) -> Account:
        await self.kv.put(account_key(account.id), account.to_bytes())
        return account

    async def create_default(
        self,
        account_id: str,
        today: date | None = None,
        tier: Tier = Tier.GUEST,
    ) -> Account:
        account = Account(id=account_id, tier=tier, last_reset_date=today or date.today())
        await self.save(account)
        logger.info(f"Created usage record for account {account_id} (tier={tier.value})")
        return account

    async def load_or_create(
        self,
        account_id: str,
        today: date | None = None,
        tier: Tier = Tier.GUEST,
    ) -> Account:
        try:
            return await self.load(account_id)
        except AccountNotFoundError:
            return await self.create_default(account_id, today, tier)

    async def record_daily_rollover_if_needed(self, account: Account, today: date) -> Account:
        """Reset today's counter when the calendar day has advanced."""
        if today == account.last_reset_date:
            return account
        if today < account.last_reset_date:
            logger.warning(
                f"Ignoring rollover for account {account.id}: {today} is before "
                f"last reset {account.last_reset_date}"
            )
            return account

        updated = account.evolve(today_count=0, last_reset_date=today)
        await self.save(updated)
        logger.debug(f"Daily rollover for account {account.id} to {today}")
        return updated

    async def commit_generation(self, account: Account) -> Account:
        """Count one successful generation. Call once per persisted poem."""
        updated = account.evolve(
            lifetime_count=account.lifetime_count + 1,
            today_count=account.today_count + 1,
        )
        await self.save(updated)
        logger.info(
            f"Committed generation for account {account.id}: "
            f"today={updated.today_count}, lifetime={updated.lifetime_count}"
        )
        return updated

    async def set_tier(self, account_id: str, tier: Tier) -> Account:
        account = await self.load(account_id)
        if account.tier == tier:
            return account
        updated = await self.save(account.evolve(tier=tier))
        logger.info(f"Account {account_id} tier changed: {account.tier.value} -> {tier.value}")
        return updated
