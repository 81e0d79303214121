"""Account service: identity to usage account mapping and tier changes"""

import logging
from dataclasses import dataclass
from datetime import date

from codepoet.models.account import Account, Tier
from codepoet.services.firebase.firebase_auth import TokenData
from codepoet.services.quota.quota_policy import QuotaPolicy
from codepoet.services.usage.usage_ledger import UsageLedger

logger = logging.getLogger(__name__)


@dataclass
class UsageSummary:
    account_id: str
    tier: Tier
    today_count: int
    lifetime_count: int
    limit: int | None
    remaining: int | None
    last_reset_date: date

    @property
    def can_generate(self) -> bool:
        return self.remaining is None or self.remaining > 0


class AccountService:
    """
    Creates and upgrades usage accounts.

    Anonymous Firebase identities start as guests, permanent ones as free.
    When a guest links a permanent identity the same uid is upgraded to free
    and its counters carry over.
    """

    def __init__(self, ledger: UsageLedger, policy: QuotaPolicy):
        self.ledger = ledger
        self.policy = policy

    async def ensure_account(self, identity: TokenData, today: date | None = None) -> Account:
        today = today or date.today()
        initial_tier = Tier.GUEST if identity.is_anonymous else Tier.FREE

        async with self.ledger.locks.hold(identity.uid):
            account = await self.ledger.load_or_create(identity.uid, today, initial_tier)
            if account.tier.rank < initial_tier.rank:
                account = await self.ledger.save(account.evolve(tier=initial_tier))
                logger.info(f"Guest account {identity.uid} linked, now {initial_tier.value}")
            return account

    async def set_tier(self, account_id: str, tier: Tier) -> Account:
        async with self.ledger.locks.hold(account_id):
            return await self.ledger.set_tier(account_id, tier)

    async def upgrade_to_pro(self, account_id: str) -> Account:
        return await self.set_tier(account_id, Tier.PRO)

    async def usage_summary(self, account_id: str, today: date | None = None) -> UsageSummary:
        today = today or date.today()
        async with self.ledger.locks.hold(account_id):
            account = await self.ledger.load(account_id)
            account = await self.ledger.record_daily_rollover_if_needed(account, today)
        return self.summarize(account)

    def summarize(self, account: Account) -> UsageSummary:
        return UsageSummary(
            account_id=account.id,
            tier=account.tier,
            today_count=account.today_count,
            lifetime_count=account.lifetime_count,
            limit=self.policy.limit_for(account.tier),
            remaining=self.policy.remaining(
                account.tier, account.today_count, account.lifetime_count
            ),
            last_reset_date=account.last_reset_date,
        )
