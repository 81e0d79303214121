"""Tier quota rules.

Pure decision logic: given a tier and the counters *before* an attempt,
decide whether one more generation is allowed. No I/O and no state beyond
the configured limits.
"""

from dataclasses import dataclass
from datetime import date

from codepoet.config import settings
from codepoet.exceptions import DenyReason
from codepoet.models.account import Tier


@dataclass(frozen=True)
class Allow:
    allowed = True


@dataclass(frozen=True)
class Deny:
    reason: DenyReason
    limit: int

    allowed = False


QuotaDecision = Allow | Deny


@dataclass(frozen=True)
class QuotaPolicy:
    free_daily_limit: int = 5
    guest_lifetime_limit: int = 3

    @classmethod
    def from_settings(cls) -> "QuotaPolicy":
        return cls(
            free_daily_limit=settings.free_daily_limit,
            guest_lifetime_limit=settings.guest_lifetime_limit,
        )

    def evaluate(
        self,
        tier: Tier,
        today_count: int,
        lifetime_count: int,
        today: date | None = None,
    ) -> QuotaDecision:
        """Decide whether the next generation is allowed.

        ``today`` is accepted for signature stability; daily rollover is
        applied by the ledger before this is called.
        """
        match tier:
            case Tier.PRO:
                return Allow()
            case Tier.FREE:
                if today_count < self.free_daily_limit:
                    return Allow()
                return Deny(DenyReason.DAILY_LIMIT_REACHED, self.free_daily_limit)
            case Tier.GUEST:
                if lifetime_count < self.guest_lifetime_limit:
                    return Allow()
                return Deny(DenyReason.LIFETIME_LIMIT_REACHED, self.guest_lifetime_limit)
        raise ValueError(f"Unknown tier: {tier!r}")

    def limit_for(self, tier: Tier) -> int | None:
        """Return the applicable limit, or None when unlimited."""
        match tier:
            case Tier.PRO:
                return None
            case Tier.FREE:
                return self.free_daily_limit
            case Tier.GUEST:
                return self.guest_lifetime_limit
        raise ValueError(f"Unknown tier: {tier!r}")

    def remaining(self, tier: Tier, today_count: int, lifetime_count: int) -> int | None:
        limit = self.limit_for(tier)
        if limit is None:
            return None
        used = lifetime_count if tier == Tier.GUEST else today_count
        return max(0, limit - used)
