"""Account usage row: identity, tier and generation counters"""

import json
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum as PyEnum


class Tier(str, PyEnum):
    GUEST = "guest"
    FREE = "free"
    PRO = "pro"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {Tier.GUEST: 0, Tier.FREE: 1, Tier.PRO: 2}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Account:
    """Per-account usage state.

    Instances are immutable; ledger operations return updated copies.
    """

    id: str
    tier: Tier = Tier.GUEST
    lifetime_count: int = 0
    today_count: int = 0
    last_reset_date: date = field(default_factory=date.today)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if self.lifetime_count < 0 or self.today_count < 0:
            raise ValueError("Usage counters must be non-negative")
        if self.today_count > self.lifetime_count:
            raise ValueError("today_count cannot exceed lifetime_count")

    @property
    def is_guest(self) -> bool:
        return self.tier == Tier.GUEST

    def evolve(self, **changes) -> "Account":
        changes.setdefault("updated_at", utcnow())
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tier": self.tier.value,
            "lifetimeCount": self.lifetime_count,
            "todayCount": self.today_count,
            "lastResetDate": self.last_reset_date.isoformat(),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        return cls(
            id=data["id"],
            tier=Tier(data["tier"]),
            lifetime_count=int(data["lifetimeCount"]),
            today_count=int(data["todayCount"]),
            last_reset_date=date.fromisoformat(data["lastResetDate"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Account":
        return cls.from_dict(json.loads(raw))

    def __repr__(self):
        return (
            f"<Account(id='{self.id}', tier='{self.tier.value}', "
            f"today={self.today_count}, lifetime={self.lifetime_count})>"
        )
