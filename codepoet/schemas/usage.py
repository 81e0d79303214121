"""Usage and account schemas"""

from datetime import date, datetime
from pydantic import BaseModel

from codepoet.models.account import Tier


class UsageResponse(BaseModel):
    """Quota state for the current account"""
    tier: Tier
    today_count: int
    lifetime_count: int
    limit: int | None
    remaining: int | None
    can_generate: bool
    last_reset_date: date

    class Config:
        from_attributes = True


class AccountResponse(BaseModel):
    """Usage account record"""
    id: str
    tier: Tier
    lifetime_count: int
    today_count: int
    last_reset_date: date
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
