"""Cloud sync schemas"""

from datetime import datetime
from pydantic import BaseModel

from codepoet.services.sync import SkipReason, SyncStatus


class SyncResponse(BaseModel):
    """Outcome of a reconciliation run"""
    status: SyncStatus
    reason: SkipReason | None = None
    pulled: int = 0
    pushed: int = 0
    favorites_updated: int = 0
    deleted: int = 0
    synced_at: datetime | None = None

    class Config:
        from_attributes = True
