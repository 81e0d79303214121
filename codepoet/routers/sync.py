"""Cloud sync router"""

from fastapi import APIRouter, Depends

from codepoet.dependencies import get_current_account, get_sync_coordinator
from codepoet.models.account import Account
from codepoet.schemas.sync import SyncResponse
from codepoet.services.sync import SyncCoordinator

router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post("", response_model=SyncResponse)
async def sync_poems(
    account: Account = Depends(get_current_account),
    sync: SyncCoordinator = Depends(get_sync_coordinator),
):
    """
    Reconcile local poems with the cloud copy.

    Guests and offline servers get a ``skipped`` result, not an error.
    """
    return SyncResponse.model_validate(await sync.reconcile(account))
