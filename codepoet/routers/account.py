"""Account router"""

from fastapi import APIRouter, Depends

from codepoet.dependencies import get_account_service, get_current_account
from codepoet.models.account import Account
from codepoet.schemas.usage import AccountResponse
from codepoet.services.account import AccountService

router = APIRouter(prefix="/account", tags=["Account"])


@router.get("", response_model=AccountResponse)
async def get_account(account: Account = Depends(get_current_account)):
    return AccountResponse.model_validate(account)


@router.post("/upgrade", response_model=AccountResponse)
async def upgrade_account(
    account: Account = Depends(get_current_account),
    accounts: AccountService = Depends(get_account_service),
):
    """Move the account to the pro tier (unlimited poems)."""
    return AccountResponse.model_validate(await accounts.upgrade_to_pro(account.id))
