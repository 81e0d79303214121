"""Usage router"""

from fastapi import APIRouter, Depends

from codepoet.dependencies import get_account_service, get_current_account
from codepoet.models.account import Account
from codepoet.schemas.usage import UsageResponse
from codepoet.services.account import AccountService

router = APIRouter(prefix="/usage", tags=["Usage"])


@router.get("", response_model=UsageResponse)
async def get_usage(
    account: Account = Depends(get_current_account),
    accounts: AccountService = Depends(get_account_service),
):
    """Current tier, counters and remaining poems (after daily rollover)."""
    summary = await accounts.usage_summary(account.id)
    return UsageResponse.model_validate(summary)
