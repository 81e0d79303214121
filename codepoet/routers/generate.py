"""Poem generation router"""

from fastapi import APIRouter, Depends, status

from codepoet.dependencies import (
    get_account_service,
    get_current_account,
    get_generation_orchestrator,
)
from codepoet.models.account import Account
from codepoet.models.poem import PoemInput
from codepoet.schemas.poem import (
    GeneratePoemRequest,
    GeneratePoemResponse,
    PersistWarningResponse,
    PoemResponse,
    RegeneratePoemRequest,
)
from codepoet.schemas.usage import UsageResponse
from codepoet.services.account import AccountService
from codepoet.services.generation import GenerationOrchestrator, GenerationResult

router = APIRouter(prefix="/generate", tags=["Poem Generation"])


def _to_response(result: GenerationResult, accounts: AccountService) -> GeneratePoemResponse:
    return GeneratePoemResponse(
        poem=PoemResponse.model_validate(result.record),
        usage=UsageResponse.model_validate(accounts.summarize(result.account)),
        warnings=[PersistWarningResponse.model_validate(w) for w in result.warnings],
    )


@router.post("", response_model=GeneratePoemResponse, status_code=status.HTTP_201_CREATED)
async def generate_poem(
    data: GeneratePoemRequest,
    account: Account = Depends(get_current_account),
    orchestrator: GenerationOrchestrator = Depends(get_generation_orchestrator),
    accounts: AccountService = Depends(get_account_service),
):
    """
    Turn a code snippet into a poem.

    Counts against the account's quota only when a poem is produced. The
    poem is returned even if saving or cloud sync fails afterwards; those
    problems are listed in ``warnings``.
    """
    result = await orchestrator.generate(
        account.id,
        PoemInput(code=data.code, language=data.language, style=data.style),
    )
    return _to_response(result, accounts)


@router.post(
    "/{poem_id}/regenerate",
    response_model=GeneratePoemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def regenerate_poem(
    poem_id: str,
    data: RegeneratePoemRequest,
    account: Account = Depends(get_current_account),
    orchestrator: GenerationOrchestrator = Depends(get_generation_orchestrator),
    accounts: AccountService = Depends(get_account_service),
):
    """Write a new poem from a saved poem's code in a different style."""
    result = await orchestrator.regenerate(account.id, poem_id, data.style)
    return _to_response(result, accounts)
