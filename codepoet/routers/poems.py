"""Poem gallery router"""

from fastapi import APIRouter, Depends, Query

from codepoet.dependencies import get_current_account, get_poem_store, get_sync_coordinator
from codepoet.exceptions import StorageUnavailableError
from codepoet.models.account import Account
from codepoet.schemas.common import MessageResponse
from codepoet.schemas.poem import (
    PoemExportResponse,
    PoemImportRequest,
    PoemImportResponse,
    PoemListResponse,
    PoemResponse,
    PoemStatsResponse,
)
from codepoet.services.storage import PoemStore
from codepoet.services.sync import SyncCoordinator
from codepoet.utils.constants import MAX_PAGE_SIZE
from codepoet.utils.logger import logger

router = APIRouter(prefix="/poems", tags=["Poems"])


@router.get("", response_model=PoemListResponse)
async def list_poems(
    style: str | None = Query(None, description="Only poems in this style"),
    favorites_only: bool = Query(False),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE, description="Most recent N"),
    account: Account = Depends(get_current_account),
    poems: PoemStore = Depends(get_poem_store),
):
    """List the account's poems, newest first."""
    records = await poems.list_poems(
        account.id, style=style, favorites_only=favorites_only, limit=limit
    )
    return PoemListResponse(
        items=[PoemResponse.model_validate(r) for r in records],
        total=len(records),
    )


@router.get("/stats", response_model=PoemStatsResponse)
async def get_poem_stats(
    account: Account = Depends(get_current_account),
    poems: PoemStore = Depends(get_poem_store),
):
    return PoemStatsResponse.model_validate(await poems.statistics(account.id))


@router.get("/export", response_model=PoemExportResponse)
async def export_poems(
    account: Account = Depends(get_current_account),
    poems: PoemStore = Depends(get_poem_store),
):
    data = await poems.export_json(account.id)
    return PoemExportResponse(data=data, count=len(await poems.list_poems(account.id)))


@router.post("/import", response_model=PoemImportResponse)
async def import_poems(
    body: PoemImportRequest,
    account: Account = Depends(get_current_account),
    poems: PoemStore = Depends(get_poem_store),
):
    """Import a previous export. Poems with the same id are overwritten."""
    return PoemImportResponse(imported=await poems.import_json(account.id, body.data))


@router.get("/{poem_id}", response_model=PoemResponse)
async def get_poem(
    poem_id: str,
    account: Account = Depends(get_current_account),
    poems: PoemStore = Depends(get_poem_store),
):
    return PoemResponse.model_validate(await poems.require(account.id, poem_id))


@router.post("/{poem_id}/favorite", response_model=PoemResponse)
async def toggle_favorite(
    poem_id: str,
    account: Account = Depends(get_current_account),
    poems: PoemStore = Depends(get_poem_store),
    sync: SyncCoordinator = Depends(get_sync_coordinator),
):
    """Flip the favorite flag and mirror it to the cloud when possible."""
    record = await poems.toggle_favorite(account.id, poem_id)
    try:
        await sync.push_record(account, record)
    except StorageUnavailableError as e:
        # The newer local timestamp wins at the next reconcile
        logger.warning(f"Favorite for poem {poem_id} not mirrored: {e.message}")
    return PoemResponse.model_validate(record)


@router.delete("/{poem_id}", response_model=MessageResponse)
async def delete_poem(
    poem_id: str,
    account: Account = Depends(get_current_account),
    poems: PoemStore = Depends(get_poem_store),
    sync: SyncCoordinator = Depends(get_sync_coordinator),
):
    tombstone = await poems.delete(account.id, poem_id)
    try:
        await sync.push_deletion(account, tombstone)
    except StorageUnavailableError as e:
        # The local tombstone is pushed at the next reconcile
        logger.warning(f"Deletion of poem {poem_id} not mirrored: {e.message}")
    return MessageResponse(message="Poem deleted")
