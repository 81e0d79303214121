"""Poetry styles router"""

from fastapi import APIRouter

from codepoet.schemas.poem import StyleResponse
from codepoet.utils.constants import POETRY_STYLES

router = APIRouter(prefix="/styles", tags=["Styles"])


@router.get("", response_model=list[StyleResponse])
async def list_styles():
    return [StyleResponse(id=style_id, **info) for style_id, info in POETRY_STYLES.items()]
