"""Poem generation and gallery schemas"""

from datetime import datetime
from pydantic import BaseModel, Field

from codepoet.schemas.usage import UsageResponse
from codepoet.utils.constants import DEFAULT_LANGUAGE, DEFAULT_STYLE


class GeneratePoemRequest(BaseModel):
    """Request to turn a code snippet into a poem"""
    code: str
    language: str = Field(default=DEFAULT_LANGUAGE)
    style: str = Field(default=DEFAULT_STYLE)


class RegeneratePoemRequest(BaseModel):
    """Request to rewrite a stored poem's code in another style"""
    style: str


class PoemResponse(BaseModel):
    """A generated poem"""
    id: str
    code: str
    language: str
    style: str
    output: str
    created_at: datetime
    favorite: bool
    favorite_updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PersistWarningResponse(BaseModel):
    """Non-fatal persistence problem after a counted generation"""
    kind: str
    message: str

    class Config:
        from_attributes = True


class GeneratePoemResponse(BaseModel):
    """Response after a successful generation"""
    poem: PoemResponse
    usage: UsageResponse
    warnings: list[PersistWarningResponse] = []


class PoemListResponse(BaseModel):
    """Poems for the gallery, newest first"""
    items: list[PoemResponse]
    total: int


class PoemStatsResponse(BaseModel):
    """Gallery statistics"""
    total_poems: int
    favorite_style: str | None
    poems_today: int

    class Config:
        from_attributes = True


class PoemExportResponse(BaseModel):
    """JSON export of all poems"""
    data: str
    count: int


class PoemImportRequest(BaseModel):
    """Previously exported poems (JSON string)"""
    data: str


class PoemImportResponse(BaseModel):
    imported: int


class StyleResponse(BaseModel):
    """A poetry style the generator supports"""
    id: str
    display_name: str
    description: str
    icon: str
