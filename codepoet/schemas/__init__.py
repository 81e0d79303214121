"""Pydantic schemas for request/response validation"""

from codepoet.schemas.common import ErrorResponse, MessageResponse
from codepoet.schemas.usage import AccountResponse, UsageResponse
from codepoet.schemas.poem import (
    GeneratePoemRequest,
    GeneratePoemResponse,
    PersistWarningResponse,
    PoemExportResponse,
    PoemImportRequest,
    PoemImportResponse,
    PoemListResponse,
    PoemResponse,
    PoemStatsResponse,
    RegeneratePoemRequest,
    StyleResponse,
)
from codepoet.schemas.sync import SyncResponse
from codepoet.schemas.github import (
    GitHubBranchResponse,
    GitHubCommitResponse,
    GitHubContentResponse,
    GitHubFileResponse,
    GitHubRepositoryResponse,
    GitHubUserResponse,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "AccountResponse",
    "UsageResponse",
    "GeneratePoemRequest",
    "GeneratePoemResponse",
    "PersistWarningResponse",
    "PoemExportResponse",
    "PoemImportRequest",
    "PoemImportResponse",
    "PoemListResponse",
    "PoemResponse",
    "PoemStatsResponse",
    "RegeneratePoemRequest",
    "StyleResponse",
    "SyncResponse",
    "GitHubBranchResponse",
    "GitHubCommitResponse",
    "GitHubContentResponse",
    "GitHubFileResponse",
    "GitHubRepositoryResponse",
    "GitHubUserResponse",
]
