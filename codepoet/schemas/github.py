"""GitHub import schemas"""

from datetime import datetime
from pydantic import BaseModel


class GitHubUserResponse(BaseModel):
    login: str
    name: str | None
    avatar_url: str | None
    public_repos: int

    class Config:
        from_attributes = True


class GitHubRepositoryResponse(BaseModel):
    name: str
    full_name: str
    owner: str
    description: str | None
    language: str
    is_private: bool
    html_url: str
    updated_at: datetime

    class Config:
        from_attributes = True


class GitHubContentResponse(BaseModel):
    """File or directory entry"""
    name: str
    path: str
    type: str
    size: int | None = None
    download_url: str | None = None
    language: str | None = None

    class Config:
        from_attributes = True


class GitHubFileResponse(BaseModel):
    """Decoded file, ready to send to /generate"""
    path: str
    content: str
    language: str | None = None


class GitHubBranchResponse(BaseModel):
    name: str
    is_protected: bool

    class Config:
        from_attributes = True


class GitHubCommitResponse(BaseModel):
    sha: str
    message: str
    author_name: str
    date: datetime

    class Config:
        from_attributes = True
