"""GitHub import router"""

from fastapi import APIRouter, Depends, Query

from codepoet.dependencies import get_current_account, get_github_service, get_github_token
from codepoet.models.account import Account
from codepoet.schemas.github import (
    GitHubBranchResponse,
    GitHubCommitResponse,
    GitHubContentResponse,
    GitHubFileResponse,
    GitHubRepositoryResponse,
    GitHubUserResponse,
)
from codepoet.services.github import GitHubContent, GitHubService
from codepoet.utils.constants import GITHUB_DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

router = APIRouter(prefix="/github", tags=["GitHub"])


@router.get("/user", response_model=GitHubUserResponse)
async def get_github_user(
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    return GitHubUserResponse.model_validate(await github.get_current_user(token))


@router.get("/repos", response_model=list[GitHubRepositoryResponse])
async def list_repositories(
    page: int = Query(1, ge=1),
    per_page: int = Query(GITHUB_DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    repos = await github.list_repositories(token, page=page, per_page=per_page)
    return [GitHubRepositoryResponse.model_validate(r) for r in repos]


@router.get("/repos/search", response_model=list[GitHubRepositoryResponse])
async def search_repositories(
    q: str = Query(..., min_length=1),
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    repos = await github.search_repositories(token, q)
    return [GitHubRepositoryResponse.model_validate(r) for r in repos]


def _contents(items: list[GitHubContent]) -> list[GitHubContentResponse]:
    return [GitHubContentResponse.model_validate(c) for c in items]


@router.get("/repos/{owner}/{repo}/contents", response_model=list[GitHubContentResponse])
async def get_contents(
    owner: str,
    repo: str,
    path: str = "",
    code_only: bool = Query(False, description="Only files with a code extension"),
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    if code_only:
        return _contents(await github.get_code_files(token, owner, repo, path))
    return _contents(await github.get_contents(token, owner, repo, path))


@router.get("/repos/{owner}/{repo}/files", response_model=list[GitHubContentResponse])
async def list_files_recursively(
    owner: str,
    repo: str,
    path: str = "",
    max_depth: int | None = Query(None, ge=1),
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    """Every file under ``path``, walking at most ``max_depth`` directory levels."""
    return _contents(
        await github.get_files_recursively(token, owner, repo, path, max_depth=max_depth)
    )


@router.get("/repos/{owner}/{repo}/file", response_model=GitHubFileResponse)
async def get_file(
    owner: str,
    repo: str,
    path: str = Query(..., min_length=1),
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    content = await github.get_file_content(token, owner, repo, path)
    name = path.rsplit("/", 1)[-1]
    entry = GitHubContent(name=name, path=path, type="file")
    return GitHubFileResponse(path=path, content=content, language=entry.language)


@router.get("/repos/{owner}/{repo}/branches", response_model=list[GitHubBranchResponse])
async def get_branches(
    owner: str,
    repo: str,
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    branches = await github.get_branches(token, owner, repo)
    return [GitHubBranchResponse.model_validate(b) for b in branches]


@router.get("/repos/{owner}/{repo}/commits", response_model=list[GitHubCommitResponse])
async def get_commits(
    owner: str,
    repo: str,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    account: Account = Depends(get_current_account),
    token: str = Depends(get_github_token),
    github: GitHubService = Depends(get_github_service),
):
    commits = await github.get_commits(token, owner, repo, page=page, per_page=per_page)
    return [GitHubCommitResponse.model_validate(c) for c in commits]
