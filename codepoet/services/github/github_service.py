"""GitHub service for importing code from a user's repositories.

Every call is made with the caller's personal access token; nothing is
stored server side.
"""

import base64
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

import httpx

from codepoet.exceptions import GitHubError
from codepoet.services.github.github_config import GitHubSettings
from codepoet.utils.constants import (
    CODE_EXTENSIONS,
    GITHUB_DEFAULT_PAGE_SIZE,
    LANGUAGE_BY_EXTENSION,
)

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class GitHubUser:
    login: str
    name: Optional[str]
    avatar_url: Optional[str]
    public_repos: int

    @classmethod
    def from_json(cls, data: dict) -> "GitHubUser":
        return cls(
            login=data["login"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            public_repos=data.get("public_repos", 0),
        )


@dataclass
class GitHubRepository:
    name: str
    full_name: str
    description: Optional[str]
    language: str
    is_private: bool
    html_url: str
    updated_at: datetime

    @classmethod
    def from_json(cls, data: dict) -> "GitHubRepository":
        return cls(
            name=data["name"],
            full_name=data["full_name"],
            description=data.get("description"),
            language=data.get("language") or "Unknown",
            is_private=data.get("private", False),
            html_url=data["html_url"],
            updated_at=_parse_timestamp(data["updated_at"]),
        )

    @property
    def owner(self) -> str:
        return self.full_name.split("/")[0]


@dataclass
class GitHubContent:
    name: str
    path: str
    type: str  # 'file' or 'dir'
    size: Optional[int] = None
    download_url: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> "GitHubContent":
        return cls(
            name=data["name"],
            path=data["path"],
            type=data["type"],
            size=data.get("size"),
            download_url=data.get("download_url"),
        )

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_directory(self) -> bool:
        return self.type == "dir"

    @property
    def extension(self) -> str:
        if not self.is_file or "." not in self.name:
            return ""
        return "." + self.name.rsplit(".", 1)[1]

    @property
    def language(self) -> Optional[str]:
        return LANGUAGE_BY_EXTENSION.get(self.extension.lower())


@dataclass
class GitHubBranch:
    name: str
    is_protected: bool

    @classmethod
    def from_json(cls, data: dict) -> "GitHubBranch":
        return cls(name=data["name"], is_protected=data.get("protected", False))


@dataclass
class GitHubCommit:
    sha: str
    message: str
    author_name: str
    date: datetime

    @classmethod
    def from_json(cls, data: dict) -> "GitHubCommit":
        commit = data["commit"]
        return cls(
            sha=data["sha"],
            message=commit["message"],
            author_name=commit["author"]["name"],
            date=_parse_timestamp(commit["author"]["date"]),
        )


class GitHubService:
    """Service for the GitHub REST API"""

    def __init__(
        self,
        settings: Optional[GitHubSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings
        self._transport = transport

    @property
    def settings(self) -> GitHubSettings:
        if self._settings is None:
            self._settings = GitHubSettings()
        return self._settings

    def _get_headers(self, token: str) -> dict:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github.v3+json",
        }

    async def _request(self, token: str, endpoint: str, params: Optional[dict] = None) -> Any:
        if not token:
            raise GitHubError(
                "Not connected to GitHub. Please add your Personal Access Token.", 401
            )

        url = f"{self.settings.GITHUB_API_BASE_URL.rstrip('/')}{endpoint}"
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.GITHUB_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.get(url, headers=self._get_headers(token), params=params)
        except httpx.HTTPError as e:
            logger.error(f"GitHub request to {endpoint} failed: {e}")
            raise GitHubError(f"GitHub API request failed: {e}") from e

        if response.status_code == 200:
            return response.json()

        logger.warning(f"GitHub API {endpoint} returned {response.status_code}")
        if response.status_code == 401:
            raise GitHubError("GitHub token is invalid or expired. Please reconnect.", 401)
        if response.status_code == 404:
            raise GitHubError("Resource not found", 404)
        if response.status_code == 403:
            try:
                message = response.json().get("message") or "API rate limit exceeded"
            except ValueError:
                message = "API rate limit exceeded"
            raise GitHubError(message, 403)
        raise GitHubError(
            f"GitHub API request failed: {response.status_code}", response.status_code
        )

    async def get_current_user(self, token: str) -> GitHubUser:
        return GitHubUser.from_json(await self._request(token, "/user"))

    async def list_repositories(
        self, token: str, page: int = 1, per_page: int = GITHUB_DEFAULT_PAGE_SIZE
    ) -> list[GitHubRepository]:
        """List the user's repositories, most recently updated first."""
        data = await self._request(
            token, "/user/repos", {"page": page, "per_page": per_page, "sort": "updated"}
        )
        return [GitHubRepository.from_json(item) for item in data]

    async def search_repositories(self, token: str, query: str) -> list[GitHubRepository]:
        data = await self._request(token, "/search/repositories", {"q": f"{query} user:@me"})
        return [GitHubRepository.from_json(item) for item in data.get("items", [])]

    async def get_contents(
        self, token: str, owner: str, repo: str, path: str = ""
    ) -> list[GitHubContent]:
        endpoint = f"/repos/{owner}/{repo}/contents"
        if path:
            endpoint = f"{endpoint}/{path.strip('/')}"
        data = await self._request(token, endpoint)
        if isinstance(data, dict):
            # A file path returns a single object
            return [GitHubContent.from_json(data)]
        return [GitHubContent.from_json(item) for item in data]

    async def get_file_content(self, token: str, owner: str, repo: str, path: str) -> str:
        """Fetch a file and decode its base64 body as UTF-8."""
        data = await self._request(token, f"/repos/{owner}/{repo}/contents/{path.strip('/')}")
        if not isinstance(data, dict) or "content" not in data:
            raise GitHubError(f"Not a file: {path}")
        raw = base64.b64decode(data["content"].replace("\n", ""))
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise GitHubError(f"File is not UTF-8 text: {path}") from e

    async def get_branches(self, token: str, owner: str, repo: str) -> list[GitHubBranch]:
        data = await self._request(token, f"/repos/{owner}/{repo}/branches")
        return [GitHubBranch.from_json(item) for item in data]

    async def get_commits(
        self, token: str, owner: str, repo: str, page: int = 1, per_page: int = 10
    ) -> list[GitHubCommit]:
        data = await self._request(
            token, f"/repos/{owner}/{repo}/commits", {"page": page, "per_page": per_page}
        )
        return [GitHubCommit.from_json(item) for item in data]

    async def get_code_files(
        self, token: str, owner: str, repo: str, path: str = ""
    ) -> list[GitHubContent]:
        contents = await self.get_contents(token, owner, repo, path)
        return [
            c for c in contents
            if c.is_file and any(c.name.endswith(ext) for ext in CODE_EXTENSIONS)
        ]

    async def get_files_recursively(
        self,
        token: str,
        owner: str,
        repo: str,
        path: str = "",
        max_depth: Optional[int] = None,
        _depth: int = 0,
    ) -> list[GitHubContent]:
        """
        Walk a directory tree and return every file.

        Each directory level costs one API call, so the walk stops at
        ``max_depth`` levels (default GITHUB_MAX_RECURSION_DEPTH).
        """
        if max_depth is None:
            max_depth = self.settings.GITHUB_MAX_RECURSION_DEPTH
        if _depth >= max_depth:
            return []

        files = []
        for content in await self.get_contents(token, owner, repo, path):
            if content.is_file:
                files.append(content)
            elif content.is_directory:
                files.extend(
                    await self.get_files_recursively(
                        token, owner, repo, content.path, max_depth, _depth + 1
                    )
                )
        return files


# Singleton instance
github_service = GitHubService()
