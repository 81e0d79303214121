"""GitHubService against a mocked GitHub API."""

import base64

import httpx
import pytest

from codepoet.exceptions import GitHubError
from codepoet.services.github import GitHubService
from codepoet.services.github.github_config import GitHubSettings

TOKEN = "ghp_test"


def make_service(routes: dict) -> GitHubService:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"
        response = routes.get(request.url.path)
        if response is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return response

    settings = GitHubSettings(GITHUB_API_BASE_URL="https://github.test")
    return GitHubService(settings=settings, transport=httpx.MockTransport(handler))


def entry(name: str, path: str, type_: str = "file") -> dict:
    return {"name": name, "path": path, "type": type_, "size": 10, "download_url": None}


async def test_current_user() -> None:
    service = make_service({
        "/user": httpx.Response(200, json={"login": "octo", "name": "Octo", "public_repos": 2}),
    })

    user = await service.get_current_user(TOKEN)

    assert (user.login, user.public_repos) == ("octo", 2)


async def test_repositories_parse_owner_and_default_language() -> None:
    service = make_service({
        "/user/repos": httpx.Response(200, json=[{
            "name": "poems",
            "full_name": "octo/poems",
            "description": None,
            "language": None,
            "private": True,
            "html_url": "https://github.com/octo/poems",
            "updated_at": "2026-01-01T00:00:00Z",
        }]),
    })

    [repo] = await service.list_repositories(TOKEN)

    assert repo.owner == "octo"
    assert repo.language == "Unknown"
    assert repo.updated_at.tzinfo is not None


async def test_file_content_is_decoded() -> None:
    encoded = base64.b64encode(b"print('hi')\n").decode()
    service = make_service({
        "/repos/octo/poems/contents/src/app.py": httpx.Response(
            200, json={"content": encoded[:8] + "\n" + encoded[8:]}
        ),
    })

    assert await service.get_file_content(TOKEN, "octo", "poems", "src/app.py") == "print('hi')\n"


async def test_code_files_filter_by_extension() -> None:
    service = make_service({
        "/repos/octo/poems/contents": httpx.Response(200, json=[
            entry("main.py", "main.py"),
            entry("README.md", "README.md"),
            entry("lib", "lib", "dir"),
        ]),
    })

    files = await service.get_code_files(TOKEN, "octo", "poems")

    assert [f.name for f in files] == ["main.py"]
    assert files[0].language == "Python"


async def test_recursive_walk_respects_max_depth() -> None:
    service = make_service({
        "/repos/octo/poems/contents": httpx.Response(200, json=[
            entry("a.py", "a.py"), entry("lib", "lib", "dir"),
        ]),
        "/repos/octo/poems/contents/lib": httpx.Response(200, json=[
            entry("b.dart", "lib/b.dart"), entry("deep", "lib/deep", "dir"),
        ]),
        "/repos/octo/poems/contents/lib/deep": httpx.Response(200, json=[
            entry("c.go", "lib/deep/c.go"),
        ]),
    })

    shallow = await service.get_files_recursively(TOKEN, "octo", "poems", max_depth=2)
    full = await service.get_files_recursively(TOKEN, "octo", "poems")

    assert [f.path for f in shallow] == ["a.py", "lib/b.dart"]
    assert [f.path for f in full] == ["a.py", "lib/b.dart", "lib/deep/c.go"]


@pytest.mark.parametrize(
    "status_code,retryable",
    [(401, False), (403, False), (404, False), (500, True)],
)
async def test_error_statuses(status_code, retryable) -> None:
    service = make_service({
        "/user": httpx.Response(status_code, json={"message": "API rate limit exceeded"}),
    })

    with pytest.raises(GitHubError) as exc_info:
        await service.get_current_user(TOKEN)

    assert exc_info.value.upstream_status == status_code
    assert exc_info.value.retryable is retryable


async def test_missing_token() -> None:
    with pytest.raises(GitHubError, match="Personal Access Token"):
        await make_service({}).get_current_user("")
