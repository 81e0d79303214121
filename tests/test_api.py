"""HTTP API through the ASGI app with in-memory services."""

from datetime import date

import httpx
import pytest
import pytest_asyncio

from codepoet.dependencies import (
    get_account_service,
    get_current_account,
    get_generation_orchestrator,
    get_github_service,
    get_poem_store,
    get_sync_coordinator,
)
from codepoet.models.account import Tier
from codepoet.services.account import AccountService
from codepoet.services.firebase import TokenData
from codepoet.services.gemini import GeminiError
from main import app

from conftest import make_record

API = "/api/v1"


@pytest.fixture
def identity() -> TokenData:
    return TokenData(uid="uid-1", email="poet@example.com")


@pytest_asyncio.fixture
async def client(identity, ledger, policy, orchestrator, poem_store, sync_coordinator):
    accounts = AccountService(ledger, policy)

    async def _current_account():
        return await accounts.ensure_account(identity)

    app.dependency_overrides[get_current_account] = _current_account
    app.dependency_overrides[get_account_service] = lambda: accounts
    app.dependency_overrides[get_generation_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_poem_store] = lambda: poem_store
    app.dependency_overrides[get_sync_coordinator] = lambda: sync_coordinator

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client

    app.dependency_overrides.clear()


async def test_generate_returns_poem_and_usage(client) -> None:
    response = await client.post(
        f"{API}/generate", json={"code": "x = 1", "language": "python", "style": "sonnet"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["poem"]["style"] == "sonnet"
    assert body["usage"]["tier"] == "free"
    assert body["usage"]["today_count"] == 1
    assert body["usage"]["remaining"] == 4
    assert body["warnings"] == []
    assert "X-Process-Time" in response.headers


async def test_quota_exceeded_envelope(client, ledger) -> None:
    from codepoet.models.account import Account

    await ledger.save(Account(
        id="uid-1", tier=Tier.FREE, lifetime_count=5, today_count=5, last_reset_date=date.today()
    ))

    response = await client.post(f"{API}/generate", json={"code": "x = 1"})

    assert response.status_code == 429
    error = response.json()["error"]
    assert error["code"] == "QUOTA_EXCEEDED"
    assert error["details"]["reason"] == "daily_limit_reached"
    assert error["details"]["retryable"] is False


async def test_input_too_large_envelope(client) -> None:
    response = await client.post(f"{API}/generate", json={"code": "x" * 10_001})

    assert response.status_code == 413
    assert response.json()["error"]["code"] == "INPUT_TOO_LARGE"


async def test_generation_failure_is_retryable(client, generator) -> None:
    generator.outputs = [GeminiError("Gemini API error: 503")]

    response = await client.post(f"{API}/generate", json={"code": "x = 1"})

    assert response.status_code == 502
    assert response.json()["error"]["details"]["retryable"] is True


async def test_storage_outage_envelope(client, ledger, kv, poem_store) -> None:
    from codepoet.models.account import Account

    await ledger.save(Account(id="uid-1", tier=Tier.FREE, last_reset_date=date.today()))
    kv.fail_writes_on = "account:"

    response = await client.post(f"{API}/generate", json={"code": "x = 1"})

    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "STORAGE_UNAVAILABLE"
    assert error["details"]["retryable"] is True
    assert await poem_store.list_poems("uid-1") == []


async def test_usage_endpoint(client) -> None:
    response = await client.get(f"{API}/usage")

    assert response.status_code == 200
    assert response.json()["limit"] == 5
    assert response.json()["can_generate"] is True


async def test_poem_gallery_flow(client) -> None:
    created = (await client.post(f"{API}/generate", json={"code": "x = 1"})).json()["poem"]

    listing = (await client.get(f"{API}/poems")).json()
    assert listing["total"] == 1

    favorite = await client.post(f"{API}/poems/{created['id']}/favorite")
    assert favorite.json()["favorite"] is True

    stats = (await client.get(f"{API}/poems/stats")).json()
    assert stats["total_poems"] == 1

    deleted = await client.delete(f"{API}/poems/{created['id']}")
    assert deleted.status_code == 200

    missing = await client.get(f"{API}/poems/{created['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


async def test_export_and_import(client, poem_store) -> None:
    await poem_store.save("uid-1", make_record())

    exported = (await client.get(f"{API}/poems/export")).json()
    assert exported["count"] == 1

    response = await client.post(f"{API}/poems/import", json={"data": exported["data"]})
    assert response.json() == {"imported": 1}

    bad = await client.post(f"{API}/poems/import", json={"data": "not json"})
    assert bad.status_code == 422
    assert bad.json()["error"]["code"] == "INVALID_INPUT"


async def test_styles_catalogue(client) -> None:
    styles = (await client.get(f"{API}/styles")).json()
    assert {s["id"] for s in styles} == {"haiku", "sonnet", "free verse", "cyberpunk"}


async def test_sync_skipped_offline(client, connectivity) -> None:
    connectivity.online = False

    response = await client.post(f"{API}/sync")

    assert response.status_code == 200
    assert response.json()["status"] == "skipped"
    assert response.json()["reason"] == "no_connectivity"


async def test_account_upgrade(client) -> None:
    assert (await client.get(f"{API}/account")).json()["tier"] == "free"

    response = await client.post(f"{API}/account/upgrade")

    assert response.json()["tier"] == "pro"
    assert (await client.get(f"{API}/usage")).json()["remaining"] is None


async def test_github_requires_token_header(client) -> None:
    response = await client.get(f"{API}/github/user")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "GITHUB_ERROR"


async def test_github_user_with_mocked_api(client) -> None:
    from codepoet.services.github import GitHubService
    from codepoet.services.github.github_config import GitHubSettings

    def handler(request):
        return httpx.Response(200, json={"login": "octo", "name": None, "public_repos": 1})

    github = GitHubService(
        settings=GitHubSettings(GITHUB_API_BASE_URL="https://github.test"),
        transport=httpx.MockTransport(handler),
    )
    app.dependency_overrides[get_github_service] = lambda: github

    response = await client.get(f"{API}/github/user", headers={"X-GitHub-Token": "ghp_x"})

    assert response.status_code == 200
    assert response.json()["login"] == "octo"


async def test_missing_bearer_token_is_rejected() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(f"{API}/usage")

    assert response.status_code == 401
