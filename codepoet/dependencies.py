"""Service wiring and FastAPI dependencies.

The services are module-level singletons built over the shared key-value
store. Routes reach them through the ``get_*`` functions so tests can swap
them with ``app.dependency_overrides``.
"""

from fastapi import Depends, Header

from codepoet.db import AsyncSessionLocal
from codepoet.models.account import Account
from codepoet.services.account import AccountService
from codepoet.services.firebase import FirestoreRecordStore, TokenData, get_current_identity
from codepoet.services.gemini import gemini_service
from codepoet.services.generation import GenerationOrchestrator
from codepoet.services.github import GitHubService, github_service
from codepoet.services.quota import QuotaPolicy
from codepoet.services.storage import PoemStore, SqlKeyValueStore
from codepoet.services.sync import SyncCoordinator, connectivity_service
from codepoet.services.usage import UsageLedger
from codepoet.utils.sentry_utils import set_user_context

kv_store = SqlKeyValueStore(AsyncSessionLocal)
quota_policy = QuotaPolicy.from_settings()
usage_ledger = UsageLedger(kv_store)
poem_store = PoemStore(kv_store, locks=usage_ledger.locks)
sync_coordinator = SyncCoordinator(
    poem_store=poem_store,
    remote=FirestoreRecordStore(),
    connectivity=connectivity_service,
    kv=kv_store,
)
generation_orchestrator = GenerationOrchestrator(
    ledger=usage_ledger,
    policy=quota_policy,
    generator=gemini_service,
    poem_store=poem_store,
    sync_coordinator=sync_coordinator,
)
account_service = AccountService(usage_ledger, quota_policy)


def get_account_service() -> AccountService:
    return account_service


def get_generation_orchestrator() -> GenerationOrchestrator:
    return generation_orchestrator


def get_poem_store() -> PoemStore:
    return poem_store


def get_sync_coordinator() -> SyncCoordinator:
    return sync_coordinator


def get_github_service() -> GitHubService:
    return github_service


async def get_current_account(
    identity: TokenData = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
) -> Account:
    """The caller's usage account, created on first sight."""
    set_user_context(identity.uid)
    return await accounts.ensure_account(identity)


def get_github_token(x_github_token: str = Header(default="")) -> str:
    """Personal access token forwarded by the client in ``X-GitHub-Token``."""
    return x_github_token
