"""AccountService identity mapping and tier transitions."""

from datetime import date

import pytest

from codepoet.exceptions import AccountNotFoundError
from codepoet.models.account import Tier
from codepoet.services.account import AccountService
from codepoet.services.firebase.firebase_auth import TokenData, token_data_from_claims

from conftest import seed_account

TODAY = date(2026, 6, 15)


@pytest.fixture
def accounts(ledger, policy) -> AccountService:
    return AccountService(ledger, policy)


async def test_anonymous_identity_starts_as_guest(accounts) -> None:
    account = await accounts.ensure_account(TokenData(uid="anon-1", is_anonymous=True), TODAY)
    assert account.tier == Tier.GUEST


async def test_permanent_identity_starts_as_free(accounts) -> None:
    account = await accounts.ensure_account(TokenData(uid="uid-1", email="a@b.c"), TODAY)
    assert account.tier == Tier.FREE


async def test_linking_guest_upgrades_and_keeps_counters(accounts, ledger) -> None:
    await seed_account(ledger, "uid-1", Tier.GUEST, lifetime_count=3, today_count=2, last_reset_date=TODAY)

    account = await accounts.ensure_account(TokenData(uid="uid-1", email="a@b.c"), TODAY)

    assert account.tier == Tier.FREE
    assert (account.lifetime_count, account.today_count) == (3, 2)


async def test_pro_is_never_downgraded(accounts, ledger) -> None:
    await seed_account(ledger, "uid-1", Tier.PRO, last_reset_date=TODAY)

    account = await accounts.ensure_account(TokenData(uid="uid-1", is_anonymous=True), TODAY)

    assert account.tier == Tier.PRO


async def test_upgrade_to_pro(accounts, ledger) -> None:
    await seed_account(ledger, "uid-1", Tier.FREE, lifetime_count=5, today_count=5, last_reset_date=TODAY)

    account = await accounts.upgrade_to_pro("uid-1")

    assert account.tier == Tier.PRO
    assert accounts.summarize(account).remaining is None


async def test_upgrade_unknown_account(accounts) -> None:
    with pytest.raises(AccountNotFoundError):
        await accounts.upgrade_to_pro("nobody")


async def test_usage_summary_applies_rollover(accounts, ledger) -> None:
    await seed_account(
        ledger, "uid-1", Tier.FREE,
        lifetime_count=9, today_count=5, last_reset_date=date(2026, 6, 14),
    )

    summary = await accounts.usage_summary("uid-1", TODAY)

    assert summary.today_count == 0
    assert summary.remaining == 5
    assert summary.can_generate is True


async def test_usage_summary_guest_exhausted(accounts, ledger) -> None:
    await seed_account(ledger, "uid-1", Tier.GUEST, lifetime_count=3, today_count=0, last_reset_date=TODAY)

    summary = await accounts.usage_summary("uid-1", TODAY)

    assert (summary.limit, summary.remaining, summary.can_generate) == (3, 0, False)


def test_token_claims_detect_anonymous_provider() -> None:
    anonymous = token_data_from_claims({"uid": "u1", "firebase": {"sign_in_provider": "anonymous"}})
    google = token_data_from_claims(
        {"uid": "u2", "email": "a@b.c", "firebase": {"sign_in_provider": "google.com"}}
    )

    assert anonymous.is_anonymous is True
    assert google.is_anonymous is False
    assert google.email == "a@b.c"
