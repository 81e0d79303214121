"""QuotaPolicy decisions per tier."""

from datetime import date

import pytest

from codepoet.exceptions import DenyReason
from codepoet.models.account import Tier
from codepoet.services.quota import Allow, Deny, QuotaPolicy


@pytest.fixture
def policy() -> QuotaPolicy:
    return QuotaPolicy(free_daily_limit=5, guest_lifetime_limit=3)


def test_guest_allowed_below_lifetime_limit(policy) -> None:
    assert isinstance(policy.evaluate(Tier.GUEST, today_count=2, lifetime_count=2), Allow)


def test_guest_denied_at_lifetime_limit(policy) -> None:
    decision = policy.evaluate(Tier.GUEST, today_count=0, lifetime_count=3)
    assert decision == Deny(DenyReason.LIFETIME_LIMIT_REACHED, 3)
    assert decision.allowed is False


def test_guest_ignores_today_count(policy) -> None:
    assert policy.evaluate(Tier.GUEST, today_count=0, lifetime_count=3).allowed is False
    assert policy.evaluate(Tier.GUEST, today_count=2, lifetime_count=2).allowed is True


def test_free_denied_at_daily_limit(policy) -> None:
    decision = policy.evaluate(Tier.FREE, today_count=5, lifetime_count=40)
    assert decision == Deny(DenyReason.DAILY_LIMIT_REACHED, 5)


def test_free_allowed_after_rollover(policy) -> None:
    # Rollover zeroes today's counter; lifetime does not matter for free
    assert policy.evaluate(Tier.FREE, today_count=0, lifetime_count=40).allowed is True


@pytest.mark.parametrize("today_count,lifetime_count", [(0, 0), (5, 5), (10_000, 10_000)])
def test_pro_always_allowed(policy, today_count, lifetime_count) -> None:
    assert isinstance(policy.evaluate(Tier.PRO, today_count, lifetime_count), Allow)


def test_evaluate_is_deterministic(policy) -> None:
    today = date(2026, 3, 1)
    first = policy.evaluate(Tier.FREE, 4, 9, today)
    second = policy.evaluate(Tier.FREE, 4, 9, today)
    assert first == second


def test_limit_for_each_tier(policy) -> None:
    assert policy.limit_for(Tier.GUEST) == 3
    assert policy.limit_for(Tier.FREE) == 5
    assert policy.limit_for(Tier.PRO) is None


def test_remaining_never_negative(policy) -> None:
    assert policy.remaining(Tier.FREE, today_count=2, lifetime_count=2) == 3
    assert policy.remaining(Tier.GUEST, today_count=0, lifetime_count=7) == 0
    assert policy.remaining(Tier.PRO, today_count=99, lifetime_count=99) is None


def test_custom_limits() -> None:
    policy = QuotaPolicy(free_daily_limit=1, guest_lifetime_limit=1)
    assert policy.evaluate(Tier.FREE, 1, 1).allowed is False
    assert policy.evaluate(Tier.GUEST, 0, 0).allowed is True
