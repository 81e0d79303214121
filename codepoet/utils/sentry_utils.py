"""Sentry error tracking utilities."""

import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from codepoet.utils.environment import is_debug, get_environment

_sentry_initialized = False


def configure_sentry(dsn_env_var: str = "SENTRY_DSN") -> bool:
    """Initialize Sentry for error tracking.

    Only initializes outside local/test environments and when the DSN
    environment variable is set.

    Returns:
        True if Sentry was initialized, False otherwise
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    if is_debug():
        return False

    dsn = os.getenv(dsn_env_var)
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=get_environment(),
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.2")),
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        # Submitted source code is user content; keep it out of events
        send_default_pii=False,
        max_request_body_size="never",
    )

    _sentry_initialized = True
    return True


def capture_exception(exception: BaseException) -> None:
    """Send an exception to Sentry if it is configured."""
    if not _sentry_initialized:
        return
    sentry_sdk.capture_exception(exception)


def set_user_context(account_id: str) -> None:
    """Attach the current account id (no email) to Sentry events."""
    if not _sentry_initialized:
        return
    sentry_sdk.set_user({"id": account_id})
