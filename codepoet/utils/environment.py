"""Environment detection utilities."""

import os

LOCAL = "local"
TEST = "test"
STAGING = "staging"
PRODUCTION = "production"


def get_environment() -> str:
    """Get the current environment name.

    Returns:
        Environment name: 'local', 'test', 'staging', or 'production'
    """
    return os.getenv("ENV", LOCAL)


def is_production() -> bool:
    return get_environment() == PRODUCTION


def is_staging() -> bool:
    return get_environment() == STAGING


def is_test() -> bool:
    return get_environment() == TEST


def is_debug() -> bool:
    """Check if running in debug mode (local development or tests)."""
    return get_environment() in (LOCAL, TEST)


def is_deployed() -> bool:
    """Check if running in a deployed environment (staging or production)."""
    return is_production() or is_staging()
