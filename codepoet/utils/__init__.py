"""Utility modules for the codepoet backend."""

from codepoet.utils.logger import logger, setup_logger, get_logger
from codepoet.utils.environment import (
    is_production,
    is_staging,
    is_debug,
    is_deployed,
    get_environment,
)
from codepoet.utils.sentry_utils import configure_sentry, capture_exception, set_user_context
from codepoet.utils.response_utils import error_response, codepoet_error_response
from codepoet.utils.constants import (
    API_VERSION,
    API_PREFIX,
    MAX_CODE_LENGTH,
    POETRY_STYLES,
)

__all__ = [
    # Logger
    "logger",
    "setup_logger",
    "get_logger",
    # Environment
    "is_production",
    "is_staging",
    "is_debug",
    "is_deployed",
    "get_environment",
    # Sentry
    "configure_sentry",
    "capture_exception",
    "set_user_context",
    # Response
    "error_response",
    "codepoet_error_response",
    # Constants
    "API_VERSION",
    "API_PREFIX",
    "MAX_CODE_LENGTH",
    "POETRY_STYLES",
]
