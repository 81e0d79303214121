"""Error taxonomy for poem generation, usage accounting and sync.

Every failure that reaches a caller is one of these types. ``retryable``
separates transient failures (provider, storage) from terminal ones
(quota, validation) so clients can decide whether to offer a retry.
"""

from enum import Enum

from fastapi import status


class DenyReason(str, Enum):
    DAILY_LIMIT_REACHED = "daily_limit_reached"
    LIFETIME_LIMIT_REACHED = "lifetime_limit_reached"


class CodePoetError(Exception):
    """Base exception for the CodePoet backend."""

    code = "CODEPOET_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST
    retryable = False

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class QuotaExceededError(CodePoetError):
    """Raised when the account's tier does not allow another generation."""

    code = "QUOTA_EXCEEDED"
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, reason: DenyReason, limit: int | None = None):
        self.reason = reason
        if reason == DenyReason.DAILY_LIMIT_REACHED:
            message = "Daily poem limit reached. Try again tomorrow or upgrade to Pro."
        else:
            message = "Guest poem limit reached. Create an account to keep writing."
        super().__init__(message, {"reason": reason.value, "limit": limit})


class InputValidationError(CodePoetError):
    """Base class for local payload validation failures."""

    code = "INVALID_INPUT"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InputEmptyError(InputValidationError):
    code = "INPUT_EMPTY"

    def __init__(self, message: str = "Code cannot be empty"):
        super().__init__(message)


class InputTooLargeError(InputValidationError):
    code = "INPUT_TOO_LARGE"
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Code is too long (max {limit:,} characters)",
            {"length": length, "limit": limit},
        )


class InvalidInputError(InputValidationError):
    pass


class GenerationFailedError(CodePoetError):
    """The AI provider call failed, timed out or returned an unusable response."""

    code = "GENERATION_FAILED"
    status_code = status.HTTP_502_BAD_GATEWAY
    retryable = True

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Failed to generate poem: {cause}", {"cause": cause})


class StorageUnavailableError(CodePoetError):
    code = "STORAGE_UNAVAILABLE"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True


class AccountNotFoundError(CodePoetError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class RecordNotFoundError(CodePoetError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__("Poem not found")


class GitHubError(CodePoetError):
    """Raised when a GitHub API call fails."""

    code = "GITHUB_ERROR"
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, upstream_status: int | None = None):
        self.upstream_status = upstream_status
        if upstream_status in (401, 403, 404):
            self.status_code = upstream_status
        self.retryable = upstream_status is None or upstream_status >= 500
        super().__init__(message, {"upstream_status": upstream_status})
