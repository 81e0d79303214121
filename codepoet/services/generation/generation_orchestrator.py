"""Generation orchestrator: one quota-checked, committed poem attempt.

An attempt runs entirely under the account's lock:

    load/rollover -> evaluate quota -> validate input -> call the AI service
    -> commit usage -> save locally -> mirror to the cloud

Only the commit step is required for success. Local and cloud persistence
after the commit report ``PersistWarning`` values instead of failing, so a
counted poem is always returned to the caller.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from codepoet.config import settings
from codepoet.exceptions import (
    CodePoetError,
    GenerationFailedError,
    InputEmptyError,
    InputTooLargeError,
    InvalidInputError,
    QuotaExceededError,
    StorageUnavailableError,
)
from codepoet.models.account import Account
from codepoet.models.poem import GenerationRecord, PoemInput
from codepoet.services.quota.quota_policy import Deny, QuotaPolicy
from codepoet.services.storage.poem_store import PoemStore
from codepoet.services.usage.usage_ledger import UsageLedger
from codepoet.utils.constants import POETRY_STYLES

logger = logging.getLogger(__name__)

LOCAL_SAVE_FAILED = "local_save_failed"
CLOUD_SYNC_FAILED = "cloud_sync_failed"
CLOUD_SYNC_SKIPPED = "cloud_sync_skipped"


class PoemGenerator(Protocol):
    async def submit(
        self, code: str, language: str, style: str, timeout: float | None = None
    ) -> str: ...


@dataclass(frozen=True)
class PersistWarning:
    kind: str
    message: str


@dataclass
class GenerationResult:
    record: GenerationRecord
    account: Account
    warnings: list[PersistWarning] = field(default_factory=list)


class GenerationOrchestrator:
    def __init__(
        self,
        ledger: UsageLedger,
        policy: QuotaPolicy,
        generator: PoemGenerator,
        poem_store: PoemStore,
        sync_coordinator=None,
        max_code_length: int | None = None,
        default_timeout: float | None = None,
    ):
        self.ledger = ledger
        self.policy = policy
        self.generator = generator
        self.poem_store = poem_store
        self.sync_coordinator = sync_coordinator
        self.max_code_length = max_code_length or settings.max_code_length
        self.default_timeout = default_timeout or settings.generation_timeout_seconds

    def validate(self, payload: PoemInput) -> PoemInput:
        """Check the payload and normalize its style tag."""
        if not payload.code or not payload.code.strip():
            raise InputEmptyError()
        if len(payload.code) > self.max_code_length:
            raise InputTooLargeError(len(payload.code), self.max_code_length)
        if not payload.language or not payload.language.strip():
            raise InvalidInputError("Language cannot be empty")

        style = (payload.style or "").strip().lower()
        if style not in POETRY_STYLES:
            raise InvalidInputError(
                f"Unknown poetry style: {payload.style!r}",
                {"supported_styles": list(POETRY_STYLES)},
            )
        return PoemInput(code=payload.code, language=payload.language.strip(), style=style)

    async def generate(
        self,
        account_id: str,
        payload: PoemInput,
        today: date | None = None,
        timeout: float | None = None,
    ) -> GenerationResult:
        """Run one generation attempt for the account.

        Raises:
            QuotaExceededError: the tier's limit is reached
            InputValidationError: the payload is rejected locally
            GenerationFailedError: the AI call failed or timed out
            StorageUnavailableError: the usage commit could not be written
        """
        today = today or date.today()
        timeout = timeout or self.default_timeout

        async with self.ledger.locks.hold(account_id):
            account = await self.ledger.load_or_create(account_id, today)
            account = await self.ledger.record_daily_rollover_if_needed(account, today)

            decision = self.policy.evaluate(
                account.tier, account.today_count, account.lifetime_count, today
            )
            if isinstance(decision, Deny):
                logger.info(
                    f"Quota denied for account {account_id}: {decision.reason.value}"
                )
                raise QuotaExceededError(decision.reason, decision.limit)

            payload = self.validate(payload)
            output = await self._call_generator(payload, timeout)

            record = GenerationRecord.complete(payload, output)
            try:
                account = await self.ledger.commit_generation(account)
            except CodePoetError:
                raise
            except Exception as e:
                logger.error(f"Failed to commit usage for account {account_id}: {e}")
                raise StorageUnavailableError("Failed to record usage") from e

            warnings = []
            warning = await self._save_locally(account_id, record)
            if warning:
                warnings.append(warning)
            warning = await self._mirror_to_cloud(account, record)
            if warning:
                warnings.append(warning)

        return GenerationResult(record=record, account=account, warnings=warnings)

    async def regenerate(
        self,
        account_id: str,
        record_id: str,
        new_style: str,
        today: date | None = None,
        timeout: float | None = None,
    ) -> GenerationResult:
        """Generate a new poem from a stored poem's code in another style."""
        source = await self.poem_store.require(account_id, record_id)
        payload = PoemInput(code=source.code, language=source.language, style=new_style)
        return await self.generate(account_id, payload, today=today, timeout=timeout)

    async def _call_generator(self, payload: PoemInput, timeout: float) -> str:
        try:
            output = await asyncio.wait_for(
                self.generator.submit(payload.code, payload.language, payload.style, timeout),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Poem generation timed out after {timeout}s")
            raise GenerationFailedError("timeout") from e
        except Exception as e:
            if getattr(e, "timed_out", False):
                raise GenerationFailedError("timeout") from e
            logger.error(f"Poem generation failed: {e}")
            raise GenerationFailedError(str(e) or e.__class__.__name__) from e

        if not output or not output.strip():
            raise GenerationFailedError("empty response")
        return output

    async def _save_locally(self, account_id: str, record: GenerationRecord) -> PersistWarning | None:
        try:
            await self.poem_store.save(account_id, record)
        except Exception as e:
            logger.error(f"Failed to save poem {record.id} locally: {e}")
            return PersistWarning(LOCAL_SAVE_FAILED, str(e))
        return None

    async def _mirror_to_cloud(self, account: Account, record: GenerationRecord) -> PersistWarning | None:
        if account.is_guest or self.sync_coordinator is None:
            return None

        try:
            pushed = await self.sync_coordinator.push_record(account, record)
        except Exception as e:
            logger.error(f"Failed to mirror poem {record.id} to the cloud: {e}")
            return PersistWarning(CLOUD_SYNC_FAILED, str(e))

        if not pushed:
            return PersistWarning(CLOUD_SYNC_SKIPPED, "No connectivity; poem will sync later")
        return None
