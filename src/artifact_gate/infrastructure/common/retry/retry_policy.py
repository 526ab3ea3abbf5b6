from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from artifact_gate.core.application.tools.common.exceptions import ProviderError

_T = TypeVar("_T")

logger = structlog.get_logger()


def _retryable(exc: BaseException) -> bool:
    return isinstance(exc, ProviderError) and exc.retryable


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        "Retrying remote call",
        processing_attempts=state.attempt_number,
        error_type=type(exc).__name__ if exc else None,
        error_details=str(exc) if exc else None,
        error_retryable=True,
    )


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 1  # Fail fast: one attempt, no retries

    async def run(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        try:
            return await self._retrying()(fn)
        except RetryError as err:
            raise err.last_attempt.result()  # type: ignore[misc]

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(_retryable),
            stop=stop_after_attempt(max(self.max_attempts, 1)),
            wait=wait_exponential_jitter(initial=0.25, max=5.0),
            before_sleep=_log_retry,
            reraise=True,
        )
