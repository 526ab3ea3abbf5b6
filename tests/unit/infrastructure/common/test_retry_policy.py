from unittest.mock import AsyncMock

import pytest

from artifact_gate.core.application.tools.common.exceptions import (
    TrackerAuthenticationError,
    TrackerTransportError,
)
from artifact_gate.infrastructure.common.retry.retry_policy import RetryPolicy


async def test_single_attempt_by_default():
    fn = AsyncMock(side_effect=TrackerTransportError(provider="Rally", message="down", retryable=True))

    with pytest.raises(TrackerTransportError):
        await RetryPolicy().run(fn)

    assert fn.await_count == 1


async def test_retryable_errors_are_retried():
    fn = AsyncMock(
        side_effect=[TrackerTransportError(provider="Rally", message="down", retryable=True), "ok"]
    )

    assert await RetryPolicy(max_attempts=3).run(fn) == "ok"
    assert fn.await_count == 2


async def test_non_retryable_errors_fail_fast():
    fn = AsyncMock(side_effect=TrackerAuthenticationError(provider="Rally", message="denied"))

    with pytest.raises(TrackerAuthenticationError):
        await RetryPolicy(max_attempts=3).run(fn)

    assert fn.await_count == 1
