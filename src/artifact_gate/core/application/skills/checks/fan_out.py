import asyncio
from collections.abc import Coroutine, Iterable, Sequence
from typing import Any, TypeVar

from artifact_gate.core.application.skills.validation.validate_artifact_skill import (
    ValidateArtifactInput,
    ValidateArtifactSkill,
)
from artifact_gate.core.domain.artifact import SourceProperty, ValidationResult
from artifact_gate.core.domain.gate import GateConfig

T = TypeVar("T")


async def gather_or_abort(coros: Iterable[Coroutine[Any, Any, T]]) -> list[T]:
    """Await ``coros`` concurrently; results keep input order.

    The first failure cancels the sibling tasks and is re-raised unwrapped,
    so callers see the original ``ProviderError`` rather than a group.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coro) for coro in coros]
    except ExceptionGroup as eg:
        error: BaseException = eg
        while isinstance(error, ExceptionGroup):
            error = error.exceptions[0]
        raise error from None
    return [task.result() for task in tasks]


async def run_limited(
    validate: ValidateArtifactSkill,
    payload: ValidateArtifactInput,
    limiter: asyncio.Semaphore | None,
) -> ValidationResult | None:
    """Run one validation, holding ``limiter`` when a concurrency bound is configured."""
    if limiter is None:
        return await validate.execute(payload)
    async with limiter:
        return await validate.execute(payload)


async def validate_keys(
    validate: ValidateArtifactSkill,
    keys: Sequence[str],
    source: SourceProperty,
    config: GateConfig,
    limiter: asyncio.Semaphore | None = None,
) -> tuple[ValidationResult, ...]:
    """Validate ``keys`` concurrently; results keep the order of ``keys``."""
    results = await gather_or_abort(
        run_limited(
            validate,
            ValidateArtifactInput(key=key, source_property=source, config=config),
            limiter,
        )
        for key in keys
    )
    return tuple(r for r in results if r is not None)
