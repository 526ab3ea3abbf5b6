import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from artifact_gate.core.application.skills.checks.fan_out import validate_keys
from artifact_gate.core.application.skills.skill import BaseSkill
from artifact_gate.core.application.skills.validation.validate_artifact_skill import (
    ValidateArtifactSkill,
)
from artifact_gate.core.domain.artifact import SourceProperty, ValidationResult
from artifact_gate.core.domain.artifact.key_extractor import find_keys
from artifact_gate.core.domain.gate import GateConfig

logger = structlog.get_logger()


@dataclass(frozen=True)
class CheckLabelsInput:
    labels: Sequence[str]
    config: GateConfig
    limiter: asyncio.Semaphore | None = None


class CheckLabelsSkill(BaseSkill[CheckLabelsInput, tuple[ValidationResult, ...]]):
    """Extracts keys label by label, merges them in label order and validates them all."""

    def __init__(self, validate: ValidateArtifactSkill) -> None:
        self._validate = validate

    async def execute(self, input_data: CheckLabelsInput) -> tuple[ValidationResult, ...]:
        keys: list[str] = []
        for label in input_data.labels:
            keys.extend(find_keys(label, input_data.config.objects))
        if not keys:
            logger.debug("No artifact found in labels", label_count=len(input_data.labels))
            return ()
        return await validate_keys(
            self._validate,
            keys,
            SourceProperty.LABEL,
            input_data.config,
            input_data.limiter,
        )
