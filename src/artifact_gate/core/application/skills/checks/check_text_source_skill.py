import asyncio
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
class CheckTextSourceInput:
    text: str | None
    source_property: SourceProperty
    config: GateConfig
    limiter: asyncio.Semaphore | None = None


class CheckTextSourceSkill(BaseSkill[CheckTextSourceInput, tuple[ValidationResult, ...]]):
    """Validates every key found in a single text (pull request title or body).

    Invalid artifacts are kept in the output so the report can show them.
    """

    def __init__(self, validate: ValidateArtifactSkill) -> None:
        self._validate = validate

    async def execute(self, input_data: CheckTextSourceInput) -> tuple[ValidationResult, ...]:
        keys = find_keys(input_data.text, input_data.config.objects)
        if not keys:
            logger.debug("No artifact found", source=input_data.source_property.value)
            return ()
        return await validate_keys(
            self._validate,
            keys,
            input_data.source_property,
            input_data.config,
            input_data.limiter,
        )
