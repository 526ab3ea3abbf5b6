from dataclasses import dataclass

import structlog

from artifact_gate.core.application.skills.skill import BaseSkill
from artifact_gate.core.application.tools import TrackerTool
from artifact_gate.core.domain.artifact import ArtifactKey, SourceProperty, ValidationResult
from artifact_gate.core.domain.gate import GateConfig

logger = structlog.get_logger()

ARTIFACT_FIELDS: tuple[str, ...] = (
    "FormattedID",
    "Name",
    "Description",
    "ScheduleState",
    "Project",
    "Connections",
)


@dataclass(frozen=True)
class ValidateArtifactInput:
    key: str | None
    source_property: SourceProperty
    config: GateConfig


class ValidateArtifactSkill(BaseSkill[ValidateArtifactInput, ValidationResult | None]):
    """Looks one artifact key up in the tracker and grades it against the gate config.

    A ``None`` key means the source had nothing to check and yields ``None``.
    Unknown prefixes and empty query results yield a ``missing`` result;
    tracker failures propagate.
    """

    def __init__(self, tracker: TrackerTool) -> None:
        self._tracker = tracker

    async def execute(self, input_data: ValidateArtifactInput) -> ValidationResult | None:
        if input_data.key is None:
            return None

        key = input_data.key
        source = input_data.source_property
        parsed = ArtifactKey.parse(key)
        if parsed is None or not parsed.is_resolvable:
            logger.info("Artifact key has no registered type", key=key, source=source.value)
            return ValidationResult.missing(key, source)

        query = await self._tracker.query_artifact(
            parsed.tracker_type,
            parsed.number,
            input_data.config.workspace_ref,
            ARTIFACT_FIELDS,
        )
        artifact = query.first
        if query.count == 0 or artifact is None:
            logger.info("Artifact not found in tracker", key=key, source=source.value)
            return ValidationResult.missing(key, source)

        config = input_data.config
        is_valid = config.is_state_allowed(artifact.schedule_state) and config.is_project_allowed(
            artifact.project_name
        )
        logger.info(
            "Artifact validated",
            key=key,
            source=source.value,
            state=artifact.schedule_state,
            project=artifact.project_name,
            is_valid=is_valid,
        )
        return ValidationResult(
            key=key,
            source_property=source,
            status=artifact.schedule_state,
            project_name=artifact.project_name,
            is_valid=is_valid,
            ref=artifact.ref,
            artifact=artifact,
        )
