from dataclasses import dataclass

import structlog

from artifact_gate.core.application.exceptions import InvalidTargetStateError
from artifact_gate.core.application.skills.checks.fan_out import gather_or_abort
from artifact_gate.core.application.skills.skill import BaseSkill
from artifact_gate.core.application.skills.validation.validate_artifact_skill import (
    ARTIFACT_FIELDS,
)
from artifact_gate.core.application.tools import TrackerTool
from artifact_gate.core.domain.artifact import ArtifactKey, PromotionMatch
from artifact_gate.core.domain.artifact.key_extractor import find_promotion_keys
from artifact_gate.core.domain.gate import GateConfig
from artifact_gate.core.domain.pull_request import PullRequest

logger = structlog.get_logger()

VALID_STATES: tuple[str, ...] = ("Defined", "In-Progress", "Completed", "Accepted")
PROMOTION_TARGET_STATE = "Completed"


@dataclass(frozen=True)
class PromoteArtifactsInput:
    pull_request: PullRequest
    config: GateConfig
    target_state: str = PROMOTION_TARGET_STATE


class PromoteArtifactsSkill(BaseSkill[PromoteArtifactsInput, list[str]]):
    """Moves artifacts named by ``/<command> <key>`` in a merged PR body to the target state.

    Returns the keys that were promoted. Keys with no registered type or no
    tracker match are skipped.
    """

    def __init__(self, tracker: TrackerTool) -> None:
        self._tracker = tracker

    async def execute(self, input_data: PromoteArtifactsInput) -> list[str]:
        config = input_data.config
        if not config.merge_on_pr_body:
            return []
        if input_data.target_state not in VALID_STATES:
            raise InvalidTargetStateError(
                f"State {input_data.target_state!r} is not a valid value",
                context={"valid_states": list(VALID_STATES)},
            )

        matches = find_promotion_keys(
            input_data.pull_request.body, config.objects, config.promotion_commands
        )
        if not matches:
            logger.debug("No promotion command found in PR body")
            return []

        promoted = await gather_or_abort(
            self._promote(match, config, input_data.target_state) for match in matches
        )
        return [key for key in promoted if key is not None]

    async def _promote(self, match: PromotionMatch, config: GateConfig, state: str) -> str | None:
        parsed = ArtifactKey.parse(match.key)
        if parsed is None or not parsed.is_resolvable:
            logger.info("Promotion skipped, unknown artifact type", key=match.key)
            return None

        query = await self._tracker.query_artifact(
            parsed.tracker_type, parsed.number, config.workspace_ref, ARTIFACT_FIELDS
        )
        artifact = query.first
        if query.count == 0 or artifact is None:
            logger.info("Promotion skipped, artifact not found", key=match.key)
            return None

        await self._tracker.update_artifact_state(artifact.ref, state)
        logger.info(
            "Artifact promoted",
            key=match.key,
            command=match.command,
            previous_state=artifact.schedule_state,
            new_state=state,
        )
        return match.key
