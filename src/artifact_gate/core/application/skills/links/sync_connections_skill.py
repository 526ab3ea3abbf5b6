from dataclasses import dataclass

import structlog

from artifact_gate.core.application.skills.skill import BaseSkill
from artifact_gate.core.application.tools import TrackerTool
from artifact_gate.core.application.tools.common.exceptions import DuplicateConnectionError
from artifact_gate.core.domain.artifact import ValidationResult
from artifact_gate.core.domain.gate import GateConfig, SourceResults
from artifact_gate.core.domain.pull_request import PullRequest

logger = structlog.get_logger()


@dataclass(frozen=True)
class SyncConnectionsInput:
    pull_request: PullRequest
    results: SourceResults
    config: GateConfig


def unique_valid_results(results: SourceResults) -> list[ValidationResult]:
    """Valid results across every source, first occurrence of each key kept."""
    unique: dict[str, ValidationResult] = {}
    for result in results.all_validations():
        if result.is_valid and result.artifact is not None:
            unique.setdefault(result.key, result)
    return list(unique.values())


class SyncConnectionsSkill(BaseSkill[SyncConnectionsInput, int]):
    """Links the pull request to every valid artifact that does not list it yet.

    Artifacts are processed one after another. The existence check and the
    create are not atomic, so two concurrent deliveries may still race; the
    tracker's duplicate rejection is treated as success.
    """

    def __init__(self, tracker: TrackerTool) -> None:
        self._tracker = tracker

    async def execute(self, input_data: SyncConnectionsInput) -> int:
        pr = input_data.pull_request
        workspace = input_data.config.workspace_ref
        created = 0

        for result in unique_valid_results(input_data.results):
            artifact = result.artifact
            connections = await self._tracker.query_connections(artifact, workspace)
            if any(connection.url == pr.html_url for connection in connections):
                logger.debug("Pull request already connected", key=result.key, pr_url=pr.html_url)
                continue
            try:
                await self._tracker.create_connection(artifact.ref, pr)
            except DuplicateConnectionError as exc:
                logger.info(
                    "Connection already recorded by tracker",
                    key=result.key,
                    pr_url=pr.html_url,
                    error_details=str(exc),
                )
                continue
            created += 1
            logger.info("Pull request connected to artifact", key=result.key, pr_url=pr.html_url)

        return created
