import asyncio
from dataclasses import dataclass

import structlog

from artifact_gate.core.application.skills.checks.fan_out import gather_or_abort, run_limited
from artifact_gate.core.application.skills.skill import BaseSkill
from artifact_gate.core.application.skills.validation.validate_artifact_skill import (
    ValidateArtifactInput,
    ValidateArtifactSkill,
)
from artifact_gate.core.application.tools import VcsTool
from artifact_gate.core.domain.artifact import CommitCheckResult, CommitRecord, SourceProperty
from artifact_gate.core.domain.artifact.entities.commit_record import SHORT_SHA_LENGTH
from artifact_gate.core.domain.artifact.key_extractor import find_keys
from artifact_gate.core.domain.gate import GateConfig
from artifact_gate.core.domain.pull_request import CommitSummary, PullRequest

logger = structlog.get_logger()


@dataclass(frozen=True)
class CheckCommitsInput:
    pull_request: PullRequest
    config: GateConfig
    limiter: asyncio.Semaphore | None = None


class CheckCommitsSkill(BaseSkill[CheckCommitsInput, CommitCheckResult]):
    """Classifies every commit of the pull request by the artifact its message references.

    Only the first key of each message is validated: a commit is expected to
    reference a single artifact.
    """

    def __init__(self, vcs: VcsTool, validate: ValidateArtifactSkill) -> None:
        self._vcs = vcs
        self._validate = validate

    async def execute(self, input_data: CheckCommitsInput) -> CommitCheckResult:
        pr = input_data.pull_request
        commits = await self._vcs.get_commit_range(pr.repository, pr.base_sha, pr.head_sha)
        logger.info("Checking commit messages", commit_count=len(commits), pr_number=pr.number)

        records = await gather_or_abort(
            self._check_commit(pr, commit, input_data) for commit in commits
        )
        return CommitCheckResult(
            with_artifact=tuple(r for r in records if r.has_artifact),
            without_artifact=tuple(r for r in records if not r.has_artifact),
        )

    async def _check_commit(
        self, pr: PullRequest, commit: CommitSummary, input_data: CheckCommitsInput
    ) -> CommitRecord:
        keys = find_keys(commit.message, input_data.config.objects)
        payload = ValidateArtifactInput(
            key=keys[0] if keys else None,
            source_property=SourceProperty.COMMIT_MESSAGE,
            config=input_data.config,
        )
        validation = await run_limited(self._validate, payload, input_data.limiter)
        return CommitRecord(
            sha=commit.sha,
            short_sha=commit.sha[:SHORT_SHA_LENGTH],
            message=commit.message,
            commit_url=pr.commit_url(commit.sha),
            validation=validation,
        )
