import asyncio
from dataclasses import dataclass

import structlog

from artifact_gate.core.application.skills.checks.check_commits_skill import (
    CheckCommitsInput,
    CheckCommitsSkill,
)
from artifact_gate.core.application.skills.checks.check_labels_skill import (
    CheckLabelsInput,
    CheckLabelsSkill,
)
from artifact_gate.core.application.skills.checks.check_text_source_skill import (
    CheckTextSourceInput,
    CheckTextSourceSkill,
)
from artifact_gate.core.application.skills.checks.fan_out import gather_or_abort
from artifact_gate.core.application.skills.report.status_report_builder import (
    build_status_report,
)
from artifact_gate.core.application.skills.skill import BaseSkill
from artifact_gate.core.domain.artifact import (
    CommitCheckResult,
    SourceProperty,
    ValidationResult,
)
from artifact_gate.core.domain.gate import GateConfig, SourceResults, ValidationOutcome
from artifact_gate.core.domain.pull_request import PullRequest

logger = structlog.get_logger()


@dataclass(frozen=True)
class ValidatePullRequestInput:
    pull_request: PullRequest
    config: GateConfig


class ValidatePullRequestSkill(BaseSkill[ValidatePullRequestInput, ValidationOutcome]):
    """Runs the enabled source checks concurrently and aggregates them into one report.

    ``max_concurrent_validations`` bounds the tracker lookups in flight for one
    invocation; ``0`` leaves the fan-out unbounded.
    """

    def __init__(
        self,
        text_check: CheckTextSourceSkill,
        labels_check: CheckLabelsSkill,
        commits_check: CheckCommitsSkill,
        max_concurrent_validations: int = 0,
    ) -> None:
        self._text_check = text_check
        self._labels_check = labels_check
        self._commits_check = commits_check
        self._max_concurrent = max_concurrent_validations

    async def execute(self, input_data: ValidatePullRequestInput) -> ValidationOutcome:
        pr, config = input_data.pull_request, input_data.config
        limiter = asyncio.Semaphore(self._max_concurrent) if self._max_concurrent > 0 else None

        labels, body, title, commits = await gather_or_abort(
            [
                self._labels(pr, config, limiter),
                self._text(pr.body, SourceProperty.BODY, config.check_pr_body, config, limiter),
                self._text(pr.title, SourceProperty.TITLE, config.check_pr_title, config, limiter),
                self._commits(pr, config, limiter),
            ]
        )
        results = SourceResults(labels=labels, body=body, title=title, commits=commits)
        report = build_status_report(config, results)
        logger.info(
            "Pull request validated",
            pr_number=pr.number,
            overall_success=report.overall_success,
            labels=len(labels),
            body=len(body),
            title=len(title),
            commits_without_artifact=len(commits.without_artifact),
        )
        return ValidationOutcome(results=results, report=report)

    async def _text(
        self,
        text: str | None,
        source: SourceProperty,
        enabled: bool,
        config: GateConfig,
        limiter: asyncio.Semaphore | None,
    ) -> tuple[ValidationResult, ...]:
        if not enabled:
            return ()
        return await self._text_check.execute(
            CheckTextSourceInput(text=text, source_property=source, config=config, limiter=limiter)
        )

    async def _labels(
        self, pr: PullRequest, config: GateConfig, limiter: asyncio.Semaphore | None
    ) -> tuple[ValidationResult, ...]:
        if not config.check_pr_labels:
            return ()
        return await self._labels_check.execute(
            CheckLabelsInput(labels=pr.labels, config=config, limiter=limiter)
        )

    async def _commits(
        self, pr: PullRequest, config: GateConfig, limiter: asyncio.Semaphore | None
    ) -> CommitCheckResult:
        if not config.check_commit_messages:
            return CommitCheckResult()
        return await self._commits_check.execute(
            CheckCommitsInput(pull_request=pr, config=config, limiter=limiter)
        )
