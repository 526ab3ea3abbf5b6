"""Deterministic validation pipeline for pull request events and check re-runs."""

from collections.abc import Callable

import structlog
from structlog.contextvars import bind_contextvars

from artifact_gate.core.application.exceptions import (
    InvalidGateConfigError,
    WorkflowExecutionError,
    WorkflowHaltedException,
)
from artifact_gate.core.application.ports import GateConfigPort
from artifact_gate.core.application.skills.gate_skills import GateSkills
from artifact_gate.core.application.skills.links.sync_connections_skill import (
    SyncConnectionsInput,
)
from artifact_gate.core.application.skills.report import gate_messages
from artifact_gate.core.application.skills.validation.validate_pull_request_skill import (
    ValidatePullRequestInput,
)
from artifact_gate.core.application.tools import TrackerTool, VcsTool
from artifact_gate.core.application.tools.common.exceptions import ProviderError
from artifact_gate.core.application.workflows.base_workflow import (
    BaseWorkflow,
    SkillsFactory,
    TrackerFactory,
)
from artifact_gate.core.domain.gate import (
    DEFAULT_CHECKS_NAME,
    CheckState,
    GateConfig,
    ValidationOutcome,
)
from artifact_gate.core.domain.pull_request import PullRequest, RepositoryRef

logger = structlog.get_logger()


class PullRequestValidationWorkflow(BaseWorkflow[PullRequest]):
    """Config -> Pending -> Validate -> Sync connections -> Pass/Fail -> Comment."""

    def __init__(
        self,
        vcs: VcsTool,
        config_port: GateConfigPort,
        tracker_factory: TrackerFactory,
        skills_factory: SkillsFactory,
        enforce_all_repos: bool = False,
        config_path: str = ".github/rally.yml",
        redact_error: Callable[[str], str] | None = None,
    ) -> None:
        super().__init__(vcs, config_port, enforce_all_repos, config_path, redact_error)
        self._tracker_factory = tracker_factory
        self._skills_factory = skills_factory

    async def execute(self, event: PullRequest) -> None:
        pr = event
        bind_contextvars(
            repository=pr.repository.full_name,
            pr_number=pr.number,
            event_type="workflow.validation",
        )
        logger.info("Validation workflow started", head_sha=pr.head_sha)
        try:
            config = await self._load_config_or_halt(pr.repository, pr.head_sha)
        except WorkflowHaltedException as halt:
            logger.info("Validation workflow halted gracefully", reason=str(halt))
            return
        except InvalidGateConfigError as exc:
            await self._handle_error(pr, DEFAULT_CHECKS_NAME, exc)
            raise WorkflowExecutionError(str(exc), context=exc.context) from exc

        await self._emit(
            pr.repository,
            pr.head_sha,
            config.checks_name,
            CheckState.PENDING,
            gate_messages.PENDING_TITLE,
            gate_messages.PENDING_SUMMARY,
        )
        try:
            outcome = await self._validate_and_sync(pr, config)
        except Exception as exc:
            await self._handle_error(pr, config.checks_name, exc)
            raise WorkflowExecutionError(
                str(exc), context={"repository": pr.repository.full_name, "pr_number": pr.number}
            ) from exc

        await self._publish(pr, config, outcome)
        logger.info(
            "Validation workflow completed", overall_success=outcome.report.overall_success
        )

    async def rerun(
        self, repository: RepositoryRef, number: int, check_run_name: str | None = None
    ) -> None:
        """Re-fetch the pull request and validate it again.

        With ``check_run_name`` set, only a run carrying the configured checks
        name is restarted.
        """
        if check_run_name is not None:
            checks_name = await self._rerun_checks_name(repository)
            if checks_name is not None and check_run_name != checks_name:
                logger.info(
                    "Re-run ignored, check run belongs to another integration",
                    check_run_name=check_run_name,
                    checks_name=checks_name,
                )
                return
        pr = await self._vcs.get_pull_request(repository, number)
        logger.info("Re-running validation", repository=repository.full_name, pr_number=number)
        await self.execute(pr)

    async def _rerun_checks_name(self, repository: RepositoryRef) -> str | None:
        """Name of the run a re-run may restart; ``None`` when the repository has no config."""
        try:
            config = await self._config_port.load(repository)
        except InvalidGateConfigError as exc:
            logger.warning(
                "Gate config invalid while filtering re-run",
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
            return DEFAULT_CHECKS_NAME
        return config.checks_name if config is not None else None

    # ── Steps ──────────────────────────────────────────────────────────

    async def _validate_and_sync(self, pr: PullRequest, config: GateConfig) -> ValidationOutcome:
        tracker: TrackerTool | None = None
        try:
            tracker = self._tracker_factory(config)
            await tracker.connect()
            skills: GateSkills = self._skills_factory(tracker)
            outcome = await skills.validate_pull_request.execute(
                ValidatePullRequestInput(pull_request=pr, config=config)
            )
            created = await skills.sync_connections.execute(
                SyncConnectionsInput(pull_request=pr, results=outcome.results, config=config)
            )
            logger.info("Connections synchronised", created=created)
            return outcome
        finally:
            await self._disconnect(tracker)

    async def _publish(self, pr: PullRequest, config: GateConfig, outcome: ValidationOutcome) -> None:
        report = outcome.report
        if report.overall_success:
            state, title = CheckState.SUCCESS, gate_messages.PASS_TITLE
        else:
            state, title = CheckState.FAILURE, gate_messages.FAIL_TITLE
        await self._emit(
            pr.repository, pr.head_sha, config.checks_name, state, title, report.rendered_markdown
        )
        if config.comment_on_pull:
            await self._vcs.post_comment(pr.repository, pr.number, report.rendered_markdown)

    async def _handle_error(self, pr: PullRequest, checks_name: str, error: Exception) -> None:
        """Log failure with the gate schema and turn the check red with the redacted error."""
        logger.error(
            "Validation workflow failed",
            processing_status="ERROR",
            error_type=type(error).__name__,
            error_details=str(error),
            error_retryable=isinstance(error, ProviderError) and error.retryable,
            source_system=error.provider if isinstance(error, ProviderError) else None,
        )
        try:
            await self._emit(
                pr.repository,
                pr.head_sha,
                checks_name,
                CheckState.FAILURE,
                gate_messages.FAIL_TITLE,
                gate_messages.ERROR_PREFIX + self._redact_error(str(error)),
            )
        except Exception as e:
            logger.warning("Failed to report error to check run", error=str(e))
