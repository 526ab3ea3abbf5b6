"""Promotion pipeline run when a pull request is closed."""

from collections.abc import Callable

import structlog
from structlog.contextvars import bind_contextvars

from artifact_gate.core.application.exceptions import (
    InvalidGateConfigError,
    WorkflowExecutionError,
    WorkflowHaltedException,
)
from artifact_gate.core.application.ports import GateConfigPort
from artifact_gate.core.application.skills.links.promote_artifacts_skill import (
    PromoteArtifactsInput,
)
from artifact_gate.core.application.tools import TrackerTool, VcsTool
from artifact_gate.core.application.tools.common.exceptions import ProviderError
from artifact_gate.core.application.workflows.base_workflow import (
    BaseWorkflow,
    SkillsFactory,
    TrackerFactory,
)
from artifact_gate.core.domain.gate import GateConfig
from artifact_gate.core.domain.pull_request import PullRequest

logger = structlog.get_logger()


class MergePromotionWorkflow(BaseWorkflow[PullRequest]):
    """Merged? -> Config -> Promote artifacts named by ``/completes`` in the body."""

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
            event_type="workflow.merge_promotion",
        )
        if not pr.merged:
            logger.info("Pull request closed without merge, nothing to promote")
            return
        try:
            config = await self._load_config_or_halt(pr.repository, pr.head_sha)
        except WorkflowHaltedException as halt:
            logger.info("Merge promotion halted gracefully", reason=str(halt))
            return
        except InvalidGateConfigError as exc:
            self._log_failure(exc)
            raise WorkflowExecutionError(str(exc), context=exc.context) from exc
        if not config.merge_on_pr_body:
            logger.info("Promotion on merge disabled for repository")
            return

        try:
            promoted = await self._promote(pr, config)
        except Exception as exc:
            self._log_failure(exc)
            raise WorkflowExecutionError(
                str(exc), context={"repository": pr.repository.full_name, "pr_number": pr.number}
            ) from exc
        logger.info("Merge promotion workflow completed", promoted=promoted)

    async def _promote(self, pr: PullRequest, config: GateConfig) -> list[str]:
        tracker: TrackerTool | None = None
        try:
            tracker = self._tracker_factory(config)
            await tracker.connect()
            skills = self._skills_factory(tracker)
            return await skills.promote_artifacts.execute(
                PromoteArtifactsInput(pull_request=pr, config=config)
            )
        finally:
            await self._disconnect(tracker)

    @staticmethod
    def _log_failure(error: Exception) -> None:
        logger.error(
            "Merge promotion workflow failed",
            processing_status="ERROR",
            error_type=type(error).__name__,
            error_details=str(error),
            error_retryable=isinstance(error, ProviderError) and error.retryable,
            source_system=error.provider if isinstance(error, ProviderError) else None,
        )
