import structlog
from structlog.contextvars import bind_contextvars

from artifact_gate.core.application.exceptions import InvalidGateConfigError
from artifact_gate.core.application.skills.report import gate_messages
from artifact_gate.core.application.workflows.base_workflow import BaseWorkflow
from artifact_gate.core.domain.gate import DEFAULT_CHECKS_NAME, CheckState, OverrideRequest
from artifact_gate.core.domain.pull_request import RepositoryRef

logger = structlog.get_logger()


class ManualOverrideWorkflow(BaseWorkflow[OverrideRequest]):
    """Turns the gate check green on behalf of the user who pressed Override."""

    async def execute(self, event: OverrideRequest) -> None:
        bind_contextvars(
            repository=event.repository.full_name,
            head_sha=event.head_sha,
            event_type="workflow.manual_override",
        )
        checks_name = await self._resolve_checks_name(event.repository)
        await self._emit(
            event.repository,
            event.head_sha,
            checks_name,
            CheckState.SUCCESS,
            gate_messages.override_title(event.requested_by),
            gate_messages.override_summary(event.requested_by),
        )
        logger.info("Gate check manually overridden", requested_by=event.requested_by)

    async def _resolve_checks_name(self, repository: RepositoryRef) -> str:
        # A broken config is reported under the default checks name.
        try:
            config = await self._config_port.load(repository)
        except InvalidGateConfigError as exc:
            logger.warning(
                "Gate config invalid, overriding default check",
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
            return DEFAULT_CHECKS_NAME
        return config.checks_name if config is not None else DEFAULT_CHECKS_NAME
