from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

from artifact_gate.core.application.exceptions import WorkflowHaltedException
from artifact_gate.core.application.ports import GateConfigPort
from artifact_gate.core.application.skills.gate_skills import GateSkills
from artifact_gate.core.application.skills.report import gate_messages
from artifact_gate.core.application.tools import TrackerTool, VcsTool
from artifact_gate.core.domain.gate import (
    DEFAULT_CHECKS_NAME,
    CheckAction,
    CheckRunUpdate,
    CheckState,
    GateConfig,
)
from artifact_gate.core.domain.pull_request import RepositoryRef

logger = structlog.get_logger()

T_Event = TypeVar("T_Event")

TrackerFactory = Callable[[GateConfig], TrackerTool]
SkillsFactory = Callable[[TrackerTool], GateSkills]

OVERRIDE_ACTION = CheckAction(
    label=gate_messages.OVERRIDE_ACTION_LABEL,
    description=gate_messages.OVERRIDE_ACTION_DESCRIPTION,
    identifier=gate_messages.OVERRIDE_ACTION_IDENTIFIER,
)


class BaseWorkflow(ABC, Generic[T_Event]):
    """Abstract base for the per-event gate pipelines.

    Holds the collaborators every pipeline shares: the VCS tool, the repo
    config port and the rules for a repository without any gate config.
    """

    def __init__(
        self,
        vcs: VcsTool,
        config_port: GateConfigPort,
        enforce_all_repos: bool = False,
        config_path: str = ".github/rally.yml",
        redact_error: Callable[[str], str] | None = None,
    ) -> None:
        self._vcs = vcs
        self._config_port = config_port
        self._enforce_all_repos = enforce_all_repos
        self._config_path = config_path
        self._redact_error = redact_error or str

    @abstractmethod
    async def execute(self, event: T_Event) -> None:
        """Run the full workflow pipeline for the given event."""

    async def _load_config_or_halt(
        self, repository: RepositoryRef, head_sha: str
    ) -> GateConfig:
        """Resolve the repo config; without one, fail the check when enforced, then halt."""
        config = await self._config_port.load(repository)
        if config is not None:
            return config
        if self._enforce_all_repos:
            logger.info("No gate config, enforcement enabled", repository=repository.full_name)
            await self._emit(
                repository,
                head_sha,
                DEFAULT_CHECKS_NAME,
                CheckState.FAILURE,
                gate_messages.FAIL_TITLE,
                gate_messages.no_config_message(self._config_path),
            )
        raise WorkflowHaltedException(
            "Repository has no gate config", context={"repository": repository.full_name}
        )

    async def _emit(
        self,
        repository: RepositoryRef,
        head_sha: str,
        checks_name: str,
        state: CheckState,
        title: str,
        summary: str,
    ) -> None:
        actions = (OVERRIDE_ACTION,) if state is CheckState.FAILURE else ()
        update = CheckRunUpdate(
            name=checks_name, state=state, title=title, summary=summary, actions=actions
        )
        await self._vcs.emit_check_status(repository, head_sha, update)
        logger.info(
            "Check status emitted",
            repository=repository.full_name,
            head_sha=head_sha,
            check_state=state.value,
        )

    @staticmethod
    async def _disconnect(tool: TrackerTool | None) -> None:
        """Close a tool session; a failing close must not mask the error in flight."""
        if tool is None:
            return
        try:
            await tool.disconnect()
        except Exception:  # noqa: BLE001
            logger.warning("Failed to disconnect tool", tool_type=type(tool).__name__)
