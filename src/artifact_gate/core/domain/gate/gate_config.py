from dataclasses import dataclass, field

from artifact_gate.core.domain.artifact.key_extractor import DEFAULT_PROMOTION_COMMANDS

ANY_PROJECT = "Any"
DEFAULT_CHECKS_NAME = "integrations/rally"


@dataclass(frozen=True)
class TrackerOverrides:
    """Per-repository tracker connection values that replace the process defaults."""

    server: str | None = None
    username: str | None = None
    password: str | None = None
    api_key: str | None = None


@dataclass(frozen=True)
class GateConfig:
    """Immutable per-invocation gate settings resolved from the repository config."""

    check_pr_title: bool = False
    check_pr_body: bool = False
    check_commit_messages: bool = False
    check_pr_labels: bool = False
    comment_on_pull: bool = False
    merge_on_pr_body: bool = False
    objects: tuple[str, ...] = ()
    allowed_states: tuple[str, ...] = ()
    allowed_projects: tuple[str, ...] = ()
    workspace: str = ""
    promotion_commands: tuple[str, ...] = DEFAULT_PROMOTION_COMMANDS
    checks_name: str = DEFAULT_CHECKS_NAME
    tracker: TrackerOverrides = field(default_factory=TrackerOverrides)

    @property
    def any_project(self) -> bool:
        return not self.allowed_projects or ANY_PROJECT in self.allowed_projects

    @property
    def project_scoped(self) -> bool:
        return not self.any_project

    @property
    def workspace_ref(self) -> str:
        return f"/workspace/{self.workspace}" if self.workspace else ""

    def is_state_allowed(self, state: str) -> bool:
        return state in self.allowed_states

    def is_project_allowed(self, project_name: str) -> bool:
        return self.any_project or project_name in self.allowed_projects
