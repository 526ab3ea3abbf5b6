"""Functional DI container: builds fully-wired gate workflows from settings.

Convenient free-function API for FastAPI dependency injection.
"""

from dataclasses import dataclass
from functools import partial

from artifact_gate.core.application.skills.gate_skills import GateSkills, build_gate_skills
from artifact_gate.core.application.tools import TrackerTool
from artifact_gate.core.application.workflows.merge.merge_promotion_workflow import (
    MergePromotionWorkflow,
)
from artifact_gate.core.application.workflows.override.manual_override_workflow import (
    ManualOverrideWorkflow,
)
from artifact_gate.core.application.workflows.validation.pull_request_validation_workflow import (
    PullRequestValidationWorkflow,
)
from artifact_gate.infrastructure.common.retry.retry_policy import RetryPolicy
from artifact_gate.infrastructure.config.app_config import AppConfig, get_app_config
from artifact_gate.infrastructure.config.repo.gate_config_loader import GateConfigLoader
from artifact_gate.infrastructure.observability.redaction_service import redact_text
from artifact_gate.infrastructure.tools.tracker.rally.rally_client_factory import (
    build_rally_client,
)
from artifact_gate.infrastructure.tools.vcs.github.config.github_settings import GitHubSettings
from artifact_gate.infrastructure.tools.vcs.github.github_http_client import GitHubHttpClient


@dataclass(frozen=True)
class GateWorkflows:
    """One workflow per webhook event family, sharing the same VCS client."""

    validation: PullRequestValidationWorkflow
    merge: MergePromotionWorkflow
    override: ManualOverrideWorkflow


def build_github_client(settings: GitHubSettings) -> GitHubHttpClient:
    return GitHubHttpClient(
        api_url=settings.api_url,
        token=settings.token.get_secret_value() if settings.token else None,
        retry_policy=RetryPolicy(max_attempts=settings.max_attempts),
        timeout_seconds=settings.timeout_seconds,
    )


# === PUBLIC BUILDERS ===


def build_gate_workflows(config: AppConfig | None = None) -> GateWorkflows:
    """Assemble the three workflows with a GitHub client and a per-repo Rally factory."""
    config = config or get_app_config()
    vcs = build_github_client(config.github)
    loader = GateConfigLoader(
        vcs,
        org_config_repo=config.gate.org_config_repo_name,
        config_file=config.gate.config_file,
    )
    tracker_factory = partial(build_rally_client, config.rally)

    def skills_factory(tracker: TrackerTool) -> GateSkills:
        return build_gate_skills(tracker, vcs, config.gate.max_concurrent_validations)

    shared = {
        "vcs": vcs,
        "config_port": loader,
        "enforce_all_repos": config.gate.enforce_all_repos,
        "config_path": config.gate.repo_config_path,
        "redact_error": redact_text,
    }
    return GateWorkflows(
        validation=PullRequestValidationWorkflow(
            tracker_factory=tracker_factory, skills_factory=skills_factory, **shared
        ),
        merge=MergePromotionWorkflow(
            tracker_factory=tracker_factory, skills_factory=skills_factory, **shared
        ),
        override=ManualOverrideWorkflow(**shared),
    )
