from dataclasses import dataclass

from artifact_gate.core.application.skills.checks.check_commits_skill import CheckCommitsSkill
from artifact_gate.core.application.skills.checks.check_labels_skill import CheckLabelsSkill
from artifact_gate.core.application.skills.checks.check_text_source_skill import (
    CheckTextSourceSkill,
)
from artifact_gate.core.application.skills.links.promote_artifacts_skill import (
    PromoteArtifactsSkill,
)
from artifact_gate.core.application.skills.links.sync_connections_skill import (
    SyncConnectionsSkill,
)
from artifact_gate.core.application.skills.validation.validate_artifact_skill import (
    ValidateArtifactSkill,
)
from artifact_gate.core.application.skills.validation.validate_pull_request_skill import (
    ValidatePullRequestSkill,
)
from artifact_gate.core.application.tools import TrackerTool, VcsTool


@dataclass(frozen=True)
class GateSkills:
    """The three engine entrypoints, bound to one tracker session."""

    validate_pull_request: ValidatePullRequestSkill
    sync_connections: SyncConnectionsSkill
    promote_artifacts: PromoteArtifactsSkill


def build_gate_skills(
    tracker: TrackerTool, vcs: VcsTool, max_concurrent_validations: int = 0
) -> GateSkills:
    validate = ValidateArtifactSkill(tracker)
    return GateSkills(
        validate_pull_request=ValidatePullRequestSkill(
            text_check=CheckTextSourceSkill(validate),
            labels_check=CheckLabelsSkill(validate),
            commits_check=CheckCommitsSkill(vcs, validate),
            max_concurrent_validations=max_concurrent_validations,
        ),
        sync_connections=SyncConnectionsSkill(tracker),
        promote_artifacts=PromoteArtifactsSkill(tracker),
    )
