from artifact_gate.core.domain.artifact.entities.commit_record import (
    CommitCheckResult,
    CommitRecord,
)
from artifact_gate.core.domain.artifact.entities.remote_artifact import (
    ArtifactQueryResult,
    RemoteArtifact,
    RemoteConnection,
)
from artifact_gate.core.domain.artifact.entities.validation_result import ValidationResult

__all__ = [
    "ArtifactQueryResult",
    "CommitCheckResult",
    "CommitRecord",
    "RemoteArtifact",
    "RemoteConnection",
    "ValidationResult",
]
