from artifact_gate.core.domain.artifact.entities import (
    ArtifactQueryResult,
    CommitCheckResult,
    CommitRecord,
    RemoteArtifact,
    RemoteConnection,
    ValidationResult,
)
from artifact_gate.core.domain.artifact.value_objects import (
    ArtifactKey,
    PromotionMatch,
    SourceProperty,
)

__all__ = [
    "ArtifactKey",
    "ArtifactQueryResult",
    "CommitCheckResult",
    "CommitRecord",
    "PromotionMatch",
    "RemoteArtifact",
    "RemoteConnection",
    "SourceProperty",
    "ValidationResult",
]
