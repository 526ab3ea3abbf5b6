from dataclasses import dataclass

from artifact_gate.core.domain.artifact.entities.remote_artifact import RemoteArtifact
from artifact_gate.core.domain.artifact.value_objects.source_property import SourceProperty

MISSING = "missing"

PASSED_ICON = ":heavy_check_mark:"
FAILED_ICON = ":heavy_exclamation_mark:"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking one artifact key against the tracker.

    ``is_valid`` holds only when the artifact exists, its state is allowed
    and its project is allowed (or any project is accepted).
    """

    key: str
    source_property: SourceProperty
    status: str
    project_name: str
    is_valid: bool
    ref: str | None = None
    artifact: RemoteArtifact | None = None

    @classmethod
    def missing(cls, key: str, source_property: SourceProperty) -> "ValidationResult":
        return cls(
            key=key,
            source_property=source_property,
            status=MISSING,
            project_name=MISSING,
            is_valid=False,
        )

    @property
    def found(self) -> bool:
        return self.artifact is not None

    @property
    def validation_label(self) -> str:
        return "passed" if self.is_valid else "failed"

    @property
    def status_icon(self) -> str:
        return PASSED_ICON if self.is_valid else FAILED_ICON
