from dataclasses import dataclass, field

from artifact_gate.core.domain.artifact.entities.validation_result import ValidationResult

SHORT_SHA_LENGTH = 6


@dataclass(frozen=True)
class CommitRecord:
    sha: str
    short_sha: str
    message: str
    commit_url: str
    validation: ValidationResult | None = None

    @property
    def has_artifact(self) -> bool:
        return self.validation is not None


@dataclass(frozen=True)
class CommitCheckResult:
    """Commits of a pull request split by whether their message referenced an artifact."""

    with_artifact: tuple[CommitRecord, ...] = field(default_factory=tuple)
    without_artifact: tuple[CommitRecord, ...] = field(default_factory=tuple)

    @property
    def validations(self) -> tuple[ValidationResult, ...]:
        return tuple(c.validation for c in self.with_artifact if c.validation is not None)

    @property
    def is_empty(self) -> bool:
        return not self.with_artifact and not self.without_artifact
