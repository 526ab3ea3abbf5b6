from dataclasses import dataclass, field

from artifact_gate.core.domain.artifact import CommitCheckResult, ValidationResult
from artifact_gate.core.domain.gate.status_report import StatusReport


@dataclass(frozen=True)
class SourceResults:
    """Per-source validation results; disabled sources stay empty."""

    labels: tuple[ValidationResult, ...] = ()
    body: tuple[ValidationResult, ...] = ()
    title: tuple[ValidationResult, ...] = ()
    commits: CommitCheckResult = field(default_factory=CommitCheckResult)

    def all_validations(self) -> list[ValidationResult]:
        """Commit validations first, then title, body and labels."""
        return [*self.commits.validations, *self.title, *self.body, *self.labels]


@dataclass(frozen=True)
class ValidationOutcome:
    results: SourceResults
    report: StatusReport
