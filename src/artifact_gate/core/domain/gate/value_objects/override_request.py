from dataclasses import dataclass

from artifact_gate.core.domain.pull_request import RepositoryRef


@dataclass(frozen=True)
class OverrideRequest:
    """A user pressed the override button on a failed gate check run."""

    repository: RepositoryRef
    head_sha: str
    requested_by: str
    head_ref: str = ""
