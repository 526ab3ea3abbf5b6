from artifact_gate.core.domain.pull_request.pull_request import (
    CommitSummary,
    PullRequest,
    RepositoryRef,
)

__all__ = ["CommitSummary", "PullRequest", "RepositoryRef"]
