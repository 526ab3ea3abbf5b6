from artifact_gate.core.domain.gate import OverrideRequest
from artifact_gate.core.domain.pull_request import PullRequest, RepositoryRef
from artifact_gate.infrastructure.entrypoints.api.dtos.github_webhook_dto import (
    CheckRunEventDTO,
    CheckSuiteDTO,
    PullRequestEventDTO,
)
from artifact_gate.infrastructure.tools.vcs.github.mappers.github_pull_request_mapper import (
    GitHubPullRequestMapper,
)


class GitHubEventMapper:
    """Maps webhook payloads to the domain objects the workflows consume."""

    @staticmethod
    def to_pull_request(payload: PullRequestEventDTO) -> PullRequest:
        repository = GitHubPullRequestMapper.to_repository(payload.repository)
        return GitHubPullRequestMapper.to_domain(payload.pull_request, repository)

    @staticmethod
    def first_pull_request_number(suite: CheckSuiteDTO | None) -> int | None:
        if suite is None or not suite.pull_requests:
            return None
        return suite.pull_requests[0].number

    @staticmethod
    def to_override_request(payload: CheckRunEventDTO) -> OverrideRequest:
        suite = payload.check_run.check_suite
        return OverrideRequest(
            repository=RepositoryRef(
                owner=payload.repository.owner.login, name=payload.repository.name
            ),
            head_sha=payload.check_run.head_sha,
            requested_by=payload.sender.login if payload.sender else "unknown",
            head_ref=(suite.head_branch or "") if suite else "",
        )
