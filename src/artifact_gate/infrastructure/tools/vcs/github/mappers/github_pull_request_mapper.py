from artifact_gate.core.domain.pull_request import PullRequest, RepositoryRef
from artifact_gate.infrastructure.tools.vcs.github.dtos.github_pull_request_dto import (
    GitHubPullRequestDTO,
    GitHubRepositoryDTO,
)


class GitHubPullRequestMapper:
    @staticmethod
    def to_repository(dto: GitHubRepositoryDTO) -> RepositoryRef:
        return RepositoryRef(owner=dto.owner.login, name=dto.name)

    @staticmethod
    def to_domain(dto: GitHubPullRequestDTO, repository: RepositoryRef) -> PullRequest:
        return PullRequest(
            repository=repository,
            number=dto.number,
            title=dto.title,
            html_url=dto.html_url,
            head_sha=dto.head.sha,
            base_sha=dto.base.sha,
            head_ref=dto.head.ref,
            body=dto.body,
            labels=tuple(label.name for label in dto.labels),
            merged=bool(dto.merged),
        )
