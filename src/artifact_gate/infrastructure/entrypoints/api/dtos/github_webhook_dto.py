from pydantic import BaseModel, ConfigDict

from artifact_gate.infrastructure.tools.vcs.github.dtos.github_pull_request_dto import (
    GitHubPullRequestDTO,
    GitHubRepositoryDTO,
    GitHubUserDTO,
)


class PullRequestNumberDTO(BaseModel):
    number: int

    model_config = ConfigDict(extra="ignore")


class GitHubAppDTO(BaseModel):
    id: int | str | None = None

    model_config = ConfigDict(extra="ignore")


class CheckSuiteDTO(BaseModel):
    head_sha: str = ""
    head_branch: str | None = None
    app: GitHubAppDTO | None = None
    pull_requests: list[PullRequestNumberDTO] = []

    model_config = ConfigDict(extra="ignore")


class CheckRunDTO(BaseModel):
    name: str
    head_sha: str
    check_suite: CheckSuiteDTO | None = None

    model_config = ConfigDict(extra="ignore")


class RequestedActionDTO(BaseModel):
    identifier: str


class PullRequestEventDTO(BaseModel):
    action: str
    pull_request: GitHubPullRequestDTO
    repository: GitHubRepositoryDTO
    sender: GitHubUserDTO | None = None

    model_config = ConfigDict(extra="ignore")


class CheckSuiteEventDTO(BaseModel):
    action: str
    check_suite: CheckSuiteDTO
    repository: GitHubRepositoryDTO
    sender: GitHubUserDTO | None = None

    model_config = ConfigDict(extra="ignore")


class CheckRunEventDTO(BaseModel):
    action: str
    check_run: CheckRunDTO
    repository: GitHubRepositoryDTO
    requested_action: RequestedActionDTO | None = None
    sender: GitHubUserDTO | None = None

    model_config = ConfigDict(extra="ignore")
