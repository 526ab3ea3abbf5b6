from pydantic import BaseModel, ConfigDict


class GitHubUserDTO(BaseModel):
    login: str = ""

    model_config = ConfigDict(extra="ignore")


class GitHubRepositoryDTO(BaseModel):
    name: str
    full_name: str | None = None
    owner: GitHubUserDTO

    model_config = ConfigDict(extra="ignore")


class GitHubLabelDTO(BaseModel):
    name: str

    model_config = ConfigDict(extra="ignore")


class GitHubBranchRefDTO(BaseModel):
    ref: str = ""
    sha: str

    model_config = ConfigDict(extra="ignore")


class GitHubPullRequestDTO(BaseModel):
    """Pull request object as sent in webhooks and returned by ``GET /pulls/{n}``."""

    number: int
    title: str = ""
    body: str | None = None
    html_url: str
    head: GitHubBranchRefDTO
    base: GitHubBranchRefDTO
    labels: list[GitHubLabelDTO] = []
    merged: bool | None = False

    model_config = ConfigDict(extra="ignore")
