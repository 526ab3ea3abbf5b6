from dataclasses import dataclass, field


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class CommitSummary:
    sha: str
    message: str


@dataclass(frozen=True)
class PullRequest:
    """Snapshot of the pull request an event refers to."""

    repository: RepositoryRef
    number: int
    title: str
    html_url: str
    head_sha: str
    base_sha: str
    head_ref: str = ""
    body: str | None = None
    labels: tuple[str, ...] = field(default_factory=tuple)
    merged: bool = False

    def commit_url(self, sha: str) -> str:
        return f"{self.html_url}/commits/{sha}"
