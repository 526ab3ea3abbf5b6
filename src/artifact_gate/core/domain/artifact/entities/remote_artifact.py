from dataclasses import dataclass, field


@dataclass(frozen=True)
class RemoteArtifact:
    """Tracker-side view of a work item, as returned by an artifact query."""

    ref: str
    formatted_id: str
    name: str = ""
    schedule_state: str = ""
    project_name: str = ""
    connections_ref: str | None = None


@dataclass(frozen=True)
class RemoteConnection:
    """A pull request link already stored on an artifact."""

    url: str
    name: str = ""


@dataclass(frozen=True)
class ArtifactQueryResult:
    count: int
    results: tuple[RemoteArtifact, ...] = field(default_factory=tuple)

    @property
    def first(self) -> RemoteArtifact | None:
        return self.results[0] if self.results else None
