from abc import abstractmethod

from artifact_gate.core.domain.gate import CheckRunUpdate
from artifact_gate.core.domain.pull_request import CommitSummary, PullRequest, RepositoryRef
from artifact_gate.core.domain.shared.base_tool import BaseTool
from artifact_gate.core.domain.shared.tool_type import ToolType


class VcsTool(BaseTool):
    """Abstract tool contract for the code host the pull requests live on."""

    @property
    def tool_type(self) -> ToolType:
        return ToolType.VCS

    @abstractmethod
    async def get_commit_range(
        self, repository: RepositoryRef, base_sha: str, head_sha: str
    ) -> list[CommitSummary]:
        """Commits reachable from ``head_sha`` but not from ``base_sha``, oldest first."""

    @abstractmethod
    async def get_pull_request(self, repository: RepositoryRef, number: int) -> PullRequest:
        """Fetch the current state of a pull request."""

    @abstractmethod
    async def emit_check_status(
        self, repository: RepositoryRef, head_sha: str, update: CheckRunUpdate
    ) -> None:
        """Create a check run on ``head_sha`` reflecting ``update``."""

    @abstractmethod
    async def post_comment(self, repository: RepositoryRef, number: int, body: str) -> None:
        """Comment on the pull request conversation."""

    @abstractmethod
    async def get_file_text(self, repository: RepositoryRef, path: str) -> str | None:
        """Return a file from the default branch, or ``None`` when it does not exist."""
