from abc import abstractmethod
from collections.abc import Sequence

from artifact_gate.core.domain.artifact import (
    ArtifactQueryResult,
    RemoteArtifact,
    RemoteConnection,
)
from artifact_gate.core.domain.pull_request import PullRequest
from artifact_gate.core.domain.shared.base_tool import BaseTool
from artifact_gate.core.domain.shared.tool_type import ToolType


class TrackerTool(BaseTool):
    """Abstract tool contract for work-tracker interactions.

    Implementations raise ``ProviderError`` subclasses for infrastructure
    failures and return empty results for artifacts that do not exist.
    """

    @property
    def tool_type(self) -> ToolType:
        return ToolType.TRACKER

    @abstractmethod
    async def query_artifact(
        self,
        artifact_type: str,
        number: str,
        workspace: str,
        fields: Sequence[str],
    ) -> ArtifactQueryResult:
        """Find artifacts of ``artifact_type`` whose formatted id number equals ``number``."""

    @abstractmethod
    async def query_connections(
        self, artifact: RemoteArtifact, workspace: str
    ) -> list[RemoteConnection]:
        """List the pull request connections stored on ``artifact``."""

    @abstractmethod
    async def create_connection(self, artifact_ref: str, pull_request: PullRequest) -> None:
        """Record ``pull_request`` as a connection of the artifact.

        Raises ``DuplicateConnectionError`` when the tracker reports it already exists.
        """

    @abstractmethod
    async def update_artifact_state(self, ref: str, new_state: str) -> None:
        """Move the artifact identified by ``ref`` to ``new_state``."""
