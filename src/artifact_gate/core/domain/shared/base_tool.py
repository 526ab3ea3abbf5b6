from abc import ABC, abstractmethod

from artifact_gate.core.domain.shared.tool_type import ToolType


class BaseTool(ABC):
    """Domain-level contract every external tool adapter must satisfy."""

    @property
    @abstractmethod
    def tool_type(self) -> ToolType: ...

    async def connect(self) -> None:
        """Open a persistent connection (no-op by default; HTTP clients override)."""
        return

    async def disconnect(self) -> None:
        """Close the persistent connection (no-op by default; HTTP clients override)."""
        return
