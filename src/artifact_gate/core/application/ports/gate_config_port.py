from abc import ABC, abstractmethod

from artifact_gate.core.domain.gate import GateConfig
from artifact_gate.core.domain.pull_request import RepositoryRef


class GateConfigPort(ABC):
    @abstractmethod
    async def load(self, repository: RepositoryRef) -> GateConfig | None:
        """Resolve the gate config for ``repository``; ``None`` when none is defined."""
