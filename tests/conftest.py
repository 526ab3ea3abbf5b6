from unittest.mock import AsyncMock, MagicMock

import pytest
from factories import NOT_FOUND

from artifact_gate.core.application.tools import TrackerTool, VcsTool
from artifact_gate.core.domain.gate import GateConfig
from artifact_gate.core.domain.pull_request import PullRequest, RepositoryRef


@pytest.fixture
def repository() -> RepositoryRef:
    return RepositoryRef(owner="acme", name="payments")


@pytest.fixture
def gate_config() -> GateConfig:
    return GateConfig(
        check_pr_title=True,
        objects=("defect", "userstory"),
        allowed_states=("Defined", "In-Progress"),
        workspace="12345",
    )


@pytest.fixture
def pull_request(repository: RepositoryRef) -> PullRequest:
    return PullRequest(
        repository=repository,
        number=7,
        title="US1234 add refunds endpoint",
        html_url="https://github.com/acme/payments/pull/7",
        head_sha="abcdef1234567890",
        base_sha="0123456789abcdef",
        head_ref="feature/refunds",
        body="Implements the refunds endpoint",
    )


@pytest.fixture
def mock_tracker() -> AsyncMock:
    tracker = AsyncMock(spec=TrackerTool)
    tracker.query_artifact.return_value = NOT_FOUND
    tracker.query_connections.return_value = []
    return tracker


@pytest.fixture
def mock_vcs() -> AsyncMock:
    vcs = AsyncMock(spec=VcsTool)
    vcs.get_commit_range.return_value = []
    return vcs


@pytest.fixture
def mock_config_port(gate_config: GateConfig) -> MagicMock:
    port = MagicMock()
    port.load = AsyncMock(return_value=gate_config)
    return port
