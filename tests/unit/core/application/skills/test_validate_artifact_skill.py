"""Unit tests: ValidateArtifactSkill (tracker mocked)."""

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest
from factories import NOT_FOUND, found, remote_artifact

from artifact_gate.core.application.skills.validation.validate_artifact_skill import (
    ARTIFACT_FIELDS,
    ValidateArtifactInput,
    ValidateArtifactSkill,
)
from artifact_gate.core.application.tools.common.exceptions import TrackerTransportError
from artifact_gate.core.domain.artifact import SourceProperty
from artifact_gate.core.domain.gate import GateConfig


@pytest.fixture()
def skill(mock_tracker: AsyncMock) -> ValidateArtifactSkill:
    return ValidateArtifactSkill(mock_tracker)


def _input(key: str | None, config: GateConfig) -> ValidateArtifactInput:
    return ValidateArtifactInput(key=key, source_property=SourceProperty.TITLE, config=config)


async def test_none_key_yields_none(skill, mock_tracker, gate_config):
    assert await skill.execute(_input(None, gate_config)) is None
    mock_tracker.query_artifact.assert_not_awaited()


async def test_existing_artifact_in_allowed_state_is_valid(skill, mock_tracker, gate_config):
    artifact = remote_artifact("US1234", state="Defined")
    mock_tracker.query_artifact.return_value = found(artifact)

    result = await skill.execute(_input("US1234", gate_config))

    assert result is not None
    assert result.is_valid
    assert result.status == "Defined"
    assert result.project_name == "Sample Project"
    assert result.ref == artifact.ref
    assert result.artifact == artifact
    mock_tracker.query_artifact.assert_awaited_once_with(
        "hierarchicalrequirement", "1234", "/workspace/12345", ARTIFACT_FIELDS
    )


async def test_state_outside_allowed_list_is_invalid(skill, mock_tracker, gate_config):
    mock_tracker.query_artifact.return_value = found(remote_artifact("US1", state="Accepted"))

    result = await skill.execute(_input("US1", gate_config))

    assert result is not None
    assert not result.is_valid
    assert result.status == "Accepted"
    assert result.found


async def test_project_outside_allowed_list_is_invalid(skill, mock_tracker, gate_config):
    config = replace(gate_config, allowed_projects=("Payments",))
    mock_tracker.query_artifact.return_value = found(remote_artifact("US1", project="Billing"))

    result = await skill.execute(_input("US1", config))

    assert result is not None
    assert not result.is_valid
    assert result.project_name == "Billing"


async def test_zero_results_yield_missing_without_raising(skill, mock_tracker, gate_config):
    mock_tracker.query_artifact.return_value = NOT_FOUND

    result = await skill.execute(_input("US9999", gate_config))

    assert result is not None
    assert not result.is_valid
    assert result.status == "missing"
    assert result.project_name == "missing"
    assert not result.found


async def test_unknown_prefix_is_missing_without_tracker_call(skill, mock_tracker, gate_config):
    result = await skill.execute(_input("XY12", gate_config))

    assert result is not None
    assert result.status == "missing"
    mock_tracker.query_artifact.assert_not_awaited()


async def test_tracker_failure_propagates(skill, mock_tracker, gate_config):
    mock_tracker.query_artifact.side_effect = TrackerTransportError(
        provider="Rally", message="down", retryable=True
    )

    with pytest.raises(TrackerTransportError):
        await skill.execute(_input("US1", gate_config))
