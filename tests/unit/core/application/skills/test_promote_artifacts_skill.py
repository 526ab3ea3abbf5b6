"""Unit tests: PromoteArtifactsSkill (tracker mocked)."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest
from factories import NOT_FOUND, found, remote_artifact

from artifact_gate.core.application.exceptions import InvalidTargetStateError
from artifact_gate.core.application.skills.links.promote_artifacts_skill import (
    PromoteArtifactsInput,
    PromoteArtifactsSkill,
)
from artifact_gate.core.application.tools.common.exceptions import TrackerTransportError


@pytest.fixture()
def skill(mock_tracker: AsyncMock) -> PromoteArtifactsSkill:
    return PromoteArtifactsSkill(mock_tracker)


@pytest.fixture()
def promoting_config(gate_config):
    return replace(gate_config, merge_on_pr_body=True)


async def test_completes_command_promotes_artifact(skill, mock_tracker, promoting_config, pull_request):
    artifact = remote_artifact("US1234", state="In-Progress", oid=55)
    mock_tracker.query_artifact.return_value = found(artifact)
    pr = replace(pull_request, body="Done.\n/completes US1234", merged=True)

    promoted = await skill.execute(PromoteArtifactsInput(pull_request=pr, config=promoting_config))

    assert promoted == ["US1234"]
    mock_tracker.update_artifact_state.assert_awaited_once_with(artifact.ref, "Completed")


async def test_disabled_promotion_returns_nothing(skill, mock_tracker, gate_config, pull_request):
    pr = replace(pull_request, body="/completes US1234")

    assert await skill.execute(PromoteArtifactsInput(pull_request=pr, config=gate_config)) == []
    mock_tracker.query_artifact.assert_not_awaited()


async def test_invalid_target_state_raises_value_error(skill, promoting_config, pull_request):
    with pytest.raises(ValueError) as exc_info:
        await skill.execute(
            PromoteArtifactsInput(
                pull_request=pull_request, config=promoting_config, target_state="Released"
            )
        )

    assert isinstance(exc_info.value, InvalidTargetStateError)
    assert "Accepted" in exc_info.value.context["valid_states"]


async def test_artifact_not_found_is_skipped(skill, mock_tracker, promoting_config, pull_request):
    mock_tracker.query_artifact.return_value = NOT_FOUND
    pr = replace(pull_request, body="/completes US404")

    assert await skill.execute(PromoteArtifactsInput(pull_request=pr, config=promoting_config)) == []
    mock_tracker.update_artifact_state.assert_not_awaited()


async def test_body_without_command_promotes_nothing(skill, mock_tracker, promoting_config, pull_request):
    pr = replace(pull_request, body="Mentions US1234 but does not complete it")

    assert await skill.execute(PromoteArtifactsInput(pull_request=pr, config=promoting_config)) == []
    mock_tracker.query_artifact.assert_not_awaited()


async def test_every_matched_key_is_promoted(skill, mock_tracker, promoting_config, pull_request):
    mock_tracker.query_artifact.return_value = found(remote_artifact("any"))
    pr = replace(pull_request, body="/completes US1\n/completes DE2")

    promoted = await skill.execute(PromoteArtifactsInput(pull_request=pr, config=promoting_config))

    assert sorted(promoted) == ["DE2", "US1"]
    assert mock_tracker.update_artifact_state.await_count == 2


async def test_failed_lookup_stops_remaining_promotions(skill, mock_tracker, promoting_config, pull_request):
    async def query(artifact_type, number, workspace, fields):
        if number == "1":
            raise TrackerTransportError(provider="rally", message="bad gateway", status_code=502)
        await asyncio.sleep(0.05)
        return found(remote_artifact(f"US{number}"))

    mock_tracker.query_artifact.side_effect = query
    pr = replace(pull_request, body="/completes US1\n/completes US2")

    with pytest.raises(TrackerTransportError):
        await skill.execute(PromoteArtifactsInput(pull_request=pr, config=promoting_config))
    await asyncio.sleep(0.1)

    mock_tracker.update_artifact_state.assert_not_awaited()
