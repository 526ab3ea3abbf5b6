"""Unit tests: MergePromotionWorkflow and ManualOverrideWorkflow (all tools mocked)."""

from dataclasses import replace

import pytest
from factories import found, remote_artifact

from artifact_gate.core.application.exceptions import (
    InvalidGateConfigError,
    WorkflowExecutionError,
)
from artifact_gate.core.application.skills.gate_skills import build_gate_skills
from artifact_gate.core.application.tools.common.exceptions import TrackerTransportError
from artifact_gate.core.application.workflows.merge.merge_promotion_workflow import (
    MergePromotionWorkflow,
)
from artifact_gate.core.application.workflows.override.manual_override_workflow import (
    ManualOverrideWorkflow,
)
from artifact_gate.core.domain.gate import DEFAULT_CHECKS_NAME, CheckState, OverrideRequest


# ── Fixtures ──


@pytest.fixture()
def workflow(mock_vcs, mock_config_port, mock_tracker) -> MergePromotionWorkflow:
    return MergePromotionWorkflow(
        vcs=mock_vcs,
        config_port=mock_config_port,
        tracker_factory=lambda config: mock_tracker,
        skills_factory=lambda tracker: build_gate_skills(tracker, mock_vcs),
    )


@pytest.fixture()
def merged_pr(pull_request):
    return replace(pull_request, merged=True, body="Ships refunds.\n\n/completes US1234")


@pytest.fixture()
def promoting(mock_config_port, gate_config):
    mock_config_port.load.return_value = replace(gate_config, merge_on_pr_body=True)
    return mock_config_port


# ── Merge promotion ──


async def test_merged_pr_promotes_completed_artifacts(workflow, promoting, mock_tracker, merged_pr):
    artifact = remote_artifact("US1234", state="In-Progress")
    mock_tracker.query_artifact.return_value = found(artifact)

    await workflow.execute(merged_pr)

    mock_tracker.update_artifact_state.assert_awaited_once_with(artifact.ref, "Completed")
    mock_tracker.disconnect.assert_awaited_once()


async def test_closed_without_merge_is_ignored(workflow, promoting, mock_tracker, merged_pr):
    await workflow.execute(replace(merged_pr, merged=False))

    promoting.load.assert_not_awaited()
    mock_tracker.update_artifact_state.assert_not_awaited()


async def test_promotion_disabled_skips_tracker(workflow, mock_tracker, merged_pr):
    await workflow.execute(merged_pr)

    mock_tracker.connect.assert_not_awaited()
    mock_tracker.update_artifact_state.assert_not_awaited()


async def test_no_config_halts(workflow, mock_config_port, mock_vcs, mock_tracker, merged_pr):
    mock_config_port.load.return_value = None

    await workflow.execute(merged_pr)

    mock_vcs.emit_check_status.assert_not_awaited()
    mock_tracker.connect.assert_not_awaited()


async def test_tracker_failure_raises(workflow, promoting, mock_tracker, merged_pr):
    mock_tracker.query_artifact.side_effect = TrackerTransportError(provider="Rally", message="down")

    with pytest.raises(WorkflowExecutionError):
        await workflow.execute(merged_pr)

    mock_tracker.disconnect.assert_awaited_once()


async def test_invalid_config_raises_without_touching_tracker(
    workflow, mock_config_port, mock_tracker, merged_pr
):
    mock_config_port.load.side_effect = InvalidGateConfigError("Invalid gate config")

    with pytest.raises(WorkflowExecutionError) as exc_info:
        await workflow.execute(merged_pr)

    assert isinstance(exc_info.value.__cause__, InvalidGateConfigError)
    mock_tracker.connect.assert_not_awaited()


# ── Manual override ──


@pytest.fixture()
def override_request(repository) -> OverrideRequest:
    return OverrideRequest(repository=repository, head_sha="abcdef1234567890", requested_by="octocat")


async def test_override_turns_check_green(mock_vcs, mock_config_port, override_request):
    workflow = ManualOverrideWorkflow(vcs=mock_vcs, config_port=mock_config_port)

    await workflow.execute(override_request)

    repository, head_sha, update = mock_vcs.emit_check_status.await_args.args
    assert (repository, head_sha) == (override_request.repository, "abcdef1234567890")
    assert update.state is CheckState.SUCCESS
    assert update.name == DEFAULT_CHECKS_NAME
    assert "@octocat" in update.title
    assert "@octocat" in update.summary
    assert update.actions == ()


async def test_override_uses_configured_checks_name(mock_vcs, mock_config_port, gate_config, override_request):
    mock_config_port.load.return_value = replace(gate_config, checks_name="rally/gate")
    workflow = ManualOverrideWorkflow(vcs=mock_vcs, config_port=mock_config_port)

    await workflow.execute(override_request)

    assert mock_vcs.emit_check_status.await_args.args[2].name == "rally/gate"


async def test_override_after_invalid_config_targets_default_check(
    mock_vcs, mock_config_port, override_request
):
    mock_config_port.load.side_effect = InvalidGateConfigError("Invalid gate config")
    workflow = ManualOverrideWorkflow(vcs=mock_vcs, config_port=mock_config_port)

    await workflow.execute(override_request)

    update = mock_vcs.emit_check_status.await_args.args[2]
    assert update.state is CheckState.SUCCESS
    assert update.name == DEFAULT_CHECKS_NAME
