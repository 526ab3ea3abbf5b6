"""Unit tests: ValidatePullRequestSkill end to end over the real check skills (tools mocked)."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest
from factories import found, remote_artifact

from artifact_gate.core.application.skills.gate_skills import build_gate_skills
from artifact_gate.core.application.skills.validation.validate_pull_request_skill import (
    ValidatePullRequestInput,
    ValidatePullRequestSkill,
)
from artifact_gate.core.application.tools.common.exceptions import TrackerAuthenticationError
from artifact_gate.core.domain.pull_request import CommitSummary


@pytest.fixture()
def skill(mock_tracker: AsyncMock, mock_vcs: AsyncMock) -> ValidatePullRequestSkill:
    return build_gate_skills(mock_tracker, mock_vcs).validate_pull_request


async def test_title_pass(skill, mock_tracker, gate_config, pull_request):
    mock_tracker.query_artifact.return_value = found(remote_artifact("US1234"))

    outcome = await skill.execute(ValidatePullRequestInput(pull_request, gate_config))

    assert outcome.report.overall_success
    assert [r.key for r in outcome.results.title] == ["US1234"]
    assert outcome.results.body == ()


async def test_title_missing_artifact_fails(skill, gate_config, pull_request):
    pr = replace(pull_request, title="US9999 nope")

    outcome = await skill.execute(ValidatePullRequestInput(pr, gate_config))

    assert not outcome.report.overall_success
    assert outcome.results.title[0].status == "missing"


async def test_commit_without_artifact_fails(skill, mock_tracker, mock_vcs, gate_config, pull_request):
    config = replace(gate_config, check_pr_title=False, check_commit_messages=True)
    mock_vcs.get_commit_range.return_value = [
        CommitSummary(sha="a1b2c3d4e5", message="US1234 add endpoint"),
        CommitSummary(sha="f6e5d4c3b2", message="cleanup"),
    ]
    mock_tracker.query_artifact.return_value = found(remote_artifact("US1234"))

    outcome = await skill.execute(ValidatePullRequestInput(pull_request, config))

    assert not outcome.report.overall_success
    assert len(outcome.results.commits.without_artifact) == 1
    assert "[f6e5d4](" in outcome.report.rendered_markdown


async def test_disabled_sources_are_not_queried(skill, mock_tracker, mock_vcs, gate_config, pull_request):
    config = replace(gate_config, check_pr_title=False)

    outcome = await skill.execute(ValidatePullRequestInput(pull_request, config))

    assert outcome.report.overall_success
    mock_tracker.query_artifact.assert_not_awaited()
    mock_vcs.get_commit_range.assert_not_awaited()


async def test_labels_and_body_are_checked_when_enabled(skill, mock_tracker, gate_config, pull_request):
    config = replace(gate_config, check_pr_labels=True, check_pr_body=True)
    pr = replace(pull_request, body="Relates to DE12", labels=("US1234",))
    mock_tracker.query_artifact.return_value = found(remote_artifact("X"))

    outcome = await skill.execute(ValidatePullRequestInput(pr, config))

    assert [r.key for r in outcome.results.labels] == ["US1234"]
    assert [r.key for r in outcome.results.body] == ["DE12"]
    assert outcome.report.overall_success


async def test_concurrency_bound_is_applied(mock_tracker, mock_vcs, gate_config, pull_request):
    skill = build_gate_skills(mock_tracker, mock_vcs, max_concurrent_validations=1).validate_pull_request
    pr = replace(pull_request, title="US1 US2 US3")
    mock_tracker.query_artifact.return_value = found(remote_artifact("US1"))

    outcome = await skill.execute(ValidatePullRequestInput(pr, gate_config))

    assert len(outcome.results.title) == 3
    assert mock_tracker.query_artifact.await_count == 3


async def test_tracker_failure_aborts_other_sources(skill, mock_tracker, gate_config, pull_request):
    config = replace(gate_config, check_pr_body=True)
    pr = replace(pull_request, title="US1 refunds", body="Also touches US2")
    completed: list[str] = []

    async def query(artifact_type, number, workspace, fields):
        if number == "1":
            raise TrackerAuthenticationError(provider="rally", message="unauthorized", status_code=401)
        await asyncio.sleep(0.05)
        completed.append(number)
        return found(remote_artifact(f"US{number}"))

    mock_tracker.query_artifact.side_effect = query

    with pytest.raises(TrackerAuthenticationError):
        await skill.execute(ValidatePullRequestInput(pr, config))
    await asyncio.sleep(0.1)

    assert completed == []
