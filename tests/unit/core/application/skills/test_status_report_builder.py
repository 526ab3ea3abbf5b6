from dataclasses import replace

from artifact_gate.core.application.skills.report.status_report_builder import (
    build_status_report,
    format_commits,
    format_text_source,
)
from artifact_gate.core.domain.artifact import (
    CommitCheckResult,
    CommitRecord,
    SourceProperty,
    ValidationResult,
)
from artifact_gate.core.domain.gate import GateConfig, SourceResults


def _valid(key: str, source: SourceProperty = SourceProperty.TITLE) -> ValidationResult:
    return ValidationResult(
        key=key, source_property=source, status="Defined", project_name="Sample Project", is_valid=True
    )


def _commit(sha: str, validation: ValidationResult | None = None) -> CommitRecord:
    return CommitRecord(
        sha=sha,
        short_sha=sha[:6],
        message="msg",
        commit_url=f"https://github.com/acme/payments/pull/7/commits/{sha}",
        validation=validation,
    )


def test_title_pass(gate_config):
    report = build_status_report(gate_config, SourceResults(title=(_valid("US1234"),)))

    assert report.overall_success
    assert "### Pull Request title validation" in report.rendered_markdown
    assert "| US1234 | `Defined` | :heavy_check_mark: `passed` |" in report.rendered_markdown


def test_title_missing_artifact_fails(gate_config):
    missing = ValidationResult.missing("US9999", SourceProperty.TITLE)

    report = build_status_report(gate_config, SourceResults(title=(missing,)))

    assert not report.overall_success
    assert "| US9999 | `missing` | :heavy_exclamation_mark: `failed` |" in report.rendered_markdown


def test_enabled_source_without_artifacts_fails(gate_config):
    report = build_status_report(gate_config, SourceResults())

    assert not report.overall_success
    assert "No valid artifacts were found in the pull request title" in report.rendered_markdown


def test_disabled_sources_pass_and_are_not_rendered():
    config = GateConfig(allowed_states=("Defined",))

    report = build_status_report(config, SourceResults())

    assert report.overall_success
    assert "###" not in report.rendered_markdown


def test_failing_data_in_a_disabled_source_changes_nothing(gate_config):
    passing = SourceResults(title=(_valid("US1234"),))
    with_disabled_failures = replace(
        passing,
        labels=(ValidationResult.missing("DE404", SourceProperty.LABEL),),
        body=(ValidationResult.missing("US404", SourceProperty.BODY),),
        commits=CommitCheckResult(without_artifact=(_commit("a1b2c3d4e5"),)),
    )

    baseline = build_status_report(gate_config, passing)
    report = build_status_report(gate_config, with_disabled_failures)

    assert baseline.overall_success
    assert report.overall_success
    assert report.rendered_markdown == baseline.rendered_markdown


def test_checklist_and_allowed_values_are_listed(gate_config):
    report = build_status_report(gate_config, SourceResults(title=(_valid("US1"),)))
    text = report.rendered_markdown

    assert "- [ ] Pull Request Labels" in text
    assert "- [x] Pull Request Title" in text
    assert "- [x] `Defined`" in text
    assert "- [x] `In-Progress`" in text
    assert "- [x] `Any`" in text


def test_project_column_only_when_projects_are_scoped(gate_config):
    unscoped = format_text_source(gate_config, [_valid("US1")], "title")
    scoped = format_text_source(
        replace(gate_config, allowed_projects=("Sample Project",)), [_valid("US1")], "title"
    )

    assert "Project" not in unscoped.message
    assert "| Artifact | Rally Status | Project | Validation |" in scoped.message
    assert "`Sample Project`" in scoped.message


def test_adding_an_invalid_result_never_turns_a_failure_into_success(gate_config):
    invalid = ValidationResult.missing("US2", SourceProperty.BODY)
    config = replace(gate_config, check_pr_body=True)

    passing = build_status_report(
        config, SourceResults(title=(_valid("US1"),), body=(_valid("US3", SourceProperty.BODY),))
    )
    failing = build_status_report(
        config,
        SourceResults(
            title=(_valid("US1"),), body=(_valid("US3", SourceProperty.BODY), invalid)
        ),
    )

    assert passing.overall_success
    assert not failing.overall_success


def test_commit_without_artifact_adds_missing_row(gate_config):
    commits = CommitCheckResult(
        with_artifact=(_commit("aaaaaa11", _valid("US1", SourceProperty.COMMIT_MESSAGE)),),
        without_artifact=(_commit("bbbbbb22"), _commit("cccccc33")),
    )

    section = format_commits(gate_config, commits)

    assert not section.is_success
    assert "| Artifact | Commit SHA | Rally Status | Validation |" in section.message
    assert "[aaaaaa](https://github.com/acme/payments/pull/7/commits/aaaaaa11)" in section.message
    assert (
        "| `missing` | [bbbbbb](https://github.com/acme/payments/pull/7/commits/bbbbbb22)<br>"
        "[cccccc](https://github.com/acme/payments/pull/7/commits/cccccc33)<br> | `missing` |"
        in section.message
    )
    assert "amend your commit message" in section.message


def test_commits_with_valid_artifacts_pass(gate_config):
    commits = CommitCheckResult(
        with_artifact=(_commit("aaaaaa11", _valid("US1", SourceProperty.COMMIT_MESSAGE)),)
    )

    assert format_commits(gate_config, commits).is_success


def test_no_commits_fails(gate_config):
    section = format_commits(gate_config, CommitCheckResult())

    assert not section.is_success
    assert "No valid artifacts were found in the commit messages" in section.message


def test_sections_follow_labels_body_title_commits_order():
    config = GateConfig(
        check_pr_labels=True,
        check_pr_body=True,
        check_pr_title=True,
        check_commit_messages=True,
        allowed_states=("Defined",),
    )

    text = build_status_report(config, SourceResults()).rendered_markdown

    positions = [
        text.index("Pull Request labels validation"),
        text.index("Pull Request body validation"),
        text.index("Pull Request title validation"),
        text.index("### Commit validation"),
    ]
    assert positions == sorted(positions)
