"""Pure functions that fold per-source validation results into one markdown report."""

from collections.abc import Sequence

from artifact_gate.core.domain.artifact import CommitCheckResult, ValidationResult
from artifact_gate.core.domain.artifact.entities.validation_result import FAILED_ICON, MISSING
from artifact_gate.core.domain.gate import (
    ANY_PROJECT,
    GateConfig,
    SourceResults,
    StatusReport,
    SubCheckReport,
)

AMEND_COMMIT_HELP_URL = (
    "https://docs.github.com/en/pull-requests/committing-changes-to-your-project/"
    "creating-and-editing-commits/changing-a-commit-message"
)

INTRO = (
    "This repository requires a valid Rally artifact to be present in the following "
    "portions of this pull request before merge will be allowed:"
)


def build_status_report(config: GateConfig, results: SourceResults) -> StatusReport:
    """Aggregate the enabled sub-checks; disabled ones pass vacuously and are not rendered."""
    sections: list[SubCheckReport] = []
    if config.check_pr_labels:
        sections.append(format_text_source(config, results.labels, "labels"))
    if config.check_pr_body:
        sections.append(format_text_source(config, results.body, "body"))
    if config.check_pr_title:
        sections.append(format_text_source(config, results.title, "title"))
    if config.check_commit_messages:
        sections.append(format_commits(config, results.commits))

    overall_success = all(section.is_success for section in sections)
    document = "\n".join(
        [
            INTRO,
            "",
            _checklist(config),
            "",
            "_Valid artifact states for this repository_:",
            "",
            _bullet_list(config.allowed_states),
            "",
            "_Valid projects for this repository_:",
            "",
            _bullet_list(config.allowed_projects or (ANY_PROJECT,)),
            "",
            *(section.message for section in sections),
        ]
    )
    return StatusReport(overall_success=overall_success, rendered_markdown=document.rstrip() + "\n")


def format_text_source(
    config: GateConfig, results: Sequence[ValidationResult], where: str
) -> SubCheckReport:
    """Render the table for a title, body or labels sub-check."""
    lines = [f"### Pull Request {where} validation", ""]
    if not results:
        lines.append(f"{FAILED_ICON} No valid artifacts were found in the pull request {where}")
        lines.append("")
        return SubCheckReport(message="\n".join(lines), is_success=False)

    lines.append(
        f"The following Rally artifacts have been found in the {where} of this pull request, "
        "with validation status below"
    )
    lines.append("")
    lines.extend(_table_header(config, with_commit=False))
    lines.extend(_result_row(config, result) for result in results)
    lines.append("")
    return SubCheckReport(
        message="\n".join(lines), is_success=all(r.is_valid for r in results)
    )


def format_commits(config: GateConfig, commits: CommitCheckResult) -> SubCheckReport:
    """Render the commit table; any commit without an artifact fails the sub-check."""
    lines = ["### Commit validation", ""]
    if commits.is_empty:
        lines.append(f"{FAILED_ICON} No valid artifacts were found in the commit messages")
        lines.append("")
        return SubCheckReport(message="\n".join(lines), is_success=False)

    lines.extend(_table_header(config, with_commit=True))
    is_success = True
    for record in commits.with_artifact:
        result = record.validation
        if result is None:
            continue
        is_success = is_success and result.is_valid
        lines.append(_result_row(config, result, commit=f"[{record.short_sha}]({record.commit_url})"))

    if commits.without_artifact:
        is_success = False
        shas = "".join(f"[{c.short_sha}]({c.commit_url})<br>" for c in commits.without_artifact)
        cells = [f"`{MISSING}`", shas, f"`{MISSING}`"]
        if config.project_scoped:
            cells.append(f"`{MISSING}`")
        cells.append(f"{FAILED_ICON} `failed`")
        lines.append(_row(cells))
        lines.append("")
        lines.append(
            f"**Note:** You can [amend your commit message]({AMEND_COMMIT_HELP_URL}) if needed"
        )
    lines.append("")
    return SubCheckReport(message="\n".join(lines), is_success=is_success)


def _checklist(config: GateConfig) -> str:
    entries = (
        (config.check_pr_labels, "Pull Request Labels"),
        (config.check_pr_body, "Pull Request Body"),
        (config.check_pr_title, "Pull Request Title"),
        (config.check_commit_messages, "Commit Messages"),
    )
    return "\n".join(f"- [{'x' if enabled else ' '}] {label}" for enabled, label in entries)


def _bullet_list(values: Sequence[str]) -> str:
    return "\n".join(f"- [x] `{value}`" for value in dict.fromkeys(values))


def _table_header(config: GateConfig, with_commit: bool) -> list[str]:
    columns = ["Artifact"]
    if with_commit:
        columns.append("Commit SHA")
    columns.append("Rally Status")
    if config.project_scoped:
        columns.append("Project")
    columns.append("Validation")
    return [_row(columns), _row(["---"] * len(columns))]


def _result_row(config: GateConfig, result: ValidationResult, commit: str | None = None) -> str:
    cells = [result.key]
    if commit is not None:
        cells.append(commit)
    cells.append(f"`{result.status}`")
    if config.project_scoped:
        cells.append(f"`{result.project_name}`")
    cells.append(f"{result.status_icon} `{result.validation_label}`")
    return _row(cells)


def _row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"
