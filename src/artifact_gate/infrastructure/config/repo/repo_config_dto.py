from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from artifact_gate.core.domain.artifact.key_extractor import DEFAULT_PROMOTION_COMMANDS
from artifact_gate.core.domain.gate import DEFAULT_CHECKS_NAME


def _none_to_list(value: Any) -> Any:
    """A YAML key left blank parses as ``None``; treat it as an empty list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class RallyBlockDTO(BaseModel):
    """The ``rally`` block of a repository config file."""

    server: str | None = None
    workspace: str | None = None
    projects: list[str] = []
    objects: list[str] = []
    states: list[str] = []
    username: str | None = None
    password: str | None = None
    api_key: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("workspace", mode="before")
    @classmethod
    def stringify_workspace(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("projects", "objects", "states", mode="before")
    @classmethod
    def blank_list(cls, value: Any) -> Any:
        return _none_to_list(value)


class RepoConfigDTO(BaseModel):
    """``.github/rally.yml`` after the org default has been merged in."""

    checks_name: str = Field(DEFAULT_CHECKS_NAME, alias="checksName")
    check_pr_body: bool = Field(False, alias="checkPRBody")
    check_pr_title: bool = Field(False, alias="checkPRTitle")
    check_commit_messages: bool = Field(False, alias="checkCommitMessages")
    check_pr_labels: bool = Field(False, alias="checkPRLabels")
    comment_on_pull: bool = Field(False, alias="commentOnPull")
    merge_on_pr_body: bool = Field(False, alias="mergeOnPRBody")
    promotion_commands: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROMOTION_COMMANDS), alias="promotionCommands"
    )
    rally: RallyBlockDTO = Field(default_factory=RallyBlockDTO)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("promotion_commands", mode="before")
    @classmethod
    def blank_commands(cls, value: Any) -> Any:
        return _none_to_list(value)

    @field_validator("rally", mode="before")
    @classmethod
    def blank_rally(cls, value: Any) -> Any:
        return {} if value is None else value
