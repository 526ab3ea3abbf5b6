from dataclasses import dataclass, field
from enum import StrEnum


class CheckState(StrEnum):
    """Gate state machine: PENDING, then exactly one terminal state."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class CheckAction:
    """A button rendered on a completed check run."""

    label: str
    description: str
    identifier: str


@dataclass(frozen=True)
class CheckRunUpdate:
    name: str
    state: CheckState
    title: str
    summary: str
    actions: tuple[CheckAction, ...] = field(default_factory=tuple)
