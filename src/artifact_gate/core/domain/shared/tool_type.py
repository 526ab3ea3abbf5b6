from enum import StrEnum, auto


class ToolType(StrEnum):
    """Classifies every remote system the gate interacts with."""

    VCS = auto()
    TRACKER = auto()
