from dataclasses import dataclass


@dataclass(frozen=True)
class SubCheckReport:
    """Rendered markdown section and verdict of one pull request source."""

    message: str = ""
    is_success: bool = True


@dataclass(frozen=True)
class StatusReport:
    overall_success: bool
    rendered_markdown: str
