"""Application exception hierarchy.

Business outcomes (missing or invalid artifacts) are never raised; only
infrastructure failures and broken preconditions travel through these types.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application-layer errors."""

    def __init__(self, message: str = "", *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


class WorkflowExecutionError(ApplicationError):
    """Raised when a gate workflow fails at any step."""


class WorkflowHaltedException(ApplicationError):
    """Benign early exit: the workflow decided there is nothing to do.

    Example: the repository has no gate config and enforcement is off.
    """


class InvalidTargetStateError(ApplicationError, ValueError):
    """A promotion was requested to a state the tracker workflow does not define."""


class InvalidGateConfigError(ApplicationError):
    """A repository gate config exists but cannot be parsed or validated."""
