from artifact_gate.core.application.exceptions.gate_exceptions import (
    ApplicationError,
    InvalidGateConfigError,
    InvalidTargetStateError,
    WorkflowExecutionError,
    WorkflowHaltedException,
)

__all__ = [
    "ApplicationError",
    "InvalidGateConfigError",
    "InvalidTargetStateError",
    "WorkflowExecutionError",
    "WorkflowHaltedException",
]
