from artifact_gate.core.domain.gate.gate_config import (
    ANY_PROJECT,
    DEFAULT_CHECKS_NAME,
    GateConfig,
    TrackerOverrides,
)
from artifact_gate.core.domain.gate.source_results import SourceResults, ValidationOutcome
from artifact_gate.core.domain.gate.status_report import StatusReport, SubCheckReport
from artifact_gate.core.domain.gate.value_objects import (
    CheckAction,
    CheckRunUpdate,
    CheckState,
    OverrideRequest,
)

__all__ = [
    "ANY_PROJECT",
    "DEFAULT_CHECKS_NAME",
    "CheckAction",
    "CheckRunUpdate",
    "CheckState",
    "GateConfig",
    "OverrideRequest",
    "SourceResults",
    "StatusReport",
    "SubCheckReport",
    "TrackerOverrides",
    "ValidationOutcome",
]
