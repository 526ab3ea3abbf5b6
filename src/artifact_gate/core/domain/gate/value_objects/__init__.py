from artifact_gate.core.domain.gate.value_objects.check_run import (
    CheckAction,
    CheckRunUpdate,
    CheckState,
)
from artifact_gate.core.domain.gate.value_objects.override_request import OverrideRequest

__all__ = ["CheckAction", "CheckRunUpdate", "CheckState", "OverrideRequest"]
