from artifact_gate.infrastructure.observability.logging.correlation_middleware import (
    CorrelationMiddleware,
)
from artifact_gate.infrastructure.observability.logging.gate_schema_processor import (
    gate_schema_processor,
)

__all__ = [
    "CorrelationMiddleware",
    "gate_schema_processor",
]
