from artifact_gate.core.application.tools.common.exceptions.domain_error import DomainError
from artifact_gate.core.application.tools.common.exceptions.infra_error import InfraError
from artifact_gate.core.application.tools.common.exceptions.provider_error import (
    DuplicateConnectionError,
    ProviderError,
    TrackerAuthenticationError,
    TrackerRequestError,
    TrackerTransportError,
    VcsTransportError,
)

__all__ = [
    "DomainError",
    "DuplicateConnectionError",
    "InfraError",
    "ProviderError",
    "TrackerAuthenticationError",
    "TrackerRequestError",
    "TrackerTransportError",
    "VcsTransportError",
]
