from dataclasses import dataclass

from artifact_gate.core.application.tools.common.exceptions.infra_error import InfraError


@dataclass(frozen=False, eq=False)
class ProviderError(InfraError):
    """A remote tool (tracker or VCS) failed; fatal for the current invocation."""

    provider: str
    message: str
    retryable: bool = False
    status_code: int | None = None
    error_code: str | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        code = f" status={self.status_code}" if self.status_code is not None else ""
        return f"{self.provider}: {self.message}{code}"


class TrackerAuthenticationError(ProviderError):
    """The tracker rejected the configured credentials."""


class TrackerTransportError(ProviderError):
    """The tracker could not be reached or answered with a server error."""


class TrackerRequestError(ProviderError):
    """The tracker refused a request it understood (validation, permissions on an object)."""


class DuplicateConnectionError(ProviderError):
    """The pull request connection already exists on the artifact."""


class VcsTransportError(ProviderError):
    """The VCS host could not be reached or rejected the request."""
