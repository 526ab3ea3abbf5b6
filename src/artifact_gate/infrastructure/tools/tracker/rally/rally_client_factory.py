from artifact_gate.core.domain.gate import GateConfig
from artifact_gate.infrastructure.common.retry.retry_policy import RetryPolicy
from artifact_gate.infrastructure.tools.tracker.rally.config.rally_settings import RallySettings
from artifact_gate.infrastructure.tools.tracker.rally.rally_http_client import RallyHttpClient


def build_rally_client(settings: RallySettings, config: GateConfig) -> RallyHttpClient:
    """Process defaults from the environment, replaced by any value the repo config sets."""
    overrides = config.tracker
    api_key = overrides.api_key or (
        settings.api_key.get_secret_value() if settings.api_key else None
    )
    password = overrides.password or (
        settings.password.get_secret_value() if settings.password else None
    )
    return RallyHttpClient(
        server=overrides.server or settings.server,
        api_version=settings.api_version,
        api_key=api_key,
        username=overrides.username or settings.username,
        password=password,
        integration_headers={
            "X-RallyIntegrationName": settings.integration_name,
            "X-RallyIntegrationVendor": settings.integration_vendor,
            "X-RallyIntegrationVersion": settings.integration_version,
        },
        retry_policy=RetryPolicy(max_attempts=settings.max_attempts),
        timeout_seconds=settings.timeout_seconds,
    )
