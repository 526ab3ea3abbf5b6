from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-level settings.

    Tool-specific config lives in isolated settings classes
    (GitHubSettings, RallySettings, GateSettings).
    """

    app_name: str = Field(default="Artifact Gate", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    trace_to_console: bool = Field(default=False, alias="OTEL_CONSOLE_EXPORT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
