from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RallySettings(BaseSettings):
    """Process-wide Rally WSAPI connection defaults; a repo config may override them."""

    # ── Connection ──
    server: str = Field(default="https://rally1.rallydev.com", alias="RALLY_SERVER")
    username: str | None = Field(default=None, alias="RALLY_USERNAME")
    password: SecretStr | None = Field(default=None, alias="RALLY_PASSWORD")
    api_key: SecretStr | None = Field(default=None, alias="RALLY_API_KEY")
    api_version: str = Field(default="v2.0", alias="RALLY_API_VERSION")
    max_attempts: int = Field(default=1, ge=1, alias="RALLY_MAX_ATTEMPTS")
    timeout_seconds: float = Field(default=30.0, alias="RALLY_TIMEOUT_SECONDS")

    # ── Integration headers ──
    integration_name: str = Field(default="Artifact Gate", alias="RALLY_INTEGRATION_NAME")
    integration_vendor: str = Field(default="GitHub", alias="RALLY_INTEGRATION_VENDOR")
    integration_version: str = Field(default="1.0", alias="RALLY_INTEGRATION_VERSION")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
