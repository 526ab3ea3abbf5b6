from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubSettings(BaseSettings):
    """Settings for the GitHub REST API and webhook deliveries."""

    api_url: str = Field(default="https://api.github.com", alias="GITHUB_API_URL")
    token: SecretStr | None = Field(default=None, alias="GITHUB_TOKEN")
    webhook_secret: SecretStr | None = Field(default=None, alias="GITHUB_WEBHOOK_SECRET")
    app_id: str = Field(default="", alias="APP_ID")
    max_attempts: int = Field(default=1, ge=1, alias="GITHUB_MAX_ATTEMPTS")
    timeout_seconds: float = Field(default=30.0, alias="GITHUB_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
