from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from artifact_gate.infrastructure.config.gate.gate_settings import GateSettings
from artifact_gate.infrastructure.config.main_settings import Settings
from artifact_gate.infrastructure.tools.tracker.rally.config.rally_settings import RallySettings
from artifact_gate.infrastructure.tools.vcs.github.config.github_settings import GitHubSettings


class AppConfig(BaseSettings):
    """Master config class combining all sub-settings."""

    app: Settings = Field(default_factory=Settings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    rally: RallySettings = Field(default_factory=RallySettings)
    gate: GateSettings = Field(default_factory=GateSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    return AppConfig()
