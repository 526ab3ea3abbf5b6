from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GateSettings(BaseSettings):
    """Org-wide gate behaviour and where repository configs are looked up."""

    enforce_all_repos: bool = Field(default=False, alias="ENFORCE_ALL_REPOS")
    org_config_repo_name: str = Field(default=".github", alias="ORG_CONFIG_REPO_NAME")
    config_file: str = Field(default="rally.yml", alias="GATE_CONFIG_FILE")
    max_concurrent_validations: int = Field(
        default=0, ge=0, alias="GATE_MAX_CONCURRENT_VALIDATIONS"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def repo_config_path(self) -> str:
        return f".github/{self.config_file}"
