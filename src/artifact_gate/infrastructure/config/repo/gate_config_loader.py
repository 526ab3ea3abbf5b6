"""Resolves the gate config of a repository from YAML files on GitHub.

Lookup order:
1. ``<org config repo>/.github/rally/<repo>.yml``, else ``<org config repo>/.github/rally.yml``
   provides the org default.
2. ``<repo>/.github/rally.yml`` is merged over that default.

Top-level keys of the repo file replace the default's; the ``rally`` block is
merged key by key.
"""

from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from artifact_gate.core.application.exceptions import InvalidGateConfigError
from artifact_gate.core.application.ports import GateConfigPort
from artifact_gate.core.application.tools import VcsTool
from artifact_gate.core.domain.gate import GateConfig
from artifact_gate.core.domain.pull_request import RepositoryRef
from artifact_gate.infrastructure.config.repo.repo_config_dto import RepoConfigDTO
from artifact_gate.infrastructure.config.repo.repo_config_mapper import RepoConfigMapper

logger = structlog.get_logger()


def merge_config(default: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = {**default, **override}
    default_rally = default.get("rally")
    override_rally = override.get("rally")
    if isinstance(default_rally, dict) and isinstance(override_rally, dict):
        merged["rally"] = {**default_rally, **override_rally}
    return merged


class GateConfigLoader(GateConfigPort):
    def __init__(
        self, vcs: VcsTool, org_config_repo: str = ".github", config_file: str = "rally.yml"
    ) -> None:
        self._vcs = vcs
        self._org_config_repo = org_config_repo
        self._config_file = config_file

    @property
    def repo_config_path(self) -> str:
        return f".github/{self._config_file}"

    async def load(self, repository: RepositoryRef) -> GateConfig | None:
        default = await self._load_org_default(repository)
        own = await self._read_yaml(repository, self.repo_config_path)
        if default is None and own is None:
            logger.info("No gate config found", repository=repository.full_name)
            return None

        merged = merge_config(default or {}, own or {})
        try:
            dto = RepoConfigDTO.model_validate(merged)
        except ValidationError as exc:
            raise InvalidGateConfigError(
                f"Invalid gate config: {exc.error_count()} validation error(s)",
                context={"repository": repository.full_name, "errors": exc.errors()},
            ) from exc
        config = RepoConfigMapper.to_domain(dto)
        logger.info(
            "Gate config resolved",
            repository=repository.full_name,
            has_org_default=default is not None,
            has_repo_file=own is not None,
            checks_name=config.checks_name,
        )
        return config

    async def _load_org_default(self, repository: RepositoryRef) -> dict[str, Any] | None:
        org_repo = RepositoryRef(owner=repository.owner, name=self._org_config_repo)
        per_repo_path = f".github/rally/{repository.name}.yml"
        default = await self._read_yaml(org_repo, per_repo_path)
        if default is not None:
            return default
        logger.info(
            "Config file not found in org repo",
            path=f"{org_repo.full_name}/{per_repo_path}",
        )
        return await self._read_yaml(org_repo, self.repo_config_path)

    async def _read_yaml(self, repository: RepositoryRef, path: str) -> dict[str, Any] | None:
        text = await self._vcs.get_file_text(repository, path)
        if text is None:
            return None
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise InvalidGateConfigError(
                f"Invalid YAML in {repository.full_name}/{path}: {exc}",
                context={"repository": repository.full_name, "path": path},
            ) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidGateConfigError(
                f"Config {repository.full_name}/{path} must be a mapping",
                context={"repository": repository.full_name, "path": path},
            )
        return data
