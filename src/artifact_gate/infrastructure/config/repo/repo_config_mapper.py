from artifact_gate.core.domain.gate import GateConfig, TrackerOverrides
from artifact_gate.infrastructure.config.repo.repo_config_dto import RepoConfigDTO


class RepoConfigMapper:
    """Maps a validated repository config file to the immutable ``GateConfig``."""

    @staticmethod
    def to_domain(dto: RepoConfigDTO) -> GateConfig:
        rally = dto.rally
        return GateConfig(
            check_pr_title=dto.check_pr_title,
            check_pr_body=dto.check_pr_body,
            check_commit_messages=dto.check_commit_messages,
            check_pr_labels=dto.check_pr_labels,
            comment_on_pull=dto.comment_on_pull,
            merge_on_pr_body=dto.merge_on_pr_body,
            objects=tuple(o.strip().lower() for o in rally.objects if o and o.strip()),
            allowed_states=tuple(rally.states),
            allowed_projects=tuple(rally.projects),
            workspace=rally.workspace or "",
            promotion_commands=RepoConfigMapper._commands(dto.promotion_commands),
            checks_name=dto.checks_name,
            tracker=TrackerOverrides(
                server=rally.server,
                username=rally.username,
                password=rally.password,
                api_key=rally.api_key,
            ),
        )

    @staticmethod
    def _commands(commands: list[str]) -> tuple[str, ...]:
        # "/completes" and "completes" are the same command
        cleaned = (c.strip().lstrip("/") for c in commands)
        return tuple(dict.fromkeys(c for c in cleaned if c))
