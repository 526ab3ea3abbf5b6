import base64
from datetime import UTC, datetime
from typing import Any, NoReturn
from urllib.parse import quote

import httpx
import structlog

from artifact_gate.core.application.tools import VcsTool
from artifact_gate.core.application.tools.common.exceptions import (
    ProviderError,
    VcsTransportError,
)
from artifact_gate.core.domain.gate import CheckRunUpdate, CheckState
from artifact_gate.core.domain.pull_request import CommitSummary, PullRequest, RepositoryRef
from artifact_gate.infrastructure.common.retry.retry_policy import RetryPolicy
from artifact_gate.infrastructure.observability.metrics_service import VCS_CALLS_TOTAL
from artifact_gate.infrastructure.tools.common.base_http_client import BaseHttpClient
from artifact_gate.infrastructure.tools.vcs.github.dtos.github_pull_request_dto import (
    GitHubPullRequestDTO,
)
from artifact_gate.infrastructure.tools.vcs.github.mappers.github_pull_request_mapper import (
    GitHubPullRequestMapper,
)

logger = structlog.get_logger()

API_VERSION = "2022-11-28"
# GitHub rejects check run summaries longer than this
MAX_SUMMARY_LENGTH = 65535
_TRUNCATION_NOTE = "\n\n_Report truncated._"


class GitHubHttpClient(BaseHttpClient, VcsTool):
    """GitHub REST v3 client authenticated with an installation or personal token."""

    _PROVIDER = "GitHub"
    _SPAN_PREFIX = "github"

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        token: str | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=api_url,
            calls_counter=VCS_CALLS_TOTAL,
            retry_policy=retry_policy,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )
        self._token = token

    # ── BaseHttpClient hooks ──

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _transport_error(self, operation: str, exc: httpx.HTTPError) -> ProviderError:
        return VcsTransportError(
            provider=self._PROVIDER,
            message=f"GitHub unreachable during {operation}: {exc}",
            retryable=True,
        )

    def _raise_for_response(self, operation: str, response: httpx.Response) -> NoReturn:
        status = response.status_code
        detail = self._json(response).get("message") or response.reason_phrase
        raise VcsTransportError(
            provider=self._PROVIDER,
            message=f"GitHub refused {operation}: {detail}",
            retryable=status >= 500 or status == 429,
            status_code=status,
        )

    # ── VcsTool ──

    async def get_commit_range(
        self, repository: RepositoryRef, base_sha: str, head_sha: str
    ) -> list[CommitSummary]:
        response = await self._request(
            "compare_commits",
            "GET",
            f"{_repo_path(repository)}/compare/{base_sha}...{head_sha}",
        )
        commits = self._json(response).get("commits", [])
        return [
            CommitSummary(sha=c["sha"], message=(c.get("commit") or {}).get("message", ""))
            for c in commits
        ]

    async def get_pull_request(self, repository: RepositoryRef, number: int) -> PullRequest:
        response = await self._request(
            "get_pull_request", "GET", f"{_repo_path(repository)}/pulls/{number}"
        )
        dto = GitHubPullRequestDTO.model_validate(self._json(response))
        return GitHubPullRequestMapper.to_domain(dto, repository)

    async def emit_check_status(
        self, repository: RepositoryRef, head_sha: str, update: CheckRunUpdate
    ) -> None:
        await self._request(
            "create_check_run",
            "POST",
            f"{_repo_path(repository)}/check-runs",
            json=_check_run_body(head_sha, update),
        )

    async def post_comment(self, repository: RepositoryRef, number: int, body: str) -> None:
        await self._request(
            "create_comment",
            "POST",
            f"{_repo_path(repository)}/issues/{number}/comments",
            json={"body": body},
        )

    async def get_file_text(self, repository: RepositoryRef, path: str) -> str | None:
        response = await self._request(
            "get_contents",
            "GET",
            f"{_repo_path(repository)}/contents/{quote(path)}",
            ok_statuses=(404,),
        )
        if response.status_code == 404:
            return None
        data = self._json(response)
        if data.get("encoding") != "base64" or "content" not in data:
            logger.warning("Unexpected contents payload", path=path, repository=repository.full_name)
            return None
        return base64.b64decode(data["content"]).decode("utf-8")


def _repo_path(repository: RepositoryRef) -> str:
    return f"/repos/{repository.owner}/{repository.name}"


def _check_run_body(head_sha: str, update: CheckRunUpdate) -> dict[str, Any]:
    now = datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")
    summary = update.summary
    if len(summary) > MAX_SUMMARY_LENGTH:
        summary = summary[: MAX_SUMMARY_LENGTH - len(_TRUNCATION_NOTE)] + _TRUNCATION_NOTE
    body: dict[str, Any] = {
        "name": update.name,
        "head_sha": head_sha,
        "started_at": now,
        "output": {"title": update.title, "summary": summary},
    }
    if update.state is CheckState.PENDING:
        body["status"] = "in_progress"
    else:
        body["status"] = "completed"
        body["conclusion"] = update.state.value
        body["completed_at"] = now
    if update.actions:
        body["actions"] = [
            {"label": a.label, "description": a.description, "identifier": a.identifier}
            for a in update.actions
        ]
    return body
