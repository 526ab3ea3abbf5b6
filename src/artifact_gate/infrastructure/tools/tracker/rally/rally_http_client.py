"""Rally Web Services API (WSAPI v2.0) client.

Authentication is either an API key sent as the ``ZSESSIONID`` header, or
basic auth. With basic auth every write must carry a security token, fetched
once per session from ``/security/authorize``.
"""

from collections.abc import Sequence
from typing import Any, NoReturn

import httpx
import structlog

from artifact_gate.core.application.tools import TrackerTool
from artifact_gate.core.application.tools.common.exceptions import (
    DuplicateConnectionError,
    ProviderError,
    TrackerAuthenticationError,
    TrackerRequestError,
    TrackerTransportError,
)
from artifact_gate.core.domain.artifact import (
    ArtifactQueryResult,
    RemoteArtifact,
    RemoteConnection,
)
from artifact_gate.core.domain.pull_request import PullRequest
from artifact_gate.infrastructure.common.retry.retry_policy import RetryPolicy
from artifact_gate.infrastructure.observability.metrics_service import TRACKER_CALLS_TOTAL
from artifact_gate.infrastructure.tools.common.base_http_client import BaseHttpClient
from artifact_gate.infrastructure.tools.tracker.rally.mappers.rally_artifact_mapper import (
    RallyArtifactMapper,
)

logger = structlog.get_logger()

# One artifact is expected per formatted id; the cap bounds a misconfigured workspace
QUERY_PAGE_SIZE = 2
CONNECTIONS_PAGE_SIZE = 200
_DUPLICATE_MARKERS = ("invalid key", "duplicate", "already exists")


class RallyHttpClient(BaseHttpClient, TrackerTool):
    _PROVIDER = "Rally"
    _SPAN_PREFIX = "rally"

    def __init__(
        self,
        server: str,
        api_version: str = "v2.0",
        api_key: str | None = None,
        username: str | None = None,
        password: str | None = None,
        integration_headers: dict[str, str] | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=f"{server.rstrip('/')}/slm/webservice/{api_version}",
            calls_counter=TRACKER_CALLS_TOTAL,
            retry_policy=retry_policy,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )
        self._api_key = api_key
        self._username = username
        self._password = password
        self._integration_headers = integration_headers or {}
        self._security_token: str | None = None

    # ── BaseHttpClient hooks ──

    def _default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", **self._integration_headers}
        if self._api_key:
            headers["ZSESSIONID"] = self._api_key
        return headers

    def _auth(self) -> httpx.Auth | None:
        if self._api_key or not self._username:
            return None
        return httpx.BasicAuth(self._username, self._password or "")

    def _transport_error(self, operation: str, exc: httpx.HTTPError) -> ProviderError:
        return TrackerTransportError(
            provider=self._PROVIDER,
            message=f"Rally unreachable during {operation}: {exc}",
            retryable=True,
        )

    def _raise_for_response(self, operation: str, response: httpx.Response) -> NoReturn:
        status = response.status_code
        if status in (401, 403):
            raise TrackerAuthenticationError(
                provider=self._PROVIDER,
                message=f"Rally rejected the credentials during {operation}",
                status_code=status,
            )
        if status >= 500 or status == 429:
            raise TrackerTransportError(
                provider=self._PROVIDER,
                message=f"Rally answered {status} during {operation}",
                retryable=True,
                status_code=status,
            )
        errors = RallyArtifactMapper.errors(self._json(response))
        raise TrackerRequestError(
            provider=self._PROVIDER,
            message=f"Rally refused {operation}: {'; '.join(errors) or response.reason_phrase}",
            status_code=status,
        )

    def _verify(self, operation: str, response: httpx.Response) -> None:
        """WSAPI reports most failures as HTTP 200 with a non-empty ``Errors`` list."""
        errors = RallyArtifactMapper.errors(self._json(response))
        if not errors:
            return
        detail = "; ".join(errors)
        if "not authorized" in detail.lower():
            raise TrackerAuthenticationError(
                provider=self._PROVIDER, message=detail, status_code=response.status_code
            )
        if operation == "create_connection" and any(
            marker in detail.lower() for marker in _DUPLICATE_MARKERS
        ):
            raise DuplicateConnectionError(
                provider=self._PROVIDER, message=detail, status_code=response.status_code
            )
        raise TrackerRequestError(
            provider=self._PROVIDER,
            message=f"Rally refused {operation}: {detail}",
            status_code=response.status_code,
        )

    # ── TrackerTool ──

    async def query_artifact(
        self,
        artifact_type: str,
        number: str,
        workspace: str,
        fields: Sequence[str],
    ) -> ArtifactQueryResult:
        params = self._scoped(
            workspace,
            query=f"(FormattedID = {number})",
            fetch=",".join(fields),
            start=1,
            pagesize=QUERY_PAGE_SIZE,
            order="Rank",
        )
        response = await self._request("query_artifact", "GET", f"/{artifact_type}", params=params)
        result = RallyArtifactMapper.to_query_result(self._json(response))
        logger.debug(
            "Rally artifact query completed",
            artifact_type=artifact_type,
            number=number,
            result_count=result.count,
        )
        return result

    async def query_connections(
        self, artifact: RemoteArtifact, workspace: str
    ) -> list[RemoteConnection]:
        if not artifact.connections_ref:
            return []
        params = self._scoped(workspace, fetch="Url,Name", start=1, pagesize=CONNECTIONS_PAGE_SIZE)
        response = await self._request(
            "query_connections", "GET", artifact.connections_ref, params=params
        )
        return RallyArtifactMapper.to_connections(self._json(response))

    async def create_connection(self, artifact_ref: str, pull_request: PullRequest) -> None:
        body = {
            "pullrequest": {
                "ExternalID": str(pull_request.number),
                "ExternalFormattedId": str(pull_request.number),
                "Artifact": artifact_ref,
                "Name": pull_request.title,
                "Url": pull_request.html_url,
            }
        }
        await self._request(
            "create_connection",
            "POST",
            "/pullrequest/create",
            params=await self._write_params(),
            json=body,
        )
        logger.info("Rally connection created", artifact_ref=artifact_ref)

    async def update_artifact_state(self, ref: str, new_state: str) -> None:
        body = {_type_from_ref(ref): {"ScheduleState": new_state}}
        await self._request(
            "update_artifact_state", "POST", ref, params=await self._write_params(), json=body
        )
        logger.info("Rally artifact state updated", artifact_ref=ref, new_state=new_state)

    # ── Helpers ──

    async def disconnect(self) -> None:
        self._security_token = None
        await super().disconnect()

    async def _write_params(self) -> dict[str, str]:
        """Basic-auth sessions sign writes with the security token."""
        if self._api_key:
            return {}
        if self._security_token is None:
            response = await self._request("authorize", "GET", "/security/authorize")
            result = self._json(response).get("OperationResult", {})
            self._security_token = result.get("SecurityToken")
            if not self._security_token:
                raise TrackerAuthenticationError(
                    provider=self._PROVIDER, message="Rally returned no security token"
                )
        return {"key": self._security_token}

    @staticmethod
    def _scoped(workspace: str, **params: Any) -> dict[str, Any]:
        if workspace:
            params["workspace"] = workspace
        return params


def _type_from_ref(ref: str) -> str:
    """``.../slm/webservice/v2.0/hierarchicalrequirement/123`` -> ``hierarchicalrequirement``."""
    parts = [p for p in ref.rstrip("/").split("/") if p]
    return parts[-2] if len(parts) >= 2 else "artifact"
