"""Abstract base for the REST clients (Rally WSAPI, GitHub).

Centralises the shared lifecycle (connect / disconnect), tracing, metrics,
retries and transport error handling so that each concrete client only
translates its own error payloads.
"""

from abc import ABC, abstractmethod
from typing import Any, NoReturn

import httpx
import structlog
from prometheus_client import Counter

from artifact_gate.core.application.tools.common.exceptions import ProviderError
from artifact_gate.infrastructure.common.retry.retry_policy import RetryPolicy
from artifact_gate.infrastructure.observability.tracing_setup import traced_call

logger = structlog.get_logger()


class BaseHttpClient(ABC):
    """Template base for httpx clients with shared lifecycle and error handling."""

    _PROVIDER: str = "BaseHTTP"
    _SPAN_PREFIX: str = "http"

    def __init__(
        self,
        base_url: str,
        calls_counter: Counter,
        retry_policy: RetryPolicy | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._calls = calls_counter
        self._retry = retry_policy or RetryPolicy()
        self._timeout = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # ── Abstract hooks ──

    @abstractmethod
    def _default_headers(self) -> dict[str, str]:
        """Headers sent with every request (auth, integration identity)."""

    @abstractmethod
    def _raise_for_response(self, operation: str, response: httpx.Response) -> NoReturn:
        """Translate a non-success response into a ``ProviderError`` subclass."""

    @abstractmethod
    def _transport_error(self, operation: str, exc: httpx.HTTPError) -> ProviderError:
        """Build the error raised when the host cannot be reached."""

    def _auth(self) -> httpx.Auth | None:
        return None

    def _verify(self, operation: str, response: httpx.Response) -> None:
        """Inspect a successful response; raise when its payload reports a failure."""
        return

    # ── Lifecycle ──

    async def connect(self) -> None:
        """Open a pooled client reused by every call until ``disconnect``."""
        if self._client is not None:
            return
        self._client = self._build_client()
        logger.info("HTTP session opened", source_system=self._PROVIDER)

    async def disconnect(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        logger.info("HTTP session closed", source_system=self._PROVIDER)

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._default_headers(),
            auth=self._auth(),
            timeout=self._timeout,
            transport=self._transport,
        )

    # ── Call internals ──

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        ok_statuses: tuple[int, ...] = (),
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request with retries, tracing and metrics.

        Statuses in ``ok_statuses`` are returned to the caller instead of
        being translated into errors (e.g. 404 on an optional file).
        """
        async with traced_call(
            f"{self._SPAN_PREFIX}.{operation}", {"http.method": method, "provider": self._PROVIDER}
        ):
            try:
                response = await self._retry.run(
                    lambda: self._send(operation, method, url, ok_statuses, **kwargs)
                )
            except ProviderError as exc:
                self._calls.labels(operation=operation, outcome="error").inc()
                logger.error(
                    "Remote call failed",
                    operation=operation,
                    processing_status="ERROR",
                    error_type=type(exc).__name__,
                    error_code=exc.error_code,
                    error_details=str(exc),
                    error_retryable=exc.retryable,
                    source_system=self._PROVIDER,
                    tags=["http-error"],
                )
                raise
            self._calls.labels(operation=operation, outcome="success").inc()
            return response

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        ok_statuses: tuple[int, ...],
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            if self._client is not None:
                response = await self._client.request(method, url, **kwargs)
            else:
                async with self._build_client() as client:
                    response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise self._transport_error(operation, exc) from exc
        if response.status_code in ok_statuses:
            return response
        if response.is_success:
            self._verify(operation, response)
            return response
        self._raise_for_response(operation, response)

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body; anything else decodes to an empty dict."""
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
