"""
Linear GraphQL transport.

A single generic ``request`` sends a query or mutation with variables and
returns the ``data`` object. HTTP, network and GraphQL errors are raised as
TransportError naming the operation; raw httpx exceptions never escape.

API Reference: https://developers.linear.app/docs/graphql/working-with-the-graphql-api
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from linearis.config import ClientConfig
from linearis.errors import TransportError

logger = logging.getLogger(__name__)


class LinearClient:
    """Async client wrapping Linear GraphQL API calls."""

    def __init__(self, config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def api_token(self) -> str:
        return self._config.api_token

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._config.api_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def __aenter__(self) -> LinearClient:
        self._client()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        """The shared httpx client; outside ``async with``, callers must ``aclose()``."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                headers=self._headers,
                timeout=self._config.timeout,
                transport=self._transport,
            )
        return self._http

    async def request(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation: str = "query Linear",
    ) -> dict[str, Any]:
        """Execute a GraphQL document against the Linear API.

        Args:
            query: GraphQL query or mutation string
            variables: Variables for the document
            operation: Human description used in error messages,
                e.g. 'update issue "ABC-123"'

        Returns:
            The response ``data`` object.
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        started = time.monotonic()
        try:
            response = await self._client().post(self._config.api_url, json=payload)
        except httpx.TimeoutException:
            raise TransportError(operation, "request timed out") from None
        except httpx.RequestError as e:
            raise TransportError(operation, f"network error: {e}") from None

        latency_ms = int((time.monotonic() - started) * 1000)
        logger.debug(
            "%s -> HTTP %s",
            operation,
            response.status_code,
            extra={
                "operation": operation,
                "latency_ms": latency_ms,
                "status_code": response.status_code,
            },
        )
        return self._handle_response(response, operation)

    async def fetch(self, url: str, operation: str = "download file") -> bytes:
        """GET an authenticated URL (uploaded files) and return the body."""
        try:
            response = await self._client().get(url, follow_redirects=True)
        except httpx.TimeoutException:
            raise TransportError(operation, "request timed out") from None
        except httpx.RequestError as e:
            raise TransportError(operation, f"network error: {e}") from None
        if response.status_code >= 400:
            raise TransportError(operation, f"HTTP {response.status_code}", response.status_code)
        logger.debug("%s: %d bytes", operation, len(response.content))
        return response.content

    def _handle_response(self, response: httpx.Response, operation: str) -> dict[str, Any]:
        """Map HTTP and GraphQL error shapes to TransportError."""
        status = response.status_code
        if status == 401:
            raise TransportError(operation, "invalid or expired Linear API token", status)
        if status == 403:
            raise TransportError(
                operation, "insufficient permissions, check your Linear API token scopes", status
            )
        if status == 429:
            raise TransportError(operation, "Linear rate limit exceeded, try again later", status)

        try:
            data = response.json()
        except ValueError:
            data = None

        if status >= 400:
            detail = response.text
            if isinstance(data, dict):
                detail = _graphql_messages(data) or data.get("message") or detail
            raise TransportError(operation, f"Linear API error (HTTP {status}): {detail}", status)

        if not isinstance(data, dict):
            raise TransportError(operation, "invalid JSON response", status)

        if data.get("errors"):
            raise TransportError(operation, f"GraphQL error: {_graphql_messages(data)}", status)

        return data.get("data") or {}


def _graphql_messages(data: dict[str, Any]) -> str:
    errors = data.get("errors") or []
    return "; ".join(e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors)
