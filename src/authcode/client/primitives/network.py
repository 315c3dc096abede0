"""Default network client built on httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from authcode.client.models.errors import TransportError
from authcode.client.models.network import NetworkResponse

logger = logging.getLogger(__name__)


class HttpxNetworkClient:
    """Sends HTTP requests through a shared httpx.AsyncClient.

    Status codes are passed through untouched. Only transport-level
    failures (connection errors, timeouts) raise.
    """

    def __init__(
        self, timeout: float = 30.0, http_client: httpx.AsyncClient | None = None
    ):
        """Initialize the network client.

        Args:
            timeout: HTTP request timeout in seconds
            http_client: Optional preconfigured client, e.g. with custom
                transport or proxies. Closed by close().
        """
        self.timeout = timeout
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def get(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> NetworkResponse:
        try:
            response = await self._http_client.get(url, headers=headers)
        except httpx.RequestError as e:
            raise TransportError(f"GET {url} failed: {e}") from e
        return self._to_network_response(response)

    async def post(
        self, url: str, *, body: str, headers: Mapping[str, str]
    ) -> NetworkResponse:
        try:
            response = await self._http_client.post(
                url, content=body.encode("utf-8"), headers=headers
            )
        except httpx.RequestError as e:
            raise TransportError(f"POST {url} failed: {e}") from e
        return self._to_network_response(response)

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._http_client.aclose()

    def _to_network_response(self, response: httpx.Response) -> NetworkResponse:
        logger.debug(
            f"{response.request.method} {response.url} -> {response.status_code}"
        )
        return NetworkResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )
