"""Collaborator protocols consumed by the authorization code client.

Authority discovery, HTTP transport and random value generation live
behind these interfaces so they can be swapped or faked independently.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from authcode.client.models.discovery import AuthorityMetadata
from authcode.client.models.network import NetworkResponse
from authcode.client.models.security import PKCECodes


class AuthorityResolver(Protocol):
    """Resolves an authority URL into its endpoint metadata."""

    async def resolve(self, authority: str | None) -> AuthorityMetadata:
        """Resolve authority metadata.

        Args:
            authority: Authority URL, or None for the resolver's default

        Returns:
            Metadata with the authorization and token endpoints

        Raises:
            AuthorityResolutionError: If metadata cannot be obtained
        """
        ...


class NetworkClient(Protocol):
    """Executes HTTP requests without interpreting status codes.

    Timeouts and cancellation are the implementation's responsibility.
    """

    async def get(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> NetworkResponse:
        """Send a GET request.

        Raises:
            TransportError: If the host is unreachable or the request times out
        """
        ...

    async def post(
        self, url: str, *, body: str, headers: Mapping[str, str]
    ) -> NetworkResponse:
        """Send a POST request with a pre-serialized body.

        Raises:
            TransportError: If the host is unreachable or the request times out
        """
        ...

    async def close(self) -> None: ...


class CryptoProvider(Protocol):
    """Source of random identifiers and PKCE codes."""

    def new_correlation_id(self) -> str:
        """Return a new random UUID string. Never cached."""
        ...

    def generate_pkce_codes(self) -> PKCECodes: ...
