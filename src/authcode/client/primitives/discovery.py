"""Authority metadata discovery primitives.

Implements OpenID Connect Discovery and RFC 8414 (Authorization Server
Metadata) lookups to find the authorization and token endpoints of an
authority.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

from pydantic import ValidationError

from authcode.client.interfaces import NetworkClient
from authcode.client.models.discovery import AuthorityMetadata
from authcode.client.models.errors import AuthorityResolutionError, TransportError

logger = logging.getLogger(__name__)


class DiscoveryAuthorityResolver:
    """Resolves authority metadata from well-known discovery documents.

    Tries the OpenID Connect configuration next to the authority first, then
    falls back to path-aware and root RFC 8414 metadata.
    """

    def __init__(self, network_client: NetworkClient):
        self._network_client = network_client

    async def resolve(self, authority: str | None) -> AuthorityMetadata:
        """Discover the endpoints of an authority.

        Args:
            authority: Authority URL, e.g. https://login.example.com/tenant

        Returns:
            Authority metadata

        Raises:
            AuthorityResolutionError: If no discovery URL yields valid metadata
        """
        if not authority:
            raise AuthorityResolutionError("No authority configured or requested")

        discovery_urls = self._build_discovery_urls(authority)

        for url in discovery_urls:
            try:
                logger.debug(f"Trying authority metadata discovery: {url}")
                response = await self._network_client.get(
                    url, headers={"Accept": "application/json"}
                )

                if response.status_code == 200:
                    metadata = AuthorityMetadata.model_validate_json(response.body)
                    logger.debug(f"Discovered authority metadata from: {url}")
                    return metadata
                elif response.status_code >= 500:
                    # Server error - don't try other URLs
                    break

            except ValidationError:
                # Invalid metadata - try next URL
                continue
            except TransportError:
                # Network error - try next URL
                continue

        raise AuthorityResolutionError(
            f"Failed to discover authority metadata for {authority}. "
            f"Tried URLs: {discovery_urls}"
        )

    def _build_discovery_urls(self, authority: str) -> list[str]:
        """Build ordered list of discovery URLs to try.

        Args:
            authority: Authority URL

        Returns:
            Ordered, de-duplicated list of URLs to try for discovery
        """
        parsed = urlparse(authority)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise AuthorityResolutionError(f"Invalid authority URL: {authority}")

        base_url = f"{parsed.scheme}://{parsed.netloc}"
        path = parsed.path.rstrip("/")
        urls = []

        # OIDC discovery relative to the authority (tenant-scoped authorities)
        urls.append(f"{base_url}{path}/.well-known/openid-configuration")

        # RFC 8414: Path-aware OAuth discovery
        if path:
            urls.append(
                urljoin(base_url, f"/.well-known/oauth-authorization-server{path}")
            )

        # OAuth root fallback
        urls.append(urljoin(base_url, "/.well-known/oauth-authorization-server"))

        # OIDC root fallback
        if path:
            urls.append(urljoin(base_url, "/.well-known/openid-configuration"))

        return urls


class StaticAuthorityResolver:
    """Resolver for authorities whose endpoints are known up front."""

    def __init__(
        self,
        metadata: AuthorityMetadata,
        overrides: dict[str, AuthorityMetadata] | None = None,
    ):
        """Initialize with fixed metadata.

        Args:
            metadata: Metadata returned for the default authority
            overrides: Metadata for specific authority URLs
        """
        self._metadata = metadata
        self._overrides = dict(overrides or {})

    async def resolve(self, authority: str | None) -> AuthorityMetadata:
        if authority is not None and authority in self._overrides:
            return self._overrides[authority]
        return self._metadata
