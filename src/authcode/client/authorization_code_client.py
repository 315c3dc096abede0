"""OAuth 2.0 authorization code client.

Coordinates parameter validation, authority resolution and token exchange
for the two legs of the authorization code grant.
"""

from __future__ import annotations

import logging

from authcode.client.models.config import ClientConfiguration
from authcode.client.models.requests import (
    AuthorizationCodeExchangeRequest,
    AuthorizationCodeUrlRequest,
)
from authcode.client.models.tokens import ExchangeOutcome
from authcode.client.primitives.discovery import DiscoveryAuthorityResolver
from authcode.client.primitives.network import HttpxNetworkClient
from authcode.client.services.authorization import AuthorizationRequestBuilder
from authcode.client.services.token_request import TokenRequestBuilder
from authcode.client.services.tokens import TokenExchangeClient

logger = logging.getLogger(__name__)


class AuthorizationCodeClient:
    """Client for the OAuth 2.0 authorization code grant with PKCE.

    Holds a read-only configuration, so one instance can serve concurrent
    operations. Every operation validates its request before any network
    call, then resolves authority metadata, then (for token acquisition)
    performs the exchange.
    """

    def __init__(self, configuration: ClientConfiguration, timeout: float = 30.0):
        """Initialize the client.

        Args:
            configuration: Immutable client configuration
            timeout: Request timeout in seconds for a client-created
                network client, ignored when one is configured
        """
        self.configuration = configuration

        # An injected network client is closed by whoever created it
        self.network_client = configuration.network_client
        self._owns_network_client = self.network_client is None
        if self.network_client is None:
            self.network_client = HttpxNetworkClient(timeout=timeout)

        # Initialize service components
        self.authority_resolver = (
            configuration.authority_resolver
            or DiscoveryAuthorityResolver(self.network_client)
        )
        self.authorization_builder = AuthorizationRequestBuilder()
        self.token_request_builder = TokenRequestBuilder()
        self.token_exchange = TokenExchangeClient(self.network_client)

    async def get_auth_code_url(self, request: AuthorizationCodeUrlRequest) -> str:
        """Build the URL the user visits to sign in.

        Default scopes openid, profile and offline_access are always added.

        Args:
            request: Authorization URL request

        Returns:
            Authorization endpoint URL with encoded query parameters

        Raises:
            RequestValidationError: If the request is invalid
            AuthorityResolutionError: If authority metadata is unavailable
        """
        parameters = self.authorization_builder.build(request, self.configuration)

        metadata = await self.authority_resolver.resolve(
            request.authority or self.configuration.authority
        )

        logger.debug(
            f"Generated authorization URL for client {self.configuration.client_id}"
        )
        return self.authorization_builder.build_url(
            metadata.authorization_endpoint, parameters
        )

    async def acquire_token(
        self, request: AuthorizationCodeExchangeRequest
    ) -> ExchangeOutcome:
        """Exchange an authorization code for tokens.

        Args:
            request: Code exchange request

        Returns:
            Success outcome with the token payload, or failure outcome with
            the token endpoint's error payload

        Raises:
            RequestValidationError: If the request is invalid
            AuthorityResolutionError: If authority metadata is unavailable
            TransportError: If the token endpoint cannot be reached
            TokenResponseError: If a successful response is malformed
        """
        token_params = self.token_request_builder.build(request, self.configuration)

        metadata = await self.authority_resolver.resolve(
            request.authority or self.configuration.authority
        )

        logger.debug("Exchanging authorization code for tokens")
        return await self.token_exchange.exchange(metadata, token_params)

    async def close(self) -> None:
        """Close the network client if this client created it."""
        if self._owns_network_client:
            await self.network_client.close()

    async def __aenter__(self) -> AuthorizationCodeClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
