"""Tests for the authorization code client orchestration.

Covers both operations end to end against faked collaborators, including
the guarantee that validation failures never reach the network.
"""

import asyncio
import json
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlparse

import pytest
from conftest import (
    AUTHORITY,
    CLIENT_ID,
    FakeCryptoProvider,
    make_metadata,
    make_response,
)

from authcode.client import authorization_code_client
from authcode.client.authorization_code_client import AuthorizationCodeClient
from authcode.client.models.config import ClientConfiguration
from authcode.client.models.errors import (
    AuthorityResolutionError,
    ConfigurationError,
    InvalidPkceParametersError,
    MissingRedirectUriError,
)
from authcode.client.models.requests import (
    AuthorizationCodeExchangeRequest,
    AuthorizationCodeUrlRequest,
)
from authcode.client.primitives.discovery import (
    DiscoveryAuthorityResolver,
    StaticAuthorityResolver,
)
from authcode.client.primitives.network import HttpxNetworkClient


class TestClientConfiguration:
    @pytest.mark.parametrize("client_id", ["", "   "])
    def test_empty_client_id_is_rejected(self, client_id):
        with pytest.raises(ConfigurationError):
            ClientConfiguration(client_id=client_id)

    def test_configuration_is_immutable(self, configuration):
        with pytest.raises(AttributeError):
            configuration.client_id = "other"

    def test_discovery_resolver_is_the_default(self, configuration):
        # Act
        client = AuthorizationCodeClient(configuration)

        # Assert
        assert isinstance(client.authority_resolver, DiscoveryAuthorityResolver)


class TestGetAuthCodeUrl:
    """Test authorization URL generation."""

    def setup_method(self):
        self.network_client = AsyncMock()
        self.resolver = AsyncMock()
        self.resolver.resolve.return_value = make_metadata()
        self.configuration = ClientConfiguration(
            client_id=CLIENT_ID,
            authority=AUTHORITY,
            crypto_provider=FakeCryptoProvider(),
            network_client=self.network_client,
            authority_resolver=self.resolver,
        )
        self.client = AuthorizationCodeClient(self.configuration)

    async def test_url_matches_expected_wire_format(self):
        # Arrange
        request = AuthorizationCodeUrlRequest(
            scopes=["mail.read"],
            redirect_uri="https://app/redirect",
            code_challenge="abc",
            code_challenge_method="S256",
            state="xyz",
        )

        # Act
        url = await self.client.get_auth_code_url(request)

        # Assert
        assert url.startswith(
            "https://login.example.com/authorize"
            f"?client_id={CLIENT_ID}"
            "&scope=openid%20profile%20offline_access%20mail.read"
            "&redirect_uri=https%3A%2F%2Fapp%2Fredirect"
            "&code_challenge=abc&code_challenge_method=S256&state=xyz&"
        )
        assert url.endswith("&response_mode=fragment&response_type=code")
        assert "&correlation_id=corr-1&" in url
        self.resolver.resolve.assert_awaited_once_with(AUTHORITY)
        self.network_client.post.assert_not_called()

    async def test_request_authority_overrides_configuration(self):
        # Arrange
        request = AuthorizationCodeUrlRequest(
            redirect_uri="https://app/redirect",
            authority="https://login.example.com/other-tenant",
        )

        # Act
        await self.client.get_auth_code_url(request)

        # Assert
        self.resolver.resolve.assert_awaited_once_with(
            "https://login.example.com/other-tenant"
        )

    async def test_correlation_id_differs_between_calls(self):
        # Arrange
        request = AuthorizationCodeUrlRequest(redirect_uri="https://app/redirect")

        # Act
        first = await self.client.get_auth_code_url(request)
        second = await self.client.get_auth_code_url(request)

        # Assert
        first_id = parse_qs(urlparse(first).query)["correlation_id"]
        second_id = parse_qs(urlparse(second).query)["correlation_id"]
        assert first_id != second_id

    async def test_missing_redirect_uri_fails_before_resolution(self):
        # Arrange
        request = AuthorizationCodeUrlRequest(redirect_uri="")

        # Act & Assert
        with pytest.raises(MissingRedirectUriError):
            await self.client.get_auth_code_url(request)

        self.resolver.resolve.assert_not_awaited()
        self.network_client.get.assert_not_called()
        self.network_client.post.assert_not_called()

    @pytest.mark.parametrize(
        "challenge, method", [("abc", None), (None, "S256")]
    )
    async def test_unpaired_pkce_fails_before_resolution(self, challenge, method):
        # Arrange
        request = AuthorizationCodeUrlRequest(
            redirect_uri="https://app/redirect",
            code_challenge=challenge,
            code_challenge_method=method,
        )

        # Act & Assert
        with pytest.raises(InvalidPkceParametersError):
            await self.client.get_auth_code_url(request)

        self.resolver.resolve.assert_not_awaited()

    async def test_resolution_error_propagates(self):
        # Arrange
        self.resolver.resolve.side_effect = AuthorityResolutionError("no metadata")
        request = AuthorizationCodeUrlRequest(redirect_uri="https://app/redirect")

        # Act & Assert
        with pytest.raises(AuthorityResolutionError):
            await self.client.get_auth_code_url(request)


class TestAcquireToken:
    """Test the authorization code exchange round trip."""

    def setup_method(self):
        self.network_client = AsyncMock()
        self.configuration = ClientConfiguration(
            client_id=CLIENT_ID,
            authority=AUTHORITY,
            crypto_provider=FakeCryptoProvider(),
            network_client=self.network_client,
            authority_resolver=StaticAuthorityResolver(make_metadata()),
        )
        self.client = AuthorizationCodeClient(self.configuration)

    async def test_successful_exchange(self):
        # Arrange
        self.network_client.post.return_value = make_response(
            200,
            json.dumps({"access_token": "access-token-xyz", "expires_in": 3600}),
        )
        request = AuthorizationCodeExchangeRequest(
            code="authcode1",
            redirect_uri="https://app/redirect",
            code_verifier="verifier-xyz",
        )

        # Act
        outcome = await self.client.acquire_token(request)

        # Assert
        assert outcome.is_success()
        assert outcome.token.access_token == "access-token-xyz"

        call_args = self.network_client.post.call_args
        assert call_args[0][0] == "https://login.example.com/token"
        body = call_args[1]["body"]
        assert "code=authcode1" in body
        assert "code_verifier=verifier-xyz" in body
        assert body.endswith("&grant_type=authorization_code")

    async def test_invalid_grant_yields_protocol_error_outcome(self):
        # Arrange
        self.network_client.post.return_value = make_response(
            400, '{"error":"invalid_grant"}'
        )
        request = AuthorizationCodeExchangeRequest(
            code="authcode1", redirect_uri="https://app/redirect"
        )

        # Act
        outcome = await self.client.acquire_token(request)

        # Assert
        assert outcome.is_error()
        assert not outcome.is_success()
        assert outcome.error.error == "invalid_grant"
        assert outcome.error.payload == {"error": "invalid_grant"}

    @pytest.mark.parametrize("redirect_uri", [None, ""])
    async def test_missing_redirect_uri_fails_before_network(self, redirect_uri):
        # Arrange
        request = AuthorizationCodeExchangeRequest(
            code="authcode1", redirect_uri=redirect_uri
        )

        # Act & Assert
        with pytest.raises(MissingRedirectUriError):
            await self.client.acquire_token(request)

        self.network_client.post.assert_not_called()

    async def test_metadata_is_resolved_before_exchange(self):
        # Arrange
        events = []
        resolver = AsyncMock()

        async def resolve(authority):
            events.append("resolve")
            return make_metadata()

        async def post(url, *, body, headers):
            events.append("post")
            return make_response(200, '{"access_token": "token-xyz"}')

        resolver.resolve.side_effect = resolve
        self.network_client.post.side_effect = post
        client = AuthorizationCodeClient(
            ClientConfiguration(
                client_id=CLIENT_ID,
                network_client=self.network_client,
                authority_resolver=resolver,
            )
        )

        # Act
        await client.acquire_token(
            AuthorizationCodeExchangeRequest(
                code="authcode1", redirect_uri="https://app/redirect"
            )
        )

        # Assert
        assert events == ["resolve", "post"]

    async def test_concurrent_exchanges_are_independent(self):
        # Arrange
        async def post(url, *, body, headers):
            code = dict(pair.split("=") for pair in body.split("&"))["code"]
            await asyncio.sleep(0)
            return make_response(200, json.dumps({"access_token": f"token-{code}"}))

        self.network_client.post.side_effect = post
        requests = [
            AuthorizationCodeExchangeRequest(
                code=f"code{i}", redirect_uri="https://app/redirect"
            )
            for i in range(5)
        ]

        # Act
        outcomes = await asyncio.gather(
            *(self.client.acquire_token(request) for request in requests)
        )

        # Assert
        assert [o.token.access_token for o in outcomes] == [
            f"token-code{i}" for i in range(5)
        ]


class TestClientLifecycle:
    """Test ownership of the network client."""

    async def test_injected_network_client_is_left_open(self, configuration):
        # Act
        async with AuthorizationCodeClient(configuration) as client:
            assert client.network_client is configuration.network_client

        # Assert
        configuration.network_client.close.assert_not_awaited()

    async def test_created_network_client_is_closed(self, monkeypatch):
        # Arrange
        created = []

        def make_network_client(timeout):
            network_client = AsyncMock()
            network_client.timeout = timeout
            created.append(network_client)
            return network_client

        monkeypatch.setattr(
            authorization_code_client, "HttpxNetworkClient", make_network_client
        )
        configuration = ClientConfiguration(client_id=CLIENT_ID, authority=AUTHORITY)

        # Act
        async with AuthorizationCodeClient(configuration, timeout=5.0) as client:
            assert client.network_client is created[0]

        # Assert
        assert len(created) == 1
        assert created[0].timeout == 5.0
        created[0].close.assert_awaited_once()
        assert configuration.network_client is None

    async def test_default_network_client_uses_httpx(self):
        # Arrange
        configuration = ClientConfiguration(client_id=CLIENT_ID)

        # Act
        client = AuthorizationCodeClient(configuration)

        # Assert
        assert isinstance(client.network_client, HttpxNetworkClient)
        assert client.authority_resolver._network_client is client.network_client
        await client.close()
