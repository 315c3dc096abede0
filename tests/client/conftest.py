import itertools
from unittest.mock import AsyncMock

import pytest

from authcode.client.models.config import ClientConfiguration
from authcode.client.models.discovery import AuthorityMetadata
from authcode.client.models.network import NetworkResponse
from authcode.client.primitives.pkce import generate_pkce_codes

CLIENT_ID = "client-456"
AUTHORITY = "https://login.example.com/tenant"


class FakeCryptoProvider:
    """Deterministic crypto provider for testing."""

    def __init__(self, prefix: str = "corr"):
        self._counter = itertools.count(1)
        self._prefix = prefix
        self.calls = 0

    def new_correlation_id(self) -> str:
        self.calls += 1
        return f"{self._prefix}-{next(self._counter)}"

    def generate_pkce_codes(self):
        return generate_pkce_codes()


def make_response(
    status_code: int, body: str = "", headers: dict[str, str] | None = None
) -> NetworkResponse:
    return NetworkResponse(status_code=status_code, body=body, headers=headers or {})


def make_metadata(base: str = "https://login.example.com") -> AuthorityMetadata:
    return AuthorityMetadata(
        issuer=base,
        authorization_endpoint=f"{base}/authorize",
        token_endpoint=f"{base}/token",
    )


@pytest.fixture
def network_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def crypto_provider() -> FakeCryptoProvider:
    return FakeCryptoProvider()


@pytest.fixture
def configuration(network_client, crypto_provider) -> ClientConfiguration:
    return ClientConfiguration(
        client_id=CLIENT_ID,
        authority=AUTHORITY,
        crypto_provider=crypto_provider,
        network_client=network_client,
    )
