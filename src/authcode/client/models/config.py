"""Client configuration for the authorization code flow."""

from __future__ import annotations

from dataclasses import dataclass, field

from authcode.client.interfaces import AuthorityResolver, CryptoProvider, NetworkClient
from authcode.client.models.errors import ConfigurationError
from authcode.client.primitives.crypto import DefaultCryptoProvider


@dataclass(frozen=True)
class ClientConfiguration:
    """Immutable settings owned by a client for its entire lifetime.

    Shared read-only between concurrent operations, so no locking is
    needed. When no network client is given, the client creates and owns
    one. An injected network client stays owned by the caller. When no
    authority resolver is given, the client discovers endpoints through
    the network client.
    """

    client_id: str
    authority: str | None = None
    crypto_provider: CryptoProvider = field(default_factory=DefaultCryptoProvider)
    network_client: NetworkClient | None = None
    authority_resolver: AuthorityResolver | None = None

    def __post_init__(self) -> None:
        if not self.client_id or not self.client_id.strip():
            raise ConfigurationError("client_id must be a non-empty string")
