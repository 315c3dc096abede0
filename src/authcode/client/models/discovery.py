"""Authority metadata model.

Subset of OAuth 2.0 Authorization Server Metadata (RFC 8414) and OpenID
Connect Discovery needed by the authorization code flow.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class AuthorityMetadata(BaseModel):
    """Endpoints exposed by an authority.

    Only the authorization and token endpoints are required; every other
    discovery field is optional and unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    # Required for authorization code flow (our use case)
    authorization_endpoint: str
    token_endpoint: str

    issuer: str | None = None
    end_session_endpoint: str | None = None
    jwks_uri: str | None = None
    response_types_supported: list[str] | None = None
    response_modes_supported: list[str] | None = None
    scopes_supported: list[str] | None = None
    code_challenge_methods_supported: list[str] | None = None

    @field_validator("authorization_endpoint", "token_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Endpoint must be an absolute HTTP(S) URL: {v}")
        return v
