"""Token endpoint response and exchange outcome models.

A token exchange either succeeds with a token payload (RFC 6749 Section 5.1)
or fails with a protocol error payload (RFC 6749 Section 5.2). The two are
separate types so callers can tell them apart without inspecting content.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from authcode.client.models.errors import TokenExchangeError


class TokenResponse(BaseModel):
    """Successful token endpoint response (RFC 6749 Section 5.1).

    Provider specific fields are kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None  # Seconds until expiry
    refresh_token: str | None = None
    scope: str | None = None
    id_token: str | None = None  # OpenID Connect

    def calculate_expires_at(self) -> float | None:
        """Calculate absolute expiry timestamp from expires_in.

        Returns:
            Unix timestamp when token expires, or None if no expiry
        """
        if self.expires_in is None:
            return None
        return time.time() + self.expires_in


class ProtocolError(BaseModel):
    """Error payload returned by the token endpoint (RFC 6749 Section 5.2).

    Keeps the decoded JSON payload and the raw body so nothing the server
    sent is lost, even when the body is not JSON.
    """

    error: str | None = None
    error_description: str | None = None
    error_uri: str | None = None

    # Identity provider diagnostics
    error_codes: list[int] | None = None
    correlation_id: str | None = None
    trace_id: str | None = None
    timestamp: str | None = None

    payload: dict[str, Any] = Field(default_factory=dict)
    body: str = ""

    @classmethod
    def from_body(cls, body: str, payload: Any = None) -> ProtocolError:
        """Build from a raw response body and its decoded JSON, if any."""
        if not isinstance(payload, dict):
            return cls(body=body)

        def text(key: str) -> str | None:
            value = payload.get(key)
            return value if isinstance(value, str) else None

        error_codes = payload.get("error_codes")
        if not (
            isinstance(error_codes, list)
            and all(isinstance(code, int) for code in error_codes)
        ):
            error_codes = None

        return cls(
            error=text("error"),
            error_description=text("error_description"),
            error_uri=text("error_uri"),
            error_codes=error_codes,
            correlation_id=text("correlation_id"),
            trace_id=text("trace_id"),
            timestamp=text("timestamp"),
            payload=payload,
            body=body,
        )


@dataclass(frozen=True)
class TokenExchangeSuccess:
    token: TokenResponse
    status_code: int = 200
    kind: Literal["success"] = "success"

    def is_success(self) -> bool:
        return True

    def is_error(self) -> bool:
        return False

    def unwrap(self) -> TokenResponse:
        return self.token


@dataclass(frozen=True)
class TokenExchangeFailure:
    error: ProtocolError
    status_code: int
    kind: Literal["error"] = "error"

    def is_success(self) -> bool:
        return False

    def is_error(self) -> bool:
        return True

    def unwrap(self) -> TokenResponse:
        """Raise the failure as an exception.

        Raises:
            TokenExchangeError: Always, carrying this outcome
        """
        raise TokenExchangeError(self)


ExchangeOutcome = Union[TokenExchangeSuccess, TokenExchangeFailure]
