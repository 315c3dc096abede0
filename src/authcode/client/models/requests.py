"""Caller request models for the authorization code flow.

Contains the authorization URL request, the code exchange request, and the
fixed protocol values used by both.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class PromptValue(str, Enum):
    """Accepted values for the prompt parameter."""

    LOGIN = "login"
    SELECT_ACCOUNT = "select_account"
    CONSENT = "consent"
    NONE = "none"


class CodeChallengeMethod(str, Enum):
    """PKCE code challenge transforms (RFC 7636 Section 4.2)."""

    S256 = "S256"
    PLAIN = "plain"


RESPONSE_TYPE_CODE = "code"
RESPONSE_MODE_FRAGMENT = "fragment"
GRANT_TYPE_AUTHORIZATION_CODE = "authorization_code"

DEFAULT_SCOPES = ("openid", "profile", "offline_access")


@dataclass(frozen=True)
class AuthorizationCodeUrlRequest:
    """Parameters for building an authorization request URL.

    Optional fields are None when omitted. An empty string is passed
    through as given where the protocol allows it.
    """

    redirect_uri: str | None = None
    scopes: Sequence[str] = ()
    code_challenge: str | None = None
    code_challenge_method: str | None = None
    state: str | None = None
    prompt: str | None = None
    login_hint: str | None = None
    domain_hint: str | None = None
    nonce: str | None = None
    correlation_id: str | None = None
    authority: str | None = None  # Overrides the configured authority


@dataclass(frozen=True)
class AuthorizationCodeExchangeRequest:
    """Parameters for exchanging an authorization code (RFC 6749 Section 4.1.3)."""

    code: str
    redirect_uri: str | None = None
    code_verifier: str | None = None  # RFC 7636
    client_secret: str | None = None  # Confidential clients only
    scopes: Sequence[str] = ()
    authority: str | None = None
