"""Security-related models for the authorization code flow.

Contains PKCE parameters generated by the crypto provider.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PKCECodes:
    """PKCE (Proof Key for Code Exchange) verifier and challenge pair.

    Immutable codes generated for each authorization flow to prevent
    authorization code interception attacks (RFC 7636). The challenge goes
    into the authorization URL, the verifier into the token exchange.
    """

    code_verifier: str = field()
    code_challenge: str = field()
    code_challenge_method: str = field(default="S256")

    def __post_init__(self) -> None:
        """Validate PKCE codes meet RFC 7636 requirements."""
        if not (43 <= len(self.code_verifier) <= 128):
            raise ValueError("code_verifier must be 43-128 characters")
        if not (43 <= len(self.code_challenge) <= 128):
            raise ValueError("code_challenge must be 43-128 characters")
        if self.code_challenge_method != "S256":
            raise ValueError("Only S256 code challenge method is generated")
