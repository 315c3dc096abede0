"""PKCE (Proof Key for Code Exchange) code generation.

Implements RFC 7636 verifier and S256 challenge generation to prevent
authorization code interception attacks.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
import string

from authcode.client.models.errors import PKCEError
from authcode.client.models.security import PKCECodes

_VERIFIER_ALPHABET = string.ascii_letters + string.digits + "-._~"


def generate_pkce_codes(length: int = 128) -> PKCECodes:
    """Generate a new PKCE verifier and its S256 challenge.

    Args:
        length: Verifier length, 43-128 characters

    Returns:
        PKCECodes: Immutable codes for one authorization flow

    Raises:
        PKCEError: If code generation fails
    """
    try:
        code_verifier = generate_code_verifier(length)
        return PKCECodes(
            code_verifier=code_verifier,
            code_challenge=compute_s256_challenge(code_verifier),
            code_challenge_method="S256",
        )
    except ValueError as e:
        raise PKCEError(f"Failed to generate PKCE codes: {e}") from e


def generate_code_verifier(length: int = 128) -> str:
    """Generate a cryptographically secure code verifier.

    RFC 7636 Section 4.1: code verifier must be 43-128 characters long
    and use only unreserved characters:
        [A-Z] / [a-z] / [0-9] / "-" / "." / "_" / "~"
    """
    if not (43 <= length <= 128):
        raise ValueError("code_verifier length must be 43-128 characters")
    return "".join(secrets.choice(_VERIFIER_ALPHABET) for _ in range(length))


def compute_s256_challenge(code_verifier: str) -> str:
    """Derive the S256 code challenge.

    RFC 7636 Section 4.2: BASE64URL-ENCODE(SHA256(ASCII(code_verifier)))
    """
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
