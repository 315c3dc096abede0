"""Ordered protocol parameter collections.

Field names follow RFC 6749 (OAuth 2.0), RFC 7636 (PKCE) and the identity
provider extensions (nonce, prompt, login/domain hints, correlation id).
"""

from __future__ import annotations

from collections.abc import Iterator
from urllib.parse import quote, urlencode

# RFC 6749
CLIENT_ID = "client_id"
CLIENT_SECRET = "client_secret"
SCOPE = "scope"
REDIRECT_URI = "redirect_uri"
STATE = "state"
RESPONSE_TYPE = "response_type"
RESPONSE_MODE = "response_mode"
GRANT_TYPE = "grant_type"
CODE = "code"

# RFC 7636
CODE_CHALLENGE = "code_challenge"
CODE_CHALLENGE_METHOD = "code_challenge_method"
CODE_VERIFIER = "code_verifier"

# Provider extensions
NONCE = "nonce"
PROMPT = "prompt"
LOGIN_HINT = "login_hint"
DOMAIN_HINT = "domain_hint"
CORRELATION_ID = "correlation_id"


class ParameterCollection:
    """Ordered sequence of unique (name, value) string pairs.

    Emission order is the insertion order, which each builder fixes so the
    serialized output is deterministic.
    """

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    def add(self, name: str, value: str) -> None:
        """Append a parameter.

        Raises:
            ValueError: If the parameter name was already added
        """
        if name in self:
            raise ValueError(f"Duplicate protocol parameter: {name}")
        self._pairs.append((name, value))

    def get(self, name: str) -> str | None:
        for key, value in self._pairs:
            if key == name:
                return value
        return None

    def names(self) -> list[str]:
        return [key for key, _ in self._pairs]

    def items(self) -> list[tuple[str, str]]:
        return list(self._pairs)

    def to_dict(self) -> dict[str, str]:
        return dict(self._pairs)

    def to_query_string(self) -> str:
        """Serialize as form URL-encoded pairs joined by '&'.

        Spaces are encoded as %20 and reserved characters such as '/' and ':'
        are always percent-encoded.
        """
        return urlencode(self._pairs, quote_via=quote)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._pairs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterCollection):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"ParameterCollection({self._pairs!r})"
