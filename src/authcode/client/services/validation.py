"""Request parameter validation for the authorization code flow.

All validators are pure and synchronous. They run before any network
request so invalid input never reaches the authority.
"""

from __future__ import annotations

from collections.abc import Iterable

from authcode.client.models.errors import (
    InvalidPkceParametersError,
    InvalidPromptValueError,
    InvalidScopeError,
    MissingRedirectUriError,
)
from authcode.client.models.requests import (
    DEFAULT_SCOPES,
    CodeChallengeMethod,
    PromptValue,
)

_CHALLENGE_METHODS = {method.value for method in CodeChallengeMethod}
_PROMPT_VALUES = {prompt.value for prompt in PromptValue}


def validate_and_default_scopes(
    requested: Iterable[str] | None, client_id: str
) -> tuple[str, ...]:
    """Merge requested scopes with the default OpenID Connect scopes.

    Defaults come first, followed by requested scopes in first-seen order.
    Duplicates are dropped case-insensitively and blank entries ignored.

    Args:
        requested: Caller-supplied scopes, may be None or empty
        client_id: Application client id, reserved as a scope value

    Returns:
        De-duplicated scopes, always including openid, profile and
        offline_access

    Raises:
        InvalidScopeError: If requested is a single string, a scope contains
            whitespace, or the client id is requested together with other
            scopes
    """
    # A bare string is itself an iterable of characters
    if isinstance(requested, str):
        raise InvalidScopeError(
            f"Scopes must be a collection of strings, not a single string: "
            f"{requested!r}"
        )

    custom = [scope.strip() for scope in requested or () if scope and scope.strip()]

    for scope in custom:
        if any(char.isspace() for char in scope):
            raise InvalidScopeError(f"Scope must not contain whitespace: {scope!r}")

    if client_id in custom and len(set(custom)) > 1:
        raise InvalidScopeError(
            "Client id can only be requested as a single scope, "
            f"got {sorted(set(custom))}"
        )

    merged: dict[str, str] = {}
    for scope in (*DEFAULT_SCOPES, *custom):
        merged.setdefault(scope.lower(), scope)
    return tuple(merged.values())


def validate_redirect_uri(uri: str | None) -> None:
    if not uri:
        raise MissingRedirectUriError("A redirect URI is required")


def validate_pkce_pair(challenge: str | None, method: str | None) -> None:
    """Check the PKCE challenge and method are given together.

    Raises:
        InvalidPkceParametersError: If exactly one is present, or the method
            is not a recognized transform
    """
    if challenge is None and method is None:
        return
    if not challenge or not method:
        raise InvalidPkceParametersError(
            "code_challenge and code_challenge_method must be provided together"
        )
    if method not in _CHALLENGE_METHODS:
        raise InvalidPkceParametersError(
            f"Unsupported code_challenge_method {method!r}, "
            f"expected one of {sorted(_CHALLENGE_METHODS)}"
        )


def validate_prompt(prompt: str | None) -> None:
    if prompt is not None and prompt not in _PROMPT_VALUES:
        raise InvalidPromptValueError(
            f"Invalid prompt {prompt!r}, expected one of {sorted(_PROMPT_VALUES)}"
        )
