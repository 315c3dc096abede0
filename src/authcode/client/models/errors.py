"""Exception hierarchy for OAuth 2.0 authorization code client errors.

Provides specific exception types for different failure modes to enable
precise error handling. Validation errors are always raised before any
network request is attempted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from authcode.client.models.tokens import TokenExchangeFailure


class OAuth2Error(Exception):
    """Base exception for all OAuth 2.0 related errors."""

    pass


class ConfigurationError(OAuth2Error):
    """Raised when the client configuration is unusable."""

    pass


class RequestValidationError(OAuth2Error):
    """Raised when caller-supplied request parameters fail validation."""

    pass


class MissingRedirectUriError(RequestValidationError):
    """Raised when the redirect URI is absent or empty."""

    pass


class InvalidScopeError(RequestValidationError):
    """Raised when requested scopes violate scope policy."""

    pass


class InvalidPkceParametersError(RequestValidationError):
    """Raised when the PKCE challenge and method are not a valid pair."""

    pass


class InvalidPromptValueError(RequestValidationError):
    """Raised when the prompt is not one of the accepted values."""

    pass


class AuthorityResolutionError(OAuth2Error):
    """Raised when authority metadata cannot be obtained or is malformed."""

    pass


class TransportError(OAuth2Error):
    """Raised when the network client cannot complete a request.

    Covers unreachable hosts and timeouts. HTTP status codes never produce
    this error; they are interpreted by the token exchange client.
    """

    pass


class TokenError(OAuth2Error):
    """Raised when token operations fail."""

    pass


class TokenResponseError(TokenError):
    """Raised when a successful token endpoint response is malformed."""

    pass


class TokenExchangeError(TokenError):
    """Raised when a failed exchange outcome is unwrapped.

    Carries the failure outcome so callers keep access to the server's
    error payload.
    """

    def __init__(self, failure: TokenExchangeFailure):
        error = failure.error
        super().__init__(
            f"Token exchange failed with {failure.status_code}: "
            f"{error.error or 'unknown_error'}"
            f"{' - ' + error.error_description if error.error_description else ''}"
        )
        self.failure = failure


class PKCEError(OAuth2Error):
    """Raised when PKCE parameter generation fails."""

    pass
