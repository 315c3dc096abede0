"""Authorization request construction.

Builds the query parameters for the authorization endpoint (RFC 6749
Section 4.1.1) including PKCE (RFC 7636) and provider extensions.
"""

from __future__ import annotations

import logging

from authcode.client.models import parameters as params
from authcode.client.models.config import ClientConfiguration
from authcode.client.models.parameters import ParameterCollection
from authcode.client.models.requests import (
    RESPONSE_MODE_FRAGMENT,
    RESPONSE_TYPE_CODE,
    AuthorizationCodeUrlRequest,
    CodeChallengeMethod,
    PromptValue,
)
from authcode.client.services.validation import (
    validate_and_default_scopes,
    validate_pkce_pair,
    validate_prompt,
    validate_redirect_uri,
)

logger = logging.getLogger(__name__)


class AuthorizationRequestBuilder:
    """Assembles authorization endpoint parameters in a fixed order.

    Order: client_id, scope, redirect_uri, code_challenge and
    code_challenge_method, state, prompt, login_hint, domain_hint, nonce,
    correlation_id, response_mode, response_type. Never performs network I/O.
    """

    def build(
        self,
        request: AuthorizationCodeUrlRequest,
        configuration: ClientConfiguration,
    ) -> ParameterCollection:
        """Validate the request and build its parameter collection.

        Args:
            request: Caller request
            configuration: Client configuration

        Returns:
            ParameterCollection: Parameters in emission order

        Raises:
            RequestValidationError: If any request parameter is invalid
        """
        # Validate everything up front so nothing is half-built on failure
        scopes = validate_and_default_scopes(request.scopes, configuration.client_id)
        validate_redirect_uri(request.redirect_uri)
        validate_pkce_pair(request.code_challenge, request.code_challenge_method)
        validate_prompt(request.prompt)

        collection = ParameterCollection()
        collection.add(params.CLIENT_ID, configuration.client_id)
        collection.add(params.SCOPE, " ".join(scopes))
        collection.add(params.REDIRECT_URI, request.redirect_uri)

        if request.code_challenge is not None:
            collection.add(params.CODE_CHALLENGE, request.code_challenge)
            collection.add(
                params.CODE_CHALLENGE_METHOD,
                CodeChallengeMethod(request.code_challenge_method).value,
            )

        if request.state is not None:
            collection.add(params.STATE, request.state)
        if request.prompt is not None:
            collection.add(params.PROMPT, PromptValue(request.prompt).value)
        if request.login_hint is not None:
            collection.add(params.LOGIN_HINT, request.login_hint)
        if request.domain_hint is not None:
            collection.add(params.DOMAIN_HINT, request.domain_hint)
        if request.nonce is not None:
            collection.add(params.NONCE, request.nonce)

        correlation_id = request.correlation_id
        if not correlation_id:
            correlation_id = configuration.crypto_provider.new_correlation_id()
        collection.add(params.CORRELATION_ID, correlation_id)

        # Only the fragment response mode is supported for this flow
        collection.add(params.RESPONSE_MODE, RESPONSE_MODE_FRAGMENT)
        collection.add(params.RESPONSE_TYPE, RESPONSE_TYPE_CODE)

        logger.debug(
            f"Built authorization parameters for client {configuration.client_id}: "
            f"{', '.join(collection.names())}"
        )
        return collection

    @staticmethod
    def build_url(authorization_endpoint: str, parameters: ParameterCollection) -> str:
        """Append the encoded parameters to the authorization endpoint."""
        separator = "&" if "?" in authorization_endpoint else "?"
        return f"{authorization_endpoint}{separator}{parameters.to_query_string()}"
