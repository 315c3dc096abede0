"""Token request construction for the authorization code exchange.

Builds the form body for the token endpoint (RFC 6749 Section 4.1.3).
"""

from __future__ import annotations

from authcode.client.models import parameters as params
from authcode.client.models.config import ClientConfiguration
from authcode.client.models.parameters import ParameterCollection
from authcode.client.models.requests import (
    GRANT_TYPE_AUTHORIZATION_CODE,
    AuthorizationCodeExchangeRequest,
)
from authcode.client.services.validation import (
    validate_and_default_scopes,
    validate_redirect_uri,
)


class TokenRequestBuilder:
    """Assembles token endpoint parameters in a fixed order.

    Order: client_id, scope, redirect_uri, code, code_verifier,
    client_secret, grant_type. The code and verifier are passed through
    unchecked; the authorization server is authoritative for both.
    """

    def build(
        self,
        request: AuthorizationCodeExchangeRequest,
        configuration: ClientConfiguration,
    ) -> ParameterCollection:
        """Validate the request and build its parameter collection.

        Raises:
            RequestValidationError: If scopes or redirect URI are invalid
        """
        scopes = validate_and_default_scopes(request.scopes, configuration.client_id)
        validate_redirect_uri(request.redirect_uri)

        collection = ParameterCollection()
        collection.add(params.CLIENT_ID, configuration.client_id)
        collection.add(params.SCOPE, " ".join(scopes))
        collection.add(params.REDIRECT_URI, request.redirect_uri)
        collection.add(params.CODE, request.code)

        if request.code_verifier is not None:
            collection.add(params.CODE_VERIFIER, request.code_verifier)
        if request.client_secret is not None:
            collection.add(params.CLIENT_SECRET, request.client_secret)

        collection.add(params.GRANT_TYPE, GRANT_TYPE_AUTHORIZATION_CODE)
        return collection
