"""Authorization code to token exchange service.

Implements the RFC 6749 Section 4.1.3 token request and maps the token
endpoint response into a typed success or failure outcome.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from authcode.client.interfaces import NetworkClient
from authcode.client.models import parameters as params
from authcode.client.models.discovery import AuthorityMetadata
from authcode.client.models.errors import TokenResponseError
from authcode.client.models.network import NetworkResponse
from authcode.client.models.parameters import ParameterCollection
from authcode.client.models.tokens import (
    ExchangeOutcome,
    ProtocolError,
    TokenExchangeFailure,
    TokenExchangeSuccess,
    TokenResponse,
)

logger = logging.getLogger(__name__)


class TokenExchangeClient:
    """Issues the back-channel token request.

    Sends a single form-encoded POST per exchange. Retries and timeouts,
    if any, belong to the network client. Transport errors propagate
    unchanged; HTTP error statuses become TokenExchangeFailure outcomes.
    """

    def __init__(self, network_client: NetworkClient):
        self._network_client = network_client

    async def exchange(
        self,
        authority_metadata: AuthorityMetadata,
        token_params: ParameterCollection,
    ) -> ExchangeOutcome:
        """Exchange token parameters for tokens at the token endpoint.

        Args:
            authority_metadata: Resolved authority endpoints
            token_params: Parameters built by TokenRequestBuilder

        Returns:
            TokenExchangeSuccess on a 2xx response, TokenExchangeFailure
            carrying the server's error payload otherwise

        Raises:
            TransportError: If the token endpoint cannot be reached
            TokenResponseError: If a 2xx response body is malformed
        """
        token_endpoint = authority_metadata.token_endpoint
        logger.debug(
            f"Exchanging authorization code at {token_endpoint}: "
            f"grant_type={token_params.get(params.GRANT_TYPE)}, "
            f"client_id={token_params.get(params.CLIENT_ID)}"
        )

        # RFC 6749 requires form encoding for token requests
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }

        response = await self._network_client.post(
            token_endpoint,
            body=token_params.to_query_string(),
            headers=headers,
        )

        if response.is_success():
            return self._parse_success(response)
        return self._parse_failure(response)

    def _parse_success(self, response: NetworkResponse) -> TokenExchangeSuccess:
        try:
            payload = response.json()
        except ValueError as e:
            raise TokenResponseError(f"Token response is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise TokenResponseError("Token response must be a JSON object")
        if "access_token" not in payload:
            raise TokenResponseError("Token response missing required access_token")

        try:
            token = TokenResponse.model_validate(payload)
        except ValidationError as e:
            raise TokenResponseError(f"Invalid token response format: {e}") from e

        logger.info("Token exchange successful")
        return TokenExchangeSuccess(token=token, status_code=response.status_code)

    def _parse_failure(self, response: NetworkResponse) -> TokenExchangeFailure:
        try:
            payload = response.json()
        except ValueError:
            # Non-JSON error bodies are kept verbatim in ProtocolError.body
            payload = None

        error = ProtocolError.from_body(response.body, payload)
        logger.warning(
            f"Token exchange failed with {response.status_code}: "
            f"{error.error or 'unknown_error'} - "
            f"{error.error_description or 'No description provided'}"
        )
        return TokenExchangeFailure(error=error, status_code=response.status_code)
