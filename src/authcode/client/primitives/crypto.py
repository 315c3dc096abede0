"""Default crypto provider backed by the standard library."""

from __future__ import annotations

import uuid

from authcode.client.models.security import PKCECodes
from authcode.client.primitives.pkce import generate_pkce_codes


class DefaultCryptoProvider:
    """Generates random correlation ids and PKCE codes."""

    def new_correlation_id(self) -> str:
        return str(uuid.uuid4())

    def generate_pkce_codes(self) -> PKCECodes:
        return generate_pkce_codes()
