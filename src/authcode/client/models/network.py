"""Raw HTTP response model returned by network clients."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NetworkResponse:
    """Uninterpreted HTTP response.

    Network clients never act on the status code; callers decide what a
    given status means.
    """

    status_code: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.body)
