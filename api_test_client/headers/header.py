"""HTTP request headers managed by the HeadersManager.

A header is a name plus a value producer. The value is resolved when the
header is applied to a request (see ApiHeader.compute_value), so subclasses
can derive it from the request itself, e.g. a signature computed over the
method and URI.
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

from ..const import HEADER_AUTHORIZATION

if TYPE_CHECKING:
    from ..client.request import ApiTestRequest


class ApiHeader:
    """HTTP request header.

    Attributes:
        name: Header name (non-empty)
        value: Header value, None for headers only used to be removed
    """

    def __init__(self, name: str, value: str | None = None) -> None:
        """Initialize the header.

        Raises:
            ValueError: If the name is None or empty
        """
        if not name:
            raise ValueError("Header name cannot be null or empty")

        self._name = name
        self._value = value

    @property
    def name(self) -> str:
        """Header name."""
        return self._name

    @property
    def value(self) -> str | None:
        """Header value as configured."""
        return self._value

    def compute_value(self, request: ApiTestRequest) -> str | None:
        """Return the value to send with the given request.

        The base implementation ignores the request and returns the stored
        value.
        """
        return str(self._value) if self._value is not None else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, value={self._value!r})"


class BasicAuthHeader(ApiHeader):
    """Authorization header for HTTP Basic Authentication (RFC 7617)."""

    def __init__(self, user: str, password: str) -> None:
        credentials = base64.b64encode(f"{user}:{password}".encode()).decode("ascii")
        super().__init__(HEADER_AUTHORIZATION, f"Basic {credentials}")
