"""HTTP response wrapper returned by ApiTestClient."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import requests
    from requests.structures import CaseInsensitiveDict


class ApiTestResponse:
    """Response of an API request.

    The body is read eagerly by requests, so the response stays usable
    after the client is closed.
    """

    def __init__(self, response: requests.Response, request_uri: str | None = None) -> None:
        self._response = response
        self._request_uri = request_uri if request_uri is not None else response.url

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> CaseInsensitiveDict[str]:
        return self._response.headers

    def get_header(self, name: str) -> str | None:
        """Value of a response header (case-insensitive), None if absent."""
        return self._response.headers.get(name)

    @property
    def text(self) -> str:
        """Response body as text, empty string if there is none."""
        return self._response.text or ""

    def json(self) -> Any:
        """Response body parsed as JSON.

        Raises:
            requests.JSONDecodeError: If the body is not valid JSON
        """
        return self._response.json()

    @property
    def request_uri(self) -> str:
        """URI of the request that produced this response."""
        return self._request_uri

    @property
    def elapsed(self) -> timedelta:
        return self._response.elapsed

    @property
    def raw_response(self) -> requests.Response:
        return self._response

    def __repr__(self) -> str:
        return f"ApiTestResponse(status={self.status}, request_uri={self._request_uri!r})"
