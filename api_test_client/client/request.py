"""HTTP request wrapper used by API tests.

ApiTestRequest keeps its headers as an ordered list of (name, value) pairs
so that ADD can append several values for the same name. Names are matched
case-insensitively. The request is turned into a requests.PreparedRequest
only when it is executed; repeated header names are then folded into one
comma-separated value (RFC 9110 section 5.3).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import requests

from ..const import CONTENT_TYPE_JSON, HEADER_CONTENT_TYPE
from ..exceptions import ApiTestError
from .uri import ApiUriBuilder


class ApiTestRequestBody:
    """Body of an API request.

    Use the factory methods; the body is handed to requests.Request as
    keyword arguments (json=, data=, files=).
    """

    def __init__(self, content_type: str | None = None, **request_kwargs: Any) -> None:
        self.content_type = content_type
        self._request_kwargs = request_kwargs

    @classmethod
    def from_json(cls, data: Any) -> ApiTestRequestBody:
        """JSON body from a JSON-serializable object (dict, list, ...)."""
        return cls(CONTENT_TYPE_JSON, json=data)

    @classmethod
    def from_json_string(cls, text: str) -> ApiTestRequestBody:
        """JSON body from an already serialized document."""
        return cls(CONTENT_TYPE_JSON, data=text.encode("utf-8"))

    @classmethod
    def from_form(cls, fields: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> ApiTestRequestBody:
        """URL-encoded form body (requests sets the content type)."""
        return cls(data=fields)

    @classmethod
    def from_multipart(
        cls,
        fields: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> ApiTestRequestBody:
        """Multipart form body (requests sets the content type and boundary)."""
        return cls(data=fields or {}, files=files or {})

    def to_request_kwargs(self) -> dict[str, Any]:
        return dict(self._request_kwargs)

    def __repr__(self) -> str:
        return f"ApiTestRequestBody(content_type={self.content_type!r})"


class ApiTestRequest:
    """HTTP request with mutable headers.

    Raises:
        ApiTestError: If the method is not supported, or a body is given
                      for a method that does not take one
    """

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    SUPPORTED_METHODS = (GET, HEAD, POST, PUT, PATCH, DELETE)
    BODY_METHODS = (POST, PUT, PATCH)

    def __init__(
        self,
        method: str,
        uri: str | ApiUriBuilder,
        body: ApiTestRequestBody | None = None,
    ) -> None:
        method = method.upper()
        url = uri.build() if isinstance(uri, ApiUriBuilder) else uri

        if method not in self.SUPPORTED_METHODS:
            raise ApiTestError(f"Unsupported HTTP method {method}", url=url)
        if body is not None and method not in self.BODY_METHODS:
            raise ApiTestError(f"HTTP method {method} does not support a request body", url=url)

        self._method = method
        self._url = url
        self._body = body
        self._headers: list[tuple[str, str]] = []

    @property
    def method(self) -> str:
        return self._method

    @property
    def uri(self) -> str:
        return self._url

    @property
    def body(self) -> ApiTestRequestBody | None:
        return self._body

    @property
    def headers(self) -> list[tuple[str, str]]:
        """All headers in order, as (name, value) pairs."""
        return list(self._headers)

    def get_headers(self, name: str) -> list[str]:
        """Values of all headers with the given name."""
        key = name.lower()
        return [value for header_name, value in self._headers if header_name.lower() == key]

    def get_header(self, name: str) -> str | None:
        """Value of the first header with the given name."""
        values = self.get_headers(name)
        return values[0] if values else None

    def add_header(self, name: str, value: object) -> ApiTestRequest:
        """Append a header. Existing headers with the same name are kept.

        Raises:
            ValueError: If the value is None
        """
        if value is None:
            raise ValueError(f"Value of header {name} cannot be null")
        self._headers.append((name, str(value)))
        return self

    def set_header(self, name: str, value: object) -> ApiTestRequest:
        """Set a header, replacing all existing headers with the same name.

        Raises:
            ValueError: If the value is None
        """
        if value is None:
            raise ValueError(f"Value of header {name} cannot be null")
        self.remove_header(name)
        self._headers.append((name, str(value)))
        return self

    def remove_header(self, name: str) -> ApiTestRequest:
        """Remove all headers with the given name."""
        key = name.lower()
        self._headers = [header for header in self._headers if header[0].lower() != key]
        return self

    def prepare(self) -> requests.PreparedRequest:
        """Build a standalone requests.PreparedRequest (no session defaults)."""
        return self.to_request().prepare()

    def to_request(self) -> requests.Request:
        """Build the requests.Request to send."""
        headers: dict[str, str] = {}
        names: dict[str, str] = {}
        for name, value in self._headers:
            key = name.lower()
            if key in names:
                headers[names[key]] = f"{headers[names[key]]}, {value}"
            else:
                names[key] = name
                headers[name] = value

        kwargs: dict[str, Any] = {}
        if self._body is not None:
            kwargs = self._body.to_request_kwargs()
            if self._body.content_type and HEADER_CONTENT_TYPE.lower() not in names:
                headers[HEADER_CONTENT_TYPE] = self._body.content_type

        return requests.Request(self._method, self._url, headers=headers, **kwargs)

    def __str__(self) -> str:
        description = f"{self._method} {self._url}"
        if self._headers:
            description += ", headers: " + ", ".join(f"{name}={value}" for name, value in self._headers)
        return description
