"""Helpers for writing API tests.

ApiTester ties a client, a headers manager and the API entry point
together. Every request it sends goes through
HeadersManager.apply_configuration() right before execution, so headers
configured for all requests or for the next request are applied.

The pytest plugin provides a ready-made instance as the ``api_tester``
fixture:

    def test_get_user(api_tester):
        api_tester.set_header_for_next_request("X-Request-Id", "abc")
        response = api_tester.get_resource(api_tester.uri("users", "42"))
        assert response.status == 200
"""

from __future__ import annotations

from typing import Any

from .client.client import ApiTestClient
from .client.request import ApiTestRequest, ApiTestRequestBody
from .client.response import ApiTestResponse
from .client.uri import ApiUriBuilder
from .const import CONTENT_TYPE_JSON, HEADER_ACCEPT
from .headers.configuration import HeaderConfiguration
from .headers.header import ApiHeader
from .headers.manager import HeadersManager, Operation


class ApiTester:
    """Sends API requests with managed headers."""

    def __init__(self, client: ApiTestClient, headers_manager: HeadersManager, entry_point: str) -> None:
        self.client = client
        self.headers_manager = headers_manager
        self.entry_point = entry_point

    def uri(self, *path: str) -> ApiUriBuilder:
        """URI builder starting at the entry point."""
        return ApiUriBuilder(self.entry_point).path(*path)

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def get_resource(self, path: str | ApiUriBuilder) -> ApiTestResponse:
        return self._execute(ApiTestRequest.GET, path)

    def head_resource(self, path: str | ApiUriBuilder) -> ApiTestResponse:
        return self._execute(ApiTestRequest.HEAD, path, accept_json=False)

    def post_resource(self, body: Any, path: str | ApiUriBuilder) -> ApiTestResponse:
        return self._execute(ApiTestRequest.POST, path, body)

    def put_resource(self, body: Any, path: str | ApiUriBuilder) -> ApiTestResponse:
        return self._execute(ApiTestRequest.PUT, path, body)

    def patch_resource(self, body: Any, path: str | ApiUriBuilder) -> ApiTestResponse:
        return self._execute(ApiTestRequest.PATCH, path, body)

    def delete_resource(self, path: str | ApiUriBuilder) -> ApiTestResponse:
        return self._execute(ApiTestRequest.DELETE, path)

    def _execute(
        self,
        method: str,
        path: str | ApiUriBuilder,
        body: Any = None,
        accept_json: bool = True,
    ) -> ApiTestResponse:
        uri = path if isinstance(path, ApiUriBuilder) else self.uri(path)
        request = ApiTestRequest(method, uri, _to_body(body))

        if accept_json:
            request.set_header(HEADER_ACCEPT, CONTENT_TYPE_JSON)

        # configured headers come last so tests can override Accept
        self.headers_manager.apply_configuration(request)

        return self.client.execute(request)

    # -------------------------------------------------------------------------
    # Header configuration
    # -------------------------------------------------------------------------

    def add_header_for_all_requests(self, header: str | ApiHeader, value: str | None = None) -> None:
        self.headers_manager.configure(Operation.ADD, _to_header(header, value), True)

    def add_header_for_next_request(self, header: str | ApiHeader, value: str | None = None) -> None:
        self.headers_manager.configure(Operation.ADD, _to_header(header, value), False)

    def set_header_for_all_requests(self, header: str | ApiHeader, value: str | None = None) -> None:
        self.headers_manager.configure(Operation.SET, _to_header(header, value), True)

    def set_headers_for_all_requests(self, header_configuration: HeaderConfiguration) -> None:
        self.headers_manager.configure(Operation.SET, header_configuration, True)

    def set_header_for_next_request(self, header: str | ApiHeader, value: str | None = None) -> None:
        self.headers_manager.configure(Operation.SET, _to_header(header, value), False)

    def set_headers_for_next_request(self, header_configuration: HeaderConfiguration) -> None:
        self.headers_manager.configure(Operation.SET, header_configuration, False)

    # replace_* read better in tests that override a header set by a configurator
    replace_header_for_all_requests = set_header_for_all_requests
    replace_header_for_next_request = set_header_for_next_request

    def remove_header_for_all_requests(self, header: str | ApiHeader) -> None:
        self.headers_manager.configure(Operation.REMOVE, _to_header(header), True)

    def remove_headers_for_all_requests(self, header_configuration: HeaderConfiguration) -> None:
        self.headers_manager.configure(Operation.REMOVE, header_configuration, True)

    def remove_header_for_next_request(self, header: str | ApiHeader) -> None:
        self.headers_manager.configure(Operation.REMOVE, _to_header(header), False)

    def remove_headers_for_next_request(self, header_configuration: HeaderConfiguration) -> None:
        self.headers_manager.configure(Operation.REMOVE, header_configuration, False)


def _to_header(header: str | ApiHeader, value: str | None = None) -> ApiHeader:
    if isinstance(header, ApiHeader):
        return header
    return ApiHeader(header, value)


def _to_body(body: Any) -> ApiTestRequestBody | None:
    """Wrap JSON-able values; bodies and None pass through."""
    if body is None or isinstance(body, ApiTestRequestBody):
        return body
    if isinstance(body, str):
        return ApiTestRequestBody.from_json_string(body)
    return ApiTestRequestBody.from_json(body)
