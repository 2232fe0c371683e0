"""HTTP client executing API test requests.

Usage:
    with ApiTestClient(config) as client:
        response = client.execute(ApiTestRequest("GET", "https://api.example.com/v1/ping"))
        assert response.status == 200
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

import requests

from ..const import DEFAULT_TIMEOUT
from ..exceptions import ApiTestError
from .config import ApiTestClientConfig
from .request import ApiTestRequest
from .response import ApiTestResponse

_LOGGER = logging.getLogger(__name__)


class ApiTestClient:
    """Executes ApiTestRequest objects with a requests.Session.

    Proxy, timeout and TLS verification come from the client configuration.
    Hosts listed in ``proxy.exceptions`` are reached without the proxy.
    """

    def __init__(self, config: ApiTestClientConfig | None = None) -> None:
        self._config = config
        self._session = requests.Session()

    @property
    def config(self) -> ApiTestClientConfig | None:
        return self._config

    def execute(self, request: ApiTestRequest) -> ApiTestResponse:
        """Send the request and return its response.

        Raises:
            ApiTestError: If the request could not be completed
        """
        _LOGGER.debug("Sending %s", request)

        try:
            # session defaults (User-Agent, cookies from previous responses) are merged in
            prepared = self._session.prepare_request(request.to_request())
            response = self._session.send(
                prepared,
                timeout=self._config.timeout if self._config else DEFAULT_TIMEOUT,
                verify=self._config.verify_ssl if self._config else True,
                proxies=self._proxies_for(request.uri),
            )
        except requests.RequestException as e:
            _LOGGER.warning("Request %s %s failed: %s", request.method, request.uri, e)
            raise ApiTestError(f"Could not complete request {request}", url=request.uri) from e

        _LOGGER.debug("Response %d for %s %s", response.status_code, request.method, request.uri)
        return ApiTestResponse(response, request_uri=request.uri)

    def _proxies_for(self, url: str) -> dict[str, str]:
        """Proxies to use for a URL (empty when not proxied)."""
        if self._config is None or self._config.proxy.url is None:
            return {}

        host = urlsplit(url).hostname
        if host in self._config.proxy.exceptions:
            _LOGGER.debug("Bypassing proxy for %s", host)
            return {}

        return {"http": self._config.proxy.url, "https": self._config.proxy.url}

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> ApiTestClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
