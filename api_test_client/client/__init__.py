"""HTTP client for API tests.

Usage:
    from api_test_client.client import ApiTestClient, ApiTestRequest, ApiUriBuilder

    request = ApiTestRequest(ApiTestRequest.GET, ApiUriBuilder(entry_point).path("users"))
    response = client.execute(request)
"""

from __future__ import annotations

from .client import ApiTestClient
from .config import ApiTestClientConfig, ProxyConfig, load_client_config
from .request import ApiTestRequest, ApiTestRequestBody
from .response import ApiTestResponse
from .uri import ApiUriBuilder

__all__ = [
    "ApiTestClient",
    "ApiTestClientConfig",
    "ApiTestRequest",
    "ApiTestRequestBody",
    "ApiTestResponse",
    "ApiUriBuilder",
    "ProxyConfig",
    "load_client_config",
]
