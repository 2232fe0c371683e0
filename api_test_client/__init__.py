"""Header-managed HTTP client for API integration tests.

Tests declare request header modifications for all subsequent requests or
for the next request only; the HeadersManager resolves conflicts between
them and applies a deterministic header set to every request.

See headers/manager.py for the replay and pruning rules.
"""

from __future__ import annotations

from .client import (
    ApiTestClient,
    ApiTestClientConfig,
    ApiTestRequest,
    ApiTestRequestBody,
    ApiTestResponse,
    ApiUriBuilder,
    load_client_config,
)
from .const import VERSION
from .exceptions import ApiTestError
from .headers import (
    ApiHeader,
    BasicAuthHeader,
    BasicAuthHeaderConfiguration,
    HeaderConfiguration,
    HeaderConfigurator,
    HeaderConfiguratorLocator,
    HeadersManager,
    Operation,
    StaticHeaderConfiguration,
)
from .testing import ApiTester

__version__ = VERSION

__all__ = [
    # Client
    "ApiTestClient",
    "ApiTestClientConfig",
    "ApiTestError",
    "ApiTestRequest",
    "ApiTestRequestBody",
    "ApiTestResponse",
    "ApiUriBuilder",
    "load_client_config",
    # Headers
    "ApiHeader",
    "BasicAuthHeader",
    "BasicAuthHeaderConfiguration",
    "HeaderConfiguration",
    "HeaderConfigurator",
    "HeaderConfiguratorLocator",
    "HeadersManager",
    "Operation",
    "StaticHeaderConfiguration",
    # Testing
    "ApiTester",
]
