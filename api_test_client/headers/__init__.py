"""Request header management for API tests.

Usage:
    from api_test_client.headers import ApiHeader, HeadersManager, Operation

    manager = HeadersManager()
    manager.configure(Operation.SET, ApiHeader("X-Tenant", "acme"), True)
    manager.apply_configuration(request)
"""

from __future__ import annotations

from .configuration import (
    BasicAuthHeaderConfiguration,
    HeaderConfiguration,
    HeaderConfigurator,
    HeaderConfiguratorLocator,
    StaticHeaderConfiguration,
)
from .header import ApiHeader, BasicAuthHeader
from .manager import HeaderOperation, HeadersManager, Operation

__all__ = [
    # Headers
    "ApiHeader",
    "BasicAuthHeader",
    # Configurations
    "BasicAuthHeaderConfiguration",
    "HeaderConfiguration",
    "HeaderConfigurator",
    "HeaderConfiguratorLocator",
    "StaticHeaderConfiguration",
    # Manager
    "HeaderOperation",
    "HeadersManager",
    "Operation",
]
