"""Pytest configuration and fixtures for api_test_client tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from api_test_client.client.config import ApiTestClientConfig
from api_test_client.client.request import ApiTestRequest

pytest_plugins = ["pytester", "api_test_client.pytest_plugin"]

ENTRY_POINT = "http://api.example.test/v1"


@pytest.fixture
def mock_request():
    """Request double recording add_header/set_header/remove_header calls in order."""
    return MagicMock(spec=ApiTestRequest)


@pytest.fixture
def client_config():
    """Minimal client configuration pointing at the mocked API."""
    return ApiTestClientConfig(entry_point=ENTRY_POINT)
