"""Constants for the API test client."""

from __future__ import annotations

VERSION = "1.0.0"

# HTTP header names
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"

# Media types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

# Request timeout in seconds, used when the client configuration doesn't set one
DEFAULT_TIMEOUT = 30

# Environment variable holding the path of the client configuration file
# (read by the pytest plugin when --api-test-config is not given)
CONFIG_ENV_VAR = "API_TEST_CONFIG"
