"""API test client configuration.

The configuration is a YAML file validated by pydantic models:

    entry_point: https://api.example.com/v1
    timeout: 10
    verify_ssl: true
    headers:
      X-Client: integration-tests
    proxy:
      enabled: true
      host: proxy.local
      port: 3128
      exceptions:
        - localhost

Only entry_point is required. ``headers`` are set on every request of
every test (the pytest plugin configures them with SET for all requests).
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..const import DEFAULT_TIMEOUT

_LOGGER = logging.getLogger(__name__)


class ProxyConfig(BaseModel):
    """HTTP proxy settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=False, description="Send requests through the proxy")
    host: str | None = Field(default=None, description="Proxy host name")
    port: int | None = Field(default=None, ge=1, le=65535, description="Proxy port")
    exceptions: list[str] = Field(
        default_factory=list,
        description="Host names reached directly, without the proxy",
    )

    @model_validator(mode="after")
    def _require_host_and_port(self) -> ProxyConfig:
        if self.enabled and (not self.host or self.port is None):
            raise ValueError("proxy.host and proxy.port are required when the proxy is enabled")
        return self

    @property
    def url(self) -> str | None:
        """Proxy URL, None if the proxy is disabled."""
        if not self.enabled:
            return None
        return f"http://{self.host}:{self.port}"


class ApiTestClientConfig(BaseModel):
    """Configuration of the API test client."""

    model_config = ConfigDict(extra="forbid")

    entry_point: str = Field(description="Base URL of the API under test")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers set on all requests",
    )
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)


def load_client_config(config_path: Path | str) -> ApiTestClientConfig:
    """Load the client configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid YAML or fails validation
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"API test configuration not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Invalid API test configuration in {path}: expected a mapping")

    try:
        config = ApiTestClientConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid API test configuration in {path}: {e}") from e

    _LOGGER.debug("Loaded API test configuration from %s (entry point %s)", path, config.entry_point)
    return config
