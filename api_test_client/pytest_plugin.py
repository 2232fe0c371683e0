"""pytest plugin providing API test fixtures.

Enable it in the conftest.py of the test suite:

    pytest_plugins = ["api_test_client.pytest_plugin"]

Fixtures (all function-scoped, one set per test):
    api_client_config: Client configuration loaded from --api-test-config
        (or the API_TEST_CONFIG environment variable). Tests are skipped
        when no configuration is given. Override it to build the
        configuration in code.
    api_client: ApiTestClient, closed after the test
    headers_manager: Fresh HeadersManager
    header_configurator_locator: HeaderConfiguratorLocator used to
        resolve the classes given to the api_header_configurators marker
    api_tester: ApiTester with the configuration's default headers and the
        marker's header configurations set for all requests

Marker:
    @pytest.mark.api_header_configurators([AdminUser, JsonClient])

    Configurator classes are passed in a list; pytest would take a single
    class argument as the object to decorate.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest

from .client.client import ApiTestClient
from .client.config import ApiTestClientConfig, load_client_config
from .const import CONFIG_ENV_VAR
from .headers.configuration import HeaderConfiguratorLocator, StaticHeaderConfiguration
from .headers.manager import HeadersManager, Operation
from .testing import ApiTester

_LOGGER = logging.getLogger(__name__)

MARKER_HEADER_CONFIGURATORS = "api_header_configurators"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("api-test-client")
    group.addoption(
        "--api-test-config",
        action="store",
        default=None,
        help=f"YAML configuration of the API test client (default: ${CONFIG_ENV_VAR})",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        f"{MARKER_HEADER_CONFIGURATORS}([configurator_classes]): "
        "set the headers of these HeaderConfigurator classes for all requests of the test",
    )


@pytest.fixture
def api_client_config(request: pytest.FixtureRequest) -> ApiTestClientConfig:
    """Client configuration from --api-test-config or $API_TEST_CONFIG."""
    config_path = request.config.getoption("--api-test-config") or os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        pytest.skip(f"No API test configuration (use --api-test-config or set {CONFIG_ENV_VAR})")
    return load_client_config(config_path)


@pytest.fixture
def api_client(api_client_config: ApiTestClientConfig) -> Iterator[ApiTestClient]:
    """HTTP client for the test, closed at teardown."""
    client = ApiTestClient(api_client_config)
    yield client
    client.close()


@pytest.fixture
def headers_manager() -> HeadersManager:
    """Headers manager for the test."""
    return HeadersManager()


@pytest.fixture
def header_configurator_locator() -> HeaderConfiguratorLocator:
    """Locator resolving the classes of the api_header_configurators marker."""
    return HeaderConfiguratorLocator()


@pytest.fixture
def api_tester(
    request: pytest.FixtureRequest,
    api_client: ApiTestClient,
    api_client_config: ApiTestClientConfig,
    headers_manager: HeadersManager,
    header_configurator_locator: HeaderConfiguratorLocator,
) -> ApiTester:
    """ApiTester with default and marker-configured headers applied."""
    if api_client_config.headers:
        headers_manager.configure(
            Operation.SET,
            StaticHeaderConfiguration.from_mapping(api_client_config.headers),
            True,
        )

    configure_marker_headers(request.node, headers_manager, header_configurator_locator)

    return ApiTester(api_client, headers_manager, api_client_config.entry_point)


def configure_marker_headers(
    node: pytest.Item,
    headers_manager: HeadersManager,
    locator: HeaderConfiguratorLocator,
) -> None:
    """Set the headers of the api_header_configurators marker(s) for all requests.

    Markers closest to the test are applied last, so a test-level marker
    overrides headers from a class or module marker.
    """
    markers = list(node.iter_markers(MARKER_HEADER_CONFIGURATORS))
    for marker in reversed(markers):
        for configurator_class in marker_configurator_classes(marker):
            configurator = locator.get_header_configurator(configurator_class)
            for configuration in configurator.get_header_configurations():
                headers_manager.configure(Operation.SET, configuration, True)
            _LOGGER.debug("Applied header configurator %s to %s", configurator_class.__name__, node.nodeid)


def marker_configurator_classes(marker: pytest.Mark) -> list[type]:
    """Configurator classes of a marker, in order.

    Lists and tuples are flattened, so both ``([A, B])`` and ``([A], B)``
    give ``[A, B]``.
    """
    classes: list[type] = []
    for arg in marker.args:
        if isinstance(arg, (list, tuple)):
            classes.extend(arg)
        else:
            classes.append(arg)
    return classes
