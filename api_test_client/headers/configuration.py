"""Reusable groups of headers and the configurators that produce them.

A HeaderConfiguration is a list of headers applied together, e.g. the
credentials of a test user. A HeaderConfigurator bundles configurations
that a test opts into with the ``api_header_configurators`` marker; the
pytest plugin looks configurators up through a HeaderConfiguratorLocator
and applies every configuration with SET for all requests.

Usage:
    class AdminUser(HeaderConfigurator):
        def get_header_configurations(self):
            return [BasicAuthHeaderConfiguration("admin", "secret")]

    @pytest.mark.api_header_configurators([AdminUser])
    def test_list_users(api_tester):
        ...
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from .header import ApiHeader, BasicAuthHeader

_LOGGER = logging.getLogger(__name__)


class HeaderConfiguration(ABC):
    """Group of headers to add, set or remove together."""

    @abstractmethod
    def get_headers(self) -> list[ApiHeader]:
        """Return the headers defined by this configuration."""
        raise NotImplementedError


class StaticHeaderConfiguration(HeaderConfiguration):
    """Configuration holding a fixed list of headers."""

    def __init__(self, *headers: ApiHeader) -> None:
        self._headers = list(headers)

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str | None]) -> StaticHeaderConfiguration:
        """Build a configuration from a name -> value mapping, in mapping order."""
        return cls(*(ApiHeader(name, value) for name, value in headers.items()))

    def get_headers(self) -> list[ApiHeader]:
        return list(self._headers)


class BasicAuthHeaderConfiguration(HeaderConfiguration):
    """Configuration with a single Basic Authentication header."""

    def __init__(self, user: str, password: str) -> None:
        self.user = user
        self.password = password

    def get_headers(self) -> list[ApiHeader]:
        return [BasicAuthHeader(self.user, self.password)]


class HeaderConfigurator(ABC):
    """Object producing header configurations for a test."""

    @abstractmethod
    def get_header_configurations(self) -> list[HeaderConfiguration]:
        """Return the header configurations to apply."""
        raise NotImplementedError


class HeaderConfiguratorLocator:
    """Locator of HeaderConfigurator instances.

    The default implementation instantiates configurator classes without
    arguments and caches one instance per class. Subclass it to build
    configurators that need dependencies (credentials store, fixtures, ...).
    """

    def __init__(self) -> None:
        self._configurators: dict[type[HeaderConfigurator], HeaderConfigurator] = {}

    def get_header_configurator(self, configurator_class: type[HeaderConfigurator]) -> HeaderConfigurator:
        """Return a configurator of the given type.

        Raises:
            ValueError: If the class is not a HeaderConfigurator
        """
        if not isinstance(configurator_class, type) or not issubclass(configurator_class, HeaderConfigurator):
            raise ValueError(f"Not a header configurator class: {configurator_class!r}")

        configurator = self._configurators.get(configurator_class)
        if configurator is None:
            _LOGGER.debug("Creating header configurator %s", configurator_class.__name__)
            configurator = self.create_header_configurator(configurator_class)
            self._configurators[configurator_class] = configurator

        return configurator

    def create_header_configurator(self, configurator_class: type[HeaderConfigurator]) -> HeaderConfigurator:
        """Instantiate a configurator (override to inject dependencies)."""
        return configurator_class()
