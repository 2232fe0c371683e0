"""Manager of HTTP request headers for API tests.

Tests declare header modifications either for all subsequent requests or
for the next request only. The manager records them as operations, prunes
operations made superfluous by newer ones, and replays the rest onto each
request right before it is sent.

Replay order:
    1. Permanent operations, in the order they were configured
    2. Next request operations, in the order they were configured

Next request operations are then cleared. Permanent operations stay until a
permanent SET or REMOVE for the same header name replaces them.

Pruning (SET and REMOVE only, ADD is purely additive):
    - Any next request operation for the same header name is dropped.
    - Permanent operations for the same header name are dropped only if the
      new operation is itself permanent.

Usage:
    manager = HeadersManager()
    manager.configure(Operation.SET, ApiHeader("X-Tenant", "acme"), True)
    manager.configure(Operation.REMOVE, ApiHeader("X-Tenant"), False)

    manager.apply_configuration(request)  # X-Tenant set, then removed
    manager.apply_configuration(request)  # X-Tenant set
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from .configuration import HeaderConfiguration
from .header import ApiHeader

if TYPE_CHECKING:
    from ..client.request import ApiTestRequest

_LOGGER = logging.getLogger(__name__)


class HeaderMutableRequest(Protocol):
    """What the manager needs from a request (ApiTestRequest implements it)."""

    def add_header(self, name: str, value: str | None) -> object: ...

    def set_header(self, name: str, value: str | None) -> object: ...

    def remove_header(self, name: str) -> object: ...


class Operation(Enum):
    """Modification of an HTTP request header."""

    ADD = "add"
    """Append the header. Previous headers with the same name are kept."""

    SET = "set"
    """Set the header. Previous headers with the same name are overwritten."""

    REMOVE = "remove"
    """Remove all headers with the same name."""

    def apply(self, request: HeaderMutableRequest, header: ApiHeader) -> None:
        """Apply this modification of the header to the request."""
        if self is Operation.ADD:
            request.add_header(header.name, header.compute_value(request))
        elif self is Operation.SET:
            request.set_header(header.name, header.compute_value(request))
        else:
            request.remove_header(header.name)


@dataclass(frozen=True)
class HeaderOperation:
    """A header paired with the operation to apply to it."""

    header: ApiHeader
    operation: Operation

    @property
    def header_name(self) -> str:
        return self.header.name

    def apply(self, request: HeaderMutableRequest) -> None:
        self.operation.apply(request, self.header)


class HeadersManager:
    """Records header operations for all requests or the next one and replays them."""

    def __init__(self) -> None:
        self._permanent_operations: list[HeaderOperation] = []
        self._next_request_operations: list[HeaderOperation] = []

    @property
    def permanent_operations(self) -> tuple[HeaderOperation, ...]:
        """Operations applied to every request."""
        return tuple(self._permanent_operations)

    @property
    def next_request_operations(self) -> tuple[HeaderOperation, ...]:
        """Operations applied to the next request only."""
        return tuple(self._next_request_operations)

    def configure(
        self,
        op: Operation,
        header: ApiHeader | HeaderConfiguration,
        for_all_requests: bool,
    ) -> HeadersManager:
        """Modify a request header, or every header of a configuration.

        Call apply_configuration() to apply the configured modifications to
        a request.

        Args:
            op: What to do with the header (ADD/SET/REMOVE)
            header: The header to modify, or a configuration whose headers
                    are all modified in order
            for_all_requests: True to apply the modification to all
                    subsequent requests, False for the next request only

        Returns:
            This manager

        Raises:
            ValueError: If the operation or header is None, the header name
                    is empty, or a configuration contains a None header
        """
        if op is None:
            raise ValueError("Operation cannot be null")
        if not isinstance(op, Operation):
            raise ValueError(f"Unknown header operation: {op!r}")
        if header is None:
            raise ValueError("Header cannot be null")

        if isinstance(header, HeaderConfiguration):
            return self._configure_all(op, header, for_all_requests)

        if not isinstance(header, ApiHeader):
            raise ValueError(f"Not a header or header configuration: {header!r}")
        if not header.name:
            raise ValueError("Header name cannot be null or empty")

        operation = HeaderOperation(header, op)

        # Drop operations made superfluous by this one, e.g. a previous SET
        # is useless once a REMOVE for the same header is configured
        self._clean_header_operations(operation, for_all_requests)

        if for_all_requests:
            self._permanent_operations.append(operation)
        else:
            self._next_request_operations.append(operation)

        # Next request operations run last, so a header removed for the next
        # request and then added for all requests would be missing from that
        # request:
        #   REMOVE X-Custom false  -> runs last
        #   ADD X-Custom true      -> runs first
        # Queueing the permanent ADD for the next request too puts it back.
        if op is Operation.ADD and for_all_requests:
            self._next_request_operations.append(operation)

        _LOGGER.debug(
            "Configured %s %s for %s",
            op.name,
            header.name,
            "all requests" if for_all_requests else "next request",
        )

        return self

    def _configure_all(
        self,
        op: Operation,
        header_configuration: HeaderConfiguration,
        for_all_requests: bool,
    ) -> HeadersManager:
        """Configure every header of a configuration, in its order."""
        for header in header_configuration.get_headers():
            if header is None:
                raise ValueError(f"Header configuration {type(header_configuration).__name__} contains a null header")
            self.configure(op, header, for_all_requests)

        return self

    def apply_configuration(self, request: ApiTestRequest | HeaderMutableRequest) -> HeadersManager:
        """Apply permanent and next request operations to a request.

        Next request operations are cleared afterwards. Errors raised by the
        request are not caught.

        Returns:
            This manager
        """
        for operation in self._permanent_operations:
            operation.apply(request)

        for operation in self._next_request_operations:
            operation.apply(request)

        _LOGGER.debug(
            "Applied %d permanent and %d next request header operations",
            len(self._permanent_operations),
            len(self._next_request_operations),
        )

        self._next_request_operations.clear()

        return self

    def _clean_header_operations(self, operation: HeaderOperation, for_all_requests: bool) -> None:
        """Remove operations that become superfluous once the given one is added."""
        if operation.operation is Operation.ADD:
            return

        # Every pending next request operation for this header is overridden
        self._next_request_operations = _without_header(self._next_request_operations, operation.header_name)

        # Permanent operations are only overridden by another permanent one
        if for_all_requests:
            self._permanent_operations = _without_header(self._permanent_operations, operation.header_name)


def _without_header(operations: list[HeaderOperation], header_name: str) -> list[HeaderOperation]:
    return [operation for operation in operations if operation.header_name != header_name]
