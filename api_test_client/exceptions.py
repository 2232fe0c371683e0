"""Exceptions for the API test client.

Invalid arguments passed by test code (null operations, empty header names,
etc.) raise ValueError directly. ApiTestError covers failures to build or
execute an HTTP request.
"""

from __future__ import annotations


class ApiTestError(Exception):
    """Error raised when a request cannot be built or completed.

    Transport failures are chained (``raise ApiTestError(...) from err``)
    so the original exception stays available as ``__cause__``.

    Attributes:
        url: The URL of the request that failed (if known)
    """

    def __init__(self, message: str, url: str | None = None):
        """Initialize error with optional request URL.

        Args:
            message: Human-readable error description
            url: The URL of the request that failed
        """
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        """Format error with context."""
        parts = [super().__str__()]
        if self.url:
            parts.append(f"url={self.url}")
        return " | ".join(parts)
