"""URI builder for API requests."""

from __future__ import annotations

from urllib.parse import quote, urlencode, urlsplit

from ..exceptions import ApiTestError


class ApiUriBuilder:
    """Builds request URIs from an entry point, path elements and query parameters.

    Example:
        ApiUriBuilder("https://api.example.com/v1/").path("users", "42").query_param("expand", "roles").build()
        -> "https://api.example.com/v1/users/42?expand=roles"
    """

    def __init__(self, entry_point: str) -> None:
        self._entry_point = entry_point.rstrip("/")
        self._path_elements: list[str] = []
        self._query_params: dict[str, list[str]] = {}

    def path(self, *elements: str) -> ApiUriBuilder:
        """Append path elements (leading and trailing slashes are stripped)."""
        for element in elements:
            self._path_elements.append(str(element).strip("/"))
        return self

    def query_param(self, name: str, *values: object) -> ApiUriBuilder:
        """Add one or more values for a query parameter."""
        self._query_params.setdefault(name, []).extend(str(value) for value in values)
        return self

    def build(self) -> str:
        """Build the URI.

        Raises:
            ApiTestError: If the entry point is not an absolute URL
        """
        parts = urlsplit(self._entry_point)
        if not parts.scheme or not parts.netloc:
            raise ApiTestError("URI entry point must be an absolute URL", url=self._entry_point)

        uri = self._entry_point
        for element in self._path_elements:
            if element:
                uri += "/" + quote(element, safe="/")

        if self._query_params:
            uri += "?" + urlencode(self._query_params, doseq=True)

        return uri

    def __str__(self) -> str:
        return self.build()
