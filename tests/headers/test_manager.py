"""Tests for the HeadersManager.

The request is a MagicMock so the exact sequence of add_header/set_header/
remove_header calls can be compared with ``mock_calls``. reset_mock() is
called between requests so each assertion covers a single
apply_configuration().
"""

from __future__ import annotations

from unittest.mock import call

import pytest

from api_test_client.client.request import ApiTestRequest
from api_test_client.headers.configuration import HeaderConfiguration, StaticHeaderConfiguration
from api_test_client.headers.header import ApiHeader
from api_test_client.headers.manager import HeaderOperation, HeadersManager, Operation


def header(name: str, value: str | None = None) -> ApiHeader:
    return ApiHeader(name, value)


@pytest.fixture
def manager():
    return HeadersManager()


class TestRemoveHeaders:
    """Test REMOVE operations."""

    def test_remove_request_headers(self, manager, mock_request):
        """Test REMOVE at both scopes across several requests."""
        manager.configure(Operation.REMOVE, header("X-A", "foo"), True)
        manager.configure(Operation.REMOVE, header("X-A", "bar"), False)
        manager.configure(Operation.REMOVE, header("X-B", "foo"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.remove_header("X-A"),
            call.remove_header("X-A"),
            call.remove_header("X-B"),
        ]

        mock_request.reset_mock()
        manager.configure(Operation.REMOVE, header("X-B", "bar"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.remove_header("X-A"), call.remove_header("X-B")]

        mock_request.reset_mock()
        manager.configure(Operation.REMOVE, header("X-A", "baz"), True)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.remove_header("X-A")]

        mock_request.reset_mock()
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.remove_header("X-A")]

    def test_remove_for_next_request_prunes_next_request_set(self, manager, mock_request):
        """Test REMOVE for the next request drops the pending SET but keeps the permanent one."""
        manager.configure(Operation.SET, header("X", "foo"), True)
        manager.configure(Operation.SET, header("X", "bar"), False)
        manager.configure(Operation.REMOVE, header("X"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X", "foo"), call.remove_header("X")]

        mock_request.reset_mock()
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X", "foo")]

    def test_remove_for_all_requests_prunes_both_scopes(self, manager, mock_request):
        """Test permanent REMOVE drops permanent and next request operations."""
        manager.configure(Operation.SET, header("X", "foo"), True)
        manager.configure(Operation.ADD, header("X", "bar"), False)
        manager.configure(Operation.REMOVE, header("X"), True)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.remove_header("X")]


class TestSetHeaders:
    """Test SET operations."""

    def test_set_request_headers(self, manager, mock_request):
        """Test SET at both scopes across several requests."""
        manager.configure(Operation.SET, header("X-A", "foo"), True)
        manager.configure(Operation.SET, header("X-A", "bar"), False)
        manager.configure(Operation.SET, header("X-B", "foo"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.set_header("X-A", "foo"),
            call.set_header("X-A", "bar"),
            call.set_header("X-B", "foo"),
        ]

        mock_request.reset_mock()
        manager.configure(Operation.SET, header("X-B", "bar"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X-A", "foo"), call.set_header("X-B", "bar")]

        mock_request.reset_mock()
        manager.configure(Operation.SET, header("X-A", "baz"), True)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X-A", "baz")]

        mock_request.reset_mock()
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X-A", "baz")]

    def test_permanent_set_overwrites_previous_permanent_set(self, manager, mock_request):
        """Test only the last permanent SET for a name is replayed."""
        manager.configure(Operation.SET, header("X", "v1"), True)
        manager.configure(Operation.SET, header("X", "v2"), True)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X", "v2")]
        assert len(manager.permanent_operations) == 1

    def test_next_request_set_overwrites_previous_next_request_set(self, manager, mock_request):
        """Test only the last next request SET for a name is replayed."""
        manager.configure(Operation.SET, header("X", "v1"), False)
        manager.configure(Operation.SET, header("X", "v2"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X", "v2")]

    def test_permanent_set_replaces_permanent_adds(self, manager, mock_request):
        """Test permanent SET drops permanent ADDs and their next request copies."""
        manager.configure(Operation.ADD, header("X", "1"), True)
        manager.configure(Operation.ADD, header("X", "2"), True)
        manager.configure(Operation.SET, header("X", "3"), True)

        assert manager.next_request_operations == ()

        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X", "3")]

    def test_next_request_set_keeps_permanent_add(self, manager, mock_request):
        """Test next request SET drops only the next request copy of a permanent ADD."""
        manager.configure(Operation.ADD, header("X", "1"), True)
        manager.configure(Operation.SET, header("X", "2"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.add_header("X", "1"), call.set_header("X", "2")]

        mock_request.reset_mock()
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.add_header("X", "1")]

    def test_header_names_are_compared_exactly(self, manager, mock_request):
        """Test pruning matches header names as recorded."""
        manager.configure(Operation.SET, header("X-Token", "a"), True)
        manager.configure(Operation.SET, header("x-token", "b"), True)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X-Token", "a"), call.set_header("x-token", "b")]


class TestAddHeaders:
    """Test ADD operations."""

    def test_add_request_headers(self, manager, mock_request):
        """Test ADD never prunes and permanent ADDs are queued for the next request too."""
        manager.configure(Operation.ADD, header("X-A", "foo"), True)
        manager.configure(Operation.ADD, header("X-A", "bar"), True)
        manager.configure(Operation.ADD, header("X-B", "foo"), False)
        manager.configure(Operation.ADD, header("X-B", "bar"), True)
        manager.configure(Operation.ADD, header("X-C", "foo"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            # permanent
            call.add_header("X-A", "foo"),
            call.add_header("X-A", "bar"),
            call.add_header("X-B", "bar"),
            # next request
            call.add_header("X-A", "foo"),
            call.add_header("X-A", "bar"),
            call.add_header("X-B", "foo"),
            call.add_header("X-B", "bar"),
            call.add_header("X-C", "foo"),
        ]

        mock_request.reset_mock()
        manager.configure(Operation.ADD, header("X-A", "baz"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.add_header("X-A", "foo"),
            call.add_header("X-A", "bar"),
            call.add_header("X-B", "bar"),
            call.add_header("X-A", "baz"),
        ]

        mock_request.reset_mock()
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.add_header("X-A", "foo"),
            call.add_header("X-A", "bar"),
            call.add_header("X-B", "bar"),
        ]

    def test_add_preserves_insertion_order(self, manager, mock_request):
        """Test permanent ADDs replay first, in order, then next request ADDs."""
        manager.configure(Operation.ADD, header("A", "1"), True)
        manager.configure(Operation.ADD, header("A", "2"), True)
        manager.configure(Operation.ADD, header("B", "1"), False)

        assert [op.header.value for op in manager.permanent_operations] == ["1", "2"]
        assert [(op.header_name, op.header.value) for op in manager.next_request_operations] == [
            ("A", "1"),
            ("A", "2"),
            ("B", "1"),
        ]

        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.add_header("A", "1"),
            call.add_header("A", "2"),
            call.add_header("A", "1"),
            call.add_header("A", "2"),
            call.add_header("B", "1"),
        ]

    def test_permanent_add_after_next_request_remove(self, manager, mock_request):
        """Test a permanent ADD after a next request REMOVE still reaches the next request."""
        manager.configure(Operation.REMOVE, header("X-Custom"), False)
        manager.configure(Operation.ADD, header("X-Custom", "value"), True)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.add_header("X-Custom", "value"),
            call.remove_header("X-Custom"),
            call.add_header("X-Custom", "value"),
        ]

    def test_next_request_remove_after_permanent_add(self, manager, mock_request):
        """Test a next request REMOVE after a permanent ADD hides the header once."""
        added = header("X-Custom", "value")
        manager.configure(Operation.ADD, added, True)
        manager.configure(Operation.REMOVE, header("X-Custom"), False)

        assert [op.operation for op in manager.next_request_operations] == [Operation.REMOVE]
        assert [op.header for op in manager.permanent_operations] == [added]

        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.add_header("X-Custom", "value"),
            call.remove_header("X-Custom"),
        ]

        mock_request.reset_mock()
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.add_header("X-Custom", "value")]

    def test_next_request_remove_after_permanent_add_on_real_request(self, manager):
        """Test the header is absent from the next request and back on the one after."""
        manager.configure(Operation.ADD, header("X-Custom", "1"), True)
        manager.configure(Operation.REMOVE, header("X-Custom"), False)

        first = ApiTestRequest(ApiTestRequest.GET, "http://api.example.test/a")
        second = ApiTestRequest(ApiTestRequest.GET, "http://api.example.test/b")
        manager.apply_configuration(first)
        manager.apply_configuration(second)

        assert first.get_headers("X-Custom") == []
        assert second.get_headers("X-Custom") == ["1"]

    def test_permanent_add_after_next_request_remove_on_real_request(self, manager):
        """Test the header ends up on the request exactly once."""
        request = ApiTestRequest(ApiTestRequest.GET, "http://api.example.test/items")
        request.add_header("X-Custom", "default")

        manager.configure(Operation.REMOVE, header("X-Custom"), False)
        manager.configure(Operation.ADD, header("X-Custom", "value"), True)
        manager.apply_configuration(request)

        assert request.get_headers("X-Custom") == ["value"]


class TestApplyConfiguration:
    """Test replay and next request scope clearing."""

    def test_permanent_set_replayed_alone_after_next_request(self, manager, mock_request):
        """Test permanent SET is replayed alone once next request operations are consumed."""
        manager.configure(Operation.SET, header("X-A", "foo"), True)
        manager.configure(Operation.SET, header("X-A", "bar"), False)
        manager.configure(Operation.SET, header("X-B", "foo"), False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.set_header("X-A", "foo"),
            call.set_header("X-A", "bar"),
            call.set_header("X-B", "foo"),
        ]

        mock_request.reset_mock()
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("X-A", "foo")]

    def test_next_request_operations_cleared(self, manager, mock_request):
        """Test next request operations are empty and permanent ones unchanged after apply."""
        manager.configure(Operation.SET, header("A", "1"), True)
        manager.configure(Operation.ADD, header("B", "1"), True)
        manager.configure(Operation.REMOVE, header("C"), False)
        manager.configure(Operation.SET, header("D", "1"), False)
        permanent = manager.permanent_operations

        manager.apply_configuration(mock_request)

        assert manager.next_request_operations == ()
        assert manager.permanent_operations == permanent

    def test_replay_is_repeatable(self, manager, mock_request):
        """Test permanent operations are replayed identically on every request."""
        manager.configure(Operation.SET, header("A", "1"), True)
        manager.configure(Operation.REMOVE, header("B"), True)
        manager.configure(Operation.ADD, header("C", "1"), True)
        manager.apply_configuration(mock_request)

        expected = [call.set_header("A", "1"), call.remove_header("B"), call.add_header("C", "1")]
        for _ in range(3):
            mock_request.reset_mock()
            manager.apply_configuration(mock_request)
            assert mock_request.mock_calls == expected

    def test_empty_manager_does_nothing(self, manager, mock_request):
        """Test applying an empty configuration makes no calls."""
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == []

    def test_returns_manager_for_chaining(self, manager, mock_request):
        """Test configure and apply_configuration return the manager."""
        result = manager.configure(Operation.SET, header("A", "1"), True).apply_configuration(mock_request)

        assert result is manager

    def test_value_computed_from_request(self, manager):
        """Test the header value is computed against the request it is applied to."""

        class MethodHeader(ApiHeader):
            def compute_value(self, request):
                return f"{request.method} {request.uri}"

        manager.configure(Operation.SET, MethodHeader("X-Signature"), True)

        first = ApiTestRequest(ApiTestRequest.GET, "http://api.example.test/a")
        second = ApiTestRequest(ApiTestRequest.DELETE, "http://api.example.test/b")
        manager.apply_configuration(first)
        manager.apply_configuration(second)

        assert first.get_header("X-Signature") == "GET http://api.example.test/a"
        assert second.get_header("X-Signature") == "DELETE http://api.example.test/b"

    def test_request_errors_propagate(self, manager):
        """Test errors raised by the request are not wrapped."""
        manager.configure(Operation.SET, header("X-Empty", None), False)
        request = ApiTestRequest(ApiTestRequest.GET, "http://api.example.test/a")

        with pytest.raises(ValueError, match="X-Empty"):
            manager.apply_configuration(request)


class TestHeaderConfigurations:
    """Test configuring a group of headers at once."""

    def test_configure_applies_each_header_in_order(self, manager, mock_request):
        """Test every header of the configuration is configured in order."""
        configuration = StaticHeaderConfiguration(header("A", "1"), header("B", "2"))
        manager.configure(Operation.SET, configuration, True)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [call.set_header("A", "1"), call.set_header("B", "2")]

    def test_remove_configuration_for_next_request(self, manager, mock_request):
        """Test removing a configuration's headers for the next request only."""
        configuration = StaticHeaderConfiguration(header("A", "1"), header("B", "2"))
        manager.configure(Operation.SET, configuration, True)
        manager.configure(Operation.REMOVE, configuration, False)
        manager.apply_configuration(mock_request)

        assert mock_request.mock_calls == [
            call.set_header("A", "1"),
            call.set_header("B", "2"),
            call.remove_header("A"),
            call.remove_header("B"),
        ]

    def test_configuration_with_null_header(self, manager):
        """Test a configuration returning None is rejected."""

        class BrokenConfiguration(HeaderConfiguration):
            def get_headers(self):
                return [header("A", "1"), None]

        with pytest.raises(ValueError, match="null header"):
            manager.configure(Operation.SET, BrokenConfiguration(), True)


class UnnamedHeader(ApiHeader):
    """Header whose name is computed and comes out empty."""

    @property
    def name(self) -> str:
        return ""


# =============================================================================
# INVALID ARGUMENT CASES
# =============================================================================
# fmt: off
INVALID_ARGUMENT_CASES = [
    # (test_id,           op,             header_arg,            match)
    ("null_operation",    None,           ApiHeader("X", "1"),   "Operation cannot be null"),
    ("bad_operation",     "SET",          ApiHeader("X", "1"),   "Unknown header operation"),
    ("null_header",       Operation.SET,  None,                  "Header cannot be null"),
    ("not_a_header",      Operation.ADD,  ("X", "1"),            "Not a header"),
    ("empty_name",        Operation.SET,  UnnamedHeader("X"),    "Header name cannot be null or empty"),
]
# fmt: on


class TestInvalidArguments:
    """Test invalid arguments fail fast at configure()."""

    @pytest.mark.parametrize(
        "op,header_arg,match",
        [case[1:] for case in INVALID_ARGUMENT_CASES],
        ids=[case[0] for case in INVALID_ARGUMENT_CASES],
    )
    def test_configure_rejects(self, manager, op, header_arg, match):
        """Test configure raises ValueError and records nothing."""
        with pytest.raises(ValueError, match=match):
            manager.configure(op, header_arg, True)

        assert manager.permanent_operations == ()
        assert manager.next_request_operations == ()

    @pytest.mark.parametrize("name", [None, ""])
    def test_header_requires_name(self, name):
        """Test headers cannot be created without a name."""
        with pytest.raises(ValueError, match="Header name"):
            ApiHeader(name, "value")


class TestHeaderOperation:
    """Test the HeaderOperation record."""

    def test_is_immutable(self):
        """Test fields cannot be reassigned."""
        operation = HeaderOperation(header("X", "1"), Operation.SET)

        with pytest.raises(AttributeError):
            operation.operation = Operation.REMOVE  # type: ignore[misc]

    def test_apply_delegates_to_operation(self, mock_request):
        """Test apply runs the operation on its header."""
        HeaderOperation(header("X", "1"), Operation.ADD).apply(mock_request)

        assert mock_request.mock_calls == [call.add_header("X", "1")]
