"""Tests for request building, row flattening and error handling."""

import json
from unittest.mock import MagicMock

import pytest
from fastmcp.exceptions import ToolError
from google.analytics.data_v1beta.types import Filter
from google.api_core.exceptions import PermissionDenied

from ga4_mcp_server import adapter
from ga4_mcp_server.config import Settings
from ga4_mcp_server.models import (
    KEY_EVENTS,
    RealtimeRequest,
    ReportError,
    ReportRequest,
    ReportTable,
)

from .conftest import make_realtime_response, make_report_response


class TestBuildReportRequest:

    def test_defaults_property_and_dates(self, settings):
        request = adapter.build_report_request(ReportRequest(metrics=("sessions",)), settings)

        assert request.property == "properties/123456"
        assert request.date_ranges[0].start_date == "30daysAgo"
        assert request.date_ranges[0].end_date == "today"
        assert [m.name for m in request.metrics] == ["sessions"]
        assert list(request.dimensions) == []

    def test_each_field_defaults_independently(self, settings):
        request = adapter.build_report_request(
            ReportRequest(metrics=("sessions",), start_date="7daysAgo", property_id="999"),
            settings,
        )

        assert request.property == "properties/999"
        assert request.date_ranges[0].start_date == "7daysAgo"
        assert request.date_ranges[0].end_date == "today"

    def test_prefixed_property_id_is_kept(self, settings):
        request = adapter.build_report_request(
            ReportRequest(metrics=("sessions",), property_id="properties/777"), settings
        )
        assert request.property == "properties/777"

    def test_dimensions_keep_request_order(self, settings):
        request = adapter.build_report_request(
            ReportRequest(metrics=("sessions", "totalUsers"), dimensions=("city", "country")),
            settings,
        )
        assert [d.name for d in request.dimensions] == ["city", "country"]
        assert [m.name for m in request.metrics] == ["sessions", "totalUsers"]

    def test_event_filter_is_exact_match_on_event_name(self, settings):
        request = adapter.build_report_request(
            KEY_EVENTS.request(event_filter="purchase"), settings
        )

        event_filter = request.dimension_filter.filter
        assert event_filter.field_name == "eventName"
        assert event_filter.string_filter.value == "purchase"
        assert event_filter.string_filter.match_type == Filter.StringFilter.MatchType.EXACT

    def test_no_filter_without_event(self, settings):
        request = adapter.build_report_request(ReportRequest(metrics=("sessions",)), settings)
        assert "dimension_filter" not in request

    def test_missing_property_raises(self):
        with pytest.raises(ValueError, match="No property ID"):
            adapter.build_report_request(ReportRequest(metrics=("sessions",)), Settings())


def test_report_request_requires_metrics():
    with pytest.raises(ValueError, match="metric"):
        ReportRequest(metrics=())


class TestBuildRealtimeRequest:

    def test_defaults_to_active_users(self, settings):
        request = adapter.build_realtime_request(RealtimeRequest(), settings)

        assert request.property == "properties/123456"
        assert [m.name for m in request.metrics] == ["activeUsers"]
        assert "minute_ranges" not in request

    def test_caller_metrics_are_used(self, settings):
        request = adapter.build_realtime_request(
            RealtimeRequest(metrics=("screenPageViews",), dimensions=("country",)), settings
        )
        assert [m.name for m in request.metrics] == ["screenPageViews"]
        assert [d.name for d in request.dimensions] == ["country"]


def test_flatten_rows_puts_dimensions_before_metrics():
    response = make_report_response(
        [
            (["/home", "Home"], ["1000", "12.5"]),
            (["/about", "About"], ["200", "3"]),
        ]
    )
    assert adapter.flatten_rows(response) == [
        ["/home", "Home", "1000", "12.5"],
        ["/about", "About", "200", "3"],
    ]


class TestRunReport:

    async def test_success(self, settings):
        client = MagicMock()
        client.run_report.return_value = make_report_response([(["US"], ["42", "7"])])
        request = ReportRequest(metrics=("sessions", "newUsers"), dimensions=("country",))

        result = await adapter.run_report(client, settings, request, "querying analytics")

        assert result == ReportTable(
            header=["country", "sessions", "newUsers"], rows=[["US", "42", "7"]]
        )
        client.run_report.assert_called_once()

    async def test_every_row_matches_header_width(self, settings):
        client = MagicMock()
        client.run_report.return_value = make_report_response(
            [(["a", "b"], ["1"]), (["c", "d"], ["2"])]
        )
        request = ReportRequest(metrics=("sessions",), dimensions=("x", "y"))

        result = await adapter.run_report(client, settings, request, "querying analytics")

        assert len(result.header) == 3
        assert all(len(row) == 3 for row in result.rows)

    async def test_zero_rows(self, settings):
        client = MagicMock()
        client.run_report.return_value = make_report_response([])

        result = await adapter.run_report(
            client, settings, ReportRequest(metrics=("sessions",)), "querying analytics"
        )

        assert result.to_dict() == {"header": ["sessions"], "rows": []}

    async def test_backend_error_becomes_report_error(self, settings):
        client = MagicMock()
        client.run_report.side_effect = PermissionDenied("User does not have access")

        result = await adapter.run_report(
            client, settings, ReportRequest(metrics=("sessions",)), "querying analytics"
        )

        assert isinstance(result, ReportError)
        assert str(result).startswith("Error querying analytics: ")
        assert "User does not have access" in str(result)

    async def test_unexpected_error_becomes_report_error(self, settings):
        client = MagicMock()
        client.run_report.side_effect = RuntimeError("connection reset")

        result = await adapter.run_report(
            client, settings, ReportRequest(metrics=("sessions",)), "getting custom report"
        )

        assert str(result) == "Error getting custom report: connection reset"

    async def test_missing_property_is_reported_without_calling_backend(self):
        client = MagicMock()

        result = await adapter.run_report(
            client, Settings(), ReportRequest(metrics=("sessions",)), "querying analytics"
        )

        assert isinstance(result, ReportError)
        assert "No property ID" in result.message
        client.run_report.assert_not_called()

    async def test_uninitialized_client(self, settings):
        result = await adapter.run_report(
            None, settings, ReportRequest(metrics=("sessions",)), "querying analytics"
        )
        assert str(result) == "Error querying analytics: Google Analytics client not initialized"


class TestRunRealtimeReport:

    async def test_default_metric_header(self, settings):
        client = MagicMock()
        client.run_realtime_report.return_value = make_realtime_response([["17"]])

        result = await adapter.run_realtime_report(
            client, settings, RealtimeRequest(), "getting real-time data"
        )

        assert result == ReportTable(header=["activeUsers"], rows=[["17"]])

    async def test_error(self, settings):
        client = MagicMock()
        client.run_realtime_report.side_effect = RuntimeError("quota exceeded")

        result = await adapter.run_realtime_report(
            client, settings, RealtimeRequest(), "getting real-time data"
        )

        assert str(result) == "Error getting real-time data: quota exceeded"


class TestEncodeResult:

    def test_table_is_indented_json(self):
        text = adapter.encode_result(ReportTable(header=["sessions"], rows=[["42"]]))

        assert text == json.dumps({"header": ["sessions"], "rows": [["42"]]}, indent=2)
        assert '\n  "header"' in text

    def test_error_raises_tool_error(self):
        with pytest.raises(ToolError, match="^Error getting traffic sources: boom$"):
            adapter.encode_result(ReportError("getting traffic sources", "boom"))
