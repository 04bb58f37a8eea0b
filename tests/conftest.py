"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest
from google.analytics.data_v1beta.types import (
    DimensionValue,
    MetricValue,
    Row,
    RunRealtimeReportResponse,
    RunReportResponse,
)

from ga4_mcp_server import utils
from ga4_mcp_server.config import Settings


def make_row(dimension_values, metric_values) -> Row:
    return Row(
        dimension_values=[DimensionValue(value=v) for v in dimension_values],
        metric_values=[MetricValue(value=v) for v in metric_values],
    )


def make_report_response(rows) -> RunReportResponse:
    """Build a report response from (dimension_values, metric_values) pairs."""
    return RunReportResponse(rows=[make_row(dims, metrics) for dims, metrics in rows])


def make_realtime_response(rows) -> RunRealtimeReportResponse:
    return RunRealtimeReportResponse(rows=[make_row([], metrics) for metrics in rows])


@pytest.fixture
def settings():
    return Settings(default_property_id="123456")


@pytest.fixture
def ga_client(monkeypatch, settings):
    """Install a mocked Data API client and default settings for the tools."""
    client = MagicMock()
    client.run_report.return_value = make_report_response([])
    client.run_realtime_report.return_value = make_realtime_response([])
    monkeypatch.setattr(utils, "analytics_client", client)
    monkeypatch.setattr(utils, "settings", settings)
    return client
