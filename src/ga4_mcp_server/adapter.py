"""
Report adapter for the Google Analytics Data API.

Translates typed report requests into Data API requests, runs them and
flattens the responses into `{header, rows}` tables. Backend failures are
returned as `ReportError` values rather than raised.
"""

import asyncio
import logging
from typing import List, Optional

from fastmcp.exceptions import ToolError
from google.analytics.data_v1beta.types import (
    DateRange,
    Dimension,
    Filter,
    FilterExpression,
    Metric,
    RunRealtimeReportRequest,
    RunReportRequest,
)

from . import utils
from .config import (
    DEFAULT_END_DATE,
    DEFAULT_REALTIME_METRIC,
    DEFAULT_START_DATE,
    Settings,
)
from .models import RealtimeRequest, ReportError, ReportRequest, ReportResult, ReportTable

# Configure logging
logger = logging.getLogger(__name__)


def resolve_property(property_id: Optional[str], settings: Settings) -> str:
    """Return the API resource name for the requested or default property."""
    prop_id = property_id or settings.default_property_id
    if not prop_id:
        raise ValueError(
            "No property ID provided and GA_PROPERTY_ID is not configured"
        )
    return utils.format_property_id(prop_id)


def realtime_metrics(request: RealtimeRequest) -> List[str]:
    """Metrics for a real-time call, defaulting to activeUsers."""
    if request.metrics:
        return list(request.metrics)
    return [DEFAULT_REALTIME_METRIC]


def build_report_request(request: ReportRequest, settings: Settings) -> RunReportRequest:
    """Build a RunReportRequest, defaulting property and dates independently."""
    report_request = RunReportRequest(
        property=resolve_property(request.property_id, settings),
        date_ranges=[
            DateRange(
                start_date=request.start_date or DEFAULT_START_DATE,
                end_date=request.end_date or DEFAULT_END_DATE,
            )
        ],
        dimensions=[Dimension(name=name) for name in request.dimensions],
        metrics=[Metric(name=name) for name in request.metrics],
    )

    if request.event_filter is not None:
        report_request.dimension_filter = FilterExpression(
            filter=Filter(
                field_name="eventName",
                string_filter=Filter.StringFilter(
                    value=request.event_filter,
                    match_type=Filter.StringFilter.MatchType.EXACT,
                ),
            )
        )

    return report_request


def build_realtime_request(
    request: RealtimeRequest, settings: Settings
) -> RunRealtimeReportRequest:
    """Build a RunRealtimeReportRequest. Real-time reports take no date range."""
    return RunRealtimeReportRequest(
        property=resolve_property(request.property_id, settings),
        dimensions=[Dimension(name=name) for name in request.dimensions],
        metrics=[Metric(name=name) for name in realtime_metrics(request)],
    )


def flatten_rows(response) -> List[List[str]]:
    """Flatten response rows into dimension values followed by metric values."""
    return [
        [value.value for value in row.dimension_values]
        + [value.value for value in row.metric_values]
        for row in response.rows
    ]


async def _execute(method, request, header: List[str], action: str) -> ReportResult:
    try:
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(None, method, request)
        return ReportTable(header=header, rows=flatten_rows(response))

    except Exception as e:
        logger.error(f"Error {action}: {e}")
        return ReportError(action, str(e))


async def run_report(
    client, settings: Settings, request: ReportRequest, action: str
) -> ReportResult:
    """
    Run one historical report against the Data API.

    Args:
        client: A BetaAnalyticsDataClient (or anything with `run_report`)
        settings: Defaults applied to missing request fields
        request: The report to run
        action: Label used in the error text, e.g. "querying analytics"

    Returns:
        A ReportTable on success, a ReportError otherwise
    """
    if client is None:
        return ReportError(action, "Google Analytics client not initialized")

    try:
        report_request = build_report_request(request, settings)
    except ValueError as e:
        logger.error(f"Error {action}: {e}")
        return ReportError(action, str(e))

    header = list(request.dimensions) + list(request.metrics)
    return await _execute(client.run_report, report_request, header, action)


async def run_realtime_report(
    client, settings: Settings, request: RealtimeRequest, action: str
) -> ReportResult:
    """Run one real-time report; see `run_report`."""
    if client is None:
        return ReportError(action, "Google Analytics client not initialized")

    try:
        realtime_request = build_realtime_request(request, settings)
    except ValueError as e:
        logger.error(f"Error {action}: {e}")
        return ReportError(action, str(e))

    header = list(request.dimensions) + realtime_metrics(request)
    return await _execute(client.run_realtime_report, realtime_request, header, action)


def encode_result(result: ReportResult) -> str:
    """Encode a result for the wire.

    Tables become indented JSON text. Errors are raised as ToolError, which
    the protocol layer returns as text content flagged with isError.
    """
    if isinstance(result, ReportError):
        raise ToolError(str(result))
    return result.to_json()
