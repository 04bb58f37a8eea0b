"""
Google Analytics Data API reporting tools.

Contains the date ranged report tools: free-form reports and the canned
traffic, demographics, page and event reports.

Argument names are camelCase because they are the tool's wire contract.
"""

import logging
from typing import List, Optional, Union

from .coordinator import mcp
from . import adapter
from . import utils
from .models import (
    CONVERSIONS,
    KEY_EVENTS,
    PAGE_PERFORMANCE,
    TRAFFIC_SOURCES,
    USER_DEMOGRAPHICS,
    CannedReport,
    ReportError,
    ReportRequest,
)

# Configure logging
logger = logging.getLogger(__name__)

_PROPERTY_NOTE = (
    " The property ID is optional and defaults to the GA_PROPERTY_ID "
    "configured in your environment."
)


async def _custom_report(
    action: str,
    propertyId: Optional[str],
    dimensions: Union[List[str], str, None],
    metrics: Union[List[str], str],
    startDate: Optional[str],
    endDate: Optional[str],
) -> str:
    try:
        request = ReportRequest(
            metrics=tuple(utils.preprocess_list_param(metrics) or ()),
            dimensions=tuple(utils.preprocess_list_param(dimensions) or ()),
            property_id=propertyId,
            start_date=startDate,
            end_date=endDate,
        )
    except ValueError as e:
        return adapter.encode_result(ReportError(action, str(e)))

    result = await adapter.run_report(
        utils.analytics_client, utils.settings, request, action
    )
    return adapter.encode_result(result)


async def _canned_report(
    report: CannedReport,
    propertyId: Optional[str],
    startDate: Optional[str],
    endDate: Optional[str],
    event_filter: Optional[str] = None,
) -> str:
    request = report.request(
        property_id=propertyId,
        start_date=startDate,
        end_date=endDate,
        event_filter=event_filter,
    )
    result = await adapter.run_report(
        utils.analytics_client, utils.settings, request, report.action
    )
    return adapter.encode_result(result)


@mcp.tool(
    description=(
        "Queries Google Analytics 4 data based on provided dimensions, "
        "metrics, and date ranges." + _PROPERTY_NOTE
    ),
    title="Query Google Analytics Data",
    annotations={"title": "Query Google Analytics Data", "readOnlyHint": True},
)
async def query_analytics(
    metrics: Union[List[str], str],
    dimensions: Union[List[str], str, None] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    propertyId: Optional[str] = None,
) -> str:
    """
    Run a free-form GA4 report.

    Args:
        metrics: Metric names, e.g. ["sessions", "activeUsers"]
        dimensions: Optional dimension names, e.g. ["country"]
        startDate: Start date (YYYY-MM-DD, "NdaysAgo", "yesterday"); defaults to 30daysAgo
        endDate: End date; defaults to today
        propertyId: Optional GA4 property ID (uses default if not provided)

    Returns:
        JSON string with "header" and "rows"
    """
    return await _custom_report(
        "querying analytics", propertyId, dimensions, metrics, startDate, endDate
    )


@mcp.tool(
    description=(
        "Retrieves a custom report from Google Analytics 4 based on provided "
        "dimensions, metrics, and date ranges." + _PROPERTY_NOTE
    ),
    title="Get Custom Google Analytics Report",
    annotations={"title": "Get Custom Google Analytics Report", "readOnlyHint": True},
)
async def get_custom_report(
    metrics: Union[List[str], str],
    dimensions: Union[List[str], str, None] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    propertyId: Optional[str] = None,
) -> str:
    """Same report as `query_analytics`, kept under its own name."""
    return await _custom_report(
        "getting custom report", propertyId, dimensions, metrics, startDate, endDate
    )


@mcp.tool(
    description=(
        "Retrieves traffic source data (e.g., channel, source, medium) for "
        "your Google Analytics 4 property." + _PROPERTY_NOTE
    ),
    title="Get Google Analytics Traffic Sources",
    annotations={"title": "Get Google Analytics Traffic Sources", "readOnlyHint": True},
)
async def get_traffic_sources(
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    propertyId: Optional[str] = None,
) -> str:
    return await _canned_report(TRAFFIC_SOURCES, propertyId, startDate, endDate)


@mcp.tool(
    description=(
        "Retrieves user demographic data (e.g., country, city, device "
        "category) for your Google Analytics 4 property." + _PROPERTY_NOTE
    ),
    title="Get Google Analytics User Demographics",
    annotations={"title": "Get Google Analytics User Demographics", "readOnlyHint": True},
)
async def get_user_demographics(
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    propertyId: Optional[str] = None,
) -> str:
    return await _canned_report(USER_DEMOGRAPHICS, propertyId, startDate, endDate)


@mcp.tool(
    description=(
        "Retrieves page performance data (e.g., page path, page title, views) "
        "for your Google Analytics 4 property." + _PROPERTY_NOTE
    ),
    title="Get Google Analytics Page Performance",
    annotations={"title": "Get Google Analytics Page Performance", "readOnlyHint": True},
)
async def get_page_performance(
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    propertyId: Optional[str] = None,
) -> str:
    return await _canned_report(PAGE_PERFORMANCE, propertyId, startDate, endDate)


@mcp.tool(
    description=(
        "Retrieves key event data for a single event name (exact match) "
        "in your Google Analytics 4 property." + _PROPERTY_NOTE
    ),
    title="Get Google Analytics Key Event Data",
    annotations={"title": "Get Google Analytics Key Event Data", "readOnlyHint": True},
)
async def get_key_event_data(
    keyEvent: str,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    propertyId: Optional[str] = None,
) -> str:
    """
    Get the keyEvents count for one event.

    Args:
        keyEvent: Event name, matched exactly against eventName (e.g. "purchase")
        startDate: Start date; defaults to 30daysAgo
        endDate: End date; defaults to today
        propertyId: Optional GA4 property ID (uses default if not provided)
    """
    return await _canned_report(
        KEY_EVENTS, propertyId, startDate, endDate, event_filter=keyEvent
    )


@mcp.tool(
    description=(
        "Retrieves conversion data for a single event name (exact match) "
        "in your Google Analytics 4 property." + _PROPERTY_NOTE
    ),
    title="Get Google Analytics Conversion Data",
    annotations={"title": "Get Google Analytics Conversion Data", "readOnlyHint": True},
)
async def get_conversion_data(
    conversionEvent: str,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    propertyId: Optional[str] = None,
) -> str:
    """Like `get_key_event_data`, reporting the legacy `conversions` metric."""
    return await _canned_report(
        CONVERSIONS, propertyId, startDate, endDate, event_filter=conversionEvent
    )
