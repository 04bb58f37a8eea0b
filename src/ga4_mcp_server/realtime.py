"""
Google Analytics realtime data tools.

Contains tools for retrieving real-time GA4 data.
"""

import logging
from typing import List, Optional, Union

from .coordinator import mcp
from . import adapter
from . import utils
from .models import RealtimeRequest

# Configure logging
logger = logging.getLogger(__name__)


@mcp.tool(
    description=(
        "Retrieves real-time active user data for your Google Analytics 4 "
        "property. The property ID is optional and defaults to the "
        "GA_PROPERTY_ID configured in your environment."
    ),
    title="Get Realtime Google Analytics Data",
    annotations={"title": "Get Realtime Google Analytics Data", "readOnlyHint": True},
)
async def get_realtime_data(
    metrics: Union[List[str], str, None] = None,
    dimensions: Union[List[str], str, None] = None,
    propertyId: Optional[str] = None,
) -> str:
    """
    Get real-time Google Analytics data.

    Args:
        metrics: Optional metric names; defaults to ["activeUsers"]
        dimensions: Optional dimension names (e.g., ["deviceCategory"])
        propertyId: Optional GA4 property ID (uses default if not provided)

    Returns:
        JSON string with "header" and "rows"
    """
    request = RealtimeRequest(
        metrics=tuple(utils.preprocess_list_param(metrics) or ()),
        dimensions=tuple(utils.preprocess_list_param(dimensions) or ()),
        property_id=propertyId,
    )
    result = await adapter.run_realtime_report(
        utils.analytics_client, utils.settings, request, "getting real-time data"
    )
    return adapter.encode_result(result)
