"""
Request and result types shared by the report tools.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ReportRequest:
    """A historical (date ranged) report query."""

    metrics: Tuple[str, ...]
    dimensions: Tuple[str, ...] = ()
    property_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    # Exact match against the eventName dimension
    event_filter: Optional[str] = None

    def __post_init__(self):
        if not self.metrics:
            raise ValueError("At least one metric is required")


@dataclass(frozen=True)
class RealtimeRequest:
    """A real-time report query. Metrics may be empty and are defaulted later."""

    metrics: Tuple[str, ...] = ()
    dimensions: Tuple[str, ...] = ()
    property_id: Optional[str] = None


@dataclass(frozen=True)
class ReportTable:
    """Flattened report: dimension columns first, then metric columns."""

    header: List[str]
    rows: List[List[str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List]:
        return {"header": list(self.header), "rows": [list(row) for row in self.rows]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class ReportError:
    """A failed report call, labelled with what the tool was doing."""

    action: str
    message: str

    def __str__(self) -> str:
        return f"Error {self.action}: {self.message}"


ReportResult = Union[ReportTable, ReportError]


@dataclass(frozen=True)
class CannedReport:
    """A report with a fixed dimension and metric set."""

    name: str
    action: str
    dimensions: Tuple[str, ...]
    metrics: Tuple[str, ...]

    def request(
        self,
        property_id: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        event_filter: Optional[str] = None,
    ) -> ReportRequest:
        return ReportRequest(
            metrics=self.metrics,
            dimensions=self.dimensions,
            property_id=property_id,
            start_date=start_date,
            end_date=end_date,
            event_filter=event_filter,
        )


TRAFFIC_SOURCES = CannedReport(
    name="get_traffic_sources",
    action="getting traffic sources",
    dimensions=("sessionDefaultChannelGroup", "sessionSource", "sessionMedium"),
    metrics=("sessions", "totalUsers"),
)

USER_DEMOGRAPHICS = CannedReport(
    name="get_user_demographics",
    action="getting user demographics",
    dimensions=("country", "city", "deviceCategory"),
    metrics=("totalUsers", "newUsers"),
)

PAGE_PERFORMANCE = CannedReport(
    name="get_page_performance",
    action="getting page performance",
    dimensions=("pagePath", "pageTitle"),
    metrics=("screenPageViews", "activeUsers"),
)

# Two names for the same filtered event report. GA4 renamed "conversions"
# to "key events"; both metric names are still accepted by the Data API.
KEY_EVENTS = CannedReport(
    name="get_key_event_data",
    action="getting key event data",
    dimensions=("eventName",),
    metrics=("keyEvents",),
)

CONVERSIONS = CannedReport(
    name="get_conversion_data",
    action="getting conversion data",
    dimensions=("eventName",),
    metrics=("conversions",),
)

CANNED_REPORTS: Dict[str, CannedReport] = {
    report.name: report
    for report in (
        TRAFFIC_SOURCES,
        USER_DEMOGRAPHICS,
        PAGE_PERFORMANCE,
        KEY_EVENTS,
        CONVERSIONS,
    )
}
