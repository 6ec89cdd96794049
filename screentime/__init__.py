from .aggregation import aggregate
from .models import AggregatedUsageRecord, DurationBreakdown, RawUsageRecord, UsageWindow
from .reporter import breakdown_duration, format_duration
from .service import ScreenTimeService
from .window import day_window

__all__ = [
    "AggregatedUsageRecord",
    "DurationBreakdown",
    "RawUsageRecord",
    "ScreenTimeService",
    "UsageWindow",
    "aggregate",
    "breakdown_duration",
    "day_window",
    "format_duration",
]
