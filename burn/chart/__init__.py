"""
Burn Chart Module

Generates the cumulative burn / ceiling chart data for a job.
"""

from burn.chart.cache import ChartCache
from burn.chart.generator import (
    ChartGenerator,
    ChartResult,
    default_pop_start,
    default_query_stop,
    generate_chart,
    validate_chart_request,
)

__all__ = [
    "ChartCache",
    "ChartGenerator",
    "ChartResult",
    "default_pop_start",
    "default_query_stop",
    "generate_chart",
    "validate_chart_request",
]
