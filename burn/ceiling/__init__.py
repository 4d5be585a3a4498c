"""
Burn Ceiling Module

Dated ceiling releases, per-job JSON records, and month-by-month accrual.
"""

from burn.ceiling.accrual import CeilingSeries, WARNING_RATIO, accrue_ceiling
from burn.ceiling.models import (
    CeilingRecord,
    CeilingRelease,
    is_valid_pop,
    parse_hours,
    pop_validation_message,
)
from burn.ceiling.store import CeilingStore, load_record_or_empty

__all__ = [
    "CeilingSeries",
    "WARNING_RATIO",
    "accrue_ceiling",
    "CeilingRecord",
    "CeilingRelease",
    "is_valid_pop",
    "parse_hours",
    "pop_validation_message",
    "CeilingStore",
    "load_record_or_empty",
]
