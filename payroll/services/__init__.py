# Payroll services package

from .earnings_service import WeeklyEarningsService, summarize_week
from .enums import RecalculationTrigger
from .wage_changes import record_wage_change, update_overtime_settings

__all__ = [
    "RecalculationTrigger",
    "WeeklyEarningsService",
    "record_wage_change",
    "summarize_week",
    "update_overtime_settings",
]
