"""
Data contracts returned by the payroll services.
"""

from datetime import date
from decimal import Decimal
from typing import List, TypedDict


class WeeklySummary(TypedDict):
    """Totals over the stored earnings records of one Monday-Sunday week"""

    employee_id: int
    week_start: date
    week_end: date
    days_recorded: int
    scheduled_hours: Decimal
    worked_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    regular_earnings: Decimal
    overtime_earnings: Decimal
    weekly_earnings: Decimal
    efficiency_percent: Decimal
    threshold_hours: Decimal
    threshold_crossed: bool


class RecalculationReport(TypedDict):
    """Outcome of rebuilding a range of weeks for one employee"""

    employee_id: int
    weeks: List[date]
    records_written: int
    dry_run: bool
