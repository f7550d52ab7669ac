"""
Plain data structures for shifts that are not (or not yet) rows.

``ShiftData`` mirrors the ``Shift`` model's fields so the algorithms in
``validation``, ``sync`` and ``continuation`` run on either.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from .check_events import CheckEventsMixin
from .enums import ShiftStatus, ShiftType


@dataclass
class ShiftData(CheckEventsMixin):
    id: Optional[Union[int, str]]
    employee_id: Optional[int]
    date: date
    start_time: str
    end_time: str
    end_date: Optional[date] = None
    overnight: bool = False
    description: str = ""
    shift_type: str = ShiftType.REGULAR
    check_in_timestamp: Optional[datetime] = None
    checked_in_time: str = ""
    check_out_timestamp: Optional[datetime] = None
    checked_out_time: str = ""
    derived_worked_hours: Optional[Decimal] = None
    derived_status: str = ShiftStatus.SCHEDULED

    @property
    def pk(self):
        return self.id


@dataclass(frozen=True)
class ContinuationFragment:
    """
    Read-only next-day portion of an overnight shift.

    Never persisted; edits always target ``base_shift_id``.
    """

    id: str
    base_shift_id: Union[int, str, None]
    employee_id: Optional[int]
    date: date
    start_time: str
    end_time: str
    end_date: date
    description: str
    original_start_date: date
    worked_minutes: Optional[int] = None
    base_worked_minutes: Optional[int] = None
    is_continuation: bool = field(default=True, init=False)


@dataclass
class DayEntry:
    """One shift (or fragment) as it counts towards a calendar day"""

    shift: object
    scheduled_minutes: int
    worked_minutes: Optional[int]
    status: str
    is_continuation: bool = False


@dataclass
class DailyTotals:
    scheduled_hours: Decimal = Decimal("0.00")
    worked_hours: Decimal = Decimal("0.00")
    total_shifts: int = 0
    completed_shifts: int = 0
    in_progress_shifts: int = 0
    pending_shifts: int = 0

    def as_dict(self):
        return {
            "scheduled_hours": self.scheduled_hours,
            "worked_hours": self.worked_hours,
            "total_shifts": self.total_shifts,
            "completed_shifts": self.completed_shifts,
            "in_progress_shifts": self.in_progress_shifts,
            "pending_shifts": self.pending_shifts,
        }


@dataclass
class DayGroup:
    date: date
    entries: list = field(default_factory=list)
    totals: DailyTotals = field(default_factory=DailyTotals)
