"""
Overlap, duration and daily-limit checks for a candidate shift.

Rejections are returned as a typed ``ShiftValidationResult``; nothing in
this module raises for a recognized input.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple, Union

from django.conf import settings

from .enums import RejectionType
from .time_arithmetic import (
    ONE_DAY,
    combine,
    hours_between,
    minutes_between,
    minutes_to_hours,
    next_midnight,
    parse_day,
    shift_interval,
)

logger = logging.getLogger(__name__)

Interval = Tuple[datetime, datetime]


@dataclass(frozen=True)
class ShiftValidationResult:
    is_valid: bool
    message: str
    type: Optional[RejectionType] = None
    total_daily_hours: Optional[Decimal] = None
    overnight: Optional[bool] = None
    conflicting_shift_id: Optional[Union[int, str]] = None

    @classmethod
    def reject(cls, rejection: RejectionType, message: str, **kwargs):
        return cls(is_valid=False, message=message, type=rejection, **kwargs)

    def as_dict(self):
        data = {
            "is_valid": self.is_valid,
            "message": self.message,
            "type": self.type.value if self.type else None,
        }
        if self.total_daily_hours is not None:
            data["total_daily_hours"] = self.total_daily_hours
        if self.overnight is not None:
            data["overnight"] = self.overnight
        if self.conflicting_shift_id is not None:
            data["conflicting_shift_id"] = self.conflicting_shift_id
        return data


def intervals_overlap(a: Interval, b: Interval) -> bool:
    """Open-interval test; touching endpoints do not overlap"""
    return a[0] < b[1] and b[0] < a[1]


def _same_id(left, right) -> bool:
    if left is None or right is None:
        return False
    return str(left) == str(right)


def _minutes_on_day(interval: Interval, day_end: datetime) -> int:
    start, end = interval
    return max(0, minutes_between(start, min(end, day_end)))


def validate_shift(
    start_time,
    end_time,
    day,
    existing_shifts: Iterable,
    exclude_id=None,
    allow_overnight: bool = False,
    max_hours=None,
    daily_limit_minutes: Optional[int] = None,
) -> ShiftValidationResult:
    """
    Decide whether a candidate shift may be committed.

    ``existing_shifts`` may include neighbours from the previous and next
    nominal day: all of them take part in overlap detection, but only
    those whose nominal date is ``day`` count towards the daily ceiling.
    Overnight shifts are clamped at midnight for the ceiling; the
    reported ``total_daily_hours`` includes the candidate's full length.
    """
    policy = settings.SHIFTLEDGER
    if max_hours is None:
        max_hours = policy["MAX_SHIFT_HOURS"]
    if daily_limit_minutes is None:
        daily_limit_minutes = policy["DAILY_LIMIT_MINUTES"]

    nominal_day = parse_day(day)
    start = combine(nominal_day, start_time)
    end = combine(nominal_day, end_time)
    if start is None or end is None:
        return ShiftValidationResult.reject(
            RejectionType.VALIDATION_ERROR, "Error validating shift: invalid date or time"
        )

    overnight = False
    if end <= start:
        if not allow_overnight:
            return ShiftValidationResult.reject(
                RejectionType.TIME_INVALID, "End time must be after start time"
            )
        end += ONE_DAY
        overnight = True

    duration_minutes = minutes_between(start, end)
    if duration_minutes > Decimal(str(max_hours)) * 60:
        return ShiftValidationResult.reject(
            RejectionType.DURATION_EXCEEDED,
            f"A shift cannot last more than {max_hours} hours",
        )

    candidate = (start, end)
    day_end = next_midnight(nominal_day)
    committed_minutes = 0

    for shift in existing_shifts:
        if _same_id(getattr(shift, "id", None), exclude_id):
            continue
        interval = shift_interval(shift)
        if interval is None:
            logger.warning(
                "Skipping shift with unparsable times during validation",
                extra={"shift_id": getattr(shift, "id", None)},
            )
            continue

        if intervals_overlap(candidate, interval):
            return ShiftValidationResult.reject(
                RejectionType.OVERLAP_CONFLICT,
                "The shift overlaps with another existing shift "
                f"({shift.start_time} - {shift.end_time}: {shift.description})",
                conflicting_shift_id=shift.id,
            )

        if parse_day(shift.date) == nominal_day:
            committed_minutes += _minutes_on_day(interval, day_end)

    ceiling_minutes = committed_minutes + _minutes_on_day(candidate, day_end)
    if ceiling_minutes > daily_limit_minutes:
        limit_hours = minutes_to_hours(daily_limit_minutes).normalize()
        return ShiftValidationResult.reject(
            RejectionType.DAILY_LIMIT_EXCEEDED,
            f"Total shift time for this day would exceed the allowed {limit_hours:f} hours "
            f"(current: {minutes_to_hours(ceiling_minutes)}h)",
            total_daily_hours=minutes_to_hours(ceiling_minutes),
        )

    total_daily_hours = minutes_to_hours(committed_minutes) + hours_between(start, end)
    return ShiftValidationResult(
        is_valid=True,
        message="Valid shift (crosses midnight)" if overnight else "Valid shift",
        total_daily_hours=total_daily_hours,
        overnight=overnight,
    )
