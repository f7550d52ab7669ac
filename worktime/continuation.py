"""
Calendar-day view of shifts.

Overnight shifts get a read-only continuation fragment on the next day so
per-day totals see the post-midnight part without the base shift being
copied or modified.
"""

import logging
from collections import OrderedDict
from datetime import datetime
from decimal import ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Tuple

from .check_events import PreciseCheck, WallClockCheck
from .enums import ShiftStatus
from .sync import compute_worked_hours, derive_status
from .time_arithmetic import (
    ONE_DAY,
    combine,
    crosses_midnight as clocks_cross_midnight,
    format_clock,
    minutes_between,
    minutes_to_hours,
    next_midnight,
    parse_day,
    shift_interval,
    to_local,
)
from .types import ContinuationFragment, DailyTotals, DayEntry, DayGroup

logger = logging.getLogger(__name__)

CONTINUATION_SUFFIX = "__cont"


def crosses_midnight(shift) -> bool:
    """Explicit end date, explicit flag, or an end clock not after the start"""
    end_date = parse_day(getattr(shift, "end_date", None))
    if end_date is not None and end_date != parse_day(shift.date):
        return True
    if getattr(shift, "overnight", False):
        return True
    return clocks_cross_midnight(shift.start_time, shift.end_time)


def _worked_interval(shift) -> Optional[Tuple[datetime, datetime]]:
    """Actual worked span as naive local datetimes, when both ends are known"""
    check_in = shift.check_in_event
    check_out = shift.check_out_event

    start = None
    if isinstance(check_in, PreciseCheck):
        start = to_local(check_in.instant)
    elif isinstance(check_in, WallClockCheck):
        start = combine(shift.date, check_in.clock)

    end = None
    if isinstance(check_out, PreciseCheck):
        end = to_local(check_out.instant)
    elif isinstance(check_out, WallClockCheck):
        end_day = parse_day(getattr(shift, "end_date", None)) or parse_day(shift.date)
        end = combine(end_day, check_out.clock)
        if end is not None and start is not None and end <= start:
            end += ONE_DAY

    if start is None or end is None or end < start:
        return None
    return start, end


def split_worked_minutes(shift) -> Optional[Tuple[int, int]]:
    """(before midnight, after midnight) worked minutes for an overnight shift"""
    interval = _worked_interval(shift)
    if interval is None:
        return None
    start, end = interval
    midnight = next_midnight(shift.date)
    total = minutes_between(start, end)
    first = max(0, minutes_between(start, min(end, midnight)))
    return first, max(0, total - first)


def split_continuation(shift) -> Optional[ContinuationFragment]:
    """
    Next-day fragment of ``shift`` or ``None`` if it stays within its date.

    The input is not modified; the pre-midnight worked share travels on the
    fragment as ``base_worked_minutes``.
    """
    if not crosses_midnight(shift):
        return None

    start_day = parse_day(shift.date)
    next_day = start_day + ONE_DAY
    end_date = parse_day(getattr(shift, "end_date", None))
    if end_date is None or end_date == start_day:
        end_date = next_day

    shares = split_worked_minutes(shift)
    base_id = getattr(shift, "pk", None) or getattr(shift, "id", None)
    description = (getattr(shift, "description", "") or "").strip()

    return ContinuationFragment(
        id=f"{base_id}{CONTINUATION_SUFFIX}",
        base_shift_id=base_id,
        employee_id=getattr(shift, "employee_id", None),
        date=next_day,
        start_time="00:00",
        end_time=format_clock(shift.end_time) or shift.end_time,
        end_date=end_date,
        description=f"{description} (cont.)".strip(),
        original_start_date=start_day,
        worked_minutes=shares[1] if shares else None,
        base_worked_minutes=shares[0] if shares else None,
    )


def _first_day_scheduled_minutes(shift) -> int:
    interval = shift_interval(shift)
    if interval is None:
        return 0
    return max(0, minutes_between(interval[0], min(interval[1], next_midnight(shift.date))))


def _fragment_scheduled_minutes(fragment: ContinuationFragment) -> int:
    start = combine(fragment.date, fragment.start_time)
    end = combine(fragment.date, fragment.end_time)
    if start is None or end is None:
        return 0
    return max(0, minutes_between(start, end))


def _base_entry(shift, fragment: Optional[ContinuationFragment]) -> DayEntry:
    status = derive_status(shift)
    if fragment is not None and fragment.base_worked_minutes is not None:
        worked = fragment.base_worked_minutes
    else:
        hours = compute_worked_hours(shift)
        worked = (
            int((hours * 60).to_integral_value(rounding=ROUND_HALF_UP))
            if hours is not None
            else None
        )
    return DayEntry(
        shift=shift,
        scheduled_minutes=_first_day_scheduled_minutes(shift),
        worked_minutes=worked,
        status=status,
    )


def calculate_daily_totals(entries: Iterable[DayEntry]) -> DailyTotals:
    """
    Sum one day's entries.

    Fragments add their scheduled and worked minutes but are not counted
    as separate shifts.
    """
    totals = DailyTotals()
    scheduled_minutes = 0
    worked_minutes = 0

    for entry in entries:
        scheduled_minutes += entry.scheduled_minutes
        if entry.worked_minutes:
            worked_minutes += entry.worked_minutes
        if entry.is_continuation:
            continue

        totals.total_shifts += 1
        if entry.status == ShiftStatus.COMPLETED:
            totals.completed_shifts += 1
        elif entry.status == ShiftStatus.IN_PROGRESS:
            totals.in_progress_shifts += 1
        else:
            totals.pending_shifts += 1

    totals.scheduled_hours = minutes_to_hours(scheduled_minutes)
    totals.worked_hours = minutes_to_hours(worked_minutes)
    return totals


def group_shifts_by_date(shifts: Iterable) -> Dict:
    """
    Group shifts by nominal date, add continuation fragments on the
    following date, and compute ``DailyTotals`` for every date touched.

    Returns an ordered ``{date: DayGroup}`` mapping.
    """
    groups: Dict = {}

    def group_for(day):
        if day not in groups:
            groups[day] = DayGroup(date=day)
        return groups[day]

    fragments = []
    for shift in shifts:
        day = parse_day(shift.date)
        if day is None:
            logger.warning(
                "Skipping shift without a usable date",
                extra={"shift_id": getattr(shift, "pk", None)},
            )
            continue
        fragment = split_continuation(shift)
        group_for(day).entries.append(_base_entry(shift, fragment))
        if fragment is not None:
            fragments.append(fragment)

    for fragment in fragments:
        group_for(fragment.date).entries.append(
            DayEntry(
                shift=fragment,
                scheduled_minutes=_fragment_scheduled_minutes(fragment),
                worked_minutes=fragment.worked_minutes,
                status=ShiftStatus.SCHEDULED,
                is_continuation=True,
            )
        )

    ordered = OrderedDict()
    for day in sorted(groups):
        group = groups[day]
        group.totals = calculate_daily_totals(group.entries)
        ordered[day] = group
    return ordered
