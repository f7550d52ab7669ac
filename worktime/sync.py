"""
Derived-field reconciliation for a single shift.

``sync_derived_fields`` returns the minimal patch needed to make the
stored worked hours and status canonical, or ``None`` when they already
are. Running it on its own output is a no-op.
"""

import logging
from decimal import Decimal
from typing import Dict, Optional

from .check_events import PreciseCheck, WallClockCheck, is_present
from .enums import ShiftStatus
from .time_arithmetic import (
    MINUTES_PER_DAY,
    hours_between,
    minutes_to_hours,
    parse_clock,
    round_hours,
)

logger = logging.getLogger(__name__)


def _clock_minutes(clock) -> Optional[int]:
    parsed = parse_clock(clock)
    if parsed is None:
        return None
    return parsed.hour * 60 + parsed.minute


def compute_worked_hours(shift) -> Optional[Decimal]:
    """
    Worked hours from check events, or ``None`` when not computable.

    A pair of precise instants is preferred; a negative difference is
    discarded. Otherwise two wall-clock strings are used, adding a day
    when the shift is overnight and the check-out clock is earlier.
    """
    check_in = shift.check_in_event
    check_out = shift.check_out_event

    if isinstance(check_in, PreciseCheck) and isinstance(check_out, PreciseCheck):
        hours = hours_between(check_in.instant, check_out.instant)
        if hours >= 0:
            return hours

    if isinstance(check_in, WallClockCheck) and isinstance(check_out, WallClockCheck):
        start = _clock_minutes(check_in.clock)
        end = _clock_minutes(check_out.clock)
        if start is None or end is None:
            return None
        if shift.overnight and end < start:
            end += MINUTES_PER_DAY
        if end - start >= 0:
            return minutes_to_hours(end - start)

    return None


def derive_status(shift) -> str:
    """Status depends only on which check events are present"""
    checked_in = is_present(shift.check_in_event)
    checked_out = is_present(shift.check_out_event)
    if checked_in and checked_out:
        return ShiftStatus.COMPLETED
    if checked_in:
        return ShiftStatus.IN_PROGRESS
    return ShiftStatus.SCHEDULED


def _hours_equal(stored, computed: Decimal) -> bool:
    if stored is None:
        return False
    return round_hours(stored) == computed


def sync_derived_fields(shift) -> Optional[Dict[str, object]]:
    patch = {}

    worked_hours = compute_worked_hours(shift)
    if worked_hours is not None and not _hours_equal(
        shift.derived_worked_hours, worked_hours
    ):
        patch["derived_worked_hours"] = worked_hours

    status = derive_status(shift)
    if shift.derived_status != status:
        patch["derived_status"] = status

    if not patch:
        return None

    logger.debug(
        "Derived fields out of date",
        extra={"shift_id": getattr(shift, "pk", None), "fields": sorted(patch)},
    )
    return patch


def apply_patch(shift, patch: Optional[Dict[str, object]]):
    """Copy a patch onto an in-memory shift (no persistence)"""
    for field_name, value in (patch or {}).items():
        setattr(shift, field_name, value)
    return shift
