"""
Write-side operations on shifts: scheduling, rescheduling and check events.
"""

import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from core.exceptions import CheckEventError, PersistenceError, ShiftRejected
from core.logging_utils import safe_log_shift
from users.models import Employee

from .models import Shift
from .time_arithmetic import parse_day
from .validation import validate_shift

logger = logging.getLogger(__name__)


def persist_shift_patch(shift_id, patch):
    """
    Partial update of derived fields.

    Goes through ``QuerySet.update`` so no save signals fire and the
    patch cannot trigger another reconciliation round.
    """
    if not patch:
        return 0
    try:
        updated = Shift.objects.filter(pk=shift_id).update(
            **patch, updated_at=timezone.now()
        )
    except DatabaseError as exc:
        logger.error(
            "Failed to persist shift patch",
            extra={"shift_id": shift_id, "fields": sorted(patch)},
        )
        raise PersistenceError(f"Could not update shift {shift_id}") from exc

    logger.info(
        "Shift derived fields updated",
        extra={"shift_id": shift_id, "fields": sorted(patch)},
    )
    return updated


def validate_candidate_shift(
    employee_id,
    day,
    start_time,
    end_time,
    exclude_id=None,
    allow_overnight=False,
    max_hours=None,
):
    """Run the overlap validator against the employee's neighbouring shifts"""
    nominal_day = parse_day(day)
    existing = []
    if nominal_day is not None:
        existing = list(
            Shift.objects.for_employee(employee_id).neighbours_of(nominal_day)
        )
    return validate_shift(
        start_time,
        end_time,
        nominal_day,
        existing,
        exclude_id=exclude_id,
        allow_overnight=allow_overnight,
        max_hours=max_hours,
    )


def schedule_shift(
    employee,
    day,
    start_time,
    end_time,
    description="",
    shift_type="",
    overnight=False,
    max_hours=None,
):
    """
    Validate and create a shift.

    Raises ``ShiftRejected`` with the typed result when validation fails;
    nothing is written in that case.
    """
    with transaction.atomic():
        # Serialize scheduling per employee
        Employee.objects.select_for_update().filter(pk=employee.pk).first()

        result = validate_candidate_shift(
            employee.pk,
            day,
            start_time,
            end_time,
            allow_overnight=overnight,
            max_hours=max_hours,
        )
        if not result.is_valid:
            logger.info(
                "Shift rejected",
                extra={"reason": result.type.value, "date": str(day)},
            )
            raise ShiftRejected(result)

        shift = Shift(
            employee=employee,
            date=parse_day(day),
            start_time=start_time,
            end_time=end_time,
            overnight=bool(result.overnight),
            description=description or "",
            shift_type=shift_type or "",
        )
        shift.save()

    logger.info("Shift scheduled", extra=safe_log_shift(shift, "schedule"))
    return shift


def reschedule_shift(shift, start_time=None, end_time=None, day=None, overnight=None, max_hours=None, **changes):
    """Edit a shift; time changes are re-validated excluding the shift itself"""
    new_day = parse_day(day) if day is not None else shift.date
    new_start = start_time if start_time is not None else shift.start_time
    new_end = end_time if end_time is not None else shift.end_time
    new_overnight = shift.overnight if overnight is None else overnight

    times_changed = (
        new_day != shift.date
        or new_start != shift.start_time
        or new_end != shift.end_time
        or new_overnight != shift.overnight
    )

    with transaction.atomic():
        if times_changed:
            Employee.objects.select_for_update().filter(pk=shift.employee_id).first()
            result = validate_candidate_shift(
                shift.employee_id,
                new_day,
                new_start,
                new_end,
                exclude_id=shift.pk,
                allow_overnight=new_overnight,
                max_hours=max_hours,
            )
            if not result.is_valid:
                raise ShiftRejected(result)
            shift.date = new_day
            shift.start_time = new_start
            shift.end_time = new_end
            shift.overnight = bool(result.overnight)
            # Recomputed from the clocks on save
            shift.end_date = None

        for field_name, value in changes.items():
            setattr(shift, field_name, value)
        shift.save()

    logger.info("Shift updated", extra=safe_log_shift(shift, "reschedule"))
    return shift


def record_check_in(shift, at=None):
    """Stamp a precise check-in instant (default: now)"""
    if shift.check_in_timestamp is not None or shift.checked_in_time:
        raise CheckEventError(
            "Shift is already checked in", code="ALREADY_CHECKED_IN"
        )
    shift.check_in_timestamp = at or timezone.now()
    shift.save()
    logger.info("Check-in recorded", extra=safe_log_shift(shift, "check_in"))
    return shift


def record_check_out(shift, at=None):
    """Stamp a precise check-out instant; refused without a check-in"""
    if shift.check_in_timestamp is None and not shift.checked_in_time:
        raise CheckEventError(
            "Cannot check out before checking in", code="NOT_CHECKED_IN"
        )
    if shift.check_out_timestamp is not None or shift.checked_out_time:
        raise CheckEventError(
            "Shift is already checked out", code="ALREADY_CHECKED_OUT"
        )
    check_out = at or timezone.now()
    if shift.check_in_timestamp is not None and check_out < shift.check_in_timestamp:
        raise CheckEventError(
            "Check-out cannot precede check-in", code="CHECK_OUT_BEFORE_CHECK_IN"
        )
    shift.check_out_timestamp = check_out
    shift.save()
    logger.info("Check-out recorded", extra=safe_log_shift(shift, "check_out"))
    return shift
