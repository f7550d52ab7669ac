"""
Wage and overtime policy changes.

Both operations write the new policy immediately and hand the earnings
rebuild to Celery once the transaction commits.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from core.exceptions import PayrollPolicyError
from core.logging_utils import hash_employee_id
from users.models import Employee, minimum_hourly_wage
from worktime.time_arithmetic import parse_day

from ..models import OvertimeSettings, WageHistoryEntry
from ..wage_history import BASELINE_DATE
from .earnings_service import last_recorded_date
from .enums import RecalculationTrigger

logger = logging.getLogger(__name__)


def _as_decimal(value, field_name):
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise PayrollPolicyError(
            f"{field_name} must be a number",
            code="INVALID_NUMBER",
            details={field_name: str(value)},
        ) from exc


def _schedule_recalculation(employee_id, start, end, trigger):
    from ..tasks import recalculate_earnings_range

    transaction.on_commit(
        lambda: recalculate_earnings_range.delay(
            employee_id, start.isoformat(), end.isoformat(), str(trigger)
        )
    )


def record_wage_change(employee, new_rate, effective_from, today=None):
    """
    Record a new hourly rate effective from ``effective_from``.

    When no entry precedes the new one, the employee's current nominal wage
    is stored first as a baseline (``0001-01-01``) so earlier days keep
    resolving to the rate they were worked at. Every week from the
    effective week through the later of today and the last stored earnings
    record is then rebuilt.
    """
    rate = _as_decimal(new_rate, "rate")
    minimum = minimum_hourly_wage()
    if rate < minimum:
        raise PayrollPolicyError(
            f"Hourly wage cannot be below the minimum of {minimum}",
            code="BELOW_MINIMUM_WAGE",
            details={"rate": str(rate), "minimum": str(minimum)},
        )

    start = parse_day(effective_from)
    if start is None:
        raise PayrollPolicyError(
            "An effective date is required for a wage change",
            code="MISSING_EFFECTIVE_DATE",
        )

    with transaction.atomic():
        employee = Employee.objects.select_for_update().get(pk=employee.pk)
        previous_wage = employee.hourly_wage

        has_earlier = WageHistoryEntry.objects.filter(
            employee=employee, effective_from__lt=start
        ).exists()
        if not has_earlier and previous_wage and previous_wage > 0:
            WageHistoryEntry.objects.create(
                employee=employee, rate=previous_wage, effective_from=BASELINE_DATE
            )

        entry = WageHistoryEntry(employee=employee, rate=rate, effective_from=start)
        entry.full_clean()
        entry.save()

        employee.hourly_wage = rate
        employee.save(update_fields=["hourly_wage", "updated_at"])

        today = today or timezone.localdate()
        last_record = last_recorded_date(employee.pk)
        end = max(today, last_record) if last_record else today
        if end < start:
            end = start
        _schedule_recalculation(employee.pk, start, end, RecalculationTrigger.WAGE_CHANGE)

    logger.info(
        "Wage change recorded",
        extra={
            "employee_hash": hash_employee_id(employee.pk),
            "effective_from": start.isoformat(),
            "baseline_added": not has_earlier and bool(previous_wage),
        },
    )
    return entry


def update_overtime_settings(threshold_hours, overtime_percent, recompute_from=None, today=None):
    """
    Replace the global overtime policy.

    Stored earnings keep the policy they were computed with unless
    ``recompute_from`` is given, in which case every active employee's
    weeks from that date through today are rebuilt.
    """
    threshold = _as_decimal(threshold_hours, "threshold_hours")
    percent = _as_decimal(overtime_percent, "overtime_percent")
    if threshold <= 0:
        raise PayrollPolicyError(
            "Overtime threshold must be greater than zero",
            code="INVALID_THRESHOLD",
            details={"threshold_hours": str(threshold)},
        )
    if percent < 0:
        raise PayrollPolicyError(
            "Overtime percent cannot be negative",
            code="INVALID_OVERTIME_PERCENT",
            details={"overtime_percent": str(percent)},
        )

    start = parse_day(recompute_from) if recompute_from else None
    if recompute_from and start is None:
        raise PayrollPolicyError(
            "recompute_from must be a YYYY-MM-DD date", code="INVALID_DATE"
        )

    with transaction.atomic():
        settings_row = OvertimeSettings.load()
        settings_row.threshold_hours = threshold
        settings_row.overtime_percent = percent
        settings_row.save()

        if start is not None:
            end = max(today or timezone.localdate(), start)
            for employee_id in Employee.objects.active().values_list("pk", flat=True):
                _schedule_recalculation(
                    employee_id, start, end, RecalculationTrigger.SETTINGS_CHANGE
                )

    logger.info(
        "Overtime settings updated",
        extra={
            "threshold_hours": str(threshold),
            "overtime_percent": str(percent),
            "recompute_from": start.isoformat() if start else None,
        },
    )
    return settings_row
