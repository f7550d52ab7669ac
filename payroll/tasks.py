"""
Celery tasks for rebuilding stored earnings.

The services never retry their own writes; transient database failures
are retried here through ``autoretry_for``.
"""

import logging

from celery import shared_task

from django.db import OperationalError
from django.utils import timezone

from core.exceptions import PersistenceError
from core.logging_utils import hash_employee_id
from users.models import Employee
from worktime.time_arithmetic import parse_day, week_start

from .services import RecalculationTrigger, WeeklyEarningsService

logger = logging.getLogger(__name__)

# Define transient errors that should trigger automatic retries
TRANSIENT_ERRORS = (
    OperationalError,
    PersistenceError,
    ConnectionError,
)


@shared_task(
    bind=True,
    autoretry_for=TRANSIENT_ERRORS,
    retry_backoff=True,
    retry_backoff_max=60,
    retry_jitter=True,
    max_retries=3,
    name="payroll.tasks.recalculate_earnings_range",
)
def recalculate_earnings_range(self, employee_id, start_date, end_date, trigger="manual"):
    """
    Rebuild every week from the week of ``start_date`` through the week of
    ``end_date`` for one employee. Dates are ISO strings.
    """
    start = parse_day(start_date)
    end = parse_day(end_date)
    if start is None or end is None:
        logger.error(
            "Invalid recalculation range",
            extra={"start_date": start_date, "end_date": end_date},
        )
        return {"status": "invalid_range", "weeks": 0}

    try:
        employee = Employee.objects.get(pk=employee_id)
    except Employee.DoesNotExist:
        logger.warning(
            "Employee vanished before recalculation",
            extra={"employee_hash": hash_employee_id(employee_id)},
        )
        return {"status": "employee_missing", "weeks": 0}

    try:
        trigger = RecalculationTrigger(trigger)
    except ValueError:
        trigger = RecalculationTrigger.MANUAL

    try:
        report = WeeklyEarningsService(employee).sync_range(
            min(start, end), max(start, end), trigger=trigger
        )
    except TRANSIENT_ERRORS as exc:
        logger.error(
            "Earnings recalculation failed",
            extra={
                "employee_hash": hash_employee_id(employee_id),
                "error": exc.__class__.__name__,
            },
        )
        # autoretry_for will handle the retry automatically
        raise

    return {
        "status": "ok",
        "employee_id": employee_id,
        "weeks": len(report["weeks"]),
        "records_written": report["records_written"],
        "completed_at": timezone.now().isoformat(),
    }


@shared_task(
    bind=True,
    autoretry_for=TRANSIENT_ERRORS,
    retry_backoff=True,
    retry_jitter=True,
    max_retries=2,
    name="payroll.tasks.recalculate_current_week",
)
def recalculate_current_week(self, day=None):
    """
    Rebuild the week containing ``day`` (default today) for every active
    employee. Intended for a nightly beat schedule.
    """
    monday = week_start(parse_day(day) or timezone.localdate())
    processed = 0
    for employee_id in Employee.objects.active().values_list("pk", flat=True):
        recalculate_earnings_range.delay(
            employee_id,
            monday.isoformat(),
            monday.isoformat(),
            str(RecalculationTrigger.MANUAL),
        )
        processed += 1

    logger.info(
        "Queued weekly recalculation",
        extra={"week_start": monday.isoformat(), "employees": processed},
    )
    return {"week_start": monday.isoformat(), "employees": processed}
