"""
Keeps stored earnings in step with shift changes.

The receiver rebuilds whole weeks, so repeated deliveries for the same
change produce the same records.
"""

import logging

from django.dispatch import receiver

from core.logging_utils import hash_employee_id
from users.models import Employee
from worktime.signals import shift_changed

from .services import RecalculationTrigger, WeeklyEarningsService

logger = logging.getLogger(__name__)


@receiver(shift_changed, dispatch_uid="payroll_recalculate_affected_weeks")
def recalculate_affected_weeks(sender, employee_id, affected_dates, deleted=False, origin=None, **kwargs):
    """Rebuild the week of the shift's date and, if overnight, of its end date"""
    if deleted and isinstance(origin, Employee):
        # The employee's earnings rows are going away with it
        return

    try:
        employee = Employee.objects.get(pk=employee_id)
    except Employee.DoesNotExist:
        return

    weeks = WeeklyEarningsService(employee).sync_weeks_for_dates(
        affected_dates, trigger=RecalculationTrigger.SHIFT_CHANGED
    )
    logger.debug(
        "Shift change reconciled",
        extra={
            "employee_hash": hash_employee_id(employee_id),
            "weeks": [monday.isoformat() for monday in weeks],
        },
    )
