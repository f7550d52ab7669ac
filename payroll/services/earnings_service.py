"""
Weekly earnings reconciliation.

Rebuilds the seven ``DailyEarningsRecord`` rows of a Monday-Sunday week
from shifts, wage history and overtime settings. A week is always
recomputed as a whole; there is no single-day patch path.
"""

import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from django.db import DatabaseError, transaction
from django.db.models import Max

from core.exceptions import PersistenceError
from core.logging_utils import hash_employee_id
from users.models import Employee
from worktime.continuation import group_shifts_by_date
from worktime.models import Shift
from worktime.time_arithmetic import parse_day, round_hours, week_days, week_start

from ..models import DailyEarningsRecord, OvertimeSettings
from ..overtime import DailyAllocation, OvertimePolicy, allocate_week
from ..wage_history import WageHistoryResolver
from .contracts import RecalculationReport, WeeklySummary
from .enums import RecalculationTrigger

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class WeeklyEarningsService:
    """
    Earnings calculator bound to one employee.

    Wage history and the overtime policy are fetched once when the service
    is built and reused for every week it processes.
    """

    def __init__(
        self,
        employee: Employee,
        policy: Optional[OvertimePolicy] = None,
        wage_resolver: Optional[WageHistoryResolver] = None,
    ):
        self.employee = employee
        self.policy = policy or OvertimeSettings.load().as_policy()
        self.wage_resolver = wage_resolver or WageHistoryResolver(
            employee.wage_history.all(), fallback=employee.hourly_wage
        )

    @classmethod
    def for_employee_id(cls, employee_id, policy=None):
        return cls(Employee.objects.get(pk=employee_id), policy=policy)

    def daily_hours(self, monday: date):
        """Worked and scheduled hours per calendar day, Monday to Sunday"""
        days = week_days(monday)
        shifts = Shift.objects.for_employee(self.employee.pk).touching_range(
            days[0], days[-1]
        )
        groups = group_shifts_by_date(shifts)

        worked, scheduled = [], []
        for day in days:
            group = groups.get(day)
            worked.append(group.totals.worked_hours if group else ZERO)
            scheduled.append(group.totals.scheduled_hours if group else ZERO)
        return worked, scheduled

    def allocate(self, monday: date) -> List[DailyAllocation]:
        worked, scheduled = self.daily_hours(monday)
        return allocate_week(monday, worked, scheduled, self.wage_resolver, self.policy)

    def sync_week(
        self,
        day,
        trigger: RecalculationTrigger = RecalculationTrigger.MANUAL,
        dry_run: bool = False,
    ) -> List[DailyAllocation]:
        """
        Recompute and upsert the week containing ``day``.

        Raises ``PersistenceError`` when the records cannot be written; the
        week is written in one transaction so a failure leaves the previous
        records in place.
        """
        monday = week_start(day)
        allocations = self.allocate(monday)

        if dry_run:
            logger.info(
                "Dry run: week not written",
                extra={
                    "employee_hash": hash_employee_id(self.employee.pk),
                    "week_start": monday.isoformat(),
                },
            )
            return allocations

        try:
            with transaction.atomic():
                for allocation in allocations:
                    DailyEarningsRecord.objects.update_or_create(
                        employee=self.employee,
                        date=allocation.date,
                        defaults=allocation.as_record(),
                    )
        except DatabaseError as exc:
            logger.error(
                "Failed to persist weekly earnings",
                extra={
                    "employee_hash": hash_employee_id(self.employee.pk),
                    "week_start": monday.isoformat(),
                },
            )
            raise PersistenceError(
                f"Could not store earnings for week of {monday.isoformat()}"
            ) from exc

        logger.info(
            "Weekly earnings recalculated",
            extra={
                "employee_hash": hash_employee_id(self.employee.pk),
                "week_start": monday.isoformat(),
                "trigger": str(trigger),
                "overtime_days": sum(1 for a in allocations if a.overtime_applied),
            },
        )
        return allocations

    def sync_weeks_for_dates(
        self,
        dates: Iterable,
        trigger: RecalculationTrigger = RecalculationTrigger.MANUAL,
    ) -> List[date]:
        """Recompute each distinct week touched by ``dates``; returns the Mondays"""
        mondays = sorted(
            {week_start(day) for day in dates if parse_day(day) is not None}
        )
        for monday in mondays:
            self.sync_week(monday, trigger=trigger)
        return mondays

    def sync_range(
        self,
        start,
        end,
        trigger: RecalculationTrigger = RecalculationTrigger.MANUAL,
        dry_run: bool = False,
    ) -> RecalculationReport:
        """Recompute every week from the week of ``start`` through the week of ``end``"""
        monday = week_start(start)
        last_monday = week_start(end)
        weeks = []
        while monday <= last_monday:
            self.sync_week(monday, trigger=trigger, dry_run=dry_run)
            weeks.append(monday)
            monday += timedelta(days=7)

        return RecalculationReport(
            employee_id=self.employee.pk,
            weeks=weeks,
            records_written=0 if dry_run else len(weeks) * 7,
            dry_run=dry_run,
        )


def last_recorded_date(employee_id) -> Optional[date]:
    return DailyEarningsRecord.objects.filter(employee_id=employee_id).aggregate(
        last=Max("date")
    )["last"]


def summarize_week(employee: Employee, day) -> WeeklySummary:
    """
    Totals over the stored records of the week containing ``day``.

    Reads only ``DailyEarningsRecord`` rows; call ``sync_week`` first when
    the records may be stale.
    """
    monday = week_start(day)
    sunday = monday + timedelta(days=6)
    records = list(
        DailyEarningsRecord.objects.filter(
            employee=employee, date__gte=monday, date__lte=sunday
        )
    )

    scheduled = sum((r.scheduled_hours for r in records), ZERO)
    worked = sum((r.worked_hours for r in records), ZERO)
    regular = sum((r.regular_hours for r in records), ZERO)
    overtime = sum((r.overtime_hours for r in records), ZERO)
    regular_earnings = sum(
        (round_hours(r.regular_hours * r.hourly_wage_snapshot) for r in records), ZERO
    )
    weekly_earnings = sum((r.day_earnings for r in records), ZERO)

    if scheduled > 0:
        efficiency = (worked / scheduled * 100).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )
    else:
        efficiency = Decimal("0.0")

    threshold = (
        records[0].overtime_threshold
        if records
        else OvertimeSettings.load().threshold_hours
    )

    return WeeklySummary(
        employee_id=employee.pk,
        week_start=monday,
        week_end=sunday,
        days_recorded=len(records),
        scheduled_hours=round_hours(scheduled),
        worked_hours=round_hours(worked),
        regular_hours=round_hours(regular),
        overtime_hours=round_hours(overtime),
        regular_earnings=round_hours(regular_earnings),
        overtime_earnings=round_hours(weekly_earnings - regular_earnings),
        weekly_earnings=round_hours(weekly_earnings),
        efficiency_percent=efficiency,
        threshold_hours=round_hours(threshold),
        threshold_crossed=any(r.overtime_applied for r in records),
    )
