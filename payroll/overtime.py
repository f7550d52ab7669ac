"""
Weekly overtime allocation.

Overtime is weekly and cumulative: days are processed Monday to Sunday
with one running counter of regular hours, so the same day can be
regular or overtime depending on what came before it in the week.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, List, Sequence

from django.conf import settings

from worktime.time_arithmetic import round_hours

ZERO = Decimal("0")


@dataclass(frozen=True)
class OvertimePolicy:
    """Threshold and premium passed explicitly into every allocation"""

    threshold_hours: Decimal
    overtime_percent: Decimal

    def __post_init__(self):
        object.__setattr__(self, "threshold_hours", Decimal(str(self.threshold_hours)))
        object.__setattr__(self, "overtime_percent", Decimal(str(self.overtime_percent)))
        if self.threshold_hours <= 0:
            raise ValueError("threshold_hours must be positive")
        if self.overtime_percent < 0:
            raise ValueError("overtime_percent cannot be negative")

    @property
    def multiplier(self) -> Decimal:
        return 1 + self.overtime_percent / 100

    @classmethod
    def defaults(cls):
        policy = settings.SHIFTLEDGER
        return cls(
            threshold_hours=policy["DEFAULT_OVERTIME_THRESHOLD_HOURS"],
            overtime_percent=policy["DEFAULT_OVERTIME_PERCENT"],
        )


@dataclass(frozen=True)
class DailyAllocation:
    date: date
    scheduled_hours: Decimal
    worked_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    hourly_wage_snapshot: Decimal
    day_earnings: Decimal
    overtime_applied: bool
    no_work_recorded: bool
    overtime_percent: Decimal
    overtime_threshold: Decimal

    @property
    def regular_earnings(self) -> Decimal:
        return round_hours(self.regular_hours * self.hourly_wage_snapshot)

    @property
    def overtime_earnings(self) -> Decimal:
        return self.day_earnings - self.regular_earnings

    def as_record(self):
        """Field values for a DailyEarningsRecord"""
        return {
            "scheduled_hours": self.scheduled_hours,
            "worked_hours": self.worked_hours,
            "regular_hours": self.regular_hours,
            "overtime_hours": self.overtime_hours,
            "hourly_wage_snapshot": self.hourly_wage_snapshot,
            "overtime_percent": self.overtime_percent,
            "overtime_threshold": self.overtime_threshold,
            "day_earnings": self.day_earnings,
            "overtime_applied": self.overtime_applied,
            "no_work_recorded": self.no_work_recorded,
        }


def _as_hours(value) -> Decimal:
    hours = Decimal(str(value if value is not None else 0))
    if hours < 0:
        raise ValueError(f"Hours cannot be negative: {value}")
    return hours


def allocate_week(
    week_start: date,
    daily_worked_hours: Sequence,
    daily_scheduled_hours: Sequence,
    wage_for_date: Callable[[date], Decimal],
    policy: OvertimePolicy,
) -> List[DailyAllocation]:
    """
    Split seven days of worked hours into regular and overtime.

    ``week_start`` is the Monday; both hour vectors run Monday to Sunday.
    ``wage_for_date`` is asked once per day so mid-week rate changes apply
    from their effective day.
    """
    if len(daily_worked_hours) != 7 or len(daily_scheduled_hours) != 7:
        raise ValueError("allocate_week needs exactly seven days of hours")

    running_regular = ZERO
    allocations = []

    for offset in range(7):
        day = week_start + timedelta(days=offset)
        worked = _as_hours(daily_worked_hours[offset])
        scheduled = _as_hours(daily_scheduled_hours[offset])

        remaining = max(policy.threshold_hours - running_regular, ZERO)
        if worked <= remaining:
            regular, overtime = worked, ZERO
        else:
            regular, overtime = remaining, worked - remaining
        running_regular += regular

        wage = Decimal(str(wage_for_date(day)))
        earnings = regular * wage + overtime * wage * policy.multiplier

        allocations.append(
            DailyAllocation(
                date=day,
                scheduled_hours=round_hours(scheduled),
                worked_hours=round_hours(worked),
                regular_hours=round_hours(regular),
                overtime_hours=round_hours(overtime),
                hourly_wage_snapshot=round_hours(wage),
                day_earnings=round_hours(earnings),
                overtime_applied=overtime > 0,
                no_work_recorded=worked == 0,
                overtime_percent=round_hours(policy.overtime_percent),
                overtime_threshold=round_hours(policy.threshold_hours),
            )
        )

    return allocations
