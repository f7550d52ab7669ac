from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from users.models import Employee

from .check_events import CheckEventsMixin
from .enums import ShiftStatus, ShiftType
from .querysets import ShiftQuerySet
from .time_arithmetic import (
    ONE_DAY,
    crosses_midnight,
    format_clock,
    hours_between,
    parse_day,
    shift_interval,
)

WEEKEND_DAYS = (5, 6)  # Saturday, Sunday


class Shift(CheckEventsMixin, models.Model):
    """
    A scheduled interval of work for one employee.

    ``end_date`` is the canonical overnight marker: it is set to the day
    after ``date`` exactly when the shift crosses midnight, and
    ``overnight`` mirrors it.
    """

    employee = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="shifts"
    )
    date = models.DateField(help_text="Nominal start date of the shift")
    start_time = models.CharField(max_length=5, help_text="Planned start, HH:mm")
    end_time = models.CharField(max_length=5, help_text="Planned end, HH:mm")
    end_date = models.DateField(
        null=True,
        blank=True,
        help_text="Set only when the shift ends on the following day",
    )
    overnight = models.BooleanField(default=False)
    description = models.CharField(max_length=255, blank=True, default="")
    shift_type = models.CharField(
        max_length=10,
        choices=ShiftType.choices,
        blank=True,
        default="",
        help_text="Defaults to overtime on weekends, regular otherwise",
    )

    # Check events: a precise instant or a typed wall-clock value
    check_in_timestamp = models.DateTimeField(null=True, blank=True)
    checked_in_time = models.CharField(max_length=8, blank=True, default="")
    check_out_timestamp = models.DateTimeField(null=True, blank=True)
    checked_out_time = models.CharField(max_length=8, blank=True, default="")

    # Derived; written by worktime.signals through a queryset update
    derived_worked_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )
    derived_status = models.CharField(
        max_length=12,
        choices=ShiftStatus.choices,
        default=ShiftStatus.SCHEDULED,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ShiftQuerySet.as_manager()

    class Meta:
        ordering = ["date", "start_time"]
        verbose_name = "Shift"
        verbose_name_plural = "Shifts"
        indexes = [
            models.Index(fields=["employee", "date"], name="wt_shift_emp_date_idx"),
            models.Index(fields=["date"], name="wt_shift_date_idx"),
            models.Index(fields=["derived_status"], name="wt_shift_status_idx"),
        ]

    def normalize(self):
        """Canonical clocks, overnight marker and default shift type"""
        self.date = parse_day(self.date) or self.date
        self.end_date = parse_day(self.end_date)
        self.start_time = format_clock(self.start_time) or self.start_time
        self.end_time = format_clock(self.end_time) or self.end_time
        self.checked_in_time = format_clock(self.checked_in_time) or (self.checked_in_time or "")
        self.checked_out_time = format_clock(self.checked_out_time) or (self.checked_out_time or "")

        crosses = (
            self.overnight
            or crosses_midnight(self.start_time, self.end_time)
            or (self.end_date is not None and self.end_date != self.date)
        )
        if crosses and self.date:
            self.end_date = self.date + ONE_DAY
            self.overnight = True
        else:
            self.end_date = None
            self.overnight = False

        if not self.shift_type and self.date:
            self.shift_type = (
                ShiftType.OVERTIME
                if self.date.weekday() in WEEKEND_DAYS
                else ShiftType.REGULAR
            )

    def clean(self):
        super().clean()
        errors = {}
        if format_clock(self.start_time) is None:
            errors["start_time"] = "Start time must look like HH:mm"
        if format_clock(self.end_time) is None:
            errors["end_time"] = "End time must look like HH:mm"
        if errors:
            raise ValidationError(errors)

        max_hours = Decimal(settings.SHIFTLEDGER["MAX_SHIFT_HOURS"])
        if self.scheduled_hours is not None and self.scheduled_hours > max_hours:
            raise ValidationError(
                {"end_time": f"A shift cannot last more than {max_hours} hours"}
            )

    def save(self, *args, **kwargs):
        self.normalize()
        self.full_clean()
        super().save(*args, **kwargs)

    @property
    def interval(self):
        return shift_interval(self)

    @property
    def scheduled_hours(self):
        """Full planned duration, overnight included"""
        interval = self.interval
        if interval is None:
            return None
        return hours_between(*interval)

    @property
    def worked_hours(self):
        return self.derived_worked_hours

    def __str__(self):
        return f"Shift {self.pk} {self.date} {self.start_time}-{self.end_time}"
