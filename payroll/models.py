from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from users.models import Employee


class WageHistoryEntry(models.Model):
    """An hourly rate effective from a given day"""

    employee = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="wage_history"
    )
    rate = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text="Hourly rate",
    )
    effective_from = models.DateField(
        help_text="First day the rate applies; 0001-01-01 marks the baseline rate"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Wage History Entry"
        verbose_name_plural = "Wage History"
        ordering = ["effective_from", "created_at"]
        indexes = [
            models.Index(fields=["employee", "effective_from"], name="payroll_wag_employe_3f2a1c_idx"),
        ]

    def __str__(self):
        return f"{self.employee_id}: {self.rate} from {self.effective_from}"


class OvertimeSettings(models.Model):
    """
    Global overtime policy (single row, pk=1).

    Changing it does not touch stored earnings; recompute explicitly.
    """

    threshold_hours = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        help_text="Weekly regular hours before overtime starts",
    )
    overtime_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        help_text="Premium on top of the base rate; 50 means 1.5x",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Overtime Settings"
        verbose_name_plural = "Overtime Settings"

    def clean(self):
        super().clean()
        errors = {}
        if self.threshold_hours is None or self.threshold_hours <= 0:
            errors["threshold_hours"] = "Threshold must be greater than zero"
        if self.overtime_percent is None or self.overtime_percent < 0:
            errors["overtime_percent"] = "Overtime percent cannot be negative"
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        self.pk = 1
        self.full_clean(validate_unique=False)
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        """The settings row, created from SHIFTLEDGER defaults on first use"""
        defaults = settings.SHIFTLEDGER
        obj, _ = cls.objects.get_or_create(
            pk=1,
            defaults={
                "threshold_hours": Decimal(str(defaults["DEFAULT_OVERTIME_THRESHOLD_HOURS"])),
                "overtime_percent": Decimal(str(defaults["DEFAULT_OVERTIME_PERCENT"])),
            },
        )
        return obj

    def as_policy(self):
        from .overtime import OvertimePolicy

        return OvertimePolicy(
            threshold_hours=self.threshold_hours,
            overtime_percent=self.overtime_percent,
        )

    def __str__(self):
        return f"Overtime after {self.threshold_hours}h at +{self.overtime_percent}%"


class DailyEarningsRecord(models.Model):
    """
    Derived earnings for one employee-day.

    Always rewritten from shifts, wage history and overtime settings;
    never edited by hand.
    """

    employee = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="daily_earnings"
    )
    date = models.DateField(db_index=True)

    scheduled_hours = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"))
    worked_hours = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"))
    regular_hours = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"))
    overtime_hours = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"))

    hourly_wage_snapshot = models.DecimalField(
        max_digits=8, decimal_places=2, default=Decimal("0"),
        help_text="Rate in effect on this day at calculation time",
    )
    overtime_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"))
    overtime_threshold = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"))
    day_earnings = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))

    overtime_applied = models.BooleanField(default=False)
    no_work_recorded = models.BooleanField(default=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Daily Earnings Record"
        verbose_name_plural = "Daily Earnings Records"
        ordering = ["employee", "date"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "date"], name="uniq_daily_earnings_employee_date"
            ),
        ]
        indexes = [
            models.Index(fields=["employee", "date"], name="payroll_dai_employe_9b4e2d_idx"),
        ]

    def __str__(self):
        return f"{self.employee_id} - {self.date} - {self.day_earnings}"
