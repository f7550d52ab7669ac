# users/models.py
from decimal import Decimal

from django.conf import settings
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import models


def minimum_hourly_wage():
    """Lowest hourly wage payroll accepts, from SHIFTLEDGER settings"""
    return Decimal(str(settings.SHIFTLEDGER["MINIMUM_HOURLY_WAGE"]))


class EmployeeQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Employee(models.Model):
    """Employee identity plus the nominal (current) hourly wage"""

    objects = EmployeeQuerySet.as_manager()

    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        related_name="employees",
        null=True,
        blank=True,
        help_text="Django user account linked to this employee",
    )

    first_name = models.CharField(max_length=50, help_text="Employee's first name")
    last_name = models.CharField(max_length=50, help_text="Employee's last name")
    email = models.EmailField(unique=True, help_text="Employee's email address")

    hourly_wage = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Current nominal hourly wage; fallback when no wage history applies",
    )

    is_active = models.BooleanField(
        default=True, help_text="Whether the employee is currently active"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["last_name", "first_name"]
        verbose_name = "Employee"
        verbose_name_plural = "Employees"
        indexes = [
            models.Index(fields=["email"], name="users_emplo_email_5e0b5f_idx"),
            models.Index(fields=["is_active"], name="users_emplo_is_acti_8c1b2e_idx"),
        ]

    def clean(self):
        super().clean()
        if self.hourly_wage is not None and self.hourly_wage < 0:
            raise ValidationError({"hourly_wage": "Hourly wage cannot be negative"})

    def get_full_name(self):
        """Return the employee's full name"""
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return self.get_full_name()
