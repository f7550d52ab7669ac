from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OvertimeSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "threshold_hours",
                    models.DecimalField(
                        decimal_places=2, help_text="Weekly regular hours before overtime starts", max_digits=5
                    ),
                ),
                (
                    "overtime_percent",
                    models.DecimalField(
                        decimal_places=2, help_text="Premium on top of the base rate; 50 means 1.5x", max_digits=5
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Overtime Settings",
                "verbose_name_plural": "Overtime Settings",
            },
        ),
        migrations.CreateModel(
            name="WageHistoryEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "rate",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Hourly rate",
                        max_digits=8,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                (
                    "effective_from",
                    models.DateField(help_text="First day the rate applies; 0001-01-01 marks the baseline rate"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="wage_history",
                        to="users.employee",
                    ),
                ),
            ],
            options={
                "verbose_name": "Wage History Entry",
                "verbose_name_plural": "Wage History",
                "ordering": ["effective_from", "created_at"],
                "indexes": [
                    models.Index(fields=["employee", "effective_from"], name="payroll_wag_employe_3f2a1c_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DailyEarningsRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(db_index=True)),
                ("scheduled_hours", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                ("worked_hours", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                ("regular_hours", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                ("overtime_hours", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                (
                    "hourly_wage_snapshot",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        help_text="Rate in effect on this day at calculation time",
                        max_digits=8,
                    ),
                ),
                ("overtime_percent", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                ("overtime_threshold", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                ("day_earnings", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10)),
                ("overtime_applied", models.BooleanField(default=False)),
                ("no_work_recorded", models.BooleanField(default=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="daily_earnings",
                        to="users.employee",
                    ),
                ),
            ],
            options={
                "verbose_name": "Daily Earnings Record",
                "verbose_name_plural": "Daily Earnings Records",
                "ordering": ["employee", "date"],
                "indexes": [
                    models.Index(fields=["employee", "date"], name="payroll_dai_employe_9b4e2d_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("employee", "date"), name="uniq_daily_earnings_employee_date"
                    ),
                ],
            },
        ),
    ]
