import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Shift",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(help_text="Nominal start date of the shift")),
                ("start_time", models.CharField(help_text="Planned start, HH:mm", max_length=5)),
                ("end_time", models.CharField(help_text="Planned end, HH:mm", max_length=5)),
                (
                    "end_date",
                    models.DateField(
                        blank=True,
                        help_text="Set only when the shift ends on the following day",
                        null=True,
                    ),
                ),
                ("overnight", models.BooleanField(default=False)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                (
                    "shift_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("regular", "Regular"),
                            ("overtime", "Overtime"),
                            ("break", "Break"),
                            ("meeting", "Meeting"),
                        ],
                        default="",
                        help_text="Defaults to overtime on weekends, regular otherwise",
                        max_length=10,
                    ),
                ),
                ("check_in_timestamp", models.DateTimeField(blank=True, null=True)),
                ("checked_in_time", models.CharField(blank=True, default="", max_length=8)),
                ("check_out_timestamp", models.DateTimeField(blank=True, null=True)),
                ("checked_out_time", models.CharField(blank=True, default="", max_length=8)),
                ("derived_worked_hours", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                (
                    "derived_status",
                    models.CharField(
                        choices=[
                            ("scheduled", "Scheduled"),
                            ("in_progress", "In progress"),
                            ("completed", "Completed"),
                        ],
                        default="scheduled",
                        max_length=12,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="shifts",
                        to="users.employee",
                    ),
                ),
            ],
            options={
                "verbose_name": "Shift",
                "verbose_name_plural": "Shifts",
                "ordering": ["date", "start_time"],
                "indexes": [
                    models.Index(fields=["employee", "date"], name="wt_shift_emp_date_idx"),
                    models.Index(fields=["date"], name="wt_shift_date_idx"),
                    models.Index(fields=["derived_status"], name="wt_shift_status_idx"),
                ],
            },
        ),
    ]
