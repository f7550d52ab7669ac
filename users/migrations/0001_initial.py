from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(help_text="Employee's first name", max_length=50)),
                ("last_name", models.CharField(help_text="Employee's last name", max_length=50)),
                ("email", models.EmailField(help_text="Employee's email address", max_length=254, unique=True)),
                (
                    "hourly_wage",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Current nominal hourly wage; fallback when no wage history applies",
                        max_digits=8,
                    ),
                ),
                ("is_active", models.BooleanField(default=True, help_text="Whether the employee is currently active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        help_text="Django user account linked to this employee",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="employees",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Employee",
                "verbose_name_plural": "Employees",
                "ordering": ["last_name", "first_name"],
                "indexes": [
                    models.Index(fields=["email"], name="users_emplo_email_5e0b5f_idx"),
                    models.Index(fields=["is_active"], name="users_emplo_is_acti_8c1b2e_idx"),
                ],
            },
        ),
    ]
