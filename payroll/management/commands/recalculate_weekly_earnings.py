from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import PersistenceError
from payroll.services import RecalculationTrigger, WeeklyEarningsService
from users.models import Employee
from worktime.time_arithmetic import parse_day, week_start


class Command(BaseCommand):
    help = "Rebuild daily earnings records for one or more Monday-Sunday weeks"

    def add_arguments(self, parser):
        parser.add_argument(
            "--week-start",
            required=True,
            help="Any date in the first week to rebuild (YYYY-MM-DD)",
        )
        parser.add_argument(
            "--weeks", type=int, default=1, help="Number of consecutive weeks"
        )
        parser.add_argument(
            "--employee-id", type=int, help="Recalculate only for specific employee ID"
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be changed without saving",
        )

    def handle(self, *args, **options):
        first_day = parse_day(options["week_start"])
        if first_day is None:
            raise CommandError("--week-start must be a date in YYYY-MM-DD format")
        if options["weeks"] < 1:
            raise CommandError("--weeks must be at least 1")

        monday = week_start(first_day)
        last_monday = monday + timedelta(weeks=options["weeks"] - 1)

        employees = Employee.objects.active()
        if options.get("employee_id"):
            employees = Employee.objects.filter(pk=options["employee_id"])
            if not employees.exists():
                raise CommandError(f"Employee {options['employee_id']} not found")

        dry_run = options["dry_run"]
        self.stdout.write(
            f"Recalculating weeks {monday} to {last_monday + timedelta(days=6)} "
            f"for {employees.count()} employee(s)..."
        )

        weeks_done = 0
        errors = 0
        for employee in employees.order_by("pk"):
            service = WeeklyEarningsService(employee)
            try:
                report = service.sync_range(
                    monday,
                    last_monday,
                    trigger=RecalculationTrigger.MANUAL,
                    dry_run=dry_run,
                )
            except PersistenceError as e:
                self.stdout.write(
                    self.style.ERROR(f"Error recalculating employee {employee.pk}: {e}")
                )
                errors += 1
                continue

            weeks_done += len(report["weeks"])
            if dry_run:
                for week in report["weeks"]:
                    total = sum(a.day_earnings for a in service.allocate(week))
                    self.stdout.write(
                        f"[DRY RUN] Employee {employee.pk} week of {week}: {total:.2f}"
                    )

        if dry_run:
            self.stdout.write(
                self.style.WARNING(
                    f"DRY RUN: Would rebuild {weeks_done} employee-weeks, {errors} errors"
                )
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f"Successfully rebuilt {weeks_done} employee-weeks, {errors} errors"
                )
            )
