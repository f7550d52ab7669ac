"""
Tests for the earnings recalculation Celery tasks
"""

from datetime import date
from unittest.mock import patch

from django.db import OperationalError

from payroll.models import DailyEarningsRecord
from payroll.tasks import (
    TRANSIENT_ERRORS,
    recalculate_current_week,
    recalculate_earnings_range,
)
from tests.base import BaseTestCase, make_employee


class RecalculateEarningsRangeTest(BaseTestCase):
    def test_rebuilds_every_week_in_range(self):
        result = recalculate_earnings_range.apply(
            args=(self.employee.pk, "2024-03-06", "2024-03-20", "wage_change")
        ).get()

        self.assertEqual(result["status"], "ok")
        self.assertEqual(result["weeks"], 3)
        self.assertEqual(result["records_written"], 21)
        self.assertEqual(
            DailyEarningsRecord.objects.filter(employee=self.employee).count(), 21
        )

    def test_reversed_range_is_normalized(self):
        result = recalculate_earnings_range.apply(
            args=(self.employee.pk, "2024-03-20", "2024-03-06")
        ).get()
        self.assertEqual(result["weeks"], 3)

    def test_invalid_dates(self):
        result = recalculate_earnings_range.apply(
            args=(self.employee.pk, "soon", "2024-03-06")
        ).get()
        self.assertEqual(result["status"], "invalid_range")

    def test_missing_employee(self):
        result = recalculate_earnings_range.apply(
            args=(999999, "2024-03-04", "2024-03-04")
        ).get()
        self.assertEqual(result["status"], "employee_missing")

    def test_unknown_trigger_falls_back_to_manual(self):
        result = recalculate_earnings_range.apply(
            args=(self.employee.pk, "2024-03-04", "2024-03-04", "cosmic_ray")
        ).get()
        self.assertEqual(result["status"], "ok")

    def test_transient_errors_configured_for_retry(self):
        self.assertIn(OperationalError, TRANSIENT_ERRORS)
        self.assertEqual(recalculate_earnings_range.max_retries, 3)
        self.assertEqual(
            tuple(recalculate_earnings_range.autoretry_for), TRANSIENT_ERRORS
        )

    def test_transient_error_propagates(self):
        with patch(
            "payroll.tasks.WeeklyEarningsService.sync_range",
            side_effect=OperationalError("database is locked"),
        ):
            with self.assertRaises(OperationalError):
                recalculate_earnings_range(self.employee.pk, "2024-03-04", "2024-03-04")


class RecalculateCurrentWeekTest(BaseTestCase):
    def test_queues_active_employees(self):
        make_employee(self.test_id, first_name="Former", is_active=False)

        with patch("payroll.tasks.recalculate_earnings_range.delay") as delay:
            result = recalculate_current_week.apply(args=("2024-03-07",)).get()

        self.assertEqual(result, {"week_start": "2024-03-04", "employees": 1})
        delay.assert_called_once_with(
            self.employee.pk, "2024-03-04", "2024-03-04", "manual"
        )

    def test_defaults_to_today(self):
        with patch("payroll.tasks.recalculate_earnings_range.delay"):
            with patch("payroll.tasks.timezone.localdate", return_value=date(2024, 3, 10)):
                result = recalculate_current_week.apply().get()

        self.assertEqual(result["week_start"], "2024-03-04")
