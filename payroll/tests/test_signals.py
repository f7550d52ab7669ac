"""
Tests for earnings reconciliation driven by shift changes
"""

from datetime import date
from decimal import Decimal

from payroll.models import DailyEarningsRecord
from payroll.signals import recalculate_affected_weeks
from tests.base import BaseTestCase
from worktime.models import Shift


class ShiftChangeReconciliationTest(BaseTestCase):
    def create_shift(self, day=date(2024, 3, 5)):
        return Shift.objects.create(
            employee=self.employee,
            date=day,
            start_time="09:00",
            end_time="17:00",
            checked_in_time="09:00",
            checked_out_time="17:00",
        )

    def record(self, day):
        return DailyEarningsRecord.objects.get(employee=self.employee, date=day)

    def test_delete_zeroes_the_day(self):
        shift = self.create_shift()
        self.assertEqual(self.record(date(2024, 3, 5)).day_earnings, Decimal("160.00"))

        shift.delete()

        record = self.record(date(2024, 3, 5))
        self.assertEqual(record.worked_hours, Decimal("0.00"))
        self.assertEqual(record.day_earnings, Decimal("0.00"))
        self.assertTrue(record.no_work_recorded)

    def test_move_to_another_week_rebuilds_both(self):
        shift = self.create_shift()

        shift.date = date(2024, 3, 13)
        shift.save()

        self.assertTrue(self.record(date(2024, 3, 5)).no_work_recorded)
        self.assertEqual(self.record(date(2024, 3, 13)).worked_hours, Decimal("8.00"))

    def test_check_out_updates_earnings(self):
        shift = Shift.objects.create(
            employee=self.employee,
            date=date(2024, 3, 5),
            start_time="09:00",
            end_time="17:00",
            checked_in_time="09:00",
        )
        self.assertEqual(self.record(date(2024, 3, 5)).worked_hours, Decimal("0.00"))

        shift.checked_out_time = "15:30"
        shift.save()

        self.assertEqual(self.record(date(2024, 3, 5)).worked_hours, Decimal("6.50"))
        self.assertEqual(self.record(date(2024, 3, 5)).day_earnings, Decimal("130.00"))

    def test_employee_delete_leaves_no_records(self):
        self.create_shift()
        employee_id = self.employee.pk

        self.employee.delete()

        self.assertFalse(DailyEarningsRecord.objects.filter(employee_id=employee_id).exists())

    def test_vanished_employee_is_ignored(self):
        recalculate_affected_weeks(
            sender=Shift, employee_id=999999, affected_dates=[date(2024, 3, 5)]
        )
        self.assertFalse(DailyEarningsRecord.objects.exists())
