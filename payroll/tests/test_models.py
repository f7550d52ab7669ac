"""
Tests for payroll models
"""

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from payroll.models import DailyEarningsRecord, OvertimeSettings, WageHistoryEntry
from tests.base import BaseTestCase


class OvertimeSettingsModelTest(BaseTestCase):
    def test_load_creates_defaults_once(self):
        first = OvertimeSettings.load()
        second = OvertimeSettings.load()

        self.assertEqual(first.pk, 1)
        self.assertEqual(second.pk, 1)
        self.assertEqual(first.threshold_hours, Decimal("40"))
        self.assertEqual(first.overtime_percent, Decimal("50"))
        self.assertEqual(OvertimeSettings.objects.count(), 1)

    def test_save_keeps_single_row(self):
        OvertimeSettings(threshold_hours=Decimal("38"), overtime_percent=Decimal("25")).save()
        OvertimeSettings(threshold_hours=Decimal("36"), overtime_percent=Decimal("30")).save()

        self.assertEqual(OvertimeSettings.objects.count(), 1)
        self.assertEqual(OvertimeSettings.load().threshold_hours, Decimal("36.00"))

    def test_invalid_values_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            OvertimeSettings(threshold_hours=Decimal("0"), overtime_percent=Decimal("-1")).save()

        self.assertIn("threshold_hours", ctx.exception.message_dict)
        self.assertIn("overtime_percent", ctx.exception.message_dict)

    def test_as_policy(self):
        policy = OvertimeSettings.load().as_policy()
        self.assertEqual(policy.multiplier, Decimal("1.5"))


class WageHistoryEntryModelTest(BaseTestCase):
    def test_ordering(self):
        WageHistoryEntry.objects.create(
            employee=self.employee, rate=Decimal("25.00"), effective_from=date(2024, 6, 1)
        )
        WageHistoryEntry.objects.create(
            employee=self.employee, rate=Decimal("20.00"), effective_from=date(2024, 1, 1)
        )

        rates = list(self.employee.wage_history.values_list("rate", flat=True))
        self.assertEqual(rates, [Decimal("20.00"), Decimal("25.00")])

    def test_rate_must_be_positive(self):
        entry = WageHistoryEntry(
            employee=self.employee, rate=Decimal("0"), effective_from=date(2024, 1, 1)
        )
        with self.assertRaises(ValidationError):
            entry.full_clean()


class DailyEarningsRecordModelTest(BaseTestCase):
    def test_one_record_per_employee_day(self):
        DailyEarningsRecord.objects.create(employee=self.employee, date=date(2024, 3, 4))

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                DailyEarningsRecord.objects.create(employee=self.employee, date=date(2024, 3, 4))

    def test_defaults_mean_no_work(self):
        record = DailyEarningsRecord.objects.create(employee=self.employee, date=date(2024, 3, 4))
        self.assertTrue(record.no_work_recorded)
        self.assertFalse(record.overtime_applied)
        self.assertEqual(record.day_earnings, Decimal("0"))
