"""
Tests for the shift REST endpoints
"""

from datetime import date

from rest_framework import status

from django.urls import reverse

from tests.base import BaseAPITestCase, UnauthenticatedAPITestCase
from worktime.models import Shift
from worktime.services import schedule_shift

MONDAY = date(2024, 3, 4)


class ShiftAPITest(BaseAPITestCase):
    def setUp(self):
        super().setUp()
        self.list_url = reverse("shift-list")

    def payload(self, **kwargs):
        data = {
            "employee": self.employee.pk,
            "date": "2024-03-04",
            "start_time": "09:00",
            "end_time": "17:00",
            "description": "Front desk",
        }
        data.update(kwargs)
        return data

    def test_create_shift(self):
        response = self.client.post(self.list_url, self.payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["scheduled_hours"], "8.00")
        self.assertEqual(response.data["shift_type"], "regular")
        self.assertIsNone(response.data["end_date"])

    def test_create_normalizes_clock(self):
        response = self.client.post(
            self.list_url, self.payload(start_time="9.30", end_time="12"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["start_time"], "09:30")
        self.assertEqual(response.data["end_time"], "12:00")

    def test_invalid_clock_rejected(self):
        response = self.client.post(
            self.list_url, self.payload(start_time="quarter past"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("start_time", response.data["details"])

    def test_overnight_create(self):
        response = self.client.post(
            self.list_url,
            self.payload(start_time="22:00", end_time="06:00", overnight=True),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["end_date"], "2024-03-05")
        self.assertTrue(response.data["overnight"])

    def test_overlap_returns_validation_result(self):
        schedule_shift(self.employee, MONDAY, "09:00", "13:00")

        response = self.client.post(
            self.list_url, self.payload(start_time="12:00", end_time="16:00"), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "OVERLAP_CONFLICT")
        self.assertEqual(response.data["details"]["type"], "overlap_conflict")
        self.assertEqual(Shift.objects.count(), 1)

    def test_cannot_schedule_for_someone_else(self):
        response = self.client.post(
            self.list_url, self.payload(employee=self.employee2.pk), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_can_schedule_for_anyone(self):
        response = self.staff_client.post(
            self.list_url, self.payload(employee=self.employee2.pk), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_list_is_limited_to_own_shifts(self):
        schedule_shift(self.employee, MONDAY, "09:00", "13:00")
        schedule_shift(self.employee2, MONDAY, "09:00", "13:00")

        response = self.client.get(self.list_url)
        self.assertEqual(response.data["count"], 1)

        response = self.staff_client.get(self.list_url)
        self.assertEqual(response.data["count"], 2)

    def test_date_filter_includes_previous_overnight(self):
        schedule_shift(self.employee, date(2024, 3, 3), "22:00", "06:00", overnight=True)
        schedule_shift(self.employee, MONDAY, "09:00", "13:00")
        schedule_shift(self.employee, date(2024, 3, 5), "09:00", "13:00")

        response = self.client.get(self.list_url, {"date": "2024-03-04"})

        self.assertEqual(response.data["count"], 2)

    def test_status_filter(self):
        shift = schedule_shift(self.employee, MONDAY, "09:00", "13:00")
        schedule_shift(self.employee, MONDAY, "14:00", "16:00")
        self.client.post(reverse("shift-check-in", args=[shift.pk]), {}, format="json")

        response = self.client.get(self.list_url, {"status": "in_progress"})

        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["id"], shift.pk)

    def test_update_revalidates(self):
        shift = schedule_shift(self.employee, MONDAY, "09:00", "13:00")
        schedule_shift(self.employee, MONDAY, "14:00", "16:00")

        response = self.client.patch(
            reverse("shift-detail", args=[shift.pk]), {"end_time": "15:00"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch(
            reverse("shift-detail", args=[shift.pk]), {"end_time": "14:00"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["end_time"], "14:00")

    def test_delete(self):
        shift = schedule_shift(self.employee, MONDAY, "09:00", "13:00")
        response = self.client.delete(reverse("shift-detail", args=[shift.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Shift.objects.exists())


class ShiftActionsAPITest(BaseAPITestCase):
    def setUp(self):
        super().setUp()
        self.shift = schedule_shift(self.employee, MONDAY, "09:00", "17:00")

    def test_validate_valid(self):
        response = self.client.post(
            reverse("shift-validate"),
            {
                "employee": self.employee.pk,
                "date": "2024-03-05",
                "start_time": "22:00",
                "end_time": "06:00",
                "overnight": True,
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_valid"])
        self.assertTrue(response.data["overnight"])
        self.assertEqual(str(response.data["total_daily_hours"]), "8.00")

    def test_validate_conflict(self):
        response = self.client.post(
            reverse("shift-validate"),
            {
                "employee": self.employee.pk,
                "date": "2024-03-04",
                "start_time": "12:00",
                "end_time": "16:00",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["type"], "overlap_conflict")
        self.assertEqual(response.data["conflicting_shift_id"], self.shift.pk)

    def test_validate_excluding_self(self):
        response = self.client.post(
            reverse("shift-validate"),
            {
                "employee": self.employee.pk,
                "date": "2024-03-04",
                "start_time": "08:00",
                "end_time": "18:00",
                "exclude_id": self.shift.pk,
            },
            format="json",
        )
        self.assertTrue(response.data["is_valid"])

    def test_check_in_and_out(self):
        response = self.client.post(
            reverse("shift-check-in", args=[self.shift.pk]),
            {"at": "2024-03-04T09:00:00Z"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["derived_status"], "in_progress")

        response = self.client.post(
            reverse("shift-check-out", args=[self.shift.pk]),
            {"at": "2024-03-04T16:30:00Z"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["derived_status"], "completed")
        self.assertEqual(response.data["derived_worked_hours"], "7.50")

    def test_check_out_first_is_conflict(self):
        response = self.client.post(
            reverse("shift-check-out", args=[self.shift.pk]), {}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "NOT_CHECKED_IN")

    def test_daily_view_splits_overnight(self):
        schedule_shift(self.employee, MONDAY, "22:00", "02:00", overnight=True)

        response = self.client.get(
            reverse("shift-daily"),
            {"employee": self.employee.pk, "date_from": "2024-03-04", "date_to": "2024-03-05"},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([day["date"] for day in response.data], ["2024-03-04", "2024-03-05"])
        monday, tuesday = response.data
        self.assertEqual(monday["totals"]["scheduled_hours"], "10.00")
        self.assertEqual(monday["totals"]["total_shifts"], 2)
        self.assertEqual(tuesday["totals"]["scheduled_hours"], "2.00")
        self.assertEqual(tuesday["totals"]["total_shifts"], 0)
        self.assertTrue(tuesday["entries"][0]["is_continuation"])
        self.assertTrue(tuesday["entries"][0]["id"].endswith("__cont"))

    def test_daily_requires_parameters(self):
        response = self.client.get(reverse("shift-daily"), {"employee": self.employee.pk})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_daily_rejects_non_numeric_employee(self):
        response = self.client.get(
            reverse("shift-daily"),
            {"employee": "abc", "date_from": "2024-03-04", "date_to": "2024-03-05"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("employee", response.data["details"])

    def test_daily_rejects_reversed_range(self):
        response = self.client.get(
            reverse("shift-daily"),
            {"employee": self.employee.pk, "date_from": "2024-03-05", "date_to": "2024-03-04"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_validate_for_another_employee_is_forbidden(self):
        schedule_shift(
            self.employee2, MONDAY, "09:00", "13:00", description="Meeting with HR"
        )
        payload = {
            "employee": self.employee2.pk,
            "date": "2024-03-04",
            "start_time": "10:00",
            "end_time": "12:00",
        }

        response = self.client.post(reverse("shift-validate"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertNotIn("Meeting with HR", str(response.data))
        self.assertNotIn("conflicting_shift_id", response.data)

        response = self.staff_client.post(reverse("shift-validate"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["type"], "overlap_conflict")

    def test_validate_unknown_employee(self):
        response = self.staff_client.post(
            reverse("shift-validate"),
            {"employee": 999999, "date": "2024-03-04", "start_time": "09:00", "end_time": "10:00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ShiftAuthTest(UnauthenticatedAPITestCase):
    def test_authentication_required(self):
        response = self.client.get(reverse("shift-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
