from datetime import timedelta

from django.db import models
from django.db.models import Q


class ShiftQuerySet(models.QuerySet):
    def for_employee(self, employee_id):
        return self.filter(employee_id=employee_id)

    def in_range(self, start_date, end_date):
        """Shifts whose nominal date falls within [start_date, end_date]"""
        return self.filter(date__gte=start_date, date__lte=end_date)

    def touching_range(self, start_date, end_date):
        """
        Shifts with any part inside [start_date, end_date], including
        overnight shifts that started the day before the range.
        """
        return self.filter(
            Q(date__gte=start_date, date__lte=end_date)
            | Q(date=start_date - timedelta(days=1), end_date__isnull=False)
        )

    def neighbours_of(self, day):
        """Candidates for overlap checks: previous, same and next nominal day"""
        return self.filter(
            date__gte=day - timedelta(days=1), date__lte=day + timedelta(days=1)
        )
