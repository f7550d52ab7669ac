from datetime import timedelta

import django_filters
from django.db.models import Q

from .models import Shift


class ShiftFilter(django_filters.FilterSet):
    # Shifts active on the date, including overnight shifts from the day before
    date = django_filters.DateFilter(method="filter_by_activity_date")
    employee = django_filters.NumberFilter(field_name="employee__id")
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    status = django_filters.ChoiceFilter(
        field_name="derived_status", choices=Shift._meta.get_field("derived_status").choices
    )
    shift_type = django_filters.CharFilter()

    def filter_by_activity_date(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(
            Q(date=value) | Q(date=value - timedelta(days=1), end_date=value)
        )

    class Meta:
        model = Shift
        fields = ["employee", "date", "date_from", "date_to", "status", "shift_type"]
