import django_filters

from .models import DailyEarningsRecord, WageHistoryEntry


class DailyEarningsFilter(django_filters.FilterSet):
    employee = django_filters.NumberFilter(field_name="employee__id")
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = DailyEarningsRecord
        fields = ["employee", "date", "date_from", "date_to", "overtime_applied"]


class WageHistoryFilter(django_filters.FilterSet):
    employee = django_filters.NumberFilter(field_name="employee__id")

    class Meta:
        model = WageHistoryEntry
        fields = ["employee"]
