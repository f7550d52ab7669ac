import logging
from datetime import timedelta

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.logging_utils import hash_employee_id
from users.permissions import IsStaffOrReadOnly, is_staff_user
from worktime.time_arithmetic import week_start

from .filters import DailyEarningsFilter, WageHistoryFilter
from .models import DailyEarningsRecord, OvertimeSettings, WageHistoryEntry
from .serializers import (
    DailyAllocationSerializer,
    DailyEarningsRecordSerializer,
    OvertimeSettingsSerializer,
    RecalculateRequestSerializer,
    WageHistoryEntrySerializer,
    WeeklySummaryRequestSerializer,
    WeeklySummarySerializer,
)
from .services import RecalculationTrigger, WeeklyEarningsService, summarize_week

logger = logging.getLogger(__name__)


def _restrict_to_own(queryset, user):
    if is_staff_user(user):
        return queryset
    return queryset.filter(employee__user=user)


class DailyEarningsViewSet(viewsets.ReadOnlyModelViewSet):
    """Stored daily earnings plus on-demand recalculation and weekly totals"""

    serializer_class = DailyEarningsRecordSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = DailyEarningsFilter

    def get_queryset(self):
        queryset = DailyEarningsRecord.objects.select_related("employee").order_by(
            "employee", "date"
        )
        return _restrict_to_own(queryset, self.request.user)

    @action(detail=False, methods=["post"])
    def recalculate(self, request):
        """Rebuild one or more weeks for an employee (staff only)"""
        if not is_staff_user(request.user):
            raise PermissionDenied("Staff access required to recalculate earnings")

        serializer = RecalculateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        employee = data["employee"]

        service = WeeklyEarningsService(employee)
        first_monday = week_start(data["week_start"])
        weeks, days = [], []
        for offset in range(data["weeks"]):
            monday = first_monday + timedelta(weeks=offset)
            days.extend(
                service.sync_week(
                    monday,
                    trigger=RecalculationTrigger.MANUAL,
                    dry_run=data["dry_run"],
                )
            )
            weeks.append(monday)

        logger.info(
            "Earnings recalculated via API",
            extra={
                "employee_hash": hash_employee_id(employee.pk),
                "weeks": len(weeks),
                "dry_run": data["dry_run"],
            },
        )
        return Response(
            {
                "employee": employee.pk,
                "weeks": [monday.isoformat() for monday in weeks],
                "dry_run": data["dry_run"],
                "days": DailyAllocationSerializer(days, many=True).data,
            },
            status=status.HTTP_200_OK,
        )

    @action(detail=False, methods=["get"], url_path="weekly-summary")
    def weekly_summary(self, request):
        serializer = WeeklySummaryRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        employee = serializer.validated_data["employee"]

        if not is_staff_user(request.user) and employee.user_id != request.user.pk:
            raise PermissionDenied("You can only view your own earnings")

        summary = summarize_week(employee, serializer.validated_data["week_start"])
        return Response(WeeklySummarySerializer(summary).data)


class WageHistoryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Wage history is append-only; creating an entry records a wage change"""

    serializer_class = WageHistoryEntrySerializer
    permission_classes = [IsStaffOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_class = WageHistoryFilter

    def get_queryset(self):
        queryset = WageHistoryEntry.objects.select_related("employee").order_by(
            "employee", "effective_from", "created_at"
        )
        return _restrict_to_own(queryset, self.request.user)


class OvertimeSettingsView(APIView):
    """Read or replace the global overtime policy"""

    permission_classes = [IsStaffOrReadOnly]

    def get(self, request):
        return Response(OvertimeSettingsSerializer(OvertimeSettings.load()).data)

    def put(self, request):
        return self._update(request, partial=False)

    def patch(self, request):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        serializer = OvertimeSettingsSerializer(
            OvertimeSettings.load(), data=request.data, partial=partial
        )
        serializer.is_valid(raise_exception=True)
        settings_row = serializer.save()
        return Response(OvertimeSettingsSerializer(settings_row).data)
