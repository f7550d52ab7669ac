import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsSelfOrStaff, is_staff_user

from .continuation import group_shifts_by_date
from .filters import ShiftFilter
from .models import Shift
from .serializers import (
    CheckEventSerializer,
    DayGroupSerializer,
    ShiftDailyRequestSerializer,
    ShiftSerializer,
    ShiftValidationRequestSerializer,
)
from .services import record_check_in, record_check_out, validate_candidate_shift

logger = logging.getLogger(__name__)


class ShiftViewSet(viewsets.ModelViewSet):
    """Scheduling, check events and per-day views of shifts"""

    serializer_class = ShiftSerializer
    permission_classes = [IsAuthenticated, IsSelfOrStaff]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ShiftFilter

    def get_queryset(self):
        queryset = Shift.objects.select_related("employee").order_by(
            "date", "start_time"
        )
        # Staff see every shift; others only the shifts of their own employee records
        if is_staff_user(self.request.user):
            return queryset
        return queryset.filter(employee__user=self.request.user)

    def _check_own_employee(self, employee, message):
        user = self.request.user
        if not is_staff_user(user) and employee.user_id != user.pk:
            raise PermissionDenied(message)

    def perform_create(self, serializer):
        self._check_own_employee(
            serializer.validated_data["employee"], "You can only schedule your own shifts"
        )
        serializer.save()

    @action(detail=False, methods=["post"])
    def validate(self, request):
        """Dry-run the overlap validator without writing anything"""
        serializer = ShiftValidationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self._check_own_employee(
            data["employee"], "You can only validate your own shifts"
        )

        result = validate_candidate_shift(
            data["employee"].pk,
            data["date"],
            data["start_time"],
            data["end_time"],
            exclude_id=data.get("exclude_id"),
            allow_overnight=data["overnight"],
            max_hours=data.get("max_hours"),
        )
        response_status = (
            status.HTTP_200_OK if result.is_valid else status.HTTP_400_BAD_REQUEST
        )
        return Response(result.as_dict(), status=response_status)

    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):
        serializer = CheckEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        shift = record_check_in(self.get_object(), at=serializer.validated_data.get("at"))
        return Response(self.get_serializer(shift).data)

    @action(detail=True, methods=["post"], url_path="check-out")
    def check_out(self, request, pk=None):
        serializer = CheckEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        shift = record_check_out(self.get_object(), at=serializer.validated_data.get("at"))
        return Response(self.get_serializer(shift).data)

    @action(detail=False, methods=["get"])
    def daily(self, request):
        """Shifts grouped by calendar day with continuation fragments and totals"""
        serializer = ShiftDailyRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        date_from = serializer.validated_data["date_from"]
        date_to = serializer.validated_data["date_to"]

        shifts = (
            self.get_queryset()
            .filter(employee_id=serializer.validated_data["employee"])
            .touching_range(date_from, date_to)
        )
        groups = [
            group
            for day, group in group_shifts_by_date(shifts).items()
            if date_from <= day <= date_to
        ]
        logger.debug("Daily view built", extra={"days": len(groups)})
        return Response(DayGroupSerializer(groups, many=True).data)
