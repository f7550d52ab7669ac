import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets
from rest_framework.filters import OrderingFilter, SearchFilter

from core.logging_utils import hash_employee_id

from .models import Employee
from .permissions import IsStaffOrReadOnly
from .serializers import EmployeeSerializer, EmployeeUpdateSerializer

logger = logging.getLogger(__name__)


class EmployeeViewSet(viewsets.ModelViewSet):
    """Employee records the scheduler and payroll work against"""

    queryset = Employee.objects.all().order_by("last_name", "first_name")
    serializer_class = EmployeeSerializer
    permission_classes = [IsStaffOrReadOnly]

    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["first_name", "last_name", "email"]
    filterset_fields = ["is_active"]
    ordering_fields = ["first_name", "last_name", "created_at"]
    ordering = ["last_name", "first_name"]

    def get_serializer_class(self):
        if self.action in ["update", "partial_update"]:
            return EmployeeUpdateSerializer
        return self.serializer_class

    def perform_create(self, serializer):
        employee = serializer.save()
        logger.info(
            "New employee created",
            extra={"employee_hash": hash_employee_id(employee.pk)},
        )

    def perform_destroy(self, instance):
        # Shifts and earnings reference the employee; deactivate instead
        instance.is_active = False
        instance.save(update_fields=["is_active", "updated_at"])
        logger.info(
            "Employee deactivated",
            extra={"employee_hash": hash_employee_id(instance.pk)},
        )
