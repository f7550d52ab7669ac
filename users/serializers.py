from rest_framework import serializers

from .models import Employee, minimum_hourly_wage


class EmployeeSerializer(serializers.ModelSerializer):
    """Employee serializer; the wage is only settable on creation"""

    full_name = serializers.ReadOnlyField(source="get_full_name")

    class Meta:
        model = Employee
        fields = [
            "id",
            "first_name",
            "last_name",
            "email",
            "hourly_wage",
            "is_active",
            "full_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_hourly_wage(self, value):
        minimum = minimum_hourly_wage()
        if value < minimum:
            raise serializers.ValidationError(
                f"Hourly wage must be at least {minimum}"
            )
        return value


class EmployeeUpdateSerializer(EmployeeSerializer):
    """Wage changes go through the payroll wage-history endpoint instead"""

    class Meta(EmployeeSerializer.Meta):
        read_only_fields = EmployeeSerializer.Meta.read_only_fields + ["hourly_wage"]
