from rest_framework import serializers

from users.models import Employee

from .models import DailyEarningsRecord, OvertimeSettings, WageHistoryEntry
from .services import record_wage_change, update_overtime_settings


class DailyEarningsRecordSerializer(serializers.ModelSerializer):
    """Read-only view of a derived earnings row"""

    class Meta:
        model = DailyEarningsRecord
        fields = [
            "id",
            "employee",
            "date",
            "scheduled_hours",
            "worked_hours",
            "regular_hours",
            "overtime_hours",
            "hourly_wage_snapshot",
            "overtime_percent",
            "overtime_threshold",
            "day_earnings",
            "overtime_applied",
            "no_work_recorded",
            "updated_at",
        ]
        read_only_fields = fields


class DailyAllocationSerializer(serializers.Serializer):
    date = serializers.DateField()
    scheduled_hours = serializers.DecimalField(max_digits=5, decimal_places=2)
    worked_hours = serializers.DecimalField(max_digits=5, decimal_places=2)
    regular_hours = serializers.DecimalField(max_digits=5, decimal_places=2)
    overtime_hours = serializers.DecimalField(max_digits=5, decimal_places=2)
    hourly_wage_snapshot = serializers.DecimalField(max_digits=8, decimal_places=2)
    day_earnings = serializers.DecimalField(max_digits=10, decimal_places=2)
    overtime_applied = serializers.BooleanField()
    no_work_recorded = serializers.BooleanField()


class RecalculateRequestSerializer(serializers.Serializer):
    employee = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all())
    week_start = serializers.DateField(help_text="Any date inside the first week")
    weeks = serializers.IntegerField(min_value=1, max_value=53, default=1)
    dry_run = serializers.BooleanField(default=False)


class WeeklySummaryRequestSerializer(serializers.Serializer):
    employee = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all())
    week_start = serializers.DateField()


class WeeklySummarySerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    week_start = serializers.DateField()
    week_end = serializers.DateField()
    days_recorded = serializers.IntegerField()
    scheduled_hours = serializers.DecimalField(max_digits=6, decimal_places=2)
    worked_hours = serializers.DecimalField(max_digits=6, decimal_places=2)
    regular_hours = serializers.DecimalField(max_digits=6, decimal_places=2)
    overtime_hours = serializers.DecimalField(max_digits=6, decimal_places=2)
    regular_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    overtime_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    weekly_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    efficiency_percent = serializers.DecimalField(max_digits=6, decimal_places=1)
    threshold_hours = serializers.DecimalField(max_digits=5, decimal_places=2)
    threshold_crossed = serializers.BooleanField()


class WageHistoryEntrySerializer(serializers.ModelSerializer):
    """
    Wage history rows. Creating one records a wage change, which also
    updates the employee's nominal wage and schedules recomputation.
    """

    class Meta:
        model = WageHistoryEntry
        fields = ["id", "employee", "rate", "effective_from", "created_at"]
        read_only_fields = ["id", "created_at"]

    def create(self, validated_data):
        return record_wage_change(
            validated_data["employee"],
            validated_data["rate"],
            validated_data["effective_from"],
        )


class OvertimeSettingsSerializer(serializers.ModelSerializer):
    recompute_from = serializers.DateField(
        write_only=True,
        required=False,
        help_text="Rebuild stored earnings from this date with the new policy",
    )

    class Meta:
        model = OvertimeSettings
        fields = ["threshold_hours", "overtime_percent", "recompute_from", "updated_at"]
        read_only_fields = ["updated_at"]

    def validate_threshold_hours(self, value):
        if value <= 0:
            raise serializers.ValidationError("Threshold must be greater than zero")
        return value

    def validate_overtime_percent(self, value):
        if value < 0:
            raise serializers.ValidationError("Overtime percent cannot be negative")
        return value

    def update(self, instance, validated_data):
        return update_overtime_settings(
            validated_data.get("threshold_hours", instance.threshold_hours),
            validated_data.get("overtime_percent", instance.overtime_percent),
            recompute_from=validated_data.get("recompute_from"),
        )
