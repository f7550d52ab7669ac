from rest_framework import serializers

from users.models import Employee

from .models import Shift
from .services import reschedule_shift, schedule_shift
from .time_arithmetic import format_clock


class ClockField(serializers.CharField):
    """Wall-clock input normalized to HH:mm"""

    default_error_messages = {"invalid_clock": "Time must look like HH:mm"}

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        normalized = format_clock(value)
        if normalized is None:
            self.fail("invalid_clock")
        return normalized


class ShiftSerializer(serializers.ModelSerializer):
    """Shift serializer; writes go through the scheduling services"""

    employee_name = serializers.ReadOnlyField(source="employee.get_full_name")
    start_time = ClockField()
    end_time = ClockField()
    scheduled_hours = serializers.DecimalField(
        max_digits=5, decimal_places=2, read_only=True
    )

    class Meta:
        model = Shift
        fields = [
            "id",
            "employee",
            "employee_name",
            "date",
            "start_time",
            "end_time",
            "end_date",
            "overnight",
            "description",
            "shift_type",
            "check_in_timestamp",
            "checked_in_time",
            "check_out_timestamp",
            "checked_out_time",
            "derived_worked_hours",
            "derived_status",
            "scheduled_hours",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "end_date",
            "check_in_timestamp",
            "check_out_timestamp",
            "derived_worked_hours",
            "derived_status",
            "created_at",
            "updated_at",
        ]

    def validate_checked_in_time(self, value):
        if value and format_clock(value) is None:
            raise serializers.ValidationError("Time must look like HH:mm")
        return value

    validate_checked_out_time = validate_checked_in_time

    def create(self, validated_data):
        shift = schedule_shift(
            validated_data["employee"],
            validated_data["date"],
            validated_data["start_time"],
            validated_data["end_time"],
            description=validated_data.get("description", ""),
            shift_type=validated_data.get("shift_type", ""),
            overnight=validated_data.get("overnight", False),
        )
        manual_checks = {
            key: validated_data[key]
            for key in ("checked_in_time", "checked_out_time")
            if validated_data.get(key)
        }
        if manual_checks:
            shift = reschedule_shift(shift, **manual_checks)
        return shift

    def update(self, instance, validated_data):
        validated_data.pop("employee", None)
        return reschedule_shift(
            instance,
            start_time=validated_data.pop("start_time", None),
            end_time=validated_data.pop("end_time", None),
            day=validated_data.pop("date", None),
            overnight=validated_data.pop("overnight", None),
            **validated_data,
        )


class ShiftValidationRequestSerializer(serializers.Serializer):
    employee = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all())
    date = serializers.DateField()
    start_time = serializers.CharField()
    end_time = serializers.CharField()
    overnight = serializers.BooleanField(default=False)
    exclude_id = serializers.IntegerField(required=False, allow_null=True)
    max_hours = serializers.DecimalField(
        max_digits=4, decimal_places=2, required=False, min_value=0
    )


class ShiftDailyRequestSerializer(serializers.Serializer):
    employee = serializers.IntegerField()
    date_from = serializers.DateField()
    date_to = serializers.DateField()

    def validate(self, attrs):
        if attrs["date_to"] < attrs["date_from"]:
            raise serializers.ValidationError(
                {"date_to": "date_to must not precede date_from"}
            )
        return attrs


class CheckEventSerializer(serializers.Serializer):
    at = serializers.DateTimeField(required=False)


class DailyTotalsSerializer(serializers.Serializer):
    scheduled_hours = serializers.DecimalField(max_digits=6, decimal_places=2)
    worked_hours = serializers.DecimalField(max_digits=6, decimal_places=2)
    total_shifts = serializers.IntegerField()
    completed_shifts = serializers.IntegerField()
    in_progress_shifts = serializers.IntegerField()
    pending_shifts = serializers.IntegerField()


class DayEntrySerializer(serializers.Serializer):
    id = serializers.SerializerMethodField()
    base_shift_id = serializers.SerializerMethodField()
    start_time = serializers.CharField(source="shift.start_time")
    end_time = serializers.CharField(source="shift.end_time")
    description = serializers.CharField(source="shift.description")
    is_continuation = serializers.BooleanField()
    status = serializers.CharField()
    scheduled_minutes = serializers.IntegerField()
    worked_minutes = serializers.IntegerField(allow_null=True)

    def get_id(self, entry):
        return str(entry.shift.id)

    def get_base_shift_id(self, entry):
        return getattr(entry.shift, "base_shift_id", entry.shift.id)


class DayGroupSerializer(serializers.Serializer):
    date = serializers.DateField()
    entries = DayEntrySerializer(many=True)
    totals = DailyTotalsSerializer()
