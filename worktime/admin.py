from django.contrib import admin

from .models import Shift


@admin.register(Shift)
class ShiftAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "date",
        "start_time",
        "end_time",
        "overnight",
        "shift_type",
        "derived_status",
        "derived_worked_hours",
    )
    list_filter = ("derived_status", "shift_type", "overnight", "date")
    search_fields = ("employee__first_name", "employee__last_name", "description")
    readonly_fields = ("end_date", "derived_worked_hours", "derived_status", "created_at", "updated_at")
    date_hierarchy = "date"
