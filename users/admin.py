from django.contrib import admin

from .models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("first_name", "last_name", "email", "hourly_wage", "is_active")
    list_filter = ("is_active",)
    search_fields = ("first_name", "last_name", "email")
    readonly_fields = ("created_at", "updated_at")
