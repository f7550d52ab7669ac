from django.contrib import admin

from .models import DailyEarningsRecord, OvertimeSettings, WageHistoryEntry


@admin.register(WageHistoryEntry)
class WageHistoryEntryAdmin(admin.ModelAdmin):
    list_display = ('employee', 'rate', 'effective_from', 'created_at')
    list_filter = ('effective_from',)
    search_fields = ('employee__first_name', 'employee__last_name', 'employee__email')
    readonly_fields = ('created_at',)


@admin.register(OvertimeSettings)
class OvertimeSettingsAdmin(admin.ModelAdmin):
    list_display = ('threshold_hours', 'overtime_percent', 'updated_at')
    readonly_fields = ('updated_at',)

    def has_add_permission(self, request):
        # Single row, created on first load
        return not OvertimeSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(DailyEarningsRecord)
class DailyEarningsRecordAdmin(admin.ModelAdmin):
    """Derived rows; rebuilt by the earnings service, never edited here"""

    list_display = (
        'employee', 'date', 'worked_hours', 'regular_hours',
        'overtime_hours', 'day_earnings', 'overtime_applied',
    )
    list_filter = ('overtime_applied', 'no_work_recorded', 'date')
    search_fields = ('employee__first_name', 'employee__last_name', 'employee__email')
    date_hierarchy = 'date'

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False
