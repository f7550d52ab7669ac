from django.apps import AppConfig


class PayrollConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "payroll"

    def ready(self):
        """Connect the earnings receiver to worktime's shift_changed signal"""
        import payroll.signals  # noqa: F401
