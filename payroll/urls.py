from rest_framework.routers import DefaultRouter

from django.urls import include, path

from .views import DailyEarningsViewSet, OvertimeSettingsView, WageHistoryViewSet

router = DefaultRouter()
router.register(r"earnings", DailyEarningsViewSet, basename="earnings")
router.register(r"wage-history", WageHistoryViewSet, basename="wage-history")

urlpatterns = [
    path("", include(router.urls)),
    path(
        "overtime-settings/",
        OvertimeSettingsView.as_view(),
        name="overtime-settings",
    ),
]
