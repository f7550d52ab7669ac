from rest_framework.routers import DefaultRouter

from django.urls import include, path

from .views import ShiftViewSet

router = DefaultRouter()
router.register(r"shifts", ShiftViewSet, basename="shift")

urlpatterns = [
    path("", include(router.urls)),
]
