# users/urls.py
from rest_framework.routers import DefaultRouter

from django.urls import include, path

from .views import EmployeeViewSet

router = DefaultRouter()
router.register(r"employees", EmployeeViewSet)

urlpatterns = [
    path("", include(router.urls)),
]
