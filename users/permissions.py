# users/permissions.py
from rest_framework.permissions import SAFE_METHODS, BasePermission


def is_staff_user(user):
    return bool(user and user.is_authenticated and (user.is_staff or user.is_superuser))


class IsStaffOrReadOnly(BasePermission):
    """
    Any authenticated user may read; only staff may write
    """

    message = "Staff access required for changes"

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return is_staff_user(request.user)


class IsSelfOrStaff(BasePermission):
    """
    Permission to access own employee data or staff access
    """

    message = "Access denied: can only access own data or need higher privileges"

    def has_permission(self, request, view):
        return request.user.is_authenticated

    def has_object_permission(self, request, view, obj):
        if is_staff_user(request.user):
            return True

        # Users can access their own data
        if hasattr(obj, "user"):
            return obj.user == request.user
        elif hasattr(obj, "employee"):
            return obj.employee.user == request.user

        return False
