# core/exceptions.py
import logging
import uuid

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from django.core.exceptions import ValidationError
from django.http import Http404

logger = logging.getLogger(__name__)


class APIError(Exception):
    """
    Custom API exception class for business logic errors
    """

    def __init__(
        self, message, code=None, status_code=status.HTTP_400_BAD_REQUEST, details=None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "API_ERROR"
        self.status_code = status_code
        self.details = details


class ShiftRejected(APIError):
    """
    A candidate shift failed overlap/duration/daily-limit validation.

    Carries the typed validation result so views can return it unchanged.
    """

    def __init__(self, result):
        super().__init__(
            message=result.message,
            code=result.type.value.upper() if result.type else "SHIFT_REJECTED",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=result.as_dict(),
        )
        self.result = result


class CheckEventError(APIError):
    """
    Check-in/check-out was requested in an order the shift cannot accept
    """

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "CHECK_EVENT_ERROR",
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class PayrollPolicyError(APIError):
    """
    Wage or overtime settings violate payroll policy
    """

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "PAYROLL_POLICY_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class PersistenceError(APIError):
    """
    Storage failure while writing a shift patch or an earnings record.

    Always raised ``from`` the underlying ``DatabaseError``; callers decide
    whether to retry.
    """

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "PERSISTENCE_ERROR",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
        )


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error format
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    # Generate unique error ID for tracking
    error_id = str(uuid.uuid4())[:8]

    request = context.get("request")
    path = getattr(request, "path", "unknown")
    method = getattr(request, "method", "unknown")

    if response is not None:
        # Standard DRF exceptions
        response.data = {
            "error": True,
            "code": get_error_code(exc),
            "message": get_error_message(response.data),
            "details": format_error_details(response.data),
            "error_id": error_id,
        }
        logger.warning(
            "API Error [%s]: %s - %s %s - Status: %s",
            error_id,
            exc.__class__.__name__,
            method,
            path,
            response.status_code,
        )
        return response

    if isinstance(exc, APIError):
        logger.info(
            "Business rule error [%s]: %s - %s %s",
            error_id,
            exc.code,
            method,
            path,
        )
        return Response(
            {
                "error": True,
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
                "error_id": error_id,
            },
            status=exc.status_code,
        )

    if isinstance(exc, Http404):
        custom_response_data = {
            "error": True,
            "code": "RESOURCE_NOT_FOUND",
            "message": "The requested resource was not found.",
            "details": None,
            "error_id": error_id,
        }
        response = Response(custom_response_data, status=status.HTTP_404_NOT_FOUND)

    elif isinstance(exc, ValidationError):
        custom_response_data = {
            "error": True,
            "code": "VALIDATION_ERROR",
            "message": "Validation failed.",
            "details": (
                exc.message_dict if hasattr(exc, "message_dict") else exc.messages
            ),
            "error_id": error_id,
        }
        response = Response(custom_response_data, status=status.HTTP_400_BAD_REQUEST)

    else:
        # Unknown exceptions propagate to Django's 500 handling
        logger.error(
            "Unhandled Exception [%s]: %s - %s %s",
            error_id,
            exc.__class__.__name__,
            method,
            path,
            exc_info=exc,
        )
        return None

    logger.warning(
        "Django Error [%s]: %s - %s %s", error_id, exc.__class__.__name__, method, path
    )
    return response


def get_error_code(exc):
    """
    Generate appropriate error code based on exception type
    """
    error_codes = {
        "ValidationError": "VALIDATION_ERROR",
        "PermissionDenied": "PERMISSION_DENIED",
        "NotAuthenticated": "AUTHENTICATION_REQUIRED",
        "AuthenticationFailed": "AUTHENTICATION_FAILED",
        "NotFound": "RESOURCE_NOT_FOUND",
        "Http404": "RESOURCE_NOT_FOUND",
        "MethodNotAllowed": "METHOD_NOT_ALLOWED",
        "ParseError": "PARSE_ERROR",
        "UnsupportedMediaType": "UNSUPPORTED_MEDIA_TYPE",
        "Throttled": "RATE_LIMIT_EXCEEDED",
    }

    exc_name = exc.__class__.__name__
    return error_codes.get(exc_name, "UNKNOWN_ERROR")


def get_error_message(data):
    """
    Extract human-readable error message from DRF error data
    """
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        elif "non_field_errors" in data:
            return (
                str(data["non_field_errors"][0])
                if data["non_field_errors"]
                else "Validation error"
            )
        else:
            # Get first error message from any field
            for key, value in data.items():
                if isinstance(value, list) and value:
                    return f"{key}: {value[0]}"
                elif isinstance(value, str):
                    return value
            return "Validation error"
    elif isinstance(data, list) and data:
        return str(data[0])
    else:
        return str(data)


def format_error_details(data):
    """
    Format error details for consistent structure
    """
    if isinstance(data, dict):
        # 'detail' already went into message
        details = {k: v for k, v in data.items() if k != "detail"}
        return details if details else None
    elif isinstance(data, list):
        return data
    else:
        return None
