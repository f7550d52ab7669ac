"""
Helpers that keep employee identity out of log records
"""

import hashlib
from typing import Any, Dict, Union

from django.conf import settings


def hash_employee_id(employee_id: Union[int, str, None], salt: str = None) -> str:
    """
    Creates hash from employee ID for safe logging

    Args:
        employee_id: Employee primary key
        salt: Salt for hashing (defaults to a value derived from SECRET_KEY)

    Returns:
        Hashed ID such as ``emp_1a2b3c4d``
    """
    if employee_id in (None, ""):
        return "[no_id]"

    if salt is None:
        salt = settings.SECRET_KEY[:16]
    digest = hashlib.sha256(f"{salt}:{employee_id}".encode()).hexdigest()
    return f"emp_{digest[:8]}"


def safe_log_shift(shift, action: str = "action") -> Dict[str, Any]:
    """
    Creates safe ``extra=`` payload describing a shift

    Only the shift id, its hashed owner and its calendar placement are
    included; descriptions are free text and are never logged.
    """
    if shift is None:
        return {"action": action, "shift": "none"}

    date = getattr(shift, "date", None)
    return {
        "action": action,
        "shift_id": getattr(shift, "pk", None) or getattr(shift, "id", None),
        "employee_hash": hash_employee_id(getattr(shift, "employee_id", None)),
        "date": date.isoformat() if hasattr(date, "isoformat") else date,
        "overnight": bool(getattr(shift, "overnight", False)),
    }
