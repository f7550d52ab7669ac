# shiftledger/logging_filters.py
import logging
import re
from typing import Any, Mapping

REDACTION = "****"
SENSITIVE_KEYS = {
    "password", "token", "authorization",
    "email", "phone", "first_name", "last_name",
    "hourly_wage", "rate", "wage", "previous_wage",
}

_email_re = re.compile(r"([A-Za-z0-9._%+-]+)@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")
_token_like_re = re.compile(r"(?:(?:Bearer|Token)\s+)[A-Za-z0-9\-_]{20,}")


def _redact_scalar(value: Any) -> Any:
    if value is None or isinstance(value, (int, float, bool)):
        return value
    s = str(value)
    s = _email_re.sub(r"***@\2", s)
    s = _token_like_re.sub(REDACTION, s)
    return s


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            k: (REDACTION if isinstance(k, str) and k.lower() in SENSITIVE_KEYS else _redact(v))
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return type(value)(_redact(v) for v in value)
    return _redact_scalar(value)


class PIIRedactorFilter(logging.Filter):
    """Redact emails, tokens, names and wages in messages, args and extra= fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _redact_scalar(record.msg)

        args = getattr(record, "args", None)
        if args:
            if isinstance(args, Mapping):
                record.args = _redact(args)
            elif isinstance(args, tuple):
                record.args = tuple(_redact(a) for a in args)

        # Fields passed through extra= land on the record itself
        for key in SENSITIVE_KEYS.intersection(record.__dict__):
            setattr(record, key, REDACTION)
        return True
