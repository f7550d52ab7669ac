"""
Date/clock arithmetic for shifts.

Shift times are wall-clock strings in the employee's local calendar
(``settings.TIME_ZONE``). Everything here is pure: unparsable input
yields ``None`` instead of raising.
"""

import re
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple, Union

import pytz

from django.conf import settings

HOURS_QUANT = Decimal("0.01")
MINUTES_PER_DAY = 24 * 60
ONE_DAY = timedelta(days=1)

_DIGITS = re.compile(r"^\d+$")

ClockLike = Union[str, time, None]
DateLike = Union[str, date, None]


def round_hours(value) -> Decimal:
    """Quantize hours/money to two decimals, half up"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(HOURS_QUANT, rounding=ROUND_HALF_UP)


def parse_clock(value: ClockLike) -> Optional[time]:
    """
    Parse a wall-clock time.

    Accepts ``"HH:mm"``/``"H:mm"``, ``"H.mm"`` (two fraction digits are
    minutes: ``"3.05"`` is 03:05) or a decimal hour fraction (``"10.5"`` is
    10:30), and a bare hour ``"H"``. Returns ``None`` for anything else.
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if ":" in text:
        parts = text.split(":")
        if len(parts) not in (2, 3) or not all(_DIGITS.match(p) for p in parts):
            return None
        hours, minutes = int(parts[0]), int(parts[1])
    elif "." in text:
        hour_part, _, fraction = text.partition(".")
        if not _DIGITS.match(hour_part) or (fraction and not _DIGITS.match(fraction)):
            return None
        hours = int(hour_part)
        if not fraction:
            minutes = 0
        elif len(fraction) == 2:
            minutes = int(fraction)
        else:
            minutes = int(
                (Decimal("0." + fraction) * 60).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            )
    elif _DIGITS.match(text):
        hours, minutes = int(text), 0
    else:
        return None

    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return time(hours, minutes)


def format_clock(value: ClockLike) -> Optional[str]:
    """Normalize a clock value to ``HH:mm``"""
    parsed = parse_clock(value)
    return parsed.strftime("%H:%M") if parsed else None


def parse_day(value: DateLike) -> Optional[date]:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def combine(day: DateLike, clock: ClockLike) -> Optional[datetime]:
    """Join a calendar day and a wall-clock time into a naive local instant"""
    parsed_day = parse_day(day)
    parsed_clock = parse_clock(clock)
    if parsed_day is None or parsed_clock is None:
        return None
    return datetime.combine(parsed_day, parsed_clock)


def minutes_between(start: datetime, end: datetime) -> int:
    """Signed whole minutes from ``start`` to ``end``"""
    return int((end - start).total_seconds() // 60)


def hours_between(start: datetime, end: datetime) -> Decimal:
    """Signed duration in hours, rounded to two decimals"""
    seconds = Decimal(str((end - start).total_seconds()))
    return round_hours(seconds / Decimal(3600))


def minutes_to_hours(minutes) -> Decimal:
    return round_hours(Decimal(minutes) / Decimal(60))


def crosses_midnight(start_clock: ClockLike, end_clock: ClockLike) -> bool:
    """True when the end clock is not after the start clock"""
    start = parse_clock(start_clock)
    end = parse_clock(end_clock)
    if start is None or end is None:
        return False
    return end <= start


def adjusted_interval(
    day: DateLike, start_clock: ClockLike, end_clock: ClockLike, overnight: bool = False
) -> Optional[Tuple[datetime, datetime]]:
    """
    Build the (start, end) pair for a shift on ``day``.

    When ``end <= start`` and ``overnight`` is set the end moves 24 hours
    later. Without the flag the raw (possibly inverted) pair is returned
    so callers can reject it.
    """
    start = combine(day, start_clock)
    end = combine(day, end_clock)
    if start is None or end is None:
        return None
    if overnight and end <= start:
        end += ONE_DAY
    return start, end


def shift_interval(shift) -> Optional[Tuple[datetime, datetime]]:
    """
    True interval of a stored shift.

    An explicit ``end_date`` wins; otherwise an end clock at or before
    the start clock means the shift ends on the next day.
    """
    start = combine(shift.date, shift.start_time)
    if start is None:
        return None

    end_date = parse_day(getattr(shift, "end_date", None))
    if end_date is not None and end_date != start.date():
        end = combine(end_date, shift.end_time)
    else:
        end = combine(start.date(), shift.end_time)
        if end is not None and end <= start:
            end += ONE_DAY
    if end is None:
        return None
    return start, end


def next_midnight(day: DateLike) -> Optional[datetime]:
    parsed = parse_day(day)
    if parsed is None:
        return None
    return datetime.combine(parsed + ONE_DAY, time.min)


def local_timezone():
    return pytz.timezone(settings.TIME_ZONE)


def to_local(instant: datetime) -> datetime:
    """
    Express a precise instant as a naive wall-clock datetime in the
    employee calendar. Naive input is assumed to be local already.
    """
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(local_timezone()).replace(tzinfo=None)


def week_start(day: DateLike) -> date:
    """Monday of the week containing ``day``"""
    parsed = parse_day(day)
    return parsed - timedelta(days=parsed.weekday())


def week_days(monday: date):
    return [monday + timedelta(days=offset) for offset in range(7)]
