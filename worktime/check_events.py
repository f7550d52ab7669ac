"""
Check-in/check-out captured either as a precise instant or as a
wall-clock string, modelled as a tagged union.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from .time_arithmetic import format_clock


@dataclass(frozen=True)
class PreciseCheck:
    """Instant recorded by a device (timezone-aware)"""

    instant: datetime


@dataclass(frozen=True)
class WallClockCheck:
    """Clock string typed by a person, e.g. ``"09:15"``"""

    clock: str


@dataclass(frozen=True)
class AbsentCheck:
    pass


ABSENT = AbsentCheck()

CheckEvent = Union[PreciseCheck, WallClockCheck, AbsentCheck]


def check_event(timestamp: Optional[datetime], clock: Optional[str]) -> CheckEvent:
    """Collapse the two storage fields into one event; the instant wins"""
    if timestamp is not None:
        return PreciseCheck(timestamp)
    if clock and clock.strip():
        return WallClockCheck(format_clock(clock) or clock.strip())
    return ABSENT


def is_present(event: CheckEvent) -> bool:
    return not isinstance(event, AbsentCheck)


class CheckEventsMixin:
    """
    Exposes ``check_in_event``/``check_out_event`` on anything carrying
    the four raw check fields (the ``Shift`` model and ``ShiftData``).
    """

    @property
    def check_in_event(self) -> CheckEvent:
        return check_event(self.check_in_timestamp, self.checked_in_time)

    @property
    def check_out_event(self) -> CheckEvent:
        return check_event(self.check_out_timestamp, self.checked_out_time)
