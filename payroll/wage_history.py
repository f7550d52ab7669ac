"""
Effective-dated hourly rates.

A history is a list of (effective_from, rate) entries sorted ascending.
The rate for a day is the last entry whose ``effective_from`` is not after
that day; before the first entry the employee's nominal wage applies.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Mapping

from worktime.time_arithmetic import parse_day

logger = logging.getLogger(__name__)

# Baseline entry date used for "rate before any recorded change"
BASELINE_DATE = date(1, 1, 1)


@dataclass(frozen=True)
class WageRate:
    rate: Decimal
    effective_from: date


def _coerce_entry(entry):
    if isinstance(entry, WageRate):
        return entry
    if isinstance(entry, Mapping):
        rate, effective_from = entry.get("rate"), entry.get("effective_from")
    else:
        rate = getattr(entry, "rate", None)
        effective_from = getattr(entry, "effective_from", None)

    day = parse_day(effective_from)
    if rate is None or day is None:
        return None
    try:
        rate = Decimal(str(rate))
    except InvalidOperation:
        return None
    return WageRate(rate=rate, effective_from=day)


def normalize_history(entries: Iterable) -> List[WageRate]:
    """
    Accept model rows, mappings or ``WageRate`` values; drop unusable
    entries and sort by ``effective_from`` (stable for same-day entries).
    """
    history = []
    for entry in entries or ():
        coerced = _coerce_entry(entry)
        if coerced is None:
            logger.warning("Ignoring malformed wage history entry")
            continue
        history.append(coerced)
    history.sort(key=lambda item: item.effective_from)
    return history


def resolve_wage_for_date(history: List[WageRate], target, fallback) -> Decimal:
    """Rate of the last entry effective on or before ``target``, else ``fallback``"""
    day = parse_day(target)
    chosen = None
    if day is not None:
        for entry in history:
            if entry.effective_from <= day:
                chosen = entry.rate
            else:
                break
    if chosen is None:
        return Decimal(str(fallback))
    return chosen


class WageHistoryResolver:
    """Callable ``day -> rate`` bound to one employee's history and fallback"""

    def __init__(self, entries: Iterable, fallback):
        self.history = normalize_history(entries)
        self.fallback = Decimal(str(fallback if fallback is not None else 0))

    def __call__(self, day) -> Decimal:
        return resolve_wage_for_date(self.history, day, self.fallback)

    def __repr__(self):
        return f"WageHistoryResolver(entries={len(self.history)}, fallback={self.fallback})"
