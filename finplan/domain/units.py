"""Unit resolution and interval helpers shared by the adapters and the engine"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional

from finplan.domain.exceptions import InvalidCentsError
from finplan.utils.date_utils import month_of, months_between

INTERVAL_MONTHS = {
    "monthly": 1,
    "quarterly": 3,
    "semi_yearly": 6,
    "yearly": 12,
}


def interval_months(interval: str) -> int:
    """Length of an interval in months (unknown intervals count as monthly)"""
    return INTERVAL_MONTHS.get(interval, 1)


def is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def round_half_up(value: float) -> int:
    # half-up, not banker's rounding: 0.5 -> 1, -0.5 -> 0
    return int(math.floor(value + 0.5))


def resolve_cents(record: Any, cents_field: str, legacy_field: str) -> int:
    """
    Resolve a dual-unit monetary field to integer cents.

    Records written before the cents migration carry euros as floats in
    ``legacy_field``; newer ones mirror the value as integer cents in
    ``cents_field``. The cents field wins whenever it is a finite number.

    Works on mappings (stored records) and on attribute objects (domain Goal).

    Example:
        {"amountCents": 1999, "amount": 19.99} -> 1999
        {"amount": 19.99} -> 1999
        {"amount": None} -> 0
    """
    if isinstance(record, Mapping):
        cents_value = record.get(cents_field)
        legacy_value = record.get(legacy_field)
    else:
        cents_value = getattr(record, cents_field, None)
        legacy_value = getattr(record, legacy_field, None)

    if is_finite_number(cents_value):
        return round_half_up(cents_value)
    if is_finite_number(legacy_value):
        return round_half_up(legacy_value * 100)
    return 0


def assert_integer_cents(value: Any, label: str) -> int:
    """Raise InvalidCentsError unless ``value`` is a plain int"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCentsError(label, value)
    return value


def to_iso_date(value: Any) -> Optional[str]:
    """Render a date, datetime or ISO string as ``YYYY-MM-DD``; unparseable input gives None"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10]).isoformat()
        except ValueError:
            return None
    return None


def normalize_to_monthly(amount: int, interval: str) -> float:
    """
    Smooth a recurring amount into its monthly equivalent.

    Not used by the projection timeline, which books non-monthly items in
    full in their occurrence month (see ``is_occurrence_month``). The result
    may be fractional; callers that need cents must round explicitly.
    """
    divisor = INTERVAL_MONTHS.get(interval)
    if divisor is None:
        return 0
    return amount / divisor if divisor > 1 else amount


def is_occurrence_month(month: str, start_date: Optional[str], interval: str) -> bool:
    """True when a recurring item books its full amount in ``month``"""
    if interval == "monthly" or not start_date:
        return True
    diff = months_between(month_of(start_date), month)
    if diff < 0:
        return False
    return diff % interval_months(interval) == 0


def is_active_in_month(month: str, start_date: Optional[str], end_date: Optional[str]) -> bool:
    """Inclusive month-range check; missing bounds are unbounded"""
    start_month = month_of(start_date)
    end_month = month_of(end_date)
    if start_month and month < start_month:
        return False
    if end_month and month > end_month:
        return False
    return True
