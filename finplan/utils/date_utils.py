"""Month-key manipulation utilities

A month key is a ``"YYYY-MM"`` string. Keys compare chronologically as plain
strings, so no calendar arithmetic is needed beyond year rollover.
"""

import re
from datetime import date
from typing import List, Optional

MONTH_KEY_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def is_valid_month_key(value: object) -> bool:
    return isinstance(value, str) and bool(MONTH_KEY_PATTERN.match(value))


def current_month_key(today: date | None = None) -> str:
    """Month key of the wall-clock date (or of ``today`` when given)"""
    today = today or date.today()
    return f"{today.year:04d}-{today.month:02d}"


def generate_month_keys(start_month: str, count: int) -> List[str]:
    """Generate ``count`` consecutive month keys starting at ``start_month``"""
    year, month = (int(part) for part in start_month.split("-"))
    keys = []
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            month = 1
            year += 1
    return keys


def month_of(iso_date: Optional[str]) -> Optional[str]:
    """Month key of an ISO date string (``"2026-03-15"`` -> ``"2026-03"``)"""
    if not iso_date:
        return None
    return iso_date[:7]


def months_between(start_month: str, end_month: str) -> int:
    """Signed number of months from ``start_month`` to ``end_month``"""
    start_year, start_num = (int(part) for part in start_month.split("-"))
    end_year, end_num = (int(part) for part in end_month.split("-"))
    return (end_year - start_year) * 12 + (end_num - start_num)
