"""Date manipulation utilities"""

import math
from datetime import date, datetime
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60
ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> Optional[date]:
    """Parse strictly 'YYYY-MM-DD'; None when empty or in any other shape"""
    # strptime alone also takes unpadded "2025-2-1"
    if not value or len(value) != 10:
        return None
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError:
        return None


def days_between(start: date, end: date) -> int:
    """Whole calendar days between two dates, rounded up, ignoring direction"""
    midnight_start = datetime.combine(start, datetime.min.time())
    midnight_end = datetime.combine(end, datetime.min.time())
    seconds = abs((midnight_end - midnight_start).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def format_br_date(value: date) -> str:
    """dd/mm/yyyy"""
    return value.strftime("%d/%m/%Y")
