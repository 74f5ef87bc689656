from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def inclusive_day_count(start: date, end: date) -> int:
    return (end - start).days + 1
