"""Calendar helpers: weekend/holiday/working-day predicates and date arithmetic.

All functions are pure. Dates are plain ``datetime.date`` values, so there is
no time zone involved and ISO strings round-trip exactly.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterable, Iterator

from batch_scheduler.domain.models import Cadence, Holiday, Weekday

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)


class InvalidDate(ValueError):
    """Raised by parse_date for strings that are not a valid YYYY-MM-DD date."""


def parse_date(value: str) -> date:
    """Parse a strict ISO ``YYYY-MM-DD`` string."""
    match = _ISO_DATE.fullmatch(str(value))
    if not match:
        raise InvalidDate(f"Expected YYYY-MM-DD, got {value!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDate(f"Not a calendar date: {value!r} ({exc})") from exc


def format_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def day_of_week(day: date) -> str:
    """Lowercase weekday name, e.g. ``"monday"``."""
    return Weekday.of(day).value


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def is_holiday(day: date, holidays: Iterable[Holiday]) -> bool:
    return any(h.date == day for h in holidays)


def is_working_day(day: date, cadence: Cadence | str = Cadence.WEEKDAY) -> bool:
    """Cadence test only; holidays are checked separately."""
    if Cadence.parse(cadence) == Cadence.WEEKEND:
        return is_weekend(day)
    return not is_weekend(day)


def is_teaching_day(day: date, cadence: Cadence | str, holidays: Iterable[Holiday]) -> bool:
    """A day that is within the cadence and not a holiday."""
    return is_working_day(day, cadence) and not is_holiday(day, holidays)


def iter_teaching_days(
    start: date,
    cadence: Cadence | str = Cadence.WEEKDAY,
    holidays: Iterable[Holiday] = (),
) -> Iterator[date]:
    """Yield teaching days from ``start`` (inclusive) onwards, without end."""
    cadence = Cadence.parse(cadence)
    holiday_dates = {h.date for h in holidays}
    current = start
    while True:
        if is_working_day(current, cadence) and current not in holiday_dates:
            yield current
        current = current + timedelta(days=1)


def add_business_days(
    start: date,
    n: int,
    holidays: Iterable[Holiday] = (),
    cadence: Cadence | str = Cadence.WEEKDAY,
) -> date:
    """Advance ``n`` working days after ``start``, skipping holidays.

    ``start`` itself is not counted; ``n <= 0`` returns ``start`` unchanged.
    """
    if n <= 0:
        return start
    days = iter_teaching_days(start + timedelta(days=1), cadence, holidays)
    for _ in range(n - 1):
        next(days)
    return next(days)
