# orderdesk/utils/calendar.py

"""
Границы рабочего дня.

Рабочий день считается по фиксированному поясу UTC+5:30 и не зависит от
часового пояса сервера. Смещение постоянное (без перехода на летнее время),
поэтому база часовых поясов не нужна.

    day_bounds("2024-03-15")
    -> DayBounds(start=2024-03-14 18:30:00+00:00,
                 end=2024-03-15 18:29:59.999000+00:00)
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import NamedTuple

from orderdesk.utils.errors import ValidationError

BUSINESS_UTC_OFFSET = timedelta(hours=5, minutes=30)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_END_OF_DAY = time(23, 59, 59, 999000)


class DayBounds(NamedTuple):
    start: datetime
    end: datetime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Наивные значения из хранилища (SQLite) считаем UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_business_date(value: str) -> date:
    """Строка YYYY-MM-DD -> date; иначе ValidationError."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def business_today(now: datetime | None = None) -> date:
    """
    Текущая дата рабочего дня: сдвигаем момент UTC вперёд на смещение
    и берём дату. Локальный пояс хоста не участвует.
    """
    moment = as_utc(now) if now is not None else utcnow()
    return (moment + BUSINESS_UTC_OFFSET).date()


def day_bounds(day: date | str | None = None, now: datetime | None = None) -> DayBounds:
    """
    Начало и конец рабочего дня в UTC.

    day=None — режим "сегодня" (через business_today), строка — YYYY-MM-DD.
    Полночь и 23:59:59.999 даты берутся как UTC, затем из них вычитается
    смещение пояса.
    """
    if day is None:
        day = business_today(now)
    elif isinstance(day, str):
        day = parse_business_date(day)

    start = datetime.combine(day, time.min, tzinfo=timezone.utc) - BUSINESS_UTC_OFFSET
    end = datetime.combine(day, _END_OF_DAY, tzinfo=timezone.utc) - BUSINESS_UTC_OFFSET
    return DayBounds(start, end)
