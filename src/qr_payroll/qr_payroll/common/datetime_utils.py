from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Fecha inválida: {value!r} (formato YYYY-MM-DD)")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Mes inválido")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def truncate_time(moment: datetime) -> time:
    """Time-of-day at whole-second precision (matches the TIME column)."""
    return moment.time().replace(microsecond=0, tzinfo=None)


def hours_between(start: Optional[time], end: Optional[time]) -> float:
    if start is None or end is None:
        return 0.0
    delta = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    return max(delta / timedelta(hours=1), 0.0)


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value else None
