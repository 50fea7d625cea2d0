# app/domain/reporting/dates.py
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from app.core.errors import ValidationError

END_OF_DAY = timedelta(hours=23, minutes=59, seconds=59)


@dataclass(frozen=True)
class DateRange:
    """Inclusive UTC range; ``end`` is 23:59:59 of the last requested day."""

    start: datetime
    end: datetime
    desde: str
    hasta: str


def parse_date_only(value: Optional[str], field: str) -> datetime:
    if not value:
        raise ValidationError("Invalid date range", code="invalid_range", details={"field": field})
    try:
        day = date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError("Invalid date range", code="invalid_range", details={"field": field}) from None
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def end_of_day(day_start: datetime) -> datetime:
    return day_start + END_OF_DAY


def parse_range(desde: Optional[str], hasta: Optional[str]) -> DateRange:
    start = parse_date_only(desde, "desde")
    end = end_of_day(parse_date_only(hasta, "hasta"))
    if start > end:
        raise ValidationError("Invalid date range", code="invalid_range", details={"field": "desde"})
    return DateRange(start=start, end=end, desde=desde.strip(), hasta=hasta.strip())
