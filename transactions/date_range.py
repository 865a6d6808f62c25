from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

QUERY_DATE_FORMAT = "%Y/%m/%d"


@dataclass(frozen=True)
class DateRange:
    """[start, end). end is exclusive, matching Gmail's before: filter."""
    start: date
    end: date

    @property
    def last_day(self) -> date:
        return self.end - timedelta(days=1)


def previous_month_range(today: Optional[Union[date, datetime]] = None) -> DateRange:
    """Range covering the whole calendar month before `today`'s month.

    The job runs on the 1st, so on 2025-01-01 this returns
    2024-12-01 .. 2025-01-01.

    Args:
        today: Reference date; defaults to the process clock.
    """
    if today is None:
        today = date.today()
    if isinstance(today, datetime):
        today = today.date()

    end = today.replace(day=1)
    start = (end - timedelta(days=1)).replace(day=1)
    return DateRange(start=start, end=end)


def format_query_date(d: date) -> str:
    """Gmail search dates: YYYY/MM/DD."""
    return d.strftime(QUERY_DATE_FORMAT)
