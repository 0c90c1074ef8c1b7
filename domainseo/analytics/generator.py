"""Time-frame dates and labels for analytics series."""

import calendar
from dataclasses import dataclass, asdict
from datetime import date
from typing import Dict, List, Optional

TIME_FRAMES = ('daily', 'weekly', 'monthly', 'yearly')

POINT_COUNTS = {
    'daily': 14,     # two weeks
    'weekly': 12,    # a quarter
    'monthly': 12,   # a year
    'yearly': 5
}


@dataclass(frozen=True)
class DataPoint:
    name: str
    value: int
    date: str

    def to_dict(self) -> Dict:
        return asdict(self)


def _shift_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def _shift_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 Feb into a non-leap year
        return day.replace(year=day.year + years, day=28)


def date_labels(time_frame: str, count: int, today: Optional[date] = None) -> List[date]:
    """Dates stepping back from today, oldest first."""
    today = today or date.today()
    dates = []

    for i in range(count - 1, -1, -1):
        if time_frame == 'daily':
            dates.append(date.fromordinal(today.toordinal() - i))
        elif time_frame == 'weekly':
            dates.append(date.fromordinal(today.toordinal() - i * 7))
        elif time_frame == 'monthly':
            dates.append(_shift_months(today, -i))
        elif time_frame == 'yearly':
            dates.append(_shift_years(today, -i))
        else:
            raise ValueError(f"Unknown time frame: {time_frame}")

    return dates


def week_number(day: date) -> int:
    """Week of the year counting from the weekday of 1 January."""
    first = date(day.year, 1, 1)
    past_days = (day - first).days
    # Sunday-based weekday of 1 Jan (Sunday = 0)
    first_weekday = (first.weekday() + 1) % 7
    return (past_days + first_weekday + 1 + 6) // 7


def label_for(time_frame: str, day: date) -> str:
    if time_frame == 'daily':
        return f"{calendar.day_abbr[day.weekday()]} {day.day}"
    if time_frame == 'weekly':
        return f"Week {week_number(day)}"
    if time_frame == 'monthly':
        return calendar.month_abbr[day.month]
    if time_frame == 'yearly':
        return str(day.year)
    raise ValueError(f"Unknown time frame: {time_frame}")

