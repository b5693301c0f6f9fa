from datetime import date
from typing import NamedTuple, Optional

from app.core.settings import settings


class DateRangeTooLarge(ValueError):
    def __init__(self, max_days: int):
        self.max_days = max_days
        super().__init__(
            f"The selected date range is too big. Max allowed range is {max_days} days!"
        )


class DateRange(NamedTuple):
    from_: date
    to: date

    @property
    def days(self) -> int:
        return (self.to - self.from_).days

    def as_dict(self) -> dict:
        return {"from": self.from_.isoformat(), "to": self.to.isoformat()}


def default_date_range(today: Optional[date] = None) -> DateRange:
    """First day of the current month through today."""
    today = today or date.today()
    return DateRange(today.replace(day=1), today)


def check_date_range(from_: date, to: date, max_days: Optional[int] = None) -> DateRange:
    max_days = settings.MAX_DATE_RANGE_DAYS if max_days is None else max_days
    candidate = DateRange(from_, to)
    if candidate.days > max_days:
        raise DateRangeTooLarge(max_days)
    return candidate


class DateRangeState:
    """The range a transactions view is currently scoped to."""

    def __init__(self, initial: Optional[DateRange] = None, max_days: Optional[int] = None):
        self.range = initial or default_date_range()
        self.max_days = max_days

    def update(self, from_: Optional[date], to: Optional[date]) -> DateRange:
        # a half-picked range is ignored until both ends are set
        if from_ is None or to is None:
            return self.range
        self.range = check_date_range(from_, to, self.max_days)
        return self.range
