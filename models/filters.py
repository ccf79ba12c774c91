"""
Filter configuration models for match and ranking queries.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional, Union

import pandas as pd

from .match import MATCH_TYPES


MATCH_TYPE_ALL = 'all'
MATCH_TYPE_FILTERS = (MATCH_TYPE_ALL,) + MATCH_TYPES


def _align(moment: datetime, reference: datetime) -> datetime:
    """Make a timestamp comparable with a reference (naive means local time)."""
    if moment.tzinfo is not None and reference.tzinfo is None:
        return moment.astimezone().replace(tzinfo=None)
    if moment.tzinfo is None and reference.tzinfo is not None:
        return moment.astimezone(reference.tzinfo)
    return moment


@dataclass(frozen=True)
class DateRange:
    """An inclusive [start, end] interval of match timestamps."""
    start: datetime
    end: datetime

    def __post_init__(self):
        # Plain dates cover the whole day on both ends
        if not isinstance(self.start, datetime) and isinstance(self.start, date):
            object.__setattr__(self, 'start', datetime.combine(self.start, time.min))
        if not isinstance(self.end, datetime) and isinstance(self.end, date):
            object.__setattr__(self, 'end', datetime.combine(self.end, time.max))
        if _align(self.start, self.end) > self.end:
            raise ValueError(f"Date range start {self.start} is after end {self.end}")

    def contains(self, moment: datetime) -> bool:
        return _align(self.start, moment) <= moment <= _align(self.end, moment)

    @classmethod
    def last_days(cls, days: int, now: Optional[datetime] = None) -> 'DateRange':
        """The interval from ``days`` days ago up to now."""
        now = now or datetime.now()
        return cls(start=now - timedelta(days=days), end=now)

    @classmethod
    def last_months(cls, months: int, now: Optional[datetime] = None) -> 'DateRange':
        """The interval from ``months`` calendar months ago up to now."""
        now = now or datetime.now()
        start = (pd.Timestamp(now) - pd.DateOffset(months=months)).to_pydatetime()
        return cls(start=start, end=now)


class TimeWindow(str, Enum):
    """Preset time windows offered by the rankings view."""
    ALL = 'all'
    LAST_30_DAYS = '30d'
    LAST_90_DAYS = '90d'
    LAST_YEAR = '1y'

    def to_date_range(self, now: Optional[datetime] = None) -> Optional[DateRange]:
        days = {
            TimeWindow.LAST_30_DAYS: 30,
            TimeWindow.LAST_90_DAYS: 90,
            TimeWindow.LAST_YEAR: 365,
        }.get(self)
        if days is None:
            return None
        return DateRange.last_days(days, now)


@dataclass(frozen=True)
class MatchFilter:
    """
    The supported filter dimensions for match and ranking queries.

    ``date_range``, ``match_type`` and ``player_id`` narrow the match list;
    ``search_term`` narrows the resulting player rows by name.
    """
    date_range: Optional[DateRange] = None
    match_type: str = MATCH_TYPE_ALL
    player_id: Optional[str] = None
    search_term: str = ''

    def __post_init__(self):
        if self.match_type not in MATCH_TYPE_FILTERS:
            raise ValueError(f"Unknown match type filter: {self.match_type!r}")

    @classmethod
    def from_window(cls, window: Union[TimeWindow, str], now: Optional[datetime] = None,
                    **kwargs) -> 'MatchFilter':
        """Build a filter from a preset time window."""
        return cls(date_range=TimeWindow(window).to_date_range(now), **kwargs)
