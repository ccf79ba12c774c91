"""
Ordering of ranking rows.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Union

from models.stats import PlayerStat


class SortField(str, Enum):
    POINTS = 'points'
    TOTAL = 'total'
    WINS = 'wins'
    DRAWS = 'draws'
    LOSSES = 'losses'
    WIN_RATE = 'win_rate'
    NOT_LOSE_RATE = 'not_lose_rate'

    @classmethod
    def parse(cls, value: Union['SortField', str]) -> 'SortField':
        """Accept enum members, snake_case values and the camelCase names used in exports."""
        if isinstance(value, cls):
            return value
        aliases = {'winRate': cls.WIN_RATE, 'notLoseRate': cls.NOT_LOSE_RATE}
        if value in aliases:
            return aliases[value]
        return cls(value)


@dataclass(frozen=True)
class SortState:
    field: SortField = SortField.POINTS
    ascending: bool = False


def sort_stats(stats: Sequence[PlayerStat], field: Union[SortField, str] = SortField.POINTS,
               ascending: bool = False) -> List[PlayerStat]:
    """Sort rows by a numeric field. Rows with equal keys keep their input order."""
    attribute = SortField.parse(field).value
    return sorted(stats, key=lambda stat: getattr(stat, attribute), reverse=not ascending)


def toggle_sort(state: SortState, field: Union[SortField, str]) -> SortState:
    """Clicking the active column flips direction; another column starts descending."""
    field = SortField.parse(field)
    if field == state.field:
        return SortState(field=field, ascending=not state.ascending)
    return SortState(field=field, ascending=False)
