"""
Match and ranking-row filtering.
"""

from typing import List, Optional, Sequence

from models.filters import MatchFilter, MATCH_TYPE_ALL
from models.match import MatchRecord
from models.stats import PlayerStat
from utils.text_utils import TextUtils
from .outcome import participates


def filter_matches(matches: Sequence[MatchRecord],
                   match_filter: Optional[MatchFilter] = None) -> List[MatchRecord]:
    """
    Narrow a match list by date range, match type and player.

    All given dimensions must pass. The input is left untouched and the
    result keeps the original relative order.
    """
    if match_filter is None:
        return list(matches)

    filtered = []
    for match in matches:
        if match_filter.date_range is not None and not match_filter.date_range.contains(match.match_date):
            continue
        if match_filter.match_type != MATCH_TYPE_ALL and match.match_type != match_filter.match_type:
            continue
        if match_filter.player_id is not None and not participates(match, match_filter.player_id):
            continue
        filtered.append(match)
    return filtered


def filter_by_search(stats: Sequence[PlayerStat], search_term: str) -> List[PlayerStat]:
    """Keep the rows whose player name contains the search term."""
    if not search_term or not search_term.strip():
        return list(stats)
    return [stat for stat in stats if TextUtils.contains(stat.name, search_term)]
