"""
Flat row shaping and CSV serialization for exports.
"""

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from models.match import MatchRecord
from models.player import Player
from models.stats import PlayerFee, PlayerStat

UNKNOWN_PLAYER = 'Unknown'
TIME_FORMAT = '%Y-%m-%d %H:%M'

Row = Dict[str, Any]


def _team_name(ids: Sequence[str], names: Dict[str, str]) -> str:
    return ', '.join(names.get(player_id, UNKNOWN_PLAYER) for player_id in ids)


def to_match_rows(matches: Sequence[MatchRecord], players: Sequence[Player]) -> List[Row]:
    """One row per match; Team1 is the winning side, Team2 the losing side."""
    names = {player.id: player.name for player in players}
    return [
        {
            'Time': match.match_date.strftime(TIME_FORMAT),
            'Type': match.match_type,
            'Team1': _team_name(match.winners, names),
            'Team2': _team_name(match.losers, names),
            'Score': match.score,
        }
        for match in matches
    ]


def to_fee_rows(fees: Sequence[PlayerFee]) -> List[Row]:
    """One row per player fee with raw amounts; currency formatting is left to the reader."""
    return [
        {
            'Player ID': fee.player_id,
            'Name': fee.name,
            'Total Matches': fee.total_matches,
            'Wins': fee.wins,
            'Draws': fee.draws,
            'Losses': fee.losses,
            'Base Fee': fee.base_fee,
            'Bet Fee': fee.bet_fee,
            'Total Fee': fee.total_fee,
        }
        for fee in fees
    ]


def to_ranking_rows(stats: Sequence[PlayerStat]) -> List[Row]:
    """Ranked rows in the given order, rates rounded to one decimal."""
    return [
        {
            'Rank': rank,
            'Player ID': stat.player_id,
            'Name': stat.name,
            'Points': stat.points,
            'Wins': stat.wins,
            'Draws': stat.draws,
            'Losses': stat.losses,
            'Total': stat.total,
            'Win Rate': round(stat.win_rate, 1),
            'Not-Lose Rate': round(stat.not_lose_rate, 1),
        }
        for rank, stat in enumerate(stats, 1)
    ]


def to_dataframe(rows: Sequence[Row]) -> pd.DataFrame:
    """Build a frame whose columns follow the keys of the first row."""
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(list(rows), columns=list(rows[0].keys()))


def to_csv(rows: Sequence[Row]) -> str:
    """
    Serialize rows as comma-separated text.

    The header is the keys of the first row. Values containing a comma are
    wrapped in double quotes. There is no trailing newline and no rows give
    an empty string.
    """
    if not rows:
        return ''
    content = to_dataframe(rows).to_csv(index=False, lineterminator='\n')
    return content[:-1] if content.endswith('\n') else content


def write_csv(rows: Sequence[Row], output_file: str, encoding: Optional[str] = 'utf-8') -> int:
    """Write rows to a CSV file and return the number of rows written."""
    if not rows:
        return 0
    with open(output_file, 'w', encoding=encoding, newline='') as f:
        f.write(to_csv(rows))
    return len(rows)
