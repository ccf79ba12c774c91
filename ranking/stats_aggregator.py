"""
Per-player statistics aggregation over a match list.
"""

from typing import List, Sequence

from models.match import MatchRecord
from models.player import Player
from models.stats import PlayerStat
from .outcome import Outcome, classify

WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = -1

OUTCOME_POINTS = {
    Outcome.WIN: WIN_POINTS,
    Outcome.DRAW: DRAW_POINTS,
    Outcome.LOSS: LOSS_POINTS,
}


def _rate(part: int, total: int) -> float:
    return part / total * 100 if total > 0 else 0.0


def aggregate_player(player: Player, matches: Sequence[MatchRecord]) -> PlayerStat:
    """Fold a match list into one player's statistics."""
    stat = PlayerStat(player_id=player.id, name=player.name)

    for match in matches:
        outcome = classify(match, player.id)
        if outcome == Outcome.NOT_PARTICIPATING:
            continue
        if outcome == Outcome.WIN:
            stat.wins += 1
        elif outcome == Outcome.DRAW:
            stat.draws += 1
        else:
            stat.losses += 1
        stat.points += OUTCOME_POINTS[outcome]

    stat.total = stat.wins + stat.draws + stat.losses
    stat.win_rate = _rate(stat.wins, stat.total)
    stat.not_lose_rate = _rate(stat.wins + stat.draws, stat.total)
    return stat


def aggregate(players: Sequence[Player], matches: Sequence[MatchRecord]) -> List[PlayerStat]:
    """
    Compute statistics for every player, in player order.

    Players without matches get all-zero rows. Matches naming players that
    are not in ``players`` simply never count for anyone in the result.
    """
    return [aggregate_player(player, matches) for player in players]
