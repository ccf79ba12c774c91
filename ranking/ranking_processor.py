"""
Ranking processor for the tennis tracker.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from config.config_manager import ConfigManager
from models.filters import MatchFilter
from models.match import MatchRecord
from models.player import Player
from models.stats import PlayerFee, PlayerStat
from .fee_calculator import FeeConstants, calculate_fees
from .match_builder import TieBreakPolicy
from .match_filter import filter_by_search, filter_matches
from .sorter import SortField, sort_stats
from .stats_aggregator import aggregate

logger = logging.getLogger(__name__)


class RankingProcessor:
    """
    Computes rankings and fees from player and match snapshots.

    The processor keeps no player or match state between calls; callers pass
    the current snapshots in and get freshly computed rows back.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else ConfigManager.get_default_config()
        self.fee_constants = FeeConstants.from_config(self.config)
        self.tie_break = TieBreakPolicy(self.config.get('matches', {}).get('tie_break', TieBreakPolicy.SIDE_A.value))

    def get_player_ranking(self, players: Sequence[Player], matches: Sequence[MatchRecord],
                           match_filter: Optional[MatchFilter] = None,
                           sort_field: Union[SortField, str] = SortField.POINTS,
                           ascending: bool = False) -> List[PlayerStat]:
        """Filter matches, aggregate per player, apply the name search and sort."""
        match_filter = match_filter or MatchFilter()
        filtered_matches = filter_matches(matches, match_filter)
        logger.debug(f"Ranking over {len(filtered_matches)} of {len(matches)} matches")

        stats = aggregate(players, filtered_matches)
        stats = filter_by_search(stats, match_filter.search_term)
        return sort_stats(stats, sort_field, ascending)

    def get_top_players(self, players: Sequence[Player], matches: Sequence[MatchRecord],
                        limit: int = 10, match_filter: Optional[MatchFilter] = None) -> List[PlayerStat]:
        """Get top N players by points."""
        return self.get_player_ranking(players, matches, match_filter)[:limit]

    def get_player_fees(self, players: Sequence[Player], matches: Sequence[MatchRecord],
                        match_filter: Optional[MatchFilter] = None) -> List[PlayerFee]:
        """Compute fees over the filtered matches."""
        filtered_matches = filter_matches(matches, match_filter)
        fees = calculate_fees(players, filtered_matches, self.fee_constants)
        logger.info(f"Calculated fees for {len(fees)} players over {len(filtered_matches)} matches")
        return fees

    def get_player_statistics(self, stats: Sequence[PlayerStat]) -> Dict[str, Any]:
        """Get overall statistics for a set of ranking rows."""
        if not stats:
            return {}

        total_players = len(stats)
        active_players = sum(1 for s in stats if s.total > 0)
        total_points = sum(s.points for s in stats)
        avg_points = total_points / total_players if total_players > 0 else 0

        # Each match shows up once per participant
        participations = sum(s.total for s in stats)

        leader = max(stats, key=lambda s: s.points)

        return {
            'total_players': total_players,
            'players_with_matches': active_players,
            'total_points': total_points,
            'average_points': round(avg_points, 2),
            'participations': participations,
            'total_wins': sum(s.wins for s in stats),
            'total_draws': sum(s.draws for s in stats),
            'total_losses': sum(s.losses for s in stats),
            'leader': leader.name if leader.total > 0 else None,
        }
