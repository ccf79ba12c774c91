"""
Ranking and fee computation engine.

All functions here are pure folds over player and match snapshots.
"""

from .outcome import Outcome, classify, is_draw, lost_by, participates, won_by
from .match_filter import filter_by_search, filter_matches
from .stats_aggregator import aggregate
from .fee_calculator import FeeConstants, calculate_fees
from .sorter import SortField, SortState, sort_stats, toggle_sort
from .match_builder import TieBreakPolicy, build_match, rebuild_match
from .ranking_processor import RankingProcessor

__all__ = [
    'Outcome', 'classify', 'is_draw', 'lost_by', 'participates', 'won_by',
    'filter_by_search', 'filter_matches', 'aggregate',
    'FeeConstants', 'calculate_fees',
    'SortField', 'SortState', 'sort_stats', 'toggle_sort',
    'TieBreakPolicy', 'build_match', 'rebuild_match',
    'RankingProcessor',
]
