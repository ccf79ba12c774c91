"""
Models package for the tennis tracker.

This package contains all data models and dataclasses used throughout the system.
"""

from .player import Player, PlayingStyle
from .match import (MatchRecord, MatchCreate, ParsedMatch, MatchValidationError,
                    SINGLES, DOUBLES, MATCH_TYPES)
from .stats import PlayerStat, PlayerFee
from .filters import DateRange, MatchFilter, TimeWindow, MATCH_TYPE_ALL

__all__ = [
    'Player', 'PlayingStyle',
    'MatchRecord', 'MatchCreate', 'ParsedMatch', 'MatchValidationError',
    'SINGLES', 'DOUBLES', 'MATCH_TYPES',
    'PlayerStat', 'PlayerFee',
    'DateRange', 'MatchFilter', 'TimeWindow', 'MATCH_TYPE_ALL',
]
