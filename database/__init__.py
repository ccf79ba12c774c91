"""
Database package for the tennis tracker.
"""

from .database_manager import DatabaseManager
from .player_manager import PlayerManager
from .match_manager import MatchManager

__all__ = ['DatabaseManager', 'PlayerManager', 'MatchManager']
