"""
Player data models for the tennis tracker.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class PlayingStyle(str, Enum):
    """Playing styles a player can be registered with."""
    AGGRESSIVE_BASELINER = 'Aggressive Baseliner'
    SERVE_AND_VOLLEY = 'Serve and Volley'
    COUNTER_PUNCHER = 'Counter-Puncher'
    ALL_COURT_PLAYER = 'All-Court Player'
    DEFENSIVE_BASELINER = 'Defensive Baseliner'

    @classmethod
    def from_value(cls, value: str) -> 'PlayingStyle':
        """Look up a style by its display value, falling back to all-court."""
        for style in cls:
            if style.value.lower() == str(value).strip().lower():
                return style
        return cls.ALL_COURT_PLAYER


@dataclass
class Player:
    """A registered club player."""
    id: str
    name: str
    age: int
    playing_style: PlayingStyle = PlayingStyle.ALL_COURT_PLAYER
    ranking_points: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.age is None or int(self.age) <= 0:
            raise ValueError(f"Player age must be positive, got {self.age!r}")
        if not isinstance(self.playing_style, PlayingStyle):
            self.playing_style = PlayingStyle.from_value(self.playing_style)
