"""
Derived statistics models. These are recomputed on every query and never stored.
"""

from dataclasses import dataclass


@dataclass
class PlayerStat:
    """Aggregated match statistics for one player."""
    player_id: str
    name: str
    points: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    total: int = 0
    win_rate: float = 0.0
    not_lose_rate: float = 0.0


@dataclass
class PlayerFee:
    """Fees owed by one player for a set of matches."""
    player_id: str
    name: str
    total_matches: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    base_fee: int = 0
    bet_fee: int = 0
    total_fee: int = 0
