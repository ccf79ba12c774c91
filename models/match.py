"""
Match data models for the tennis tracker.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from utils.score_utils import ScoreUtils, InvalidScoreError


SINGLES = 'singles'
DOUBLES = 'doubles'
MATCH_TYPES = (SINGLES, DOUBLES)


class MatchValidationError(ValueError):
    """Raised when match data violates the match record invariants."""


def _validate_participants(match_type: str, winner1_id: str, winner2_id: Optional[str],
                           loser1_id: str, loser2_id: Optional[str]) -> None:
    """Check participant fields against the match type."""
    if match_type not in MATCH_TYPES:
        raise MatchValidationError(f"Unknown match type: {match_type!r}")
    if not winner1_id or not loser1_id:
        raise MatchValidationError("winner1_id and loser1_id are required")

    has_partners = (winner2_id is not None, loser2_id is not None)
    if match_type == SINGLES and any(has_partners):
        raise MatchValidationError("Singles matches cannot have a second winner or loser")
    if match_type == DOUBLES and not all(has_partners):
        raise MatchValidationError("Doubles matches need two winners and two losers")

    ids = [i for i in (winner1_id, winner2_id, loser1_id, loser2_id) if i is not None]
    if len(set(ids)) != len(ids):
        raise MatchValidationError("A player cannot appear twice in the same match")


@dataclass(frozen=True)
class MatchRecord:
    """A completed match as stored by the data-access layer."""
    id: str
    match_type: str
    winner1_id: str
    loser1_id: str
    score: str
    match_date: datetime
    winner2_id: Optional[str] = None
    loser2_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        _validate_participants(self.match_type, self.winner1_id, self.winner2_id,
                               self.loser1_id, self.loser2_id)
        try:
            ScoreUtils.parse_sets(self.score)
        except InvalidScoreError as e:
            raise MatchValidationError(str(e)) from e

    @property
    def winners(self) -> Tuple[str, ...]:
        return tuple(i for i in (self.winner1_id, self.winner2_id) if i is not None)

    @property
    def losers(self) -> Tuple[str, ...]:
        return tuple(i for i in (self.loser1_id, self.loser2_id) if i is not None)

    @property
    def participants(self) -> Tuple[str, ...]:
        return self.winners + self.losers


@dataclass(frozen=True)
class MatchCreate:
    """Payload accepted by the match creation operation."""
    match_type: str
    winner1_id: str
    loser1_id: str
    score: str
    match_date: datetime
    winner2_id: Optional[str] = None
    loser2_id: Optional[str] = None

    def validate(self) -> None:
        """Validate participants and require a normalized score."""
        _validate_participants(self.match_type, self.winner1_id, self.winner2_id,
                               self.loser1_id, self.loser2_id)
        if not ScoreUtils.is_normalized(self.score):
            raise InvalidScoreError(self.score)


@dataclass
class ParsedMatch:
    """A match candidate produced by the natural-language match parser."""
    player1: str
    player3: str
    score: str
    match_type: str = SINGLES
    player2: Optional[str] = None
    player4: Optional[str] = None
    match_date: Optional[datetime] = None
    is_valid: bool = True
    error_message: Optional[str] = None
    player1_id: Optional[str] = None
    player2_id: Optional[str] = None
    player3_id: Optional[str] = None
    player4_id: Optional[str] = None
