"""
Outcome classification of a match from one player's point of view.
"""

from enum import Enum

from models.match import MatchRecord


DRAW_SCORES = ('5-5', '6-6')


class Outcome(str, Enum):
    WIN = 'win'
    LOSS = 'loss'
    DRAW = 'draw'
    NOT_PARTICIPATING = 'not_participating'


def is_draw(score: str) -> bool:
    """A draw is recorded as one of the sentinel scores, compared on the whole field."""
    return score in DRAW_SCORES


def participates(match: MatchRecord, player_id: str) -> bool:
    return player_id in match.participants


def won_by(match: MatchRecord, player_id: str) -> bool:
    return not is_draw(match.score) and player_id in match.winners


def lost_by(match: MatchRecord, player_id: str) -> bool:
    return not is_draw(match.score) and player_id in match.losers


def classify(match: MatchRecord, player_id: str) -> Outcome:
    """Return exactly one outcome for a (match, player) pair."""
    if not participates(match, player_id):
        return Outcome.NOT_PARTICIPATING
    if is_draw(match.score):
        return Outcome.DRAW
    if won_by(match, player_id):
        return Outcome.WIN
    return Outcome.LOSS
