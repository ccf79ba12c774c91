"""
Building match records from per-set score entry.

Scores are entered per set as two sub-scores, one for side A (player1 and
player2) and one for side B (player3 and player4). The side with more set
wins becomes the winning team; the stored score is normalized larger-first.
"""

import logging
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from models.match import MatchCreate, MatchRecord, MatchValidationError, ParsedMatch, DOUBLES
from utils.score_utils import ScoreUtils
from .outcome import is_draw

logger = logging.getLogger(__name__)

SIDE_A = 'a'
SIDE_B = 'b'

SetInput = Tuple[str, str]
Side = Tuple[str, Optional[str]]


class TieBreakPolicy(str, Enum):
    """How to pick a winner when both sides won the same number of sets."""
    SIDE_A = 'side_a'
    SIDE_B = 'side_b'
    REJECT = 'reject'


def _is_blank(value) -> bool:
    return value is None or str(value).strip() == ''


def _as_number(value) -> Optional[int]:
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def set_winner(a_score, b_score) -> Optional[str]:
    """Return the side that won a single set, or None when there is no winner."""
    if _is_blank(a_score) or _is_blank(b_score):
        return None
    a, b = _as_number(a_score), _as_number(b_score)
    if a is None or b is None or a == b:
        return None
    return SIDE_A if a > b else SIDE_B


def entered_sets(set_scores: Sequence[SetInput]) -> List[SetInput]:
    """Drop sets where either sub-score was left blank."""
    return [(a, b) for a, b in set_scores if not _is_blank(a) and not _is_blank(b)]


def determine_match_winner(set_scores: Sequence[SetInput],
                           tie_break: TieBreakPolicy = TieBreakPolicy.SIDE_A,
                           score: Optional[str] = None) -> str:
    """
    Count set wins per side and return the side with more of them.

    Equal counts are settled by ``tie_break``. ``reject`` raises
    MatchValidationError unless ``score`` is a draw sentinel, where the
    entered order is kept.
    """
    a_sets = b_sets = 0
    for a, b in set_scores:
        winner = set_winner(a, b)
        if winner == SIDE_A:
            a_sets += 1
        elif winner == SIDE_B:
            b_sets += 1

    if a_sets != b_sets:
        return SIDE_A if a_sets > b_sets else SIDE_B

    tie_break = TieBreakPolicy(tie_break)
    if tie_break == TieBreakPolicy.SIDE_B:
        return SIDE_B
    if tie_break == TieBreakPolicy.REJECT and not (score and is_draw(score)):
        raise MatchValidationError(f"Both sides won {a_sets} sets; cannot determine a winner")
    return SIDE_A


def sets_from_score(score: str) -> List[SetInput]:
    """Split a score string such as '4-6,6-3' into per-set sub-scores."""
    sets = []
    for token in (score or '').split(','):
        a, _, b = token.strip().partition('-')
        sets.append((a.strip(), b.strip()))
    return sets


def build_match(match_type: str, side_a: Side, side_b: Side,
                set_scores: Sequence[SetInput], match_date: Optional[datetime] = None,
                tie_break: TieBreakPolicy = TieBreakPolicy.SIDE_A) -> MatchCreate:
    """Build a creation payload from two sides and their per-set scores."""
    valid_sets = entered_sets(set_scores)
    if not valid_sets:
        raise MatchValidationError("Please enter at least one set score")

    score = ScoreUtils.normalize(','.join(f"{a}-{b}" for a, b in valid_sets))
    winner = determine_match_winner(valid_sets, tie_break, score)
    winners, losers = (side_a, side_b) if winner == SIDE_A else (side_b, side_a)

    doubles = match_type == DOUBLES
    payload = MatchCreate(
        match_type=match_type,
        winner1_id=winners[0],
        winner2_id=(winners[1] or None) if doubles else None,
        loser1_id=losers[0],
        loser2_id=(losers[1] or None) if doubles else None,
        score=score,
        match_date=match_date or datetime.now(),
    )
    payload.validate()
    return payload


def rebuild_match(match: MatchRecord, set_scores: Sequence[SetInput],
                  match_date: Optional[datetime] = None,
                  tie_break: TieBreakPolicy = TieBreakPolicy.SIDE_A) -> MatchRecord:
    """
    Apply edited set scores to a stored match.

    Side A is the currently recorded winning team. The teams never change;
    only which of them is the winner, the score and the date may.
    """
    payload = build_match(
        match.match_type,
        (match.winner1_id, match.winner2_id),
        (match.loser1_id, match.loser2_id),
        set_scores,
        match_date or match.match_date,
        tie_break,
    )
    if payload.winner1_id != match.winner1_id:
        logger.info(f"Score edit on match {match.id} swapped winner and loser teams")
    return replace(
        match,
        winner1_id=payload.winner1_id,
        winner2_id=payload.winner2_id,
        loser1_id=payload.loser1_id,
        loser2_id=payload.loser2_id,
        score=payload.score,
        match_date=payload.match_date,
    )


def build_from_parsed(parsed: ParsedMatch,
                      tie_break: TieBreakPolicy = TieBreakPolicy.SIDE_A) -> MatchCreate:
    """Turn a validated parser result into a creation payload."""
    if not parsed.is_valid:
        raise MatchValidationError(parsed.error_message or "Parsed match is not valid")
    return build_match(
        parsed.match_type,
        (parsed.player1_id, parsed.player2_id),
        (parsed.player3_id, parsed.player4_id),
        sets_from_score(parsed.score),
        parsed.match_date,
        tie_break,
    )
