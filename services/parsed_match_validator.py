"""
Validation of match candidates produced by the match text parser.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence

from models.match import DOUBLES, MATCH_TYPES, ParsedMatch
from models.player import Player
from utils.name_utils import NameUtils
from utils.score_utils import ScoreUtils

logger = logging.getLogger(__name__)

MAX_SET_GAMES = 7


class ParsedMatchValidator:
    """Resolves parsed player names to ids and checks scores and dates."""

    def __init__(self, players: Sequence[Player]):
        self.players = list(players)

    def _resolve(self, name: Optional[str]) -> str:
        """Return the id for a written name or raise ValueError with a user-facing message."""
        candidates = NameUtils.find_candidates(name or '', self.players)
        if not candidates:
            raise ValueError(f"Player {name} not found")
        if len(candidates) > 1:
            names = ', '.join(p.name for p in candidates)
            raise ValueError(f"Multiple matches found for player {name}: {names}")
        return candidates[0].id

    def _check_score(self, score: str) -> None:
        if not ScoreUtils.is_valid(score):
            raise ValueError(f"Invalid score format: {score}")
        if any(a > MAX_SET_GAMES or b > MAX_SET_GAMES for a, b in ScoreUtils.parse_sets(score)):
            raise ValueError(f"Invalid score format: {score}")

    def validate(self, parsed: ParsedMatch) -> ParsedMatch:
        """Return a copy with resolved ids, or marked invalid with an error message."""
        if not parsed.is_valid:
            return parsed

        try:
            if parsed.match_type not in MATCH_TYPES:
                raise ValueError(f"Invalid match type: {parsed.match_type}")
            if parsed.match_date is not None and not isinstance(parsed.match_date, datetime):
                raise ValueError(f"Invalid date format: {parsed.match_date}")
            self._check_score(parsed.score)

            doubles = parsed.match_type == DOUBLES
            resolved = replace(
                parsed,
                player1_id=self._resolve(parsed.player1),
                player3_id=self._resolve(parsed.player3),
                player2_id=self._resolve(parsed.player2) if doubles else None,
                player4_id=self._resolve(parsed.player4) if doubles else None,
            )
        except ValueError as e:
            logger.info(f"Rejected parsed match '{parsed.player1}' vs '{parsed.player3}': {e}")
            return replace(parsed, is_valid=False, error_message=str(e))

        ids = [resolved.player1_id, resolved.player2_id, resolved.player3_id, resolved.player4_id]
        ids = [i for i in ids if i is not None]
        if len(set(ids)) != len(ids):
            return replace(parsed, is_valid=False, error_message="A player cannot appear twice in the same match")
        return resolved

    def validate_all(self, parsed_matches: Sequence[ParsedMatch]) -> List[ParsedMatch]:
        return [self.validate(parsed) for parsed in parsed_matches]
