"""
Set score utilities for the tennis tracker.

Scores are stored as comma-separated set tokens such as ``"6-4,7-5"``.
"""

import re
from typing import List, Tuple


SET_TOKEN_PATTERN = re.compile(r'^(\d{1,2})-(\d{1,2})$')


class InvalidScoreError(ValueError):
    """Raised when a score string cannot be parsed into set tokens."""

    def __init__(self, score: str):
        self.score = score
        super().__init__(f"Invalid score format: {score}")


class ScoreUtils:
    """Utilities for parsing and normalizing set scores."""

    @staticmethod
    def parse_sets(score: str) -> List[Tuple[int, int]]:
        """Parse a score string into a list of (a, b) set tuples."""
        if score is None or not str(score).strip():
            raise InvalidScoreError(score)

        sets = []
        for token in str(score).split(','):
            match = SET_TOKEN_PATTERN.match(token.strip())
            if not match:
                raise InvalidScoreError(score)
            sets.append((int(match.group(1)), int(match.group(2))))
        return sets

    @staticmethod
    def is_valid(score: str) -> bool:
        """Check whether a score string is well formed."""
        try:
            ScoreUtils.parse_sets(score)
        except InvalidScoreError:
            return False
        return True

    @staticmethod
    def format_sets(sets: List[Tuple[int, int]]) -> str:
        """Join set tuples back into a score string."""
        return ','.join(f"{a}-{b}" for a, b in sets)

    @staticmethod
    def normalize(score: str) -> str:
        """Rewrite every set so the larger number comes first."""
        sets = ScoreUtils.parse_sets(score)
        return ScoreUtils.format_sets([(max(a, b), min(a, b)) for a, b in sets])

    @staticmethod
    def is_normalized(score: str) -> bool:
        """Check that a score is already in stored form: stripped, unpadded, larger number first."""
        return ScoreUtils.normalize(score) == score
