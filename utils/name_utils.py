"""
Name utilities for resolving free-text player names to known players.
"""

from typing import List

from .text_utils import TextUtils


class NameUtils:
    """Utilities for player name resolution."""

    @staticmethod
    def contains_words(full_name: str, written_name: str) -> bool:
        """Check whether the written name appears as whole words in the full name."""
        words = TextUtils.normalize_name(full_name).split(' ')
        target_words = TextUtils.normalize_name(written_name).split(' ')
        for i in range(len(words) - len(target_words) + 1):
            if words[i:i + len(target_words)] == target_words:
                return True
        return False

    @staticmethod
    def find_candidates(name: str, players: List) -> List:
        """
        Find the players a written name could refer to.

        An exact (normalized) full-name match wins outright. Otherwise every
        player whose name contains the written name as whole words is a
        candidate, so "Long" matches both "Tài Long" and "Đức Long".
        """
        target = TextUtils.normalize_name(name)
        if not target:
            return []

        exact = [p for p in players if TextUtils.normalize_name(p.name) == target]
        if exact:
            return exact

        return [p for p in players if NameUtils.contains_words(p.name, target)]
