"""
Text processing utilities for the tennis tracker.
"""

import unicodedata


class TextUtils:
    """Utilities for text processing and normalization."""

    @staticmethod
    def strip_accents(text: str) -> str:
        """Remove diacritics, e.g. 'Hiển' -> 'Hien'."""
        # đ/Đ do not decompose
        text = text.replace('đ', 'd').replace('Đ', 'D')
        decomposed = unicodedata.normalize('NFD', text)
        return ''.join(c for c in decomposed if unicodedata.category(c) != 'Mn')

    @staticmethod
    def normalize_name(name: str) -> str:
        """Normalize a name for consistent comparison."""
        if not name:
            return ""

        # Convert to lowercase and collapse whitespace
        normalized = ' '.join(name.lower().split())

        return TextUtils.strip_accents(normalized)

    @staticmethod
    def contains(haystack: str, needle: str) -> bool:
        """Case- and accent-insensitive substring check."""
        return TextUtils.normalize_name(needle) in TextUtils.normalize_name(haystack)
