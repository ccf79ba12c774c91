"""
Collaborator services for the tennis tracker.
"""

from .match_text_client import MatchTextClient
from .parsed_match_validator import ParsedMatchValidator

__all__ = ['MatchTextClient', 'ParsedMatchValidator']
