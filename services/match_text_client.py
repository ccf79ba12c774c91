"""
Client for the external service that turns free text into match candidates.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import requests

from models.match import SINGLES, ParsedMatch
from models.player import Player

logger = logging.getLogger(__name__)


class MatchTextClient:
    """Posts match text to the parsing service and decodes its answer."""

    def __init__(self, url: str, timeout: int = 30, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'MatchTextClient':
        parser_config = config.get('parser', {})
        return cls(parser_config.get('url'), int(parser_config.get('timeout', 30)))

    def parse(self, text: str, players: Sequence[Player]) -> List[ParsedMatch]:
        """Send text and the known player names; return the parsed candidates."""
        if not text or not text.strip():
            raise ValueError("Text is required")

        payload = {
            'text': text,
            'playerList': [{'id': p.id, 'name': p.name} for p in players],
        }

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            content = response.json()
        except requests.RequestException as e:
            logger.error(f"Error calling match text service: {e}")
            raise

        if 'error' in content:
            raise ValueError(content['error'])

        matches = [self._decode(item) for item in content.get('matches', [])]
        logger.info(f"Match text service returned {len(matches)} candidates")
        return matches

    def _decode(self, item: Dict[str, Any]) -> ParsedMatch:
        """Map one JSON object to a ParsedMatch; unparseable dates mark it invalid."""
        parsed = ParsedMatch(
            player1=item.get('player1') or '',
            player2=item.get('player2'),
            player3=item.get('player3') or '',
            player4=item.get('player4'),
            score=item.get('score') or '',
            match_type=item.get('matchType') or SINGLES,
            is_valid=bool(item.get('isValid', True)),
            error_message=item.get('errorMessage'),
        )

        raw_date = item.get('matchDate')
        if not raw_date:
            parsed.match_date = datetime.now()
            return parsed
        try:
            parsed.match_date = pd.to_datetime(raw_date).to_pydatetime()
        except (ValueError, TypeError):
            parsed.is_valid = False
            parsed.error_message = f"Invalid date format: {raw_date}"
        return parsed
