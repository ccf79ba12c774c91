"""
Match management for the tennis tracker.
"""

import logging
import uuid
import pandas as pd
from datetime import datetime
from typing import List, Optional, Sequence

from models.match import MatchCreate, MatchRecord, MatchValidationError
from ranking.match_builder import SetInput, TieBreakPolicy, rebuild_match
from utils.score_utils import InvalidScoreError, ScoreUtils
from .database_manager import from_db_timestamp, to_db_timestamp

logger = logging.getLogger(__name__)

MATCH_COLUMNS = """
    id, match_type, winner1_id, winner2_id, loser1_id, loser2_id, score, match_date, created_at
"""


class MatchManager:
    """Manages match records."""

    def __init__(self, database_manager):
        self.db_manager = database_manager
        self.config = database_manager.config
        self.tie_break = TieBreakPolicy(self.config.get('matches', {}).get('tie_break', 'side_a'))

    def create_match(self, payload: MatchCreate) -> MatchRecord:
        """Validate and store a new match. The score must already be normalized."""
        payload.validate()

        match = MatchRecord(
            id=str(uuid.uuid4()),
            match_type=payload.match_type,
            winner1_id=payload.winner1_id,
            winner2_id=payload.winner2_id,
            loser1_id=payload.loser1_id,
            loser2_id=payload.loser2_id,
            score=payload.score,
            match_date=payload.match_date,
            created_at=datetime.now()
        )

        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                INSERT INTO matches ({MATCH_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, self._match_to_row(match))
            conn.commit()

        logger.info(f"Recorded {match.match_type} match {match.id} ({match.score})")
        return match

    def update_match_score(self, match_id: str, set_scores: Sequence[SetInput],
                           match_date: Optional[datetime] = None) -> MatchRecord:
        """
        Correct the score (and optionally the date) of a stored match.

        Set scores are given with the recorded winners as side A; winner and
        loser teams are re-derived from them.
        """
        match = self.get_match(match_id)
        if match is None:
            raise KeyError(f"Match {match_id} not found")

        updated = rebuild_match(match, set_scores, match_date, self.tie_break)

        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE matches SET
                    winner1_id = ?, winner2_id = ?, loser1_id = ?, loser2_id = ?,
                    score = ?, match_date = ?
                WHERE id = ?
            """, (
                updated.winner1_id, updated.winner2_id, updated.loser1_id, updated.loser2_id,
                updated.score, to_db_timestamp(updated.match_date), match_id
            ))
            conn.commit()

        logger.info(f"Updated match {match_id}: {match.score} -> {updated.score}")
        return updated

    def delete_match(self, match_id: str) -> bool:
        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM matches WHERE id = ?", (match_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _match_to_row(self, match: MatchRecord) -> tuple:
        return (
            match.id, match.match_type, match.winner1_id, match.winner2_id,
            match.loser1_id, match.loser2_id, match.score,
            to_db_timestamp(match.match_date), to_db_timestamp(match.created_at)
        )

    def _row_to_match(self, row) -> MatchRecord:
        return MatchRecord(
            id=row[0],
            match_type=row[1],
            winner1_id=row[2],
            winner2_id=row[3],
            loser1_id=row[4],
            loser2_id=row[5],
            score=row[6],
            match_date=from_db_timestamp(row[7]),
            created_at=from_db_timestamp(row[8])
        )

    def list_matches(self) -> List[MatchRecord]:
        """Get all matches, most recent first. Rows that fail validation are skipped."""
        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {MATCH_COLUMNS} FROM matches ORDER BY match_date DESC")
            rows = cursor.fetchall()

        matches = []
        for row in rows:
            try:
                matches.append(self._row_to_match(row))
            except (MatchValidationError, ValueError) as e:
                logger.error(f"Skipping invalid match {row[0]}: {e}")
        return matches

    def get_match(self, match_id: str) -> Optional[MatchRecord]:
        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {MATCH_COLUMNS} FROM matches WHERE id = ?", (match_id,))
            row = cursor.fetchone()
            if row:
                return self._row_to_match(row)
            return None

    def load_matches_from_csv(self, csv_file: str) -> int:
        """
        Load matches from a CSV file with columns match_type, winner1_id,
        winner2_id, loser1_id, loser2_id, score and match_date.
        Scores are normalized on import. Returns the number of matches added.
        """
        try:
            df = pd.read_csv(csv_file, encoding='utf-8', dtype=str)
            logger.info(f"Loaded CSV with {len(df)} rows")
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Error loading CSV file: {e}")
            return 0

        matches_added = 0
        for index, row in df.iterrows():
            if self._process_csv_row(index, row):
                matches_added += 1

        logger.info(f"Processed {matches_added} matches from CSV")
        return matches_added

    def _process_csv_row(self, index, row: pd.Series) -> bool:
        """Process a single CSV row and record the match."""
        def value(column: str) -> Optional[str]:
            cell = row.get(column)
            return None if pd.isna(cell) or not str(cell).strip() else str(cell).strip()

        try:
            payload = MatchCreate(
                match_type=value('match_type') or 'singles',
                winner1_id=value('winner1_id'),
                winner2_id=value('winner2_id'),
                loser1_id=value('loser1_id'),
                loser2_id=value('loser2_id'),
                score=ScoreUtils.normalize(value('score')),
                match_date=pd.to_datetime(value('match_date')).to_pydatetime()
                if value('match_date') else datetime.now()
            )
            self.create_match(payload)
            return True
        except (InvalidScoreError, MatchValidationError, ValueError) as e:
            logger.warning(f"Skipping match row {index}: {e}")
            return False
