"""
Core database management for the tennis tracker.
"""

import sqlite3
import logging
from datetime import datetime
from typing import Dict, Any, Optional
from config.config_manager import ConfigManager

logger = logging.getLogger(__name__)


def to_db_timestamp(moment: Optional[datetime]) -> Optional[str]:
    """Store timestamps as ISO 8601 text."""
    return moment.isoformat() if moment is not None else None


def from_db_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class DatabaseManager:
    """Manages core database operations and initialization."""

    def __init__(self, db_path: Optional[str] = None, config_file: str = "config.yaml"):
        self.config = ConfigManager.load_config(config_file)
        self.db_path = db_path or self.config.get('database_path', 'tennis_club.db')
        self.init_database()

    def init_database(self) -> None:
        """Initialize the database with required tables."""
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    age INTEGER NOT NULL CHECK (age > 0),
                    playing_style TEXT NOT NULL,
                    ranking_points INTEGER NOT NULL DEFAULT 0,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS matches (
                    id TEXT PRIMARY KEY,
                    match_type TEXT NOT NULL CHECK (match_type IN ('singles', 'doubles')),
                    winner1_id TEXT NOT NULL,
                    winner2_id TEXT,
                    loser1_id TEXT NOT NULL,
                    loser2_id TEXT,
                    score TEXT NOT NULL,
                    match_date TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_matches_date ON matches(match_date)")
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_players_name ON players(name)")

            conn.commit()
            logger.info("Database initialized successfully")

    def get_connection(self):
        """Get a database connection."""
        return sqlite3.connect(self.db_path)

    def get_database_stats(self) -> Dict[str, int]:
        """Get basic database statistics."""
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("SELECT COUNT(*) FROM players")
            players = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM players WHERE is_active = 1")
            active_players = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM matches")
            matches = cursor.fetchone()[0]

            return {
                'players': players,
                'active_players': active_players,
                'matches': matches
            }
