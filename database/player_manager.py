"""
Player management for the tennis tracker.
"""

import sqlite3
import logging
import uuid
import pandas as pd
from datetime import datetime
from typing import List, Optional

from models.player import Player, PlayingStyle
from .database_manager import from_db_timestamp, to_db_timestamp

logger = logging.getLogger(__name__)


class PlayerManager:
    """Manages player records."""

    def __init__(self, database_manager):
        self.db_manager = database_manager
        self.config = database_manager.config

    def add_player(self, name: str, age: int,
                   playing_style: PlayingStyle = PlayingStyle.ALL_COURT_PLAYER,
                   ranking_points: int = 0, is_active: bool = True,
                   player_id: Optional[str] = None) -> Player:
        """Create a new player and return it."""
        player = Player(
            id=player_id or str(uuid.uuid4()),
            name=name.strip(),
            age=int(age),
            playing_style=playing_style,
            ranking_points=int(ranking_points),
            is_active=bool(is_active),
            created_at=datetime.now()
        )

        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO players (id, name, age, playing_style, ranking_points, is_active, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                player.id, player.name, player.age, player.playing_style.value,
                player.ranking_points, int(player.is_active), to_db_timestamp(player.created_at)
            ))
            conn.commit()

        logger.info(f"Added new player {player.name}")
        return player

    def update_player(self, player: Player) -> bool:
        """Update an existing player. Returns False when the player does not exist."""
        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE players SET
                    name = ?, age = ?, playing_style = ?, ranking_points = ?, is_active = ?
                WHERE id = ?
            """, (
                player.name, player.age, player.playing_style.value,
                player.ranking_points, int(player.is_active), player.id
            ))
            conn.commit()
            updated = cursor.rowcount > 0

        if updated:
            logger.info(f"Updated player {player.name}")
        else:
            logger.warning(f"Player {player.id} not found for update")
        return updated

    def delete_player(self, player_id: str) -> bool:
        """Delete a player. Matches referencing the player are kept."""
        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM players WHERE id = ?", (player_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_player(self, row) -> Player:
        return Player(
            id=row[0],
            name=row[1],
            age=row[2],
            playing_style=PlayingStyle.from_value(row[3]),
            ranking_points=row[4],
            is_active=bool(row[5]),
            created_at=from_db_timestamp(row[6])
        )

    def list_players(self) -> List[Player]:
        """Get all players from the database, ordered by name."""
        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, age, playing_style, ranking_points, is_active, created_at
                FROM players
                ORDER BY name
            """)
            rows = cursor.fetchall()

        players = []
        for row in rows:
            try:
                players.append(self._row_to_player(row))
            except (ValueError, TypeError) as e:
                logger.error(f"Skipping invalid player {row[0]}: {e}")
        return players

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get a player by id."""
        with self.db_manager.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, age, playing_style, ranking_points, is_active, created_at
                FROM players
                WHERE id = ?
            """, (player_id,))

            row = cursor.fetchone()
            if row:
                return self._row_to_player(row)
            return None

    def load_players_from_csv(self, csv_file: str) -> int:
        """
        Load players from a CSV file with columns name, age and optionally
        playing_style, ranking_points, is_active and id.
        Returns the number of players added.
        """
        try:
            df = pd.read_csv(csv_file, encoding='utf-8')
            logger.info(f"Loaded CSV with {len(df)} rows")
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Error loading CSV file: {e}")
            return 0

        players_added = 0
        for index, row in df.iterrows():
            if self._process_csv_row(row):
                players_added += 1

        logger.info(f"Processed {players_added} players from CSV")
        return players_added

    def _process_csv_row(self, row: pd.Series) -> bool:
        """Process a single CSV row and add the player."""
        name = row.get('name')
        age = row.get('age')

        # Skip if essential fields are missing
        if pd.isna(name) or pd.isna(age):
            return False

        playing_style = row.get('playing_style')
        ranking_points = row.get('ranking_points')
        is_active = row.get('is_active')
        player_id = row.get('id')

        try:
            self.add_player(
                name=str(name),
                age=int(age),
                playing_style=PlayingStyle.from_value(playing_style) if not pd.isna(playing_style)
                else PlayingStyle.ALL_COURT_PLAYER,
                ranking_points=int(ranking_points) if not pd.isna(ranking_points) else 0,
                is_active=str(is_active).strip().lower() in ('1', 'true', 'yes') if not pd.isna(is_active) else True,
                player_id=str(player_id) if not pd.isna(player_id) else None
            )
            return True
        except (ValueError, sqlite3.IntegrityError) as e:
            logger.warning(f"Skipping player row {name}: {e}")
            return False
