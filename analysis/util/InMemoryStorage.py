import logging
import sqlite3
from collections import defaultdict
from typing import Any, DefaultDict, Dict, List, Optional, Tuple

from eloratings.interfaces import Storage
from eloratings.math.elo import EloRating

from .CLI import cli

__all__ = ["InMemoryStorage"]


logger = logging.getLogger(__name__)

cli.add_argument(
    "--rating-history-db", dest="rating_history_db", type=str,
    help="Path to DB for ratings history (not saved by default)",
)

class InMemoryStorage(Storage):
    _data: Dict[int, EloRating]
    _match_history: DefaultDict[int, List[Tuple[int, Any]]]
    _rating_history: DefaultDict[int, List[Tuple[int, EloRating]]]
    _set_count: DefaultDict[int, int]
    entry_type: Any

    def __init__(self, entry_type: type = EloRating) -> None:
        self._data = {}
        self._match_history = defaultdict(lambda: [])
        self._rating_history = defaultdict(lambda: [])
        self._set_count = defaultdict(lambda: 0)
        self.entry_type = entry_type

    def get(self, player_id: int) -> EloRating:
        if player_id not in self._data:
            self._data[player_id] = self.entry_type()
        return self._data[player_id]

    def set(self, player_id: int, entry: EloRating) -> None:
        self._data[player_id] = entry
        self._set_count[player_id] += 1

    def clear_set_count(self, player_id: int) -> None:
        self._set_count[player_id] = 0

    def get_set_count(self, player_id: int) -> int:
        return self._set_count[player_id]

    def all_players(self) -> Dict[int, EloRating]:
        return self._data

    # We assume we add these entries in ascending order (by timestamp).
    def add_rating_history(self, player_id: int, timestamp: int, entry: EloRating) -> None:
        self._rating_history[player_id].append((timestamp, entry))

    def add_match_history(self, player_id: int, timestamp: int, entry: Any) -> None:
        self._match_history[player_id].append((timestamp, entry))

    def get_rating_history(self, player_id: int) -> List[Tuple[int, EloRating]]:
        return list(self._rating_history[player_id])

    def get_first_rating_older_than(self, player_id: int, timestamp: int) -> EloRating:
        for e in reversed(self._rating_history[player_id]):
            if e[0] < timestamp:
                return e[1]
        return self.entry_type()

    def get_first_timestamp_older_than(self, player_id: int, timestamp: int) -> Optional[int]:
        for e in reversed(self._rating_history[player_id]):
            if e[0] < timestamp:
                return e[0]
        return None

    def get_matches_newer_or_equal_to(self, player_id: int, timestamp: int) -> List[Any]:
        ct = 0
        for e in reversed(self._match_history[player_id]):
            if e[0] >= timestamp:
                ct += 1
            else:
                break
        if ct == 0:
            return []
        return [e[1] for e in self._match_history[player_id][-ct:]]

    def save_rating_history(self, category: str, db_path: Optional[str]) -> None:
        if db_path is None:
            return
        logger.info("Saving rating history for %d players to %s", len(self._rating_history), db_path)
        connection = sqlite3.connect(db_path)
        cursor = connection.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS rating_history(
                category TEXT,
                player_id INTEGER,
                timestamp INTEGER,
                rating REAL
            )""")
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS index_ratings_by_player
                ON rating_history
                (player_id,timestamp)
            """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS index_ratings_by_category
                ON rating_history
                (category,player_id,timestamp)
            """)
        cursor.executemany("""
            INSERT INTO rating_history(category,player_id,timestamp,rating)
                VALUES (?,?,?,?)
            """,
            ((category, player, timestamp, r.rating)
                for (player,history) in self._rating_history.items()
                for (timestamp, r) in history
            ),
            )
        connection.commit()
        connection.close()
