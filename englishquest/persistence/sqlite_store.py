"""SQLite store for profiles and session history."""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from englishquest.config import DEFAULT_DB_PATH
from englishquest.models.records import ProfileRecord, SessionRecord
from englishquest.persistence.base import Store

logger = logging.getLogger(__name__.split(".")[-1])

_PROFILE_COLUMNS = (
    "id", "name", "player_class", "level", "exp", "next_level_exp", "hp", "max_hp", "attack",
    "defense", "combo", "streak_days", "gold", "exp_boost", "damage_reduction", "updated_at",
)

_SESSION_COLUMNS = (
    "record_id", "player_id", "mode", "started_at", "ended_at", "question_set_id",
    "question_count", "correct_count", "best_combo", "exp_gained", "exp_lost", "hp_delta",
    "gold_delta", "defense_delta", "fainted", "leveled_up",
)


class SQLiteStore(Store):
    """Profiles are upserted by id; sessions are append-only."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        # A single connection keeps ":memory:" databases alive across calls
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._init_tables()

    @contextmanager
    def _transaction(self):
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _init_tables(self) -> None:
        with self._transaction() as conn:
            conn.execute('''CREATE TABLE IF NOT EXISTS profiles (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                player_class TEXT NOT NULL,
                level INTEGER NOT NULL,
                exp INTEGER NOT NULL,
                next_level_exp INTEGER NOT NULL,
                hp INTEGER NOT NULL,
                max_hp INTEGER NOT NULL,
                attack INTEGER NOT NULL,
                defense REAL NOT NULL,
                combo INTEGER NOT NULL,
                streak_days INTEGER NOT NULL,
                gold INTEGER NOT NULL,
                exp_boost REAL NOT NULL DEFAULT 0,
                damage_reduction REAL NOT NULL DEFAULT 0,
                updated_at TEXT
            )''')
            conn.execute('''CREATE TABLE IF NOT EXISTS sessions (
                record_id TEXT PRIMARY KEY,
                player_id TEXT NOT NULL,
                mode TEXT NOT NULL,
                started_at TEXT,
                ended_at TEXT,
                question_set_id TEXT,
                question_count INTEGER,
                correct_count INTEGER,
                best_combo INTEGER,
                exp_gained INTEGER,
                exp_lost INTEGER,
                hp_delta INTEGER,
                gold_delta INTEGER,
                defense_delta REAL,
                fainted INTEGER,
                leveled_up INTEGER,
                FOREIGN KEY(player_id) REFERENCES profiles(id)
            )''')
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_sessions_player_ended ON sessions (player_id, ended_at)"
            )

    def close(self) -> None:
        self._conn.close()

    def save_session(self, record: SessionRecord) -> None:
        if not record.player_id:
            return
        values = (
            record.record_id,
            record.player_id,
            record.mode.value,
            record.started_at.isoformat(),
            record.ended_at.isoformat(),
            record.question_set_id,
            record.question_count,
            record.correct_count,
            record.best_combo,
            record.exp_gained,
            record.exp_lost,
            record.hp_delta,
            record.gold_delta,
            record.defense_delta,
            int(record.fainted),
            int(record.leveled_up),
        )
        placeholders = ", ".join("?" for _ in _SESSION_COLUMNS)
        try:
            with self._transaction() as conn:
                conn.execute(
                    f"INSERT INTO sessions ({', '.join(_SESSION_COLUMNS)}) VALUES ({placeholders})",
                    values,
                )
        except sqlite3.Error as e:
            logger.error(f"Failed to save session {record.record_id}: {e}", exc_info=True)
            raise

    def save_profile(self, record: ProfileRecord) -> None:
        if not record.id:
            raise ValueError("player ID is required")
        values = (
            record.id,
            record.name,
            record.player_class,
            record.level,
            record.exp,
            record.next_level_exp,
            record.hp,
            record.max_hp,
            record.attack,
            record.defense,
            record.combo,
            record.streak_days,
            record.gold,
            record.exp_boost,
            record.damage_reduction,
            datetime.now().isoformat(),
        )
        updates = ", ".join(f"{col} = excluded.{col}" for col in _PROFILE_COLUMNS if col != "id")
        placeholders = ", ".join("?" for _ in _PROFILE_COLUMNS)
        try:
            with self._transaction() as conn:
                conn.execute(
                    f"INSERT INTO profiles ({', '.join(_PROFILE_COLUMNS)}) VALUES ({placeholders}) "
                    f"ON CONFLICT(id) DO UPDATE SET {updates}",
                    values,
                )
        except sqlite3.Error as e:
            logger.error(f"Failed to save profile {record.id}: {e}", exc_info=True)
            raise

    def load_profile(self, player_id: str) -> Optional[ProfileRecord]:
        if not player_id:
            return None
        row = self._conn.execute(
            f"SELECT {', '.join(_PROFILE_COLUMNS)} FROM profiles WHERE id = ?", (player_id,)
        ).fetchone()
        if row is None:
            return None
        data = dict(row)
        if data["updated_at"] is None:
            data.pop("updated_at")
        return ProfileRecord.model_validate(data)

    def list_sessions(self, player_id: str, limit: int) -> list[SessionRecord]:
        if not player_id or limit <= 0:
            return []
        rows = self._conn.execute(
            f"SELECT {', '.join(_SESSION_COLUMNS)} FROM sessions "
            "WHERE player_id = ? ORDER BY ended_at DESC LIMIT ?",
            (player_id, limit),
        ).fetchall()
        return [SessionRecord.model_validate(dict(row)) for row in rows]
