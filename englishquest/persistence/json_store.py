"""JSON file store for profiles and session history."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from englishquest.config import DEFAULT_DATA_DIR
from englishquest.models.records import ProfileRecord, SessionRecord
from englishquest.persistence.base import Store

logger = logging.getLogger(__name__.split(".")[-1])


class JsonFileStore(Store):
    """Stores each player under {data_dir}/{player_id}/ as JSON documents."""

    PROFILE_FILE_NAME = "profile.json"
    SESSIONS_DIR_NAME = "sessions"

    def __init__(self, data_directory: str = DEFAULT_DATA_DIR):
        """
        Initialize JSON store.

        Args:
            data_directory: Directory where player data will be saved
        """
        self.data_directory = Path(data_directory)
        self._ensure_directory_exists(self.data_directory)

    def _ensure_directory_exists(self, directory: Path) -> None:
        """Ensure a directory exists, create if it doesn't."""
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            logger.error(f"Permission denied creating directory: {directory}")
            raise
        except OSError as e:
            logger.error(f"Error creating directory {directory}: {e}")
            raise

    def _get_player_directory(self, player_id: str) -> Path:
        """Get directory for a specific player."""
        return self.data_directory / player_id

    def _get_sessions_directory(self, player_id: str) -> Path:
        """Get session history directory for a specific player."""
        return self._get_player_directory(player_id) / self.SESSIONS_DIR_NAME

    def _write_atomic(self, file_path: Path, model: BaseModel) -> None:
        """Write a model as JSON through a temp file and rename."""
        temp_path = file_path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(model.model_dump_json(indent=2))
            temp_path.replace(file_path)
        except Exception as e:
            logger.error(f"Error writing {file_path}: {e}", exc_info=True)
            raise

    def save_session(self, record: SessionRecord) -> None:
        """
        Append a session using structure: {player_id}/sessions/{ended_at}_{record_id}.json

        Args:
            record: Session record to save
        """
        if not record.player_id:
            return
        sessions_dir = self._get_sessions_directory(record.player_id)
        self._ensure_directory_exists(sessions_dir)

        stamp = record.ended_at.strftime("%Y%m%dT%H%M%S%f")
        file_path = sessions_dir / f"{stamp}_{record.record_id}.json"
        self._write_atomic(file_path, record)
        logger.debug(f"Saved {record.mode.value} session {record.record_id} to {file_path}")

    def save_profile(self, record: ProfileRecord) -> None:
        """Insert or replace the profile document for a player."""
        if not record.id:
            raise ValueError("player ID is required")
        player_dir = self._get_player_directory(record.id)
        self._ensure_directory_exists(player_dir)
        self._write_atomic(player_dir / self.PROFILE_FILE_NAME, record)
        logger.debug(f"Saved profile {record.id} (level {record.level})")

    def load_profile(self, player_id: str) -> Optional[ProfileRecord]:
        """
        Load a profile from disk.

        Args:
            player_id: Profile to load

        Returns:
            ProfileRecord if found and readable, None otherwise
        """
        if not player_id:
            return None
        file_path = self._get_player_directory(player_id) / self.PROFILE_FILE_NAME
        if not file_path.exists():
            logger.warning(f"Profile file not found: {file_path}")
            return None
        return self._load_model(file_path, ProfileRecord)

    def list_sessions(self, player_id: str, limit: int) -> list[SessionRecord]:
        """
        List session records for a player.

        Args:
            player_id: Player whose history to read
            limit: Maximum number of records

        Returns:
            Records ordered by ended_at, newest first
        """
        sessions_dir = self._get_sessions_directory(player_id)
        if not player_id or limit <= 0 or not sessions_dir.exists():
            return []

        records = []
        try:
            for file_path in sessions_dir.glob("*.json"):
                record = self._load_model(file_path, SessionRecord)
                if record is not None:
                    records.append(record)
        except Exception as e:
            logger.error(f"Error scanning session directory {sessions_dir}: {e}", exc_info=True)
            return []

        records.sort(key=lambda r: r.ended_at, reverse=True)
        return records[:limit]

    def _load_model(self, file_path: Path, model_cls):
        """Load a model from a specific file, None if unreadable."""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return model_cls.model_validate(data)
        except Exception as e:
            logger.error(f"Error loading {model_cls.__name__} from {file_path}: {e}", exc_info=True)
            return None

    def list_players(self) -> list[str]:
        """List all player IDs that have a saved profile."""
        player_ids = []
        try:
            for item in self.data_directory.iterdir():
                if item.is_dir() and (item / self.PROFILE_FILE_NAME).exists():
                    player_ids.append(item.name)
        except Exception as e:
            logger.error(f"Error listing players in {self.data_directory}: {e}", exc_info=True)
        return sorted(player_ids)
