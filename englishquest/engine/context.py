"""Game context: active player and store handle."""

import logging
from datetime import datetime
from typing import Callable, Optional

from englishquest.config import DEFAULT_HISTORY_LIMIT
from englishquest.models.records import ProfileRecord, SessionRecord
from englishquest.models.stats import PlayerStats, default_stats
from englishquest.persistence.base import Store

logger = logging.getLogger(__name__.split(".")[-1])


class GameContext:
    """Carries the active profile id and store through settlement and persistence calls."""

    def __init__(
        self,
        player_id: str,
        store: Optional[Store] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize game context.

        Args:
            player_id: Active profile id used to stamp records; empty disables saving
            store: Optional persistence store
            clock: Time source for session timestamps
        """
        self._player_id = player_id
        self._store = store
        self._clock = clock

    @property
    def player_id(self) -> str:
        """Get active profile id."""
        return self._player_id

    @property
    def store(self) -> Optional[Store]:
        """Get persistence store."""
        return self._store

    def now(self) -> datetime:
        """Current time from the context clock."""
        return self._clock()

    def save_stats(self, stats: PlayerStats) -> None:
        """Upsert the player's profile. Raises whatever the store raises."""
        if self._store is None or not self._player_id:
            return
        self._store.save_profile(ProfileRecord.from_stats(self._player_id, stats))

    def save_session(self, record: SessionRecord) -> None:
        """Append a session record. Raises whatever the store raises."""
        if self._store is None or not self._player_id:
            return
        self._store.save_session(record)

    def load_stats(self) -> Optional[PlayerStats]:
        """Load the active player's stats, None if no profile exists."""
        if self._store is None or not self._player_id:
            return None
        record = self._store.load_profile(self._player_id)
        return record.to_stats() if record else None

    def load_or_create_stats(self) -> PlayerStats:
        """Load the active profile or seed a new one with default stats."""
        stats = self.load_stats()
        if stats is not None:
            return stats

        stats = default_stats()
        try:
            self.save_stats(stats)
        except Exception as e:
            logger.warning(f"Failed to seed profile {self._player_id}: {e}")
        return stats

    def recent_sessions(self, limit: int = DEFAULT_HISTORY_LIMIT) -> list[SessionRecord]:
        """Newest-first session history of the active player."""
        if self._store is None or not self._player_id:
            return []
        return self._store.list_sessions(self._player_id, limit)
