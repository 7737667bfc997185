"""Store interface shared by persistence backends."""

from abc import ABC, abstractmethod
from typing import Optional

from englishquest.models.records import ProfileRecord, SessionRecord


class Store(ABC):
    """Profile and session history storage."""

    @abstractmethod
    def save_session(self, record: SessionRecord) -> None:
        """Append a session record."""

    @abstractmethod
    def save_profile(self, record: ProfileRecord) -> None:
        """Insert or update a profile by id."""

    @abstractmethod
    def load_profile(self, player_id: str) -> Optional[ProfileRecord]:
        """Load a profile, or None if it does not exist."""

    @abstractmethod
    def list_sessions(self, player_id: str, limit: int) -> list[SessionRecord]:
        """List a player's sessions, newest first."""
