"""User preferences stored on disk."""

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from englishquest.config import (
    DEFAULT_CONFIG_DIR_NAME,
    DEFAULT_CONFIG_FILE_NAME,
    DEFAULT_LANG_PREF,
    DEFAULT_QUESTIONS_PER_SESSION,
)

logger = logging.getLogger(__name__.split(".")[-1])


LANG_PREFS = ("en", "ja")
MIN_QUESTIONS_PER_SESSION = 1
MAX_QUESTIONS_PER_SESSION = 50


class UserConfig(BaseModel):
    """User preference model. Out-of-range values from older files are coerced, not rejected."""

    lang_pref: Literal["en", "ja"] = Field(default=DEFAULT_LANG_PREF, description="UI language")
    api_key: str = Field(default="", description="API key for the question provider")
    questions_per_session: int = Field(
        default=DEFAULT_QUESTIONS_PER_SESSION,
        ge=MIN_QUESTIONS_PER_SESSION,
        le=MAX_QUESTIONS_PER_SESSION,
        description="Questions per session",
    )
    profile_id: str = Field(default="", description="Active profile id")

    @field_validator("lang_pref", mode="before")
    @classmethod
    def coerce_lang_pref(cls, v):
        """Unknown languages (including the retired "both") fall back to English."""
        if isinstance(v, str) and v.strip().lower() in LANG_PREFS:
            return v.strip().lower()
        return "en"

    @field_validator("questions_per_session", mode="before")
    @classmethod
    def clamp_questions_per_session(cls, v):
        """Clamp the question count into range; non-numbers use the default."""
        try:
            count = int(v)
        except (TypeError, ValueError):
            return DEFAULT_QUESTIONS_PER_SESSION
        return min(max(count, MIN_QUESTIONS_PER_SESSION), MAX_QUESTIONS_PER_SESSION)

    @field_validator("api_key", "profile_id", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return "" if v is None else v


def default_config_path() -> Path:
    """Platform-appropriate path for the config file."""
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        base = Path(xdg)
    elif sys.platform == "win32":
        base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path.home() / ".local" / "share"
    return base / DEFAULT_CONFIG_DIR_NAME / DEFAULT_CONFIG_FILE_NAME


class UserConfigManager:
    """Loads, updates and saves user preferences."""

    def __init__(self, config_path: Optional[Path] = None, initial_config: Optional[UserConfig] = None) -> None:
        """Initialize with optional path and config."""
        self._path = Path(config_path) if config_path else default_config_path()
        self._config = initial_config or UserConfig()

    @property
    def path(self) -> Path:
        """Get config file path."""
        return self._path

    @property
    def config(self) -> UserConfig:
        """Get current config."""
        return self._config

    def update_config(self, new_config: UserConfig) -> None:
        """Update configuration."""
        self._config = new_config

    def load(self) -> UserConfig:
        """
        Load configuration from disk.

        Returns:
            Loaded config, or defaults if the file is missing or malformed
        """
        if not self._path.exists():
            self._config = UserConfig()
            return self._config

        try:
            self._config = UserConfig.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Failed to read config {self._path}: {e}. Using defaults.")
            self._config = UserConfig()
        return self._config

    def save(self) -> None:
        """Save configuration, creating directories as needed."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(self._config.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save config {self._path}: {e}", exc_info=True)
            raise

    def ensure_profile_id(self) -> str:
        """Return the profile id, generating and saving one if missing."""
        if self._config.profile_id:
            return self._config.profile_id

        self._config = self._config.model_copy(update={"profile_id": uuid.uuid4().hex})
        try:
            self.save()
        except OSError as e:
            logger.warning(f"Failed to persist profile id: {e}")
        return self._config.profile_id
