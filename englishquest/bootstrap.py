"""Startup wiring: logging, user config, store and the active profile."""

import logging
from typing import Optional

from englishquest.config import DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL, DEFAULT_STORE_BACKEND
from englishquest.engine.context import GameContext
from englishquest.engine.settlement import SessionSettlement
from englishquest.models.stats import PlayerStats
from englishquest.persistence import build_store
from englishquest.persistence.base import Store
from englishquest.user_config import UserConfigManager

logger = logging.getLogger(__name__.split(".")[-1])


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=DEFAULT_LOG_FORMAT)


class GameSession:
    """Everything the presentation layer needs after startup."""

    def __init__(self, context: GameContext, stats: PlayerStats, config_manager: UserConfigManager) -> None:
        """
        Initialize game session.

        Args:
            context: Active player and store
            stats: Stats loaded or seeded for the active player
            config_manager: Preferences manager the session was started with
        """
        self.context = context
        self.stats = stats
        self.config_manager = config_manager
        self.settlement = SessionSettlement(context)


def bootstrap(
    config_manager: Optional[UserConfigManager] = None,
    store: Optional[Store] = None,
    backend: str = DEFAULT_STORE_BACKEND,
    location: str = "",
) -> GameSession:
    """
    Load preferences, open the store and load or seed the active profile.

    Args:
        config_manager: Optional preferences manager (defaults to the platform config path)
        store: Optional pre-built store; built from backend/location otherwise
        backend: Store backend used when no store is given
        location: Store location used when no store is given

    Returns:
        GameSession ready for play
    """
    config_manager = config_manager or UserConfigManager()
    config_manager.load()
    player_id = config_manager.ensure_profile_id()

    if store is None:
        store = build_store(backend, location)

    context = GameContext(player_id, store)
    stats = context.load_or_create_stats()
    logger.info(f"Profile {player_id} ready (level {stats.level}, {stats.hp}/{stats.max_hp} HP)")
    return GameSession(context, stats, config_manager)
