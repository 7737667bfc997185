"""Central configuration defaults and constants for English Quest."""

import os

# Storage Defaults
DEFAULT_DATA_DIR = os.getenv("ENGLISHQUEST_DATA_DIR", os.path.join(os.path.expanduser("~"), ".local", "share", "tui-english-quest"))
DEFAULT_STORE_BACKEND = os.getenv("ENGLISHQUEST_STORE_BACKEND", "sqlite")  # "sqlite" or "json"
DEFAULT_DB_PATH = os.getenv("ENGLISHQUEST_DB_PATH", os.path.join(DEFAULT_DATA_DIR, "db.sqlite"))
DEFAULT_HISTORY_LIMIT = int(os.getenv("ENGLISHQUEST_HISTORY_LIMIT", "20"))  # Sessions shown in history / analysis

# User Preference Defaults
DEFAULT_LANG_PREF = os.getenv("ENGLISHQUEST_LANG_PREF", "en")
DEFAULT_QUESTIONS_PER_SESSION = int(os.getenv("ENGLISHQUEST_QUESTIONS_PER_SESSION", "5"))
DEFAULT_CONFIG_DIR_NAME = "tui-english-quest"
DEFAULT_CONFIG_FILE_NAME = "config.json"

# New Player Defaults
DEFAULT_PLAYER_NAME = os.getenv("ENGLISHQUEST_PLAYER_NAME", "Takuya")
DEFAULT_PLAYER_CLASS = os.getenv("ENGLISHQUEST_PLAYER_CLASS", "Vocabulary Warrior")
DEFAULT_PLAYER_ATTACK = int(os.getenv("ENGLISHQUEST_PLAYER_ATTACK", "10"))

# Logging
DEFAULT_LOG_LEVEL = os.getenv("ENGLISHQUEST_LOG_LEVEL", "INFO").upper()
DEFAULT_LOG_FORMAT = "[%(name)-19s - %(levelname)5s] %(message)s"
