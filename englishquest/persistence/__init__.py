"""Persistence package."""

from englishquest.config import DEFAULT_DATA_DIR, DEFAULT_DB_PATH, DEFAULT_STORE_BACKEND
from englishquest.persistence.base import Store
from englishquest.persistence.json_store import JsonFileStore
from englishquest.persistence.sqlite_store import SQLiteStore


def build_store(backend: str = DEFAULT_STORE_BACKEND, location: str = "") -> Store:
    """
    Create a store for the configured backend.

    Args:
        backend: "sqlite" or "json"
        location: Database file (sqlite) or data directory (json); defaults from config

    Returns:
        Store instance
    """
    if backend == "sqlite":
        return SQLiteStore(location or DEFAULT_DB_PATH)
    if backend == "json":
        return JsonFileStore(location or DEFAULT_DATA_DIR)
    raise ValueError(f"Unknown store backend: {backend}")


__all__ = [
    "Store",
    "JsonFileStore",
    "SQLiteStore",
    "build_store",
]
