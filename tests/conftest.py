"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta

import pytest

from englishquest.engine.context import GameContext
from englishquest.engine.progression import ProgressionCurve
from englishquest.engine.settlement import SessionSettlement
from englishquest.models.stats import PlayerStats
from englishquest.persistence.json_store import JsonFileStore
from englishquest.persistence.sqlite_store import SQLiteStore


def make_stats(level: int, **overrides) -> PlayerStats:
    """Stats for a player at full HP on the given level."""
    max_hp = ProgressionCurve.max_hp_for_level(level)
    values = {
        "level": level,
        "exp": 0,
        "next": ProgressionCurve.exp_to_next(level),
        "hp": max_hp,
        "max_hp": max_hp,
    }
    values.update(overrides)
    return PlayerStats(**values)


class FakeClock:
    """Clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 9, 0, 0)) -> None:
        self._now = start

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


@pytest.fixture
def level_ten_stats():
    """Level 10 player at full HP (MaxHP 114)."""
    return make_stats(10)


@pytest.fixture
def json_store(tmp_path):
    """JSON store in a temporary directory."""
    return JsonFileStore(str(tmp_path / "data"))


@pytest.fixture
def sqlite_store():
    """In-memory SQLite store."""
    store = SQLiteStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def game_context(json_store):
    """Context for player 'p1' backed by the JSON store."""
    return GameContext("p1", json_store, clock=FakeClock())


@pytest.fixture
def settlement(game_context):
    """Settlement persisting through the JSON store."""
    return SessionSettlement(game_context)


@pytest.fixture
def offline_settlement():
    """Settlement with no store attached."""
    return SessionSettlement(GameContext("", None, clock=FakeClock()))
