"""Data models module for English Quest."""

# Stats
from englishquest.models.stats import PlayerStats, default_stats

# Sessions
from englishquest.models.session import (
    GrammarAnswer,
    ListeningAnswer,
    QuizAnswer,
    SessionMode,
    SessionSummary,
    SpellingOutcome,
    TavernOutcome,
    VocabAnswer,
)

# Persisted records
from englishquest.models.records import ProfileRecord, SessionRecord

__all__ = [
    # Stats
    "PlayerStats",
    "default_stats",
    # Sessions
    "SessionMode",
    "QuizAnswer",
    "VocabAnswer",
    "GrammarAnswer",
    "ListeningAnswer",
    "SpellingOutcome",
    "TavernOutcome",
    "SessionSummary",
    # Persisted records
    "ProfileRecord",
    "SessionRecord",
]
