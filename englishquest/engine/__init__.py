"""Game engine package."""

from englishquest.engine.analysis import HistoryAnalyzer
from englishquest.engine.answer_judge import AnswerJudge
from englishquest.engine.context import GameContext
from englishquest.engine.damage import DamageSystem
from englishquest.engine.leveling import LevelingSystem
from englishquest.engine.progression import ProgressionCurve
from englishquest.engine.settlement import SessionSettlement

__all__ = [
    "AnswerJudge",
    "DamageSystem",
    "GameContext",
    "HistoryAnalyzer",
    "LevelingSystem",
    "ProgressionCurve",
    "SessionSettlement",
]
