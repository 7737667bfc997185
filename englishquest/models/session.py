"""Session answer and summary models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SessionMode(str, Enum):
    """Learning modes."""

    VOCAB = "vocab"
    GRAMMAR = "grammar"
    TAVERN = "tavern"
    SPELLING = "spelling"
    LISTENING = "listening"


class QuizAnswer(BaseModel):
    """Judged correctness of one quiz question."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    correct: bool = Field(description="Whether the answer matched the key")


class VocabAnswer(QuizAnswer):
    """Answer to one vocabulary battle question."""


class GrammarAnswer(QuizAnswer):
    """Answer on one grammar dungeon floor."""


class ListeningAnswer(QuizAnswer):
    """Answer to one listening cave prompt."""


class SpellingOutcome(str, Enum):
    """Graded result of a spelling prompt."""

    PERFECT = "perfect"
    NEAR = "near"
    FAIL = "fail"


class TavernOutcome(str, Enum):
    """Evaluation of one conversation turn."""

    SUCCESS = "success"
    NORMAL = "normal"
    FAIL = "fail"

    @classmethod
    def parse(cls, value: str) -> "TavernOutcome":
        """Parse an evaluator label; unknown labels count as a normal turn."""
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            return cls.NORMAL


class SessionSummary(BaseModel):
    """Result of settling one session."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    mode: SessionMode = Field(description="Mode the session was played in")
    correct: int = Field(ge=0, default=0, description="Correct answers among processed questions")
    exp_delta: int = Field(default=0, description="Session EXP before the EXP boost")
    hp_delta: int = Field(default=0, description="HP change caused during the session")
    gold_delta: int = Field(default=0, description="Gold earned")
    defense_delta: float = Field(default=0.0, description="Defense earned")
    best_combo: int = Field(ge=0, default=0, description="Highest combo reached")
    fainted: bool = Field(default=False, description="Whether HP ran out")
    leveled_up: bool = Field(default=False, description="Whether at least one level was gained")
    note: str = Field(default="", description="Error or skip message")
