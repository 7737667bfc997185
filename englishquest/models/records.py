"""Persisted profile and session history records."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from englishquest.models.session import SessionMode, SessionSummary
from englishquest.models.stats import PlayerStats


class SessionRecord(BaseModel):
    """One completed session in the append-only history log."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    record_id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Unique record identifier")
    player_id: str = Field(description="Profile the session belongs to")
    mode: SessionMode = Field(description="Session mode")
    started_at: datetime = Field(default_factory=datetime.now, description="Session start time")
    ended_at: datetime = Field(default_factory=datetime.now, description="Settlement time")
    question_set_id: Optional[str] = Field(default=None, description="Question batch identifier, if any")

    question_count: int = Field(ge=0, default=0, description="Questions or turns presented")
    correct_count: int = Field(ge=0, default=0, description="Correct answers")
    best_combo: int = Field(ge=0, default=0, description="Highest combo reached")
    exp_gained: int = Field(default=0, description="Session EXP awarded")
    exp_lost: int = Field(ge=0, default=0, description="EXP removed by the faint penalty")
    hp_delta: int = Field(default=0, description="HP change during the session")
    gold_delta: int = Field(default=0, description="Gold earned")
    defense_delta: float = Field(default=0.0, description="Defense earned")
    fainted: bool = Field(default=False, description="Whether the player fainted")
    leveled_up: bool = Field(default=False, description="Whether the player leveled up")

    @classmethod
    def from_summary(
        cls,
        player_id: str,
        summary: SessionSummary,
        question_count: int,
        started_at: datetime,
        ended_at: datetime,
        exp_lost: int = 0,
        question_set_id: Optional[str] = None,
    ) -> "SessionRecord":
        """Flatten a settlement summary into a history record."""
        return cls(
            player_id=player_id,
            mode=summary.mode,
            started_at=started_at,
            ended_at=ended_at,
            question_set_id=question_set_id,
            question_count=question_count,
            correct_count=summary.correct,
            best_combo=summary.best_combo,
            exp_gained=summary.exp_delta,
            exp_lost=exp_lost,
            hp_delta=summary.hp_delta,
            gold_delta=summary.gold_delta,
            defense_delta=summary.defense_delta,
            fainted=summary.fainted,
            leveled_up=summary.leveled_up,
        )


class ProfileRecord(BaseModel):
    """Persisted player profile, upserted by id."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    id: str = Field(description="Profile identifier")
    updated_at: datetime = Field(default_factory=datetime.now, description="Last save time")

    name: str
    player_class: str
    level: int
    exp: int
    next_level_exp: int
    hp: int
    max_hp: int
    attack: int
    defense: float
    combo: int
    streak_days: int
    gold: int
    exp_boost: float = 0.0
    damage_reduction: float = 0.0

    @classmethod
    def from_stats(cls, player_id: str, stats: PlayerStats) -> "ProfileRecord":
        """Build a profile record for the given player."""
        return cls(
            id=player_id,
            name=stats.name,
            player_class=stats.player_class,
            level=stats.level,
            exp=stats.exp,
            next_level_exp=stats.next,
            hp=stats.hp,
            max_hp=stats.max_hp,
            attack=stats.attack,
            defense=stats.defense,
            combo=stats.combo,
            streak_days=stats.streak,
            gold=stats.gold,
            exp_boost=stats.exp_boost,
            damage_reduction=stats.damage_reduction,
        )

    def to_stats(self) -> PlayerStats:
        """Rebuild player stats from the stored profile."""
        return PlayerStats(
            name=self.name,
            player_class=self.player_class,
            level=self.level,
            exp=self.exp,
            next=self.next_level_exp,
            hp=self.hp,
            max_hp=self.max_hp,
            attack=self.attack,
            defense=self.defense,
            combo=self.combo,
            streak=self.streak_days,
            gold=self.gold,
            exp_boost=self.exp_boost,
            damage_reduction=self.damage_reduction,
        )
