"""Player statistics models."""

from pydantic import BaseModel, ConfigDict, Field

from englishquest.config import DEFAULT_PLAYER_ATTACK, DEFAULT_PLAYER_CLASS, DEFAULT_PLAYER_NAME


class PlayerStats(BaseModel):
    """Complete player statistics."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    name: str = Field(default=DEFAULT_PLAYER_NAME, description="Player display name")
    player_class: str = Field(default=DEFAULT_PLAYER_CLASS, description="Display-only class title")

    level: int = Field(ge=1, default=1, description="Player level")
    exp: int = Field(ge=0, default=0, description="Progress toward the next level")
    next: int = Field(gt=0, default=30, description="EXP required for the next level")
    hp: int = Field(ge=0, default=30, description="Current health points")
    max_hp: int = Field(gt=0, default=30, description="Maximum health points for the level")

    attack: int = Field(default=DEFAULT_PLAYER_ATTACK, description="Attack stat")
    defense: float = Field(default=0.0, description="Defense stat, never decreases")
    combo: int = Field(ge=0, default=0, description="Consecutive correct answers")
    streak: int = Field(ge=0, default=0, description="Daily play streak")
    gold: int = Field(ge=0, default=0, description="Gold")

    exp_boost: float = Field(ge=0.0, default=0.0, description="Multiplicative EXP modifier")
    damage_reduction: float = Field(ge=0.0, lt=1.0, default=0.0, description="Fraction of damage mitigated")

    def add_combo(self) -> "PlayerStats":
        """Increment the combo counter."""
        return self.model_copy(update={"combo": self.combo + 1})

    def reset_combo(self) -> "PlayerStats":
        """Clear the combo counter after a miss."""
        return self.model_copy(update={"combo": 0})

    def add_defense(self, delta: float) -> "PlayerStats":
        """Increase defense."""
        return self.model_copy(update={"defense": self.defense + delta})

    def add_gold(self, delta: int) -> "PlayerStats":
        """Adjust gold, never below zero."""
        return self.model_copy(update={"gold": max(0, self.gold + delta)})


def default_stats() -> PlayerStats:
    """Initial stats for a new game."""
    # Local import: englishquest.engine imports this module
    from englishquest.engine.progression import ProgressionCurve

    max_hp = ProgressionCurve.max_hp_for_level(1)
    return PlayerStats(
        level=1,
        exp=0,
        next=ProgressionCurve.exp_to_next(1),
        hp=max_hp,
        max_hp=max_hp,
    )
