"""Damage, fainting and healing rules."""

from englishquest.engine.progression import ProgressionCurve, round_half_up
from englishquest.models.stats import PlayerStats


class DamageSystem:
    """Applies damage and faint recovery to player stats."""

    FAINT_EXP_PENALTY = 5

    @staticmethod
    def apply_damage(stats: PlayerStats, dmg: int) -> PlayerStats:
        """
        Reduce HP by damage after damage reduction.

        Args:
            stats: Current stats
            dmg: Raw damage

        Returns:
            New stats with HP clamped at zero
        """
        effective = max(0, round_half_up(dmg * (1 - stats.damage_reduction)))
        return stats.model_copy(update={"hp": max(0, stats.hp - effective)})

    @staticmethod
    def fainted(stats: PlayerStats) -> bool:
        """Check if HP has run out."""
        return stats.hp <= 0

    @staticmethod
    def apply_faint_penalty(stats: PlayerStats) -> PlayerStats:
        """Deduct faint EXP from current progress and restore half HP."""
        return stats.model_copy(
            update={
                "exp": max(0, stats.exp - DamageSystem.FAINT_EXP_PENALTY),
                "hp": stats.max_hp // 2,
            }
        )

    @staticmethod
    def apply_faint(stats: PlayerStats) -> tuple[PlayerStats, bool]:
        """Apply the faint penalty if the player has fainted."""
        if DamageSystem.fainted(stats):
            return DamageSystem.apply_faint_penalty(stats), True
        return stats, False

    @staticmethod
    def full_heal(stats: PlayerStats) -> PlayerStats:
        """Resync MaxHP and the EXP threshold to the level and restore HP."""
        max_hp = ProgressionCurve.max_hp_for_level(stats.level)
        return stats.model_copy(
            update={"next": ProgressionCurve.exp_to_next(stats.level), "max_hp": max_hp, "hp": max_hp}
        )

    @staticmethod
    def sync_max_hp(stats: PlayerStats) -> PlayerStats:
        """Resync MaxHP and the EXP threshold to the level without healing; HP is clamped into range."""
        max_hp = ProgressionCurve.max_hp_for_level(stats.level)
        hp = min(max(0, stats.hp), max_hp)
        return stats.model_copy(
            update={"next": ProgressionCurve.exp_to_next(stats.level), "max_hp": max_hp, "hp": hp}
        )
