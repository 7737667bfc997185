"""Experience gain and level-up rules."""

from englishquest.engine.progression import ProgressionCurve, round_half_up
from englishquest.models.stats import PlayerStats


class LevelingSystem:
    """Handles EXP accumulation and level progression."""

    ATTACK_PER_LEVEL = 2
    DEFENSE_PER_LEVEL = 1.0

    @staticmethod
    def gain_exp(stats: PlayerStats, gained: int) -> PlayerStats:
        """
        Add EXP and roll any overflow into level-ups.

        Args:
            stats: Current stats
            gained: Raw EXP before the EXP boost; negative values count as 0

        Returns:
            New stats with exp < next
        """
        effective = round_half_up(max(0, gained) * (1 + stats.exp_boost))
        stats = stats.model_copy(update={"exp": stats.exp + effective})
        while stats.exp >= stats.next:
            stats = stats.model_copy(update={"exp": stats.exp - stats.next})
            stats = LevelingSystem.level_up(stats)
        return stats

    @staticmethod
    def level_up(stats: PlayerStats) -> PlayerStats:
        """Advance one level, refresh thresholds and fully heal."""
        level = stats.level + 1
        max_hp = ProgressionCurve.max_hp_for_level(level)
        return stats.model_copy(
            update={
                "level": level,
                "next": ProgressionCurve.exp_to_next(level),
                "max_hp": max_hp,
                "hp": max_hp,
                "attack": stats.attack + LevelingSystem.ATTACK_PER_LEVEL,
                "defense": stats.defense + LevelingSystem.DEFENSE_PER_LEVEL,
            }
        )

    @staticmethod
    def leveled_up(before: PlayerStats, after: PlayerStats) -> bool:
        """Check whether any level was gained between two snapshots."""
        return after.level > before.level
