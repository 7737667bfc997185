"""Progression curve: HP, miss allowance, tiers and EXP formulas."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


class ProgressionCurve:
    """Pure balance formulas. Inputs are clamped, never rejected."""

    # (first level, last level, multiplier); the last band is open-ended
    TIERS = [
        (1, 19, 1.0),
        (20, 49, 1.2),
        (50, 99, 1.5),
        (100, 199, 1.9),
        (200, 399, 2.4),
    ]
    TOP_TIER_MULTIPLIER = 3.0

    MISS_RATIO = 0.20
    CLEAR_BONUS_RATIO = 0.5
    RARE_MULTIPLIER = 2.0
    FAIL_FACTOR = 0.40

    @staticmethod
    def max_hp_for_level(level: int) -> int:
        """
        Maximum HP for a level.

        Levels 1..30 grow linearly from 30 to 300 HP, levels above 30 grow
        linearly from 300 toward 999 HP at level 999.
        """
        level = max(1, level)
        if level <= 30:
            return 30 + round_half_up(270 * (level - 1) / 29)
        return 300 + round_half_up(699 * (level - 30) / 969)

    @staticmethod
    def allowed_misses(question_count: int) -> int:
        """Number of misses a session of the given length tolerates."""
        if question_count <= 0:
            return 1
        base = math.ceil(question_count * ProgressionCurve.MISS_RATIO)
        if question_count <= 10:
            return max(2, base)
        return max(1, base)

    @staticmethod
    def damage_per_miss(max_hp: int, misses: int) -> int:
        """Damage per miss such that misses + 1 misses always empty a full HP bar."""
        misses = max(0, misses)
        return math.ceil(max_hp / (misses + 1))

    @staticmethod
    def tier_for_level(level: int) -> tuple[int, float]:
        """Return (tier index, EXP multiplier) for a level."""
        for index, (low, high, multiplier) in enumerate(ProgressionCurve.TIERS, start=1):
            if low <= level <= high:
                return index, multiplier
        if level < 1:
            return 1, ProgressionCurve.TIERS[0][2]
        return len(ProgressionCurve.TIERS) + 1, ProgressionCurve.TOP_TIER_MULTIPLIER

    @staticmethod
    def q_exp_for(base_exp: int, tier_mul: float, rare: bool = False) -> int:
        """EXP for a single correct answer."""
        rarity_mul = ProgressionCurve.RARE_MULTIPLIER if rare else 1.0
        return round_half_up(base_exp * tier_mul * rarity_mul)

    @staticmethod
    def clear_bonus(question_count: int, base_exp: int, tier_mul: float) -> int:
        """Flat bonus for finishing every question of a session."""
        return round_half_up(question_count * base_exp * tier_mul * ProgressionCurve.CLEAR_BONUS_RATIO)

    @staticmethod
    def perfect_bonus_mul(question_count: int) -> float:
        """Multiplier applied to a cleared session with no misses."""
        return 1.20 + 0.01 * question_count

    @staticmethod
    def session_exp_clear(
        sum_correct_exp: int,
        clear_bonus: int,
        all_correct: bool,
        question_count: int,
        perfect_enabled: bool = True,
    ) -> int:
        """Session EXP for a cleared session."""
        total = sum_correct_exp + clear_bonus
        if all_correct and perfect_enabled:
            total = round_half_up(total * ProgressionCurve.perfect_bonus_mul(question_count))
        return total

    @staticmethod
    def session_exp_fail(sum_correct_exp: int, fail_factor: float = FAIL_FACTOR) -> int:
        """Session EXP for a failed session."""
        fail_factor = max(0.0, fail_factor)
        return math.floor(sum_correct_exp * fail_factor)

    @staticmethod
    def exp_to_next(level: int) -> int:
        """EXP required to advance from the given level."""
        level = max(1, level)
        if level <= 99:
            return 30 + 5 * (level - 1)
        return 500 + 10 * (level - 100)
