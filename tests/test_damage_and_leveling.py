"""Tests for PlayerStats mutators, DamageSystem and LevelingSystem."""

import pytest

from englishquest.engine.damage import DamageSystem
from englishquest.engine.leveling import LevelingSystem
from englishquest.engine.progression import ProgressionCurve
from englishquest.models.stats import PlayerStats, default_stats

from conftest import make_stats


class TestPlayerStats:
    """Test suite for PlayerStats and its leaf mutators."""

    def test_default_stats_consistent(self):
        """Test new-game stats satisfy the level invariants."""
        stats = default_stats()
        assert stats.level == 1
        assert stats.exp == 0
        assert stats.next == ProgressionCurve.exp_to_next(1)
        assert stats.max_hp == ProgressionCurve.max_hp_for_level(1)
        assert stats.hp == stats.max_hp
        assert stats.exp_boost == 0.0
        assert stats.damage_reduction == 0.0

    def test_stats_are_immutable(self):
        """Test stats cannot be mutated in place."""
        stats = default_stats()
        with pytest.raises(Exception):
            stats.hp = 1

    def test_combo_mutators(self):
        """Test combo increments and resets on copies."""
        stats = default_stats()
        comboed = stats.add_combo().add_combo()
        assert comboed.combo == 2
        assert stats.combo == 0
        assert comboed.reset_combo().combo == 0

    def test_add_defense(self):
        """Test defense accumulates."""
        assert default_stats().add_defense(0.2).add_defense(0.2).defense == pytest.approx(0.4)

    def test_add_gold_never_negative(self):
        """Test gold is floored at zero."""
        stats = default_stats().add_gold(10)
        assert stats.gold == 10
        assert stats.add_gold(-25).gold == 0

    def test_damage_reduction_must_be_below_one(self):
        """Test validation rejects full damage immunity."""
        with pytest.raises(Exception):
            PlayerStats(damage_reduction=1.0)


class TestDamageSystem:
    """Test suite for DamageSystem."""

    @pytest.mark.parametrize("dmg", [0, 1, 7, 50, 113, 114, 500])
    @pytest.mark.parametrize("reduction", [0.0, 0.25, 0.9])
    def test_hp_clamped_and_never_raised(self, dmg, reduction):
        """Test apply_damage keeps HP within [0, previous HP]."""
        stats = make_stats(10, damage_reduction=reduction)
        result = DamageSystem.apply_damage(stats, dmg)
        assert 0 <= result.hp <= stats.hp

    def test_damage_reduction_applied(self):
        """Test reduced damage is rounded half up."""
        stats = make_stats(10, damage_reduction=0.25)
        assert DamageSystem.apply_damage(stats, 10).hp == 114 - 8

    def test_negative_damage_does_not_heal(self):
        """Test negative damage is floored at zero."""
        stats = make_stats(10, hp=50)
        assert DamageSystem.apply_damage(stats, -20).hp == 50

    def test_fainted(self):
        """Test faint detection at zero HP."""
        assert DamageSystem.fainted(make_stats(10, hp=0)) is True
        assert DamageSystem.fainted(make_stats(10, hp=1)) is False

    def test_faint_penalty(self):
        """Test faint penalty removes 5 EXP and restores half HP."""
        stats = make_stats(10, hp=0, exp=20)
        result = DamageSystem.apply_faint_penalty(stats)
        assert result.exp == 15
        assert result.hp == 57
        assert result.level == 10

    def test_faint_penalty_exp_floor(self):
        """Test faint penalty never pushes EXP below zero."""
        result = DamageSystem.apply_faint_penalty(make_stats(10, hp=0, exp=3))
        assert result.exp == 0

    def test_apply_faint_only_when_fainted(self):
        """Test apply_faint is a no-op for a standing player."""
        standing = make_stats(10, hp=10, exp=20)
        result, fainted = DamageSystem.apply_faint(standing)
        assert fainted is False
        assert result == standing

        result, fainted = DamageSystem.apply_faint(make_stats(10, hp=0, exp=20))
        assert fainted is True
        assert result.hp == 57

    def test_full_heal_resyncs_max_hp(self):
        """Test full heal normalizes stale MaxHP."""
        stale = PlayerStats(level=10, next=75, hp=40, max_hp=100)
        healed = DamageSystem.full_heal(stale)
        assert healed.max_hp == 114
        assert healed.hp == 114

    def test_sync_max_hp_clamps_without_healing(self):
        """Test resync keeps HP but clamps it into the new range."""
        low = DamageSystem.sync_max_hp(PlayerStats(level=10, next=75, hp=40, max_hp=100))
        assert low.max_hp == 114
        assert low.hp == 40

        high = DamageSystem.sync_max_hp(PlayerStats(level=1, next=30, hp=100, max_hp=100))
        assert high.max_hp == 30
        assert high.hp == 30

    def test_resync_refreshes_exp_threshold(self):
        """Test resync and full heal restore the level's EXP threshold."""
        stale = PlayerStats(level=2, exp=10, next=50, hp=20, max_hp=110)
        assert DamageSystem.sync_max_hp(stale).next == ProgressionCurve.exp_to_next(2)
        assert DamageSystem.full_heal(stale).next == ProgressionCurve.exp_to_next(2)


class TestLevelingSystem:
    """Test suite for LevelingSystem."""

    def test_gain_without_level_up(self):
        """Test EXP accumulates below the threshold."""
        stats = LevelingSystem.gain_exp(default_stats(), 29)
        assert stats.level == 1
        assert stats.exp == 29

    def test_single_level_up(self):
        """Test crossing one threshold levels up and fully heals."""
        start = default_stats().model_copy(update={"hp": 3})
        stats = LevelingSystem.gain_exp(start, 31)
        assert stats.level == 2
        assert stats.exp == 1
        assert stats.next == ProgressionCurve.exp_to_next(2)
        assert stats.max_hp == ProgressionCurve.max_hp_for_level(2)
        assert stats.hp == stats.max_hp
        assert stats.attack == start.attack + 2
        assert stats.defense == pytest.approx(start.defense + 1)

    def test_two_level_rollover(self):
        """Test a large gain crossing two thresholds levels up twice."""
        stats = LevelingSystem.gain_exp(default_stats(), 30 + 35 + 5)
        assert stats.level == 3
        assert stats.exp == 5
        assert stats.exp < stats.next
        assert stats.next == ProgressionCurve.exp_to_next(3)

    def test_exp_boost(self):
        """Test the EXP boost scales gains."""
        stats = LevelingSystem.gain_exp(default_stats().model_copy(update={"exp_boost": 0.5}), 9)
        assert stats.exp == 14  # 13.5 rounds up

    def test_negative_gain_ignored(self):
        """Test negative gains never remove EXP."""
        stats = make_stats(10, exp=20)
        assert LevelingSystem.gain_exp(stats, -50).exp == 20

    @pytest.mark.parametrize("gained", [0, 1, 29, 30, 75, 400, 5000])
    @pytest.mark.parametrize("level", [1, 10, 99, 100])
    def test_net_progress_never_decreases(self, gained, level):
        """Test (level, exp) never moves backwards on a gain."""
        stats = make_stats(level, exp=ProgressionCurve.exp_to_next(level) - 1)
        result = LevelingSystem.gain_exp(stats, gained)
        assert (result.level, result.exp) >= (stats.level, stats.exp)
        assert result.exp < result.next

    def test_leveled_up(self):
        """Test level comparison."""
        before = default_stats()
        assert LevelingSystem.leveled_up(before, LevelingSystem.level_up(before)) is True
        assert LevelingSystem.leveled_up(before, before) is False
