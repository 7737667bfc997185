"""Per-mode session settlement."""

import logging
from datetime import datetime
from typing import Optional, Sequence

from englishquest.engine.context import GameContext
from englishquest.engine.damage import DamageSystem
from englishquest.engine.leveling import LevelingSystem
from englishquest.engine.progression import ProgressionCurve
from englishquest.models.records import SessionRecord
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
from englishquest.models.stats import PlayerStats

logger = logging.getLogger(__name__.split(".")[-1])

EMPTY_SESSION_NOTE = "no answers"


class SessionSettlement:
    """
    Turns a session's judged answers into stat changes.

    Quiz modes (vocab, grammar, listening) deal a fixed damage per miss sized
    so that one miss more than the session allows empties a full HP bar. A
    faint stops the session at the fatal answer and settles it as failed.
    Spelling and tavern modes grade each prompt and settle once at the end.
    """

    VOCAB_BASE_EXP = 4
    GRAMMAR_BASE_EXP = 3
    LISTENING_BASE_EXP = 5

    GRAMMAR_DEFENSE_PER_CORRECT = 0.2

    # outcome -> (raw EXP, damage)
    SPELLING_RULES = {
        SpellingOutcome.PERFECT: (5, 0),
        SpellingOutcome.NEAR: (2, 5),
        SpellingOutcome.FAIL: (1, 12),
    }
    # outcome -> (raw EXP, gold)
    TAVERN_RULES = {
        TavernOutcome.SUCCESS: (5, 10),
        TavernOutcome.NORMAL: (3, 5),
        TavernOutcome.FAIL: (1, 0),
    }
    UNKNOWN_OUTCOME_EXP = 1

    def __init__(self, context: GameContext) -> None:
        """
        Initialize settlement.

        Args:
            context: Active player and store used to persist results
        """
        self._context = context

    @property
    def context(self) -> GameContext:
        """Get game context."""
        return self._context

    def run_vocab_session(
        self, stats: PlayerStats, answers: Sequence[VocabAnswer], started_at: Optional[datetime] = None
    ) -> tuple[PlayerStats, SessionSummary]:
        """Settle a vocabulary battle."""
        return self._run_quiz_session(SessionMode.VOCAB, self.VOCAB_BASE_EXP, stats, answers, started_at)

    def run_grammar_session(
        self, stats: PlayerStats, answers: Sequence[GrammarAnswer], started_at: Optional[datetime] = None
    ) -> tuple[PlayerStats, SessionSummary]:
        """Settle a grammar dungeon run. Each correct floor also adds defense."""
        return self._run_quiz_session(
            SessionMode.GRAMMAR,
            self.GRAMMAR_BASE_EXP,
            stats,
            answers,
            started_at,
            defense_per_correct=self.GRAMMAR_DEFENSE_PER_CORRECT,
        )

    def run_listening_session(
        self, stats: PlayerStats, answers: Sequence[ListeningAnswer], started_at: Optional[datetime] = None
    ) -> tuple[PlayerStats, SessionSummary]:
        """Settle a listening cave run."""
        return self._run_quiz_session(
            SessionMode.LISTENING, self.LISTENING_BASE_EXP, stats, answers, started_at
        )

    def _run_quiz_session(
        self,
        mode: SessionMode,
        base_exp: int,
        stats: PlayerStats,
        answers: Sequence[QuizAnswer],
        started_at: Optional[datetime],
        defense_per_correct: float = 0.0,
    ) -> tuple[PlayerStats, SessionSummary]:
        started_at = started_at or self._context.now()
        before = stats
        stats = DamageSystem.sync_max_hp(stats)

        question_count = len(answers)
        misses = ProgressionCurve.allowed_misses(question_count)
        dmg = ProgressionCurve.damage_per_miss(stats.max_hp, misses)
        _, tier_mul = ProgressionCurve.tier_for_level(stats.level)
        q_exp = ProgressionCurve.q_exp_for(base_exp, tier_mul, rare=False)

        sum_correct_exp = 0
        hp_delta = 0
        correct = 0
        processed = 0
        best_combo = stats.combo
        fainted = False

        for answer in answers:
            processed += 1
            if answer.correct:
                stats = stats.add_combo()
                best_combo = max(best_combo, stats.combo)
                sum_correct_exp += q_exp
                correct += 1
                continue

            # Miss damage bypasses damage reduction
            stats = stats.reset_combo()
            hp_delta -= dmg
            hp = stats.hp - dmg
            if hp <= 0:
                stats = stats.model_copy(update={"hp": 0})
                fainted = True
                logger.debug(f"{mode.value}: fainted at question {processed}/{question_count}")
                break
            stats = stats.model_copy(update={"hp": hp})

        defense_delta = defense_per_correct * correct
        if defense_delta:
            stats = stats.add_defense(defense_delta)

        exp_lost = 0
        if not fainted and processed == question_count:
            clear_bonus = ProgressionCurve.clear_bonus(question_count, base_exp, tier_mul)
            session_exp = ProgressionCurve.session_exp_clear(
                sum_correct_exp, clear_bonus, correct == question_count, question_count, perfect_enabled=True
            )
            stats = LevelingSystem.gain_exp(stats, session_exp)
        else:
            session_exp = ProgressionCurve.session_exp_fail(sum_correct_exp, ProgressionCurve.FAIL_FACTOR)
            stats = LevelingSystem.gain_exp(stats, session_exp)
            if fainted:
                exp_before_penalty = stats.exp
                stats = DamageSystem.apply_faint_penalty(stats)
                exp_lost = exp_before_penalty - stats.exp

        summary = SessionSummary(
            mode=mode,
            correct=correct,
            exp_delta=session_exp,
            hp_delta=hp_delta,
            defense_delta=defense_delta,
            best_combo=best_combo,
            fainted=fainted,
            leveled_up=LevelingSystem.leveled_up(before, stats),
            note=EMPTY_SESSION_NOTE if question_count == 0 else "",
        )
        self._persist(stats, summary, question_count, started_at, exp_lost)
        return stats, summary

    def run_spelling_session(
        self,
        stats: PlayerStats,
        outcomes: Sequence[SpellingOutcome],
        started_at: Optional[datetime] = None,
    ) -> tuple[PlayerStats, SessionSummary]:
        """
        Settle a spelling challenge.

        EXP is a flat sum per outcome without tier scaling. Near and failed
        spellings deal damage through apply_damage, so damage reduction applies.
        The faint check happens once, after EXP is awarded.
        """
        started_at = started_at or self._context.now()
        before = stats
        stats = DamageSystem.sync_max_hp(stats)

        exp_delta = 0
        hp_delta = 0
        correct = 0
        for outcome in outcomes:
            gained, dmg = self.SPELLING_RULES.get(outcome, (self.UNKNOWN_OUTCOME_EXP, 0))
            exp_delta += gained
            if outcome == SpellingOutcome.PERFECT:
                correct += 1
            if dmg:
                hp_before = stats.hp
                stats = DamageSystem.apply_damage(stats, dmg)
                hp_delta += stats.hp - hp_before

        stats = LevelingSystem.gain_exp(stats, exp_delta)
        exp_before_penalty = stats.exp
        stats, fainted = DamageSystem.apply_faint(stats)

        summary = SessionSummary(
            mode=SessionMode.SPELLING,
            correct=correct,
            exp_delta=exp_delta,
            hp_delta=hp_delta,
            fainted=fainted,
            leveled_up=LevelingSystem.leveled_up(before, stats),
            note=EMPTY_SESSION_NOTE if not outcomes else "",
        )
        self._persist(stats, summary, len(outcomes), started_at, exp_before_penalty - stats.exp)
        return stats, summary

    def run_tavern_session(
        self,
        stats: PlayerStats,
        outcomes: Sequence[TavernOutcome],
        started_at: Optional[datetime] = None,
    ) -> tuple[PlayerStats, SessionSummary]:
        """Settle a conversation tavern visit. No damage is dealt in this mode."""
        started_at = started_at or self._context.now()
        before = stats
        stats = DamageSystem.sync_max_hp(stats)

        exp_delta = 0
        gold_delta = 0
        correct = 0
        for outcome in outcomes:
            gained, gold = self.TAVERN_RULES.get(outcome, (self.UNKNOWN_OUTCOME_EXP, 0))
            exp_delta += gained
            gold_delta += gold
            if outcome == TavernOutcome.SUCCESS:
                correct += 1

        stats = LevelingSystem.gain_exp(stats, exp_delta)
        stats = stats.add_gold(gold_delta)
        exp_before_penalty = stats.exp
        stats, fainted = DamageSystem.apply_faint(stats)

        summary = SessionSummary(
            mode=SessionMode.TAVERN,
            correct=correct,
            exp_delta=exp_delta,
            gold_delta=gold_delta,
            fainted=fainted,
            leveled_up=LevelingSystem.leveled_up(before, stats),
            note=EMPTY_SESSION_NOTE if not outcomes else "",
        )
        self._persist(stats, summary, len(outcomes), started_at, exp_before_penalty - stats.exp)
        return stats, summary

    def _persist(
        self,
        stats: PlayerStats,
        summary: SessionSummary,
        question_count: int,
        started_at: datetime,
        exp_lost: int,
    ) -> None:
        """Save the session record and the updated profile. Failures are logged only."""
        logger.info(
            f"{summary.mode.value} settled: {summary.correct}/{question_count} correct, "
            f"exp {summary.exp_delta:+d}, hp {summary.hp_delta:+d}, "
            f"fainted={summary.fainted}, leveled_up={summary.leveled_up}"
        )

        record = SessionRecord.from_summary(
            player_id=self._context.player_id,
            summary=summary,
            question_count=question_count,
            started_at=started_at,
            ended_at=self._context.now(),
            exp_lost=exp_lost,
        )
        try:
            self._context.save_session(record)
        except Exception as e:
            logger.warning(f"Failed to save {summary.mode.value} session record: {e}")

        try:
            self._context.save_stats(stats)
        except Exception as e:
            logger.warning(f"Failed to persist profile: {e}")
