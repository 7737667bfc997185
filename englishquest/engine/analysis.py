"""Deterministic weak-point analysis over session history."""

from pydantic import BaseModel, ConfigDict, Field

from englishquest.models.records import SessionRecord
from englishquest.models.stats import PlayerStats


class ModeInsight(BaseModel):
    """Per-mode performance metrics."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    mode: str = Field(description="Session mode")
    accuracy: float = Field(ge=0.0, le=1.0, description="Correct answers / questions")
    sessions: int = Field(ge=0, description="Sessions played in this mode")
    trend: float = Field(default=0.0, description="Recent accuracy minus prior accuracy")
    description: str = Field(default="", description="Readable summary")


class ActionSuggestion(BaseModel):
    """A readable next step for the player."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    mode: str = ""
    title: str
    description: str
    priority: str = Field(description="high, medium or low")


class WeaknessReport(BaseModel):
    """Weak points, strengths and a short action plan."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    weak_points: list[ModeInsight] = Field(default_factory=list)
    strength_points: list[ModeInsight] = Field(default_factory=list)
    recommendation: str = ""
    summary: str = ""
    action_plan: list[ActionSuggestion] = Field(default_factory=list)


class _ModeAccumulator:
    def __init__(self, mode: str) -> None:
        self.mode = mode
        self.sessions = 0
        self.total = 0
        self.correct = 0
        self.recent_total = 0
        self.recent_correct = 0
        self.prev_total = 0
        self.prev_correct = 0


class HistoryAnalyzer:
    """Builds a WeaknessReport from newest-first session records."""

    RECENT_WINDOW = 5
    PREVIOUS_WINDOW = 5
    WEAK_ACCURACY = 0.75
    STRONG_ACCURACY = 0.85
    MAX_LISTED = 2
    STREAK_TO_PROTECT = 3

    @staticmethod
    def analyze(sessions: list[SessionRecord], stats: PlayerStats) -> WeaknessReport:
        """
        Analyze session history.

        Args:
            sessions: Session records, newest first
            stats: Current player stats (HP and streak feed the action plan)

        Returns:
            WeaknessReport
        """
        if not sessions:
            return WeaknessReport(
                recommendation="Play some sessions to get an analysis!",
                summary="No sessions available yet.",
            )

        recent_end = min(len(sessions), HistoryAnalyzer.RECENT_WINDOW)
        prev_end = min(len(sessions), HistoryAnalyzer.RECENT_WINDOW + HistoryAnalyzer.PREVIOUS_WINDOW)

        accumulators: dict[str, _ModeAccumulator] = {}
        total_correct = 0
        total_questions = 0
        for i, session in enumerate(sessions):
            mode = session.mode.value
            acc = accumulators.setdefault(mode, _ModeAccumulator(mode))
            acc.sessions += 1
            acc.total += session.question_count
            acc.correct += session.correct_count
            total_correct += session.correct_count
            total_questions += session.question_count
            if i < recent_end:
                acc.recent_total += session.question_count
                acc.recent_correct += session.correct_count
            elif i < prev_end:
                acc.prev_total += session.question_count
                acc.prev_correct += session.correct_count

        insights = sorted(
            (HistoryAnalyzer._build_insight(acc) for acc in accumulators.values()),
            key=lambda insight: insight.accuracy,
        )
        weak, strong, recommendation = HistoryAnalyzer._weak_and_strong(insights)

        return WeaknessReport(
            weak_points=weak,
            strength_points=strong,
            recommendation=recommendation,
            summary=HistoryAnalyzer._summary(len(sessions), total_correct, total_questions),
            action_plan=HistoryAnalyzer._action_plan(stats, weak, strong),
        )

    @staticmethod
    def _ratio(correct: int, total: int) -> float:
        return min(1.0, correct / total) if total > 0 else 0.0

    @staticmethod
    def _build_insight(acc: _ModeAccumulator) -> ModeInsight:
        accuracy = HistoryAnalyzer._ratio(acc.correct, acc.total)
        description = f"{acc.sessions} sessions, {accuracy * 100:.0f}% accuracy"
        trend = 0.0
        if acc.recent_total > 0 or acc.prev_total > 0:
            recent_avg = HistoryAnalyzer._ratio(acc.recent_correct, acc.recent_total)
            prev_avg = HistoryAnalyzer._ratio(acc.prev_correct, acc.prev_total)
            description = f"Recent {recent_avg * 100:.0f}% vs prior {prev_avg * 100:.0f}%"
            if acc.recent_total > 0 and acc.prev_total > 0:
                trend = recent_avg - prev_avg
        return ModeInsight(
            mode=acc.mode,
            accuracy=accuracy,
            sessions=acc.sessions,
            trend=trend,
            description=description,
        )

    @staticmethod
    def _weak_and_strong(insights: list[ModeInsight]) -> tuple[list[ModeInsight], list[ModeInsight], str]:
        weak = [i for i in insights if i.accuracy < HistoryAnalyzer.WEAK_ACCURACY][: HistoryAnalyzer.MAX_LISTED]
        strong = [i for i in reversed(insights) if i.accuracy > HistoryAnalyzer.STRONG_ACCURACY][
            : HistoryAnalyzer.MAX_LISTED
        ]

        if weak:
            recommendation = f"Focus on {weak[0].mode}. Try playing {weak[0].mode} sessions."
        elif strong:
            recommendation = "Great job! You're strong in all areas."
        else:
            recommendation = "No clear patterns yet. Keep playing!"
        return weak, strong, recommendation

    @staticmethod
    def _summary(session_count: int, correct: int, questions: int) -> str:
        if session_count == 0 or questions == 0:
            return "No data to summarize yet."
        overall = correct / questions * 100
        return f"Analyzed {session_count} sessions ({questions} questions) with {overall:.0f}% accuracy overall."

    @staticmethod
    def _action_plan(
        stats: PlayerStats, weak: list[ModeInsight], strong: list[ModeInsight]
    ) -> list[ActionSuggestion]:
        plan = []
        if stats.max_hp > 0 and stats.hp < stats.max_hp // 2:
            plan.append(
                ActionSuggestion(
                    title="Recover HP",
                    description=f"HP is {stats.hp}/{stats.max_hp}. Run a lighter mode to rebuild HP before tackling harder fights.",
                    priority="high",
                )
            )
        if weak:
            entry = weak[0]
            plan.append(
                ActionSuggestion(
                    mode=entry.mode,
                    title=f"Focus on {entry.mode}",
                    description=f"Accuracy {entry.accuracy * 100:.0f}%. Spend two sessions reviewing {entry.mode} mode mistakes.",
                    priority="high",
                )
            )
        else:
            plan.append(
                ActionSuggestion(
                    title="Keep the pace",
                    description="No pronounced weak points. Rotate through high-accuracy modes to maintain streaks.",
                    priority="medium",
                )
            )
        if stats.streak >= HistoryAnalyzer.STREAK_TO_PROTECT:
            plan.append(
                ActionSuggestion(
                    title="Protect streak",
                    description=f"Streak {stats.streak} days. Pick quick, high-accuracy runs to lock it in.",
                    priority="medium",
                )
            )
        if strong:
            top = strong[0]
            plan.append(
                ActionSuggestion(
                    mode=top.mode,
                    title=f"Use {top.mode} for bonus EXP",
                    description=f"You're strong in {top.mode}. Lean on it for a confident run.",
                    priority="low",
                )
            )
        return plan
