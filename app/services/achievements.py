"""Achievement evaluator: unlock badges from workout stats and accrue points.

Category dispatch goes through ``CATEGORY_RULES`` and special badges through
``SPECIAL_RULES``. An input that is missing (e.g. no streak data) or a
special id without a rule evaluates to "not met". Unlocks are monotonic:
an unlocked achievement is never evaluated again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from app.core.constants import POINTS_PER_ACHIEVEMENT
from app.core.enums import AchievementCategory
from app.core.timeutils import local_now
from app.schemas.achievement import Achievement
from app.schemas.stats import WorkoutStats

logger = logging.getLogger(__name__)

Rule = Callable[[WorkoutStats, Achievement], bool]


def _at_least(value: float | None, requirement: float) -> bool:
    if value is None:
        return False
    return value >= requirement


SPECIAL_RULES: dict[str, Rule] = {
    "weekly-goal": lambda stats, a: _at_least(stats.this_week_workouts, a.requirement),
    "early-bird": lambda stats, a: bool(stats.has_early_workout),
    "night-owl": lambda stats, a: bool(stats.has_late_workout),
}


def _special(stats: WorkoutStats, achievement: Achievement) -> bool:
    rule = SPECIAL_RULES.get(achievement.id)
    return rule(stats, achievement) if rule else False


CATEGORY_RULES: dict[AchievementCategory, Rule] = {
    AchievementCategory.WORKOUT: lambda stats, a: _at_least(stats.total_workouts, a.requirement),
    AchievementCategory.VOLUME: lambda stats, a: _at_least(stats.total_volume, a.requirement),
    AchievementCategory.STREAK: lambda stats, a: _at_least(stats.current_streak, a.requirement),
    AchievementCategory.SPECIAL: _special,
}


def is_met(stats: WorkoutStats, achievement: Achievement) -> bool:
    rule = CATEGORY_RULES.get(achievement.category)
    return rule(stats, achievement) if rule else False


def default_achievements(weekly_goal: int = 5) -> list[Achievement]:
    """The stock badge set; the weekly-goal threshold follows the user's profile."""
    w, v, s, x = (
        AchievementCategory.WORKOUT,
        AchievementCategory.VOLUME,
        AchievementCategory.STREAK,
        AchievementCategory.SPECIAL,
    )
    return [
        Achievement(id="first-workout", title="First Step", description="Finish your first workout", emoji="🎯", category=w, requirement=1),
        Achievement(id="workout-10", title="Warm-Up Lap", description="Finish 10 workouts", emoji="🔥", category=w, requirement=10),
        Achievement(id="workout-25", title="Committed", description="Finish 25 workouts", emoji="💪", category=w, requirement=25),
        Achievement(id="workout-50", title="Half Century", description="Finish 50 workouts", emoji="🏆", category=w, requirement=50),
        Achievement(id="workout-100", title="Centurion", description="Finish 100 workouts", emoji="👑", category=w, requirement=100),
        Achievement(id="volume-1t", title="One Tonne", description="Lift 1,000 kg in total", emoji="🏋️", category=v, requirement=1_000),
        Achievement(id="volume-10t", title="Ten Tonne Club", description="Lift 10,000 kg in total", emoji="💎", category=v, requirement=10_000),
        Achievement(id="volume-50t", title="Heavyweight", description="Lift 50,000 kg in total", emoji="🦾", category=v, requirement=50_000),
        Achievement(id="volume-100t", title="Beast", description="Lift 100,000 kg in total", emoji="🔱", category=v, requirement=100_000),
        Achievement(id="streak-3", title="Three Days", description="Train 3 days in a row", emoji="⚡", category=s, requirement=3),
        Achievement(id="streak-7", title="One Week", description="Train 7 days in a row", emoji="🌟", category=s, requirement=7),
        Achievement(id="streak-30", title="One Month", description="Train 30 days in a row", emoji="🏅", category=s, requirement=30),
        Achievement(id="weekly-goal", title="Weekly Goal", description="Hit your weekly workout goal", emoji="✅", category=x, requirement=weekly_goal),
        Achievement(id="early-bird", title="Early Bird", description="Train before 7 AM", emoji="🌅", category=x, requirement=1),
        Achievement(id="night-owl", title="Night Owl", description="Train after 10 PM", emoji="🌙", category=x, requirement=1),
    ]


class AchievementEvaluator:
    """Holds achievement state for one user profile."""

    def __init__(
        self,
        achievements: Iterable[Achievement] | None = None,
        weekly_goal: int = 5,
        total_points: int = 0,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._achievements = list(achievements) if achievements is not None else default_achievements(weekly_goal)
        self._total_points = total_points
        self._clock = clock

    @property
    def achievements(self) -> list[Achievement]:
        return list(self._achievements)

    @property
    def total_points(self) -> int:
        return self._total_points

    def unlocked(self) -> list[Achievement]:
        return [a for a in self._achievements if a.is_unlocked]

    def locked(self) -> list[Achievement]:
        return [a for a in self._achievements if not a.is_unlocked]

    def check(self, stats: WorkoutStats) -> list[Achievement]:
        """Unlock every locked achievement whose rule now holds; return the new batch."""
        now = self._clock()
        newly_unlocked: list[Achievement] = []
        for index, achievement in enumerate(self._achievements):
            if achievement.is_unlocked or not is_met(stats, achievement):
                continue
            unlocked = achievement.model_copy(update={"is_unlocked": True, "unlocked_at": now})
            self._achievements[index] = unlocked
            newly_unlocked.append(unlocked)

        if newly_unlocked:
            self._total_points += POINTS_PER_ACHIEVEMENT * len(newly_unlocked)
            logger.info(
                "Unlocked %s (+%d points)",
                ", ".join(a.id for a in newly_unlocked),
                POINTS_PER_ACHIEVEMENT * len(newly_unlocked),
            )
        return newly_unlocked

    def unlock(self, achievement_id: str) -> Achievement | None:
        """Unlock one achievement by hand. Already unlocked or unknown ids award nothing."""
        for index, achievement in enumerate(self._achievements):
            if achievement.id != achievement_id:
                continue
            if achievement.is_unlocked:
                return achievement
            unlocked = achievement.model_copy(update={"is_unlocked": True, "unlocked_at": self._clock()})
            self._achievements[index] = unlocked
            self._total_points += POINTS_PER_ACHIEVEMENT
            logger.info("Unlocked %s manually", achievement_id)
            return unlocked
        return None
