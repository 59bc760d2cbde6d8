"""Tests for achievement evaluation and points."""

from app.core.constants import POINTS_PER_ACHIEVEMENT
from app.core.enums import AchievementCategory
from app.schemas.achievement import Achievement
from app.schemas.stats import WorkoutStats
from app.services.achievements import AchievementEvaluator, default_achievements
from tests.factories import NOW


def _evaluator(**kwargs) -> AchievementEvaluator:
    return AchievementEvaluator(clock=lambda: NOW, **kwargs)


def _ids(achievements) -> set:
    return {a.id for a in achievements}


class TestDefaults:
    def test_stock_badges(self):
        achievements = default_achievements()
        assert len(achievements) == 15
        assert len(_ids(achievements)) == 15
        assert not any(a.is_unlocked for a in achievements)

    def test_weekly_goal_follows_profile(self):
        weekly = next(a for a in default_achievements(weekly_goal=3) if a.id == "weekly-goal")
        assert weekly.requirement == 3


class TestCheck:
    def test_first_workout_unlocks_once(self):
        evaluator = _evaluator()

        first = evaluator.check(WorkoutStats(total_workouts=1))
        assert _ids(first) == {"first-workout"}
        assert first[0].unlocked_at == NOW
        assert evaluator.total_points == POINTS_PER_ACHIEVEMENT

        assert evaluator.check(WorkoutStats(total_workouts=1)) == []
        assert evaluator.total_points == POINTS_PER_ACHIEVEMENT

    def test_batch_awards_points_per_unlock(self):
        evaluator = _evaluator()
        unlocked = evaluator.check(WorkoutStats(total_workouts=10, total_volume=10_000))
        assert _ids(unlocked) == {"first-workout", "workout-10", "volume-1t", "volume-10t"}
        assert evaluator.total_points == 4 * POINTS_PER_ACHIEVEMENT

    def test_unlocks_are_never_revoked(self):
        evaluator = _evaluator()
        evaluator.check(WorkoutStats(total_workouts=1))
        evaluator.check(WorkoutStats())
        assert _ids(evaluator.unlocked()) == {"first-workout"}
        assert len(evaluator.locked()) == 14

    def test_streak_uses_current_streak(self):
        evaluator = _evaluator()
        assert _ids(evaluator.check(WorkoutStats(current_streak=7, longest_streak=7))) == {"streak-3", "streak-7"}

    def test_missing_streak_is_not_met(self):
        evaluator = _evaluator()
        assert evaluator.check(WorkoutStats(current_streak=None, longest_streak=40)) == []

    def test_weekly_goal(self):
        evaluator = _evaluator(weekly_goal=3)
        assert _ids(evaluator.check(WorkoutStats(this_week_workouts=2))) == set()
        assert "weekly-goal" in _ids(evaluator.check(WorkoutStats(this_week_workouts=3)))

    def test_time_of_day_badges(self):
        evaluator = _evaluator()
        unlocked = evaluator.check(WorkoutStats(has_early_workout=True, has_late_workout=True))
        assert _ids(unlocked) == {"early-bird", "night-owl"}

    def test_special_without_rule_is_not_met(self):
        mystery = Achievement(
            id="mystery", title="Mystery", category=AchievementCategory.SPECIAL, requirement=1
        )
        evaluator = _evaluator(achievements=[mystery])
        assert evaluator.check(WorkoutStats(total_workouts=100, has_early_workout=True)) == []


class TestManualUnlock:
    def test_unlock_is_idempotent(self):
        evaluator = _evaluator()
        achievement = evaluator.unlock("night-owl")
        assert achievement.is_unlocked
        assert evaluator.unlock("night-owl").unlocked_at == NOW
        assert evaluator.total_points == POINTS_PER_ACHIEVEMENT

    def test_unknown_id(self):
        evaluator = _evaluator()
        assert evaluator.unlock("does-not-exist") is None
        assert evaluator.total_points == 0

    def test_manually_unlocked_is_skipped_by_check(self):
        evaluator = _evaluator()
        evaluator.unlock("first-workout")
        assert evaluator.check(WorkoutStats(total_workouts=1)) == []
        assert evaluator.total_points == POINTS_PER_ACHIEVEMENT
