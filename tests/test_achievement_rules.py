"""Tests for the badge rules."""

from conftest import make_records
from fitspark.models.achievement import BadgeType
from fitspark.stats.achievement_rules import AchievementRules, evaluate_achievements

T, F = True, False


class TestEvaluateAchievements:
    """Tests for evaluate_achievements."""

    def test_first_workout(self):
        earned = evaluate_achievements(1, make_records([T]), set())
        assert earned == [BadgeType.FIRST_WORKOUT]

    def test_first_workout_requires_exact_count(self):
        """Thresholds are exact: a count of 2 does not award first-workout."""
        earned = evaluate_achievements(2, make_records([T, T]), set())
        assert BadgeType.FIRST_WORKOUT not in earned

    def test_first_week(self):
        earned = evaluate_achievements(7, make_records([T] * 5), {"first-workout", "consistency"})
        assert earned == [BadgeType.FIRST_WEEK]

    def test_eighth_workout_awards_nothing_new(self):
        earned = evaluate_achievements(8, make_records([T] * 5), {"first-workout", "consistency"})
        assert earned == []

    def test_consistency(self):
        earned = evaluate_achievements(5, make_records([T] * 5), set())
        assert earned == [BadgeType.CONSISTENCY]

    def test_consistency_needs_all_five_completed(self):
        earned = evaluate_achievements(4, make_records([T, T, F, T, T]), set())
        assert BadgeType.CONSISTENCY not in earned

    def test_consistency_needs_five_records(self):
        earned = evaluate_achievements(4, make_records([T] * 4), set())
        assert BadgeType.CONSISTENCY not in earned

    def test_rule_order_when_several_fire(self):
        rules = AchievementRules(first_week_count=1, consistency_window=1)
        earned = evaluate_achievements(1, make_records([T]), set(), rules)
        assert earned == [BadgeType.FIRST_WORKOUT, BadgeType.FIRST_WEEK, BadgeType.CONSISTENCY]

    def test_existing_badges_never_reemitted(self):
        held = {BadgeType.FIRST_WORKOUT, BadgeType.CONSISTENCY}
        assert evaluate_achievements(1, make_records([T]), held) == []
        assert evaluate_achievements(5, make_records([T] * 5), held) == []

    def test_accepts_badge_identifiers_as_strings(self):
        assert evaluate_achievements(1, make_records([T]), {"first-workout"}) == []
