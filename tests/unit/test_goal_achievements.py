"""Unit tests for goal statistics and achievements (soulspace/gamification/goal_achievements.py)"""
from datetime import datetime, timezone

import pytest

from soulspace.gamification.goal_achievements import (
    completion_rate,
    evaluate_goal_achievements,
    milestone_achievement_keys,
    summarize_categories,
)
from soulspace.models.goal import GoalCategory, GoalStatus


NOW = datetime(2026, 10, 5, 9, 0, 0, tzinfo=timezone.utc)


def _by_key(achievements):
    return {achievement.key: achievement for achievement in achievements}


# ============================================================================
# Completion Rate & Category Summary Tests
# ============================================================================

def test_completion_rate(sample_goals):
    """Test completion percentage"""
    assert completion_rate(sample_goals) == pytest.approx(2 / 7 * 100)


def test_completion_rate_no_goals():
    """Test no goals gives 0%"""
    assert completion_rate([]) == 0.0


def test_summarize_categories(sample_goals):
    """Test per-category counts follow the single-assignment partition"""
    summaries = summarize_categories(sample_goals)
    by_category = {summary.category: summary for summary in summaries}

    assert [summary.category for summary in summaries][-1] == GoalCategory.GENERAL
    assert sum(summary.count for summary in summaries) == len(sample_goals)

    physical = by_category[GoalCategory.PHYSICAL]
    assert physical.count == 2
    assert physical.completed == 1
    assert physical.progress == 50.0
    assert physical.title == "Physical Health"

    assert by_category[GoalCategory.LEARNING].progress == 100.0
    assert by_category[GoalCategory.CREATIVE].count == 0
    assert by_category[GoalCategory.CREATIVE].progress == 0.0


# ============================================================================
# Achievement Tests
# ============================================================================

def test_achievements_no_goals():
    """Test nothing is earned without goals"""
    achievements = evaluate_goal_achievements([], now=NOW)

    assert not any(achievement.earned for achievement in achievements)
    assert _by_key(achievements)["perfect_score"].progress == 0


def test_achievements_sample_goals(sample_goals):
    """Test achievements for a mixed goal list"""
    achievements = _by_key(evaluate_goal_achievements(sample_goals, now=NOW))

    assert achievements["goal_setter"].earned
    assert achievements["first_success"].earned
    assert not achievements["goal_crusher"].earned
    assert achievements["goal_crusher"].progress == 2
    assert achievements["goal_crusher"].max_progress == 5

    assert not achievements["perfect_score"].earned
    assert not achievements["high_achiever"].earned
    assert achievements["high_achiever"].progress == 29

    assert achievements["well_rounded"].earned
    assert achievements["category_master"].earned


def test_achievements_category_progress_not_capped(sample_goals):
    """Test category spread achievements report the raw category count"""
    achievements = _by_key(evaluate_goal_achievements(sample_goals, now=NOW))

    # Physical, mindfulness, learning, financial, digital and general
    assert achievements["well_rounded"].progress == 6
    assert achievements["well_rounded"].max_progress == 3
    assert achievements["category_master"].progress == 6
    assert achievements["category_master"].max_progress == 5

    assert achievements["fitness_enthusiast"].earned
    assert achievements["lifelong_learner"].earned
    assert not achievements["mindful_soul"].earned
    assert not achievements["digital_wellness"].earned

    assert achievements["recent_success"].earned
    assert not achievements["streak_master"].earned


def test_achievements_perfect_score(goal_factory):
    """Test 100% completion earns both quality achievements"""
    goals = [
        goal_factory("Run a 5k", status=GoalStatus.COMPLETED),
        goal_factory("Study chemistry", status=GoalStatus.COMPLETED),
        goal_factory("Drink more water", status=GoalStatus.COMPLETED),
    ]

    achievements = _by_key(evaluate_goal_achievements(goals, now=NOW))

    assert achievements["perfect_score"].earned
    assert achievements["high_achiever"].earned
    assert achievements["streak_master"].earned
    assert achievements["well_rounded"].earned
    assert not achievements["category_master"].earned


def test_achievements_recent_success_window(sample_goals):
    """Test completions older than a week are not recent"""
    later = datetime(2026, 10, 20, tzinfo=timezone.utc)

    achievements = _by_key(evaluate_goal_achievements(sample_goals, now=later))

    assert not achievements["recent_success"].earned


def test_achievements_naive_now(sample_goals):
    """Test a naive reference time is treated as UTC"""
    achievements = _by_key(evaluate_goal_achievements(sample_goals, now=datetime(2026, 10, 5)))

    assert achievements["recent_success"].earned


# ============================================================================
# Milestone Key Tests
# ============================================================================

@pytest.mark.parametrize("total_completed,reached_hundred,expected", [
    (0, False, []),
    (1, False, ["first_goal_completed"]),
    (2, False, []),
    (3, True, ["streak_3", "progress_100"]),
    (5, False, ["streak_5"]),
    (6, False, []),
])
def test_milestone_achievement_keys(total_completed, reached_hundred, expected):
    """Test milestone keys only fire on exact counts"""
    assert milestone_achievement_keys(total_completed, reached_hundred) == expected
