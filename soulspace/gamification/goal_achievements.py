"""
Goal Achievements

Derives the goals overview from a user's goal list:
- Per-category counts and completion percentage
- Overall completion rate
- Goal achievements with progress toward unlocking

Works on the single-assignment partition from goal_categorizer, so a goal
counts toward exactly one category.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence
import logging

from soulspace.gamification.goal_categorizer import CATEGORY_INFO, categorize_all
from soulspace.models.goal import (
    CategorySummary,
    Goal,
    GoalAchievement,
    GoalCategory,
    GoalStatus,
)

logger = logging.getLogger(__name__)

RECENT_COMPLETION_WINDOW = timedelta(days=7)


def completion_rate(goals: Sequence[Goal]) -> float:
    """Percentage of goals completed, 0.0 for no goals"""
    if not goals:
        return 0.0
    completed = sum(1 for goal in goals if goal.status == GoalStatus.COMPLETED)
    return completed / len(goals) * 100


def summarize_categories(goals: Sequence[Goal]) -> List[CategorySummary]:
    """Count and completion percentage for every category, in category order"""
    summaries = []

    for category, bucket in categorize_all(goals).items():
        info = CATEGORY_INFO[category]
        completed = sum(1 for goal in bucket if goal.status == GoalStatus.COMPLETED)
        summaries.append(CategorySummary(
            category=category,
            title=info.title,
            icon=info.icon,
            description=info.description,
            count=len(bucket),
            completed=completed,
            progress=completion_rate(bucket),
        ))

    return summaries


def _has_recent_completion(goals: Sequence[Goal], now: datetime) -> bool:
    completed_times = [
        goal.updated_at for goal in goals
        if goal.status == GoalStatus.COMPLETED and goal.updated_at is not None
    ]
    if not completed_times:
        return False
    latest = max(completed_times)
    if latest.tzinfo is None:
        latest = latest.replace(tzinfo=timezone.utc)
    return now - latest < RECENT_COMPLETION_WINDOW


def _count(key: str, name: str, description: str, value: int, target: int) -> GoalAchievement:
    return GoalAchievement(
        key=key,
        name=name,
        description=description,
        earned=value >= target,
        progress=min(value, target),
        max_progress=target,
    )


def evaluate_goal_achievements(
    goals: Sequence[Goal],
    now: Optional[datetime] = None
) -> List[GoalAchievement]:
    """
    Evaluate every goal achievement against a goal list

    Args:
        goals: All of the user's goals
        now: Reference time for "this week" checks (defaults to current UTC time)

    Returns:
        All achievements, earned or not, with progress toward each
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    total = len(goals)
    completed = sum(1 for goal in goals if goal.status == GoalStatus.COMPLETED)
    rate = completion_rate(goals)
    summaries: Dict[GoalCategory, CategorySummary] = {
        summary.category: summary for summary in summarize_categories(goals)
    }
    active_categories = sum(1 for summary in summaries.values() if summary.count > 0)
    recent = _has_recent_completion(goals, now)

    achievements = [
        # Basic
        _count("goal_setter", "Goal Setter", "Created your first goal", total, 1),
        _count("first_success", "First Success", "Completed your first goal", completed, 1),

        # Quantity
        _count("goal_crusher", "Goal Crusher", "Completed 5+ goals", completed, 5),
        _count("goal_master", "Goal Master", "Completed 10+ goals", completed, 10),
        _count("goal_legend", "Goal Legend", "Completed 25+ goals", completed, 25),

        # Quality
        GoalAchievement(
            key="perfect_score",
            name="Perfect Score",
            description="100% completion rate",
            earned=rate == 100 and total > 0,
            progress=round(rate),
            max_progress=100,
        ),
        GoalAchievement(
            key="high_achiever",
            name="High Achiever",
            description="80%+ completion rate",
            earned=rate >= 80 and total > 0,
            progress=round(rate),
            max_progress=100,
        ),

        # Category spread; progress is the raw count, not capped
        GoalAchievement(
            key="well_rounded",
            name="Well-Rounded",
            description="Goals in 3+ categories",
            earned=active_categories >= 3,
            progress=active_categories,
            max_progress=3,
        ),
        GoalAchievement(
            key="category_master",
            name="Category Master",
            description="Goals in 5+ categories",
            earned=active_categories >= 5,
            progress=active_categories,
            max_progress=5,
        ),
    ]

    # Specific categories
    for key, name, description, category in (
        ("digital_wellness", "Digital Wellness", "Completed digital wellness goals", GoalCategory.DIGITAL),
        ("fitness_enthusiast", "Fitness Enthusiast", "Completed physical health goals", GoalCategory.PHYSICAL),
        ("mindful_soul", "Mindful Soul", "Completed mindfulness goals", GoalCategory.MINDFULNESS),
        ("lifelong_learner", "Lifelong Learner", "Completed learning goals", GoalCategory.LEARNING),
    ):
        category_completed = summaries[category].completed
        achievements.append(GoalAchievement(
            key=key,
            name=name,
            description=description,
            earned=category_completed > 0,
            progress=category_completed,
            max_progress=1,
        ))

    achievements.extend([
        GoalAchievement(
            key="recent_success",
            name="Recent Success",
            description="Completed a goal this week",
            earned=recent,
            progress=1 if recent else 0,
            max_progress=1,
        ),
        _count("streak_master", "Streak Master", "Completed 3 goals in a row", completed, 3),
        _count("consistency_king", "Consistency King", "Completed 7 goals in a row", completed, 7),
    ])

    earned = [achievement.key for achievement in achievements if achievement.earned]
    logger.debug(f"Goal achievements earned: {earned}")

    return achievements


def milestone_achievement_keys(total_completed: int, reached_hundred: bool) -> List[str]:
    """
    Achievement keys to award after a goal update

    Only exact milestone counts award, so re-awarding is avoided when the
    count passes a milestone again later.
    """
    keys = []
    if total_completed == 1:
        keys.append("first_goal_completed")
    if total_completed == 3:
        keys.append("streak_3")
    if total_completed == 5:
        keys.append("streak_5")
    if reached_hundred:
        keys.append("progress_100")
    return keys
