"""
Gamification core for SoulSpace

This module implements the progression and goals engine with:
- XP and leveling system
- Goal categorization
- Goal statistics and achievements
- In-memory progress store
"""

from soulspace.gamification.xp_system import (
    level_threshold,
    level_from_total_xp,
    apply_xp_grant,
    apply_event,
    progress_fraction,
)
from soulspace.gamification.goal_categorizer import categorize, categorize_all, category_info
from soulspace.gamification.goal_achievements import (
    summarize_categories,
    completion_rate,
    evaluate_goal_achievements,
)

__all__ = [
    "level_threshold",
    "level_from_total_xp",
    "apply_xp_grant",
    "apply_event",
    "progress_fraction",
    "categorize",
    "categorize_all",
    "category_info",
    "summarize_categories",
    "completion_rate",
    "evaluate_goal_achievements",
]
