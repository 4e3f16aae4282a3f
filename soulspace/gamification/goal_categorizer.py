"""
Goal Categorizer

Assigns each goal to exactly one of ten categories by substring keyword
matching on the lower-cased "title description" text.

The nine specific categories are checked in CATEGORY_ORDER and the first
one with a keyword hit wins. GENERAL is the catch-all and is only returned
when nothing else matched.
"""

from typing import Dict, Iterable, List, Optional, Tuple
import logging

from soulspace.models.goal import CategoryInfo, Goal, GoalCategory

logger = logging.getLogger(__name__)


# Checked top to bottom; order is the tie-break
CATEGORY_KEYWORDS: Tuple[Tuple[GoalCategory, Tuple[str, ...]], ...] = (
    (GoalCategory.DIGITAL, (
        "screen", "digital", "phone", "social", "app", "online", "computer",
        "laptop", "tech", "internet", "gaming", "streaming",
    )),
    (GoalCategory.PHYSICAL, (
        "walk", "exercise", "fitness", "steps", "run", "jog", "gym", "workout",
        "sport", "bike", "swim", "dance", "hike", "cardio", "strength",
    )),
    (GoalCategory.MINDFULNESS, (
        "meditation", "meditate", "yoga", "mindfulness", "breathing", "relax",
        "stress", "anxiety", "sleep", "journal", "gratitude", "peace", "calm",
        "focus", "mental",
    )),
    (GoalCategory.LEARNING, (
        "learn", "study", "read", "book", "course", "skill", "language",
        "programming", "coding", "education", "knowledge", "practice",
    )),
    (GoalCategory.HEALTH, (
        "health", "diet", "nutrition", "water", "vitamin", "doctor", "medical",
        "checkup", "weight", "meal", "food", "drink",
    )),
    (GoalCategory.PRODUCTIVITY, (
        "productivity", "work", "task", "project", "deadline", "schedule",
        "time management", "organize", "efficiency", "focus",
    )),
    (GoalCategory.SOCIAL, (
        "social", "friend", "family", "relationship", "meet", "connect",
        "community", "network", "hangout", "party",
    )),
    (GoalCategory.FINANCIAL, (
        "money", "budget", "save", "invest", "financial", "debt", "income",
        "expense", "retirement", "wealth", "buy",
    )),
    (GoalCategory.CREATIVE, (
        "creative", "art", "music", "write", "draw", "paint", "design", "craft",
        "hobby", "photography",
    )),
)

CATEGORY_ORDER: Tuple[GoalCategory, ...] = tuple(
    category for category, _ in CATEGORY_KEYWORDS
) + (GoalCategory.GENERAL,)

CATEGORY_INFO: Dict[GoalCategory, CategoryInfo] = {
    info.key: info for info in (
        CategoryInfo(key=GoalCategory.DIGITAL, title="Digital Wellness", icon="📱",
                     description="Screen time, apps, tech habits"),
        CategoryInfo(key=GoalCategory.PHYSICAL, title="Physical Health", icon="🏃",
                     description="Exercise, fitness, sports"),
        CategoryInfo(key=GoalCategory.MINDFULNESS, title="Mindfulness", icon="🧘",
                     description="Meditation, yoga, mental health"),
        CategoryInfo(key=GoalCategory.LEARNING, title="Learning & Skills", icon="📚",
                     description="Education, courses, skill development"),
        CategoryInfo(key=GoalCategory.HEALTH, title="Health & Nutrition", icon="🏥",
                     description="Diet, nutrition, medical checkups"),
        CategoryInfo(key=GoalCategory.PRODUCTIVITY, title="Productivity", icon="⚡",
                     description="Work habits, time management"),
        CategoryInfo(key=GoalCategory.SOCIAL, title="Social & Relationships", icon="👥",
                     description="Social connections, family time"),
        CategoryInfo(key=GoalCategory.FINANCIAL, title="Financial", icon="💰",
                     description="Savings, budgeting, investments"),
        CategoryInfo(key=GoalCategory.CREATIVE, title="Creative", icon="🎨",
                     description="Art, music, writing, hobbies"),
        CategoryInfo(key=GoalCategory.GENERAL, title="General", icon="⭐",
                     description="Other personal goals"),
    )
}


def _normalize(title: str, description: Optional[str]) -> str:
    return f"{title.lower()} {(description or '').lower()}"


def categorize(title: str, description: Optional[str] = None) -> GoalCategory:
    """
    Categorize a goal from its title and optional description

    Args:
        title: Goal title
        description: Goal description, treated as "" when None

    Returns:
        First category in CATEGORY_ORDER with a keyword contained in the
        text, or GoalCategory.GENERAL
    """
    text = _normalize(title, description)

    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category

    return GoalCategory.GENERAL


def categorize_goal(goal: Goal) -> GoalCategory:
    """Categorize a Goal model"""
    return categorize(goal.title, goal.description)


def categorize_all(goals: Iterable[Goal]) -> Dict[GoalCategory, List[Goal]]:
    """
    Group goals by category

    Every category is present as a key (possibly empty), keys follow
    CATEGORY_ORDER, and goals keep their input order within a bucket.
    """
    buckets: Dict[GoalCategory, List[Goal]] = {category: [] for category in CATEGORY_ORDER}

    for goal in goals:
        buckets[categorize_goal(goal)].append(goal)

    logger.debug(
        "Categorized goals: "
        + ", ".join(f"{category.value}={len(items)}" for category, items in buckets.items() if items)
    )
    return buckets


def category_info(category: GoalCategory) -> CategoryInfo:
    """Display metadata (title, icon, description) for a category"""
    return CATEGORY_INFO[GoalCategory(category)]
