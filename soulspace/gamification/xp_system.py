"""
XP and Leveling System

Derives level progress from a lifetime XP total and applies XP grants.

Leveling Curve:
- Level n needs T(n) = floor(1000 * 1.2^(n-1)) XP to advance to n+1
- T(1) = 1000, T(2) = 1200, T(3) = 1440, T(4) = 1727, ...
  (float evaluation: 1.2 ** 3 is just under 1.728, and floor truncates)
- Thresholds past level ~3850 exceed float range; totals that reach them
  (roughly 10**309 XP and up) raise InvalidArgument

XP Award Rules:
- Goal completion: 50 XP + 10 calm points
- Quiz (PHQ-9/GAD-7) completion: 75 XP + 15 calm points
- Level-up bonus: 100 XP + 50 calm points (issued once by the caller)
- Daily challenge: XP and points set per challenge

Everything here is pure. Level, xp_in_level and xp_to_next are recomputed
from total_xp on every call and never stored on their own.
"""

from typing import Dict, Tuple
import logging
import math

from soulspace.exceptions import InvalidArgument
from soulspace.models.progress import (
    LevelInfo,
    ProgressionState,
    XPGrantEvent,
    XPGrantResult,
)

logger = logging.getLogger(__name__)

BASE_XP_PER_LEVEL = 1000
LEVEL_MULTIPLIER = 1.2

GOAL_COMPLETION = "goal_completion"
QUIZ_COMPLETION = "quiz_completion"
LEVEL_UP_BONUS = "level_up_bonus"
DAILY_CHALLENGE = "daily_challenge"

XP_REWARDS: Dict[str, int] = {
    GOAL_COMPLETION: 50,
    QUIZ_COMPLETION: 75,
    LEVEL_UP_BONUS: 100,
}

POINTS_REWARDS: Dict[str, int] = {
    GOAL_COMPLETION: 10,
    QUIZ_COMPLETION: 15,
    LEVEL_UP_BONUS: 50,
}


def _require_int(value, field: str) -> None:
    # bool is an int subclass but never a valid XP quantity
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(
            message=f"{field} must be an integer",
            field=field,
            value=value,
        )


def level_threshold(level: int) -> int:
    """XP required to advance from `level` to `level + 1`"""
    _require_int(level, "level")
    if level < 1:
        raise InvalidArgument(message="level must be >= 1", field="level", value=level)
    try:
        return int(math.floor(BASE_XP_PER_LEVEL * LEVEL_MULTIPLIER ** (level - 1)))
    except OverflowError as e:
        raise InvalidArgument(
            message=f"level {level} threshold exceeds float range",
            field="level",
            value=level,
            cause=e,
        )


def level_from_total_xp(total_xp: int) -> LevelInfo:
    """
    Calculate level from lifetime XP

    Subtracts each level's threshold from the total until the remainder no
    longer covers the next one. Terminates in O(level) iterations.

    Args:
        total_xp: Lifetime XP, non-negative

    Returns:
        LevelInfo(level, xp_in_level, xp_to_next) where xp_to_next is the
        full threshold of the current level

    Raises:
        InvalidArgument: total_xp is negative, not an integer, or so large
            that a threshold on the way exceeds float range
    """
    _require_int(total_xp, "total_xp")
    if total_xp < 0:
        raise InvalidArgument(
            message="total_xp must be non-negative",
            field="total_xp",
            value=total_xp,
        )

    level = 1
    remaining = total_xp
    threshold = BASE_XP_PER_LEVEL

    while remaining >= threshold:
        remaining -= threshold
        level += 1
        threshold = level_threshold(level)

    return LevelInfo(level=level, xp_in_level=remaining, xp_to_next=threshold)


def total_xp_for_level(level: int) -> int:
    """Cumulative XP at which `level` is first reached"""
    _require_int(level, "level")
    if level < 1:
        raise InvalidArgument(message="level must be >= 1", field="level", value=level)
    return sum(level_threshold(n) for n in range(1, level))


def apply_xp_grant(prior_total_xp: int, amount: int) -> XPGrantResult:
    """
    Apply one XP grant to a prior total

    Does not chain the level-up bonus. When `leveled_up` is True the caller
    issues the LEVEL_UP_BONUS grant itself.

    Raises:
        InvalidArgument: prior_total_xp is negative or amount is not positive
    """
    _require_int(amount, "amount")
    if amount <= 0:
        raise InvalidArgument(message="amount must be positive", field="amount", value=amount)

    old_info = level_from_total_xp(prior_total_xp)
    new_total_xp = prior_total_xp + amount
    new_info = level_from_total_xp(new_total_xp)

    leveled_up = new_info.level > old_info.level
    if leveled_up:
        logger.debug(f"Grant of {amount} XP crosses level {old_info.level} -> {new_info.level}")

    return XPGrantResult(
        new_total_xp=new_total_xp,
        leveled_up=leveled_up,
        new_level=new_info.level,
        new_xp_in_level=new_info.xp_in_level,
        old_level=old_info.level,
        xp_to_next=new_info.xp_to_next,
    )


def apply_event(
    state: ProgressionState,
    event: XPGrantEvent
) -> Tuple[ProgressionState, XPGrantResult]:
    """Apply an XPGrantEvent to a ProgressionState, returning the new state and result"""
    result = apply_xp_grant(state.total_xp, event.amount)
    return ProgressionState(total_xp=result.new_total_xp), result


def progress_fraction(xp_in_level: int, xp_to_next: int) -> float:
    """Fraction of the current level completed, in [0, 1]"""
    if xp_to_next <= 0:
        raise InvalidArgument(
            message="xp_to_next must be positive",
            field="xp_to_next",
            value=xp_to_next,
        )
    if xp_in_level < 0:
        raise InvalidArgument(
            message="xp_in_level must be non-negative",
            field="xp_in_level",
            value=xp_in_level,
        )
    return min(xp_in_level / xp_to_next, 1.0)


def get_xp_for_activity(source: str) -> int:
    """Fixed XP amount for a reward source"""
    if source not in XP_REWARDS:
        raise InvalidArgument(message=f"No fixed XP reward for {source!r}", field="source", value=source)
    return XP_REWARDS[source]


def get_points_for_activity(source: str) -> int:
    """Fixed calm points amount for a reward source"""
    if source not in POINTS_REWARDS:
        raise InvalidArgument(message=f"No fixed points reward for {source!r}", field="source", value=source)
    return POINTS_REWARDS[source]
