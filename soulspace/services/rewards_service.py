"""
RewardsService - XP, Calm Points and Reward Business Logic

Loads a user's progress from the store, runs grants through the XP system,
writes the derived level back and logs every grant.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from soulspace import config
from soulspace.exceptions import (
    ChallengeAlreadyCompletedError,
    InvalidArgument,
    ValidationError,
)
from soulspace.gamification.progress_store import InMemoryProgressStore
from soulspace.gamification.xp_system import (
    DAILY_CHALLENGE,
    GOAL_COMPLETION,
    LEVEL_UP_BONUS,
    QUIZ_COMPLETION,
    apply_xp_grant,
    get_points_for_activity,
    get_xp_for_activity,
    level_from_total_xp,
    progress_fraction,
)
from soulspace.models.progress import (
    ChallengeCompletionResult,
    DailyChallenge,
    LevelProgress,
    PointsLogEntry,
    Reward,
    UserProgress,
    XPGrantResult,
    XPLogEntry,
)

logger = logging.getLogger(__name__)

QUIZ_TYPES = ("phq9", "gad7")


class RewardsService:
    """
    Service for rewards features.

    Responsibilities:
    - XP and calm points awarding
    - Level-up bonus chaining (exactly one bonus per level-up)
    - Daily challenge completion
    - Reward listing and redemption
    """

    def __init__(self, store: InMemoryProgressStore, level_up_bonus_enabled: Optional[bool] = None):
        """
        Initialize RewardsService.

        Args:
            store: Progress store instance
            level_up_bonus_enabled: Override for LEVEL_UP_BONUS_ENABLED
        """
        self.store = store
        if level_up_bonus_enabled is None:
            level_up_bonus_enabled = config.LEVEL_UP_BONUS_ENABLED
        self.level_up_bonus_enabled = level_up_bonus_enabled
        logger.debug("RewardsService initialized")

    async def get_user_progress(self, user_id: str) -> UserProgress:
        """Get or create the user's progress row"""
        return await self.store.get_or_create_progress(user_id)

    async def get_level_progress(self, user_id: str) -> LevelProgress:
        """Level and progress bar data derived from the stored total"""
        progress = await self.store.get_or_create_progress(user_id)
        info = level_from_total_xp(progress.total_xp)
        return LevelProgress(
            total_xp=progress.total_xp,
            level=info.level,
            xp_in_level=info.xp_in_level,
            xp_to_next=info.xp_to_next,
            fraction=progress_fraction(info.xp_in_level, info.xp_to_next),
            calm_points=progress.calm_points,
        )

    async def add_xp(
        self,
        user_id: str,
        amount: int,
        source: str,
        source_id: Optional[str] = None
    ) -> XPGrantResult:
        """
        Add XP to a user and update their level

        Args:
            user_id: User ID
            amount: XP to add, positive
            source: Activity tag (goal_completion, quiz_completion, ...)
            source_id: ID of the source activity (optional)

        Returns:
            XPGrantResult for the grant

        Raises:
            InvalidArgument: amount is not positive
        """
        async with self.store.user_lock(user_id):
            progress = await self.store.get_or_create_progress(user_id)
            result = apply_xp_grant(progress.total_xp, amount)

            progress.level = result.new_level
            progress.xp = result.new_xp_in_level
            progress.total_xp = result.new_total_xp
            await self.store.save_progress(progress)

            await self.store.add_xp_log(XPLogEntry(
                user_id=user_id,
                amount=amount,
                source=source,
                source_id=source_id,
                total_xp=result.new_total_xp,
            ))

        logger.info(
            f"Awarded {amount} XP to user {user_id} for {source}. "
            f"Total: {result.new_total_xp} XP, Level: {result.new_level}"
        )
        if result.leveled_up:
            logger.info(f"User {user_id} leveled up from {result.old_level} to {result.new_level}!")

        return result

    async def add_calm_points(
        self,
        user_id: str,
        amount: int,
        source: str,
        source_id: Optional[str] = None
    ) -> int:
        """Add calm points and return the new balance"""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidArgument(
                message="amount must be a positive integer",
                field="amount",
                value=amount,
                user_id=user_id,
                operation="add_calm_points",
            )

        async with self.store.user_lock(user_id):
            progress = await self.store.get_or_create_progress(user_id)
            progress.calm_points += amount
            await self.store.save_progress(progress)

            await self.store.add_points_log(PointsLogEntry(
                user_id=user_id,
                amount=amount,
                source=source,
                source_id=source_id,
                total_points=progress.calm_points,
            ))

        logger.info(f"Awarded {amount} calm points to user {user_id} for {source}. Total: {progress.calm_points}")
        return progress.calm_points

    async def _award(self, user_id: str, source: str, source_id: Optional[str]) -> Dict[str, Any]:
        xp_amount = get_xp_for_activity(source)
        points_amount = get_points_for_activity(source)

        xp_result = await self.add_xp(user_id, xp_amount, source, source_id)
        await self.add_calm_points(user_id, points_amount, source, source_id)

        result = {
            'xp_awarded': xp_amount,
            'points_awarded': points_amount,
            'leveled_up': xp_result.leveled_up,
            'new_level': xp_result.new_level,
            'bonus_awarded': False,
        }

        # One bonus per level-up. The bonus grant's own level-up is not chained.
        if xp_result.leveled_up and self.level_up_bonus_enabled:
            bonus_result = await self.add_xp(user_id, get_xp_for_activity(LEVEL_UP_BONUS), LEVEL_UP_BONUS)
            await self.add_calm_points(user_id, get_points_for_activity(LEVEL_UP_BONUS), LEVEL_UP_BONUS)
            result['xp_awarded'] += get_xp_for_activity(LEVEL_UP_BONUS)
            result['points_awarded'] += get_points_for_activity(LEVEL_UP_BONUS)
            result['new_level'] = bonus_result.new_level
            result['bonus_awarded'] = True

        return result

    async def award_goal_completion(self, user_id: str, goal_id: str) -> Dict[str, Any]:
        """
        Award XP and calm points for completing a goal

        Returns:
            {
                'xp_awarded': int,
                'points_awarded': int,
                'leveled_up': bool,
                'new_level': int,
                'bonus_awarded': bool
            }
        """
        return await self._award(user_id, GOAL_COMPLETION, goal_id)

    async def award_quiz_completion(self, user_id: str, assessment_id: str, quiz_type: str) -> Dict[str, Any]:
        """Award XP and calm points for completing a PHQ-9 or GAD-7 assessment"""
        if quiz_type not in QUIZ_TYPES:
            raise ValidationError(
                message=f"quiz_type must be one of {', '.join(QUIZ_TYPES)}",
                field="quiz_type",
                value=quiz_type,
                user_id=user_id,
                operation="award_quiz_completion",
            )
        return await self._award(user_id, QUIZ_COMPLETION, assessment_id)

    async def get_daily_challenges(self, user_id: str, on_date: Optional[date] = None) -> List[DailyChallenge]:
        """Challenges for a date with this user's completion flags"""
        on_date = on_date or date.today()
        challenges = []

        for challenge in await self.store.list_challenges(on_date.isoformat()):
            completed_at = await self.store.get_challenge_completion(user_id, challenge.id)
            challenges.append(challenge.model_copy(update={
                "is_completed": completed_at is not None,
                "completed_at": completed_at,
            }))

        return challenges

    async def complete_daily_challenge(self, user_id: str, challenge_id: str) -> ChallengeCompletionResult:
        """
        Complete a daily challenge once and grant its rewards

        Raises:
            RecordNotFoundError: challenge does not exist
            ChallengeAlreadyCompletedError: user already completed it
        """
        challenge = await self.store.get_challenge(challenge_id)

        async with self.store.user_lock(user_id):
            if await self.store.has_completed_challenge(user_id, challenge_id):
                raise ChallengeAlreadyCompletedError(
                    challenge_id,
                    user_id=user_id,
                    operation="complete_daily_challenge",
                )
            await self.store.record_challenge_completion(user_id, challenge_id)

        xp_result = await self.add_xp(user_id, challenge.xp_reward, DAILY_CHALLENGE, challenge_id)
        if challenge.points_reward > 0:
            await self.add_calm_points(user_id, challenge.points_reward, DAILY_CHALLENGE, challenge_id)

        return ChallengeCompletionResult(
            xp_gained=challenge.xp_reward,
            points_gained=challenge.points_reward,
            leveled_up=xp_result.leveled_up,
        )

    async def get_user_rewards(self, user_id: str) -> List[Reward]:
        """User rewards, newest first"""
        return await self.store.list_rewards(user_id)

    async def redeem_reward(self, user_id: str, reward_id: str) -> Reward:
        """Mark a reward redeemed"""
        reward = await self.store.mark_reward_redeemed(user_id, reward_id)
        logger.info(f"User {user_id} redeemed reward {reward_id} ({reward.name})")
        return reward
