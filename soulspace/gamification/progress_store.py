"""
In-Memory Progress Store

Holds progress rows, XP/points logs, daily challenges and their
completions, and rewards. Not persisted; a database-backed store only needs
the same async methods.

Read-modify-write of a user's progress must happen under user_lock(user_id).
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from soulspace.exceptions import RecordNotFoundError
from soulspace.models.progress import (
    DailyChallenge,
    PointsLogEntry,
    Reward,
    UserProgress,
    XPLogEntry,
)

logger = logging.getLogger(__name__)


class InMemoryProgressStore:
    """In-memory store for progress, logs, challenges and rewards"""

    def __init__(self):
        self._progress: Dict[str, UserProgress] = {}
        self._xp_logs: Dict[str, List[XPLogEntry]] = defaultdict(list)
        self._points_logs: Dict[str, List[PointsLogEntry]] = defaultdict(list)
        self._challenges: Dict[str, DailyChallenge] = {}
        self._completions: Dict[Tuple[str, str], datetime] = {}
        self._rewards: Dict[str, Reward] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        logger.debug("InMemoryProgressStore initialized")

    def user_lock(self, user_id: str) -> asyncio.Lock:
        """
        Lock serializing progress updates for one user

        Locks are kept for the life of the store, one per user seen, the same
        way progress rows are. A database-backed store would serialize with
        row locks instead.
        """
        if user_id not in self._locks:
            self._locks[user_id] = asyncio.Lock()
        return self._locks[user_id]

    # ---- Progress ----

    async def get_or_create_progress(self, user_id: str) -> UserProgress:
        """Get user progress, creating a level 1 row on first access"""
        progress = self._progress.get(user_id)
        if progress is None:
            progress = UserProgress(user_id=user_id)
            self._progress[user_id] = progress
            logger.info(f"Created progress record for user {user_id}")
        return progress.model_copy()

    async def save_progress(self, progress: UserProgress) -> UserProgress:
        """Replace the stored progress row"""
        progress = progress.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        self._progress[progress.user_id] = progress
        return progress.model_copy()

    # ---- Logs ----

    async def add_xp_log(self, entry: XPLogEntry) -> None:
        self._xp_logs[entry.user_id].append(entry)

    async def add_points_log(self, entry: PointsLogEntry) -> None:
        self._points_logs[entry.user_id].append(entry)

    async def get_xp_logs(self, user_id: str) -> List[XPLogEntry]:
        """XP log entries, oldest first"""
        return list(self._xp_logs.get(user_id, []))

    async def get_points_logs(self, user_id: str) -> List[PointsLogEntry]:
        """Points log entries, oldest first"""
        return list(self._points_logs.get(user_id, []))

    # ---- Daily challenges ----

    async def add_challenge(self, challenge: DailyChallenge) -> None:
        self._challenges[challenge.id] = challenge

    async def get_challenge(self, challenge_id: str) -> DailyChallenge:
        challenge = self._challenges.get(challenge_id)
        if challenge is None:
            raise RecordNotFoundError(
                message=f"Daily challenge {challenge_id} not found",
                record_type="Challenge",
                record_id=challenge_id,
                operation="get_challenge",
            )
        return challenge

    async def list_challenges(self, on_date: str) -> List[DailyChallenge]:
        """Challenges offered on an ISO date"""
        return [c for c in self._challenges.values() if c.date == on_date]

    async def has_completed_challenge(self, user_id: str, challenge_id: str) -> bool:
        return (user_id, challenge_id) in self._completions

    async def get_challenge_completion(self, user_id: str, challenge_id: str) -> Optional[datetime]:
        return self._completions.get((user_id, challenge_id))

    async def record_challenge_completion(self, user_id: str, challenge_id: str) -> datetime:
        completed_at = datetime.now(timezone.utc)
        self._completions[(user_id, challenge_id)] = completed_at
        return completed_at

    # ---- Rewards ----

    async def add_reward(self, reward: Reward) -> None:
        self._rewards[reward.id] = reward

    async def list_rewards(self, user_id: str) -> List[Reward]:
        """User rewards, newest first"""
        rewards = [r for r in self._rewards.values() if r.user_id == user_id]
        return sorted(rewards, key=lambda r: r.created_at, reverse=True)

    async def mark_reward_redeemed(self, user_id: str, reward_id: str) -> Reward:
        reward = self._rewards.get(reward_id)
        if reward is None or reward.user_id != user_id:
            raise RecordNotFoundError(
                message=f"Reward {reward_id} not found for user {user_id}",
                record_type="Reward",
                record_id=reward_id,
                user_id=user_id,
                operation="mark_reward_redeemed",
            )
        reward = reward.model_copy(update={"redeemed": True})
        self._rewards[reward_id] = reward
        return reward
