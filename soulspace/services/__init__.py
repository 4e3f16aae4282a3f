"""
Service Layer Package

Business logic services between the presentation layer and the progress store.

- RewardsService: XP, calm points, level-up bonus, daily challenges, rewards
"""

from soulspace.services.rewards_service import RewardsService

__all__ = [
    "RewardsService",
]
