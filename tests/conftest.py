"""Global test fixtures and utilities for soulspace tests"""
import pytest
from datetime import datetime, timezone

from soulspace.gamification.progress_store import InMemoryProgressStore
from soulspace.models.goal import Goal, GoalStatus
from soulspace.services.rewards_service import RewardsService


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "5f0c7a52-user"


# ============================================================================
# Store & Service Fixtures
# ============================================================================

@pytest.fixture
def progress_store():
    """Fresh in-memory progress store"""
    return InMemoryProgressStore()


@pytest.fixture
def rewards_service(progress_store):
    """RewardsService with the level-up bonus enabled"""
    return RewardsService(progress_store, level_up_bonus_enabled=True)


# ============================================================================
# Goal Fixtures
# ============================================================================

@pytest.fixture
def goal_factory():
    """Factory for creating goals"""
    def _create(title, description=None, status=GoalStatus.IN_PROGRESS, **kwargs):
        return Goal(
            id=kwargs.get("id", title.lower().replace(" ", "-")),
            title=title,
            description=description,
            status=status,
            progress=kwargs.get("progress", 100 if status == GoalStatus.COMPLETED else 0),
            updated_at=kwargs.get("updated_at", datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)),
        )

    return _create


@pytest.fixture
def sample_goals(goal_factory):
    """Mixed goals across several categories"""
    return [
        goal_factory("Walk 10,000 steps daily", status=GoalStatus.COMPLETED),
        goal_factory("Meditate for 10 minutes"),
        goal_factory("Read a new book", "Finish one novel per month", status=GoalStatus.COMPLETED),
        goal_factory("Buy a house"),
        goal_factory("Say hi to the cat"),
        goal_factory("Go for a run", status=GoalStatus.PAUSED),
        goal_factory("Limit screen time"),
    ]
