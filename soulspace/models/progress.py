"""Progression and reward Pydantic models"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProgressionState(BaseModel):
    """The only durable XP quantity. Level fields are always derived from it."""
    model_config = ConfigDict(frozen=True)

    total_xp: int = Field(0, ge=0)


class LevelInfo(BaseModel):
    """Level derived from a lifetime XP total"""
    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    xp_in_level: int = Field(..., ge=0)
    xp_to_next: int = Field(..., gt=0)  # full threshold of the current level


class XPGrantEvent(BaseModel):
    """One XP-earning action (goal_completion, quiz_completion, level_up_bonus, ...)"""
    model_config = ConfigDict(frozen=True)

    amount: int = Field(..., gt=0)
    source: str = Field(..., min_length=1)
    source_id: Optional[str] = None


class XPGrantResult(BaseModel):
    """Outcome of applying one grant to a prior XP total"""
    model_config = ConfigDict(frozen=True)

    new_total_xp: int
    leveled_up: bool
    new_level: int
    new_xp_in_level: int
    old_level: int
    xp_to_next: int


class UserProgress(BaseModel):
    """Stored progress row for one user"""
    user_id: str
    level: int = 1
    xp: int = 0  # xp within the current level
    total_xp: int = 0
    calm_points: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class XPLogEntry(BaseModel):
    """XP grant audit row"""
    user_id: str
    amount: int
    source: str
    source_id: Optional[str] = None
    total_xp: int
    created_at: datetime = Field(default_factory=_utcnow)


class PointsLogEntry(BaseModel):
    """Calm points grant audit row"""
    user_id: str
    amount: int
    source: str
    source_id: Optional[str] = None
    total_points: int
    created_at: datetime = Field(default_factory=_utcnow)


class ChallengeCategory(str, Enum):
    """Daily challenge categories"""
    WELLNESS = "wellness"
    PRODUCTIVITY = "productivity"
    SOCIAL = "social"
    LEARNING = "learning"


class ChallengeDifficulty(str, Enum):
    """Daily challenge difficulty levels"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DailyChallenge(BaseModel):
    """Challenge offered on a given date"""
    id: str
    title: str
    description: str
    xp_reward: int = Field(..., gt=0)
    points_reward: int = Field(0, ge=0)
    category: ChallengeCategory
    difficulty: ChallengeDifficulty
    date: str  # ISO date the challenge is offered on
    is_completed: bool = False
    completed_at: Optional[datetime] = None


class ChallengeCompletionResult(BaseModel):
    """What completing a daily challenge granted"""
    xp_gained: int
    points_gained: int
    leveled_up: bool


class Reward(BaseModel):
    """Redeemable reward owned by a user"""
    id: str
    user_id: str
    name: str
    points: int
    redeemed: bool = False
    created_at: datetime = Field(default_factory=_utcnow)


class LevelProgress(BaseModel):
    """Progress bar data for the rewards page"""
    total_xp: int
    level: int
    xp_in_level: int
    xp_to_next: int
    fraction: float = Field(..., ge=0.0, le=1.0)
    calm_points: int
