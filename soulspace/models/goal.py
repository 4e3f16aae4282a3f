"""Goal-related Pydantic models"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class GoalStatus(str, Enum):
    """Goal lifecycle status"""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    PAUSED = "paused"


class GoalCategory(str, Enum):
    """Closed set of goal categories. GENERAL is the catch-all."""
    DIGITAL = "digital"
    PHYSICAL = "physical"
    MINDFULNESS = "mindfulness"
    LEARNING = "learning"
    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    SOCIAL = "social"
    FINANCIAL = "financial"
    CREATIVE = "creative"
    GENERAL = "general"


class Goal(BaseModel):
    """User goal. Owned and persisted by the caller; never mutated here."""
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: GoalStatus = GoalStatus.IN_PROGRESS
    progress: int = Field(0, ge=0, le=100)
    updated_at: Optional[datetime] = None


class CategoryInfo(BaseModel):
    """Display metadata for a category"""
    key: GoalCategory
    title: str
    icon: str
    description: str


class CategorySummary(BaseModel):
    """Per-category goal counts for the goals overview"""
    category: GoalCategory
    title: str
    icon: str
    description: str
    count: int
    completed: int
    progress: float  # percent of goals in the bucket that are completed


class GoalAchievement(BaseModel):
    """Goal achievement with progress toward unlocking"""
    key: str
    name: str
    description: str
    earned: bool
    progress: int
    max_progress: int
