"""Achievement schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.core.enums import AchievementCategory


class Achievement(BaseModel):
    """Unlockable badge. Once ``is_unlocked`` is True it never flips back."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    emoji: str = ""
    category: AchievementCategory
    requirement: float
    is_unlocked: bool = False
    unlocked_at: datetime | None = None


class AchievementsRead(BaseModel):
    total_points: int
    achievements: list[Achievement] = []


class AchievementCheckRead(BaseModel):
    newly_unlocked: list[Achievement] = []
    total_points: int
