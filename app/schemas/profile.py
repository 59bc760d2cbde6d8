"""User profile settings consumed by the engine (read-only)."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import Settings


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_rest_seconds: int = Field(90, ge=0)
    weekly_goal: int = Field(5, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UserProfile":
        return cls(
            default_rest_seconds=settings.default_rest_seconds,
            weekly_goal=settings.weekly_goal,
        )
