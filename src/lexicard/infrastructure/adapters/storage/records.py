"""
Wire models for the persisted state document.

Field names on disk are camelCase (``easeFactor``, ``nextReview``, ...);
pydantic aliases map them onto the snake_case domain models.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from lexicard.domain.cards.models import CardState, LearnerSettings
from lexicard.domain.constants import (
    DEFAULT_EASE_FACTOR,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
)


class CardRecord(BaseModel):
    """Persisted shape of one item's scheduling state."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    interval: int = Field(default=0, ge=0)
    repetitions: int = Field(default=0, ge=0)
    ease_factor: float = Field(default=DEFAULT_EASE_FACTOR, ge=MIN_EASE_FACTOR, alias="easeFactor")
    next_review: date | None = Field(default=None, alias="nextReview")
    last_review: date | None = Field(default=None, alias="lastReview")
    quality: int | None = Field(default=None, ge=MIN_QUALITY, le=MAX_QUALITY)

    @classmethod
    def from_state(cls, state: CardState) -> "CardRecord":
        return cls(
            interval=state.interval,
            repetitions=state.repetitions,
            ease_factor=state.ease_factor,
            next_review=state.next_review,
            last_review=state.last_review,
            quality=state.quality,
        )

    def to_state(self) -> CardState:
        return CardState(
            interval=self.interval,
            repetitions=self.repetitions,
            ease_factor=self.ease_factor,
            next_review=self.next_review,
            last_review=self.last_review,
            quality=self.quality,
        )


class SettingsRecord(BaseModel):
    """Persisted shape of the learner settings section."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    primary_language: str = Field(default="uk", alias="primaryLanguage")
    secondary_language: str = Field(default="en", alias="secondaryLanguage")
    daily_goal_minutes: int = Field(default=15, ge=0, alias="dailyGoalMinutes")
    show_pronunciation: bool = Field(default=True, alias="showPronunciation")
    auto_play_audio: bool = Field(default=False, alias="autoPlayAudio")
    module_locking: bool = Field(default=True, alias="moduleLocking")
    theme: str = "light"

    @classmethod
    def from_settings(cls, settings: LearnerSettings) -> "SettingsRecord":
        return cls(
            primary_language=settings.primary_language,
            secondary_language=settings.secondary_language,
            daily_goal_minutes=settings.daily_goal_minutes,
            show_pronunciation=settings.show_pronunciation,
            auto_play_audio=settings.auto_play_audio,
            module_locking=settings.module_locking,
            theme=settings.theme,
        )

    def to_settings(self) -> LearnerSettings:
        return LearnerSettings(
            primary_language=self.primary_language,
            secondary_language=self.secondary_language,
            daily_goal_minutes=self.daily_goal_minutes,
            show_pronunciation=self.show_pronunciation,
            auto_play_audio=self.auto_play_audio,
            module_locking=self.module_locking,
            theme=self.theme,
        )

    @classmethod
    def known_keys(cls) -> set[str]:
        """Every on-disk key that maps to a field, by alias and by name."""
        keys = set(cls.model_fields)
        keys.update(f.alias for f in cls.model_fields.values() if f.alias)
        return keys
