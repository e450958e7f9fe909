"""Input model for calendar export.

Rows come straight from the events table (snake_case) or from the web form
(camelCase); both spellings are accepted.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .timestamps import DEFAULT_DURATION_HOURS, normalize_duration_hours


class CalendarEvent(BaseModel):
    """An event a user registered for."""

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        extra="ignore",
        frozen=True,
    )

    title: str
    speaker_name: str = Field(
        validation_alias=AliasChoices("speaker_name", "speakerName")
    )
    speaker_role: str = Field(
        validation_alias=AliasChoices("speaker_role", "speakerRole")
    )
    location: str
    price: str
    date: str = Field(..., description="Human-entered date, e.g. 'Monday, June 10, 2024'")
    time: str = Field(..., description="Time of day, e.g. '18:00'")
    description: Optional[str] = None
    duration_hours: float = Field(
        default=DEFAULT_DURATION_HOURS,
        validation_alias=AliasChoices("duration_hours", "durationHours", "duration"),
    )

    @field_validator("price", mode="before")
    @classmethod
    def _price_text(cls, value: Any) -> Any:
        # 500.0 prints as "500"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return value

    @field_validator("duration_hours", mode="before")
    @classmethod
    def _default_unusable_duration(cls, value: Any) -> float:
        return normalize_duration_hours(value)
