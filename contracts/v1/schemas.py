"""Pydantic contracts for user-authored journal input (v1)."""

from datetime import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_TEXT_LENGTH = 200
MAX_USER_NAME_LENGTH = 100


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class EntryDraftContract(_StrictModel):
    text: str = Field(max_length=MAX_TEXT_LENGTH)
    mood: int = Field(default=5, ge=1, le=10)
    social_comfort: int = Field(default=5, ge=1, le=10)
    regret: int = Field(default=5, ge=1, le=10)

    @field_validator("text", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("Please enter some text for your journal entry.")
        return value


class PreferencesContract(_StrictModel):
    user_name: Optional[str] = Field(default=None, max_length=MAX_USER_NAME_LENGTH)
    enable_reminders: bool = False
    reminder_time: time = time(21, 0)
    use_dark_mode: bool = False

    @field_validator("user_name", mode="before")
    @classmethod
    def _blank_name_is_none(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value
