"""Platform-owned preferences workflows."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from contracts.v1 import PreferencesContract
from journal_platform.persistence import JournalStore
from journal_platform.runtime.models import InvalidArgumentError, UserPreferences

from .entry_service import _first_error_message

logger = logging.getLogger(__name__)


async def load_preferences(store: JournalStore,
                           cancel_event: Optional[asyncio.Event] = None) -> UserPreferences:
    """Return stored preferences, falling back to defaults when none were saved."""
    preferences = await store.get_preferences(cancel_event)
    if preferences is None:
        logger.info("No saved preferences found, using defaults")
        return UserPreferences()
    return preferences


async def update_preferences(store: JournalStore,
                             payload: PreferencesContract | Mapping[str, Any],
                             cancel_event: Optional[asyncio.Event] = None) -> UserPreferences:
    """Validate ``payload`` and upsert it as the preferences row."""
    if payload is None:
        raise InvalidArgumentError("preferences must not be None")
    if not isinstance(payload, PreferencesContract):
        try:
            payload = PreferencesContract.model_validate(dict(payload))
        except ValidationError as e:
            raise InvalidArgumentError(_first_error_message(e)) from e

    preferences = UserPreferences(
        user_name=payload.user_name,
        enable_reminders=payload.enable_reminders,
        reminder_time=payload.reminder_time,
        use_dark_mode=payload.use_dark_mode,
    )
    return await store.save_preferences(preferences, cancel_event)


__all__ = ["load_preferences", "update_preferences"]
