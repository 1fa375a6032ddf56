"""Platform-owned single-record preferences store."""

from dataclasses import replace
from datetime import time
from typing import Optional

import aiosqlite

from journal_platform.runtime.models import PREFERENCES_ROW_ID, UserPreferences


class PreferencesStore:
    """Load/save for the one preferences row.

    Only load and save exist: the table holds zero rows until the first
    save and exactly one afterwards.
    """

    ROW_ID = PREFERENCES_ROW_ID

    @staticmethod
    async def load(conn: aiosqlite.Connection) -> Optional[UserPreferences]:
        """Load the preferences row, or None if it was never saved."""
        cursor = await conn.execute(
            "SELECT * FROM user_preferences WHERE id = ?", (PreferencesStore.ROW_ID,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return UserPreferences(
            id=row["id"],
            user_name=row["user_name"],
            enable_reminders=bool(row["enable_reminders"]),
            reminder_time=time.fromisoformat(row["reminder_time"]),
            use_dark_mode=bool(row["use_dark_mode"]),
        )

    @staticmethod
    async def save(conn: aiosqlite.Connection,
                   preferences: UserPreferences) -> UserPreferences:
        """Upsert the preferences row, forcing the sentinel id."""
        stored = replace(preferences, id=PreferencesStore.ROW_ID)
        await conn.execute(
            """INSERT INTO user_preferences
               (id, user_name, enable_reminders, reminder_time, use_dark_mode)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   user_name = excluded.user_name,
                   enable_reminders = excluded.enable_reminders,
                   reminder_time = excluded.reminder_time,
                   use_dark_mode = excluded.use_dark_mode""",
            (stored.id, stored.user_name, int(stored.enable_reminders),
             stored.reminder_time.isoformat(timespec="seconds"),
             int(stored.use_dark_mode)),
        )
        await conn.commit()
        return stored


__all__ = ["PreferencesStore"]
