"""Platform-owned statistics over the journal history."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from journal_platform.persistence import JournalStore
from journal_platform.persistence.entry_store import normalize_timestamp
from journal_platform.runtime.config import MAX_RATING, RECENT_WINDOWS_DAYS
from journal_platform.runtime.models import JournalEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalStatistics:
    total_count: int
    average_mood: Optional[float] = None
    average_social_comfort: Optional[float] = None
    average_regret: Optional[float] = None
    count_last_7_days: int = 0
    count_last_30_days: int = 0
    most_common_mood: Optional[tuple[int, int]] = None  # (mood, occurrences)

    @classmethod
    def empty(cls) -> "JournalStatistics":
        return cls(total_count=0)

    @property
    def has_data(self) -> bool:
        return self.total_count > 0

    @property
    def most_common_mood_label(self) -> str:
        if self.most_common_mood is None:
            return "N/A"
        mood, count = self.most_common_mood
        return f"{mood}/{MAX_RATING} ({count} entries)"

    def to_dict(self) -> dict:
        return {
            "has_data": self.has_data,
            "total_count": self.total_count,
            "average_mood": self.average_mood,
            "average_social_comfort": self.average_social_comfort,
            "average_regret": self.average_regret,
            "count_last_7_days": self.count_last_7_days,
            "count_last_30_days": self.count_last_30_days,
            "most_common_mood": self.most_common_mood_label,
        }


def _mean(values: list[int]) -> float:
    return round(sum(values) / len(values), 1)


def compute_statistics(entries: Sequence[JournalEntry], *,
                       now: datetime | None = None) -> JournalStatistics:
    """Reduce ``entries`` to summary numbers.

    Recent-window counts include entries exactly N days old. When several
    moods share the top count, the one seen first in ``entries`` wins.
    """
    if not entries:
        return JournalStatistics.empty()

    # Compare in naive local time, the form entries are stored in
    now = normalize_timestamp(now or datetime.now())
    week_days, month_days = RECENT_WINDOWS_DAYS
    week_start = now - timedelta(days=week_days)
    month_start = now - timedelta(days=month_days)

    moods: list[int] = []
    comfort: list[int] = []
    regret: list[int] = []
    last_week = 0
    last_month = 0
    for entry in entries:
        moods.append(entry.mood)
        comfort.append(entry.social_comfort)
        regret.append(entry.regret)
        created_at = normalize_timestamp(entry.created_at)
        if created_at >= week_start:
            last_week += 1
        if created_at >= month_start:
            last_month += 1

    # Counter.most_common keeps first-encountered order among equal counts
    mood_value, mood_count = Counter(moods).most_common(1)[0]

    return JournalStatistics(
        total_count=len(entries),
        average_mood=_mean(moods),
        average_social_comfort=_mean(comfort),
        average_regret=_mean(regret),
        count_last_7_days=last_week,
        count_last_30_days=last_month,
        most_common_mood=(mood_value, mood_count),
    )


async def load_statistics(store: JournalStore, *, now: datetime | None = None,
                          cancel_event: Optional[asyncio.Event] = None) -> JournalStatistics:
    """Read every entry from ``store`` and summarise it."""
    entries = await store.list_entries(cancel_event)
    stats = compute_statistics(entries, now=now)
    if stats.has_data:
        logger.info("Statistics computed. Total entries: %d", stats.total_count)
    else:
        logger.info("No entries found for statistics")
    return stats


__all__ = ["JournalStatistics", "compute_statistics", "load_statistics"]
