"""Platform-owned history service: filter and paginate journal entries.

``HistoryPager`` keeps an owned snapshot of the full entry list so that
scrolling through pages never goes back to the database. A page sequence is
always cut from one filtered view: changing the filter drops the cursor and
the next ``load_first_page()`` starts again from the top.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Sequence

from journal_platform.persistence import JournalStore
from journal_platform.runtime.config import PAGE_SIZE, REMAINING_ITEMS_THRESHOLD
from journal_platform.runtime.models import InvalidArgumentError, JournalEntry

logger = logging.getLogger(__name__)


def _as_date(value: date | datetime | None) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class EntryFilter:
    """AND of independently optional predicates over entries."""

    search_text: str = ""
    min_mood: Optional[int] = None
    max_mood: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "search_text", self.search_text or "")
        object.__setattr__(self, "start_date", _as_date(self.start_date))
        object.__setattr__(self, "end_date", _as_date(self.end_date))

    @property
    def is_active(self) -> bool:
        return bool(
            self.search_text.strip()
            or self.min_mood is not None
            or self.max_mood is not None
            or self.start_date is not None
            or self.end_date is not None
        )

    def matches(self, entry: JournalEntry) -> bool:
        # Whitespace only decides activity; the raw text is what gets matched
        needle = self.search_text.lower()
        if needle.strip() and needle not in entry.text.lower():
            return False
        if self.min_mood is not None and entry.mood < self.min_mood:
            return False
        if self.max_mood is not None and entry.mood > self.max_mood:
            return False
        entry_date = entry.entry_date
        if self.start_date is not None and entry_date < self.start_date:
            return False
        if self.end_date is not None and entry_date > self.end_date:
            return False
        return True

    def apply(self, entries: Sequence[JournalEntry]) -> list[JournalEntry]:
        """Return matching entries in their original order."""
        if not self.is_active:
            return list(entries)
        return [e for e in entries if self.matches(e)]


@dataclass(frozen=True)
class EntrySnapshot:
    """An in-memory copy of every stored entry, newest first."""

    entries: tuple[JournalEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class HistoryPage:
    entries: list[JournalEntry]
    page_index: int
    offset: int
    total_count: int  # size of the filtered view
    has_more: bool


class HistoryPager:
    """Incremental ("load more") view over the journal history."""

    def __init__(self, store: JournalStore, *, page_size: int = PAGE_SIZE):
        if page_size < 1:
            raise InvalidArgumentError("page_size must be at least 1")
        self.store = store
        self.page_size = page_size
        self._filter = EntryFilter()
        self._snapshot: EntrySnapshot | None = None
        self._view: list[JournalEntry] | None = None
        self._next_page = 0
        self.has_more = False
        self.is_loading = False
        self.visible_entries: list[JournalEntry] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def filter(self) -> EntryFilter:
        return self._filter

    @property
    def snapshot(self) -> EntrySnapshot | None:
        return self._snapshot

    @property
    def next_page_index(self) -> int:
        return self._next_page

    @property
    def is_filtered(self) -> bool:
        return self._filter.is_active

    def set_filter(self, entry_filter: EntryFilter) -> None:
        """Replace the active filter; the cursor is dropped until the next first page."""
        if entry_filter == self._filter:
            return
        self._filter = entry_filter
        self._reset_cursor()

    def update_filter(self, **changes) -> EntryFilter:
        """Change individual filter fields, e.g. ``update_filter(min_mood=3)``."""
        self.set_filter(replace(self._filter, **changes))
        return self._filter

    def clear_filters(self) -> None:
        self.set_filter(EntryFilter())

    def invalidate(self) -> None:
        """Forget the snapshot; the next first page re-reads the store."""
        self._snapshot = None
        self._reset_cursor()

    def _reset_cursor(self) -> None:
        self._view = None
        self._next_page = 0
        self.has_more = False

    def should_load_more(self, last_visible_index: int) -> bool:
        """True once scrolling gets within the threshold of the loaded tail."""
        if not self.has_more or self.is_loading:
            return False
        remaining = len(self.visible_entries) - 1 - last_visible_index
        return remaining <= REMAINING_ITEMS_THRESHOLD

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_first_page(self,
                              cancel_event: Optional[asyncio.Event] = None) -> Optional[HistoryPage]:
        """Filter the snapshot and return page 0.

        Reads the store only when no snapshot is held. Returns None when
        another load is already in flight.
        """
        if self.is_loading:
            return None
        self.is_loading = True
        try:
            if self._snapshot is None:
                await self._fetch_snapshot(cancel_event)
            return self._first_page()
        finally:
            self.is_loading = False

    async def load_next_page(self) -> Optional[HistoryPage]:
        """Return the next slice of the current filtered view.

        A no-op returning None when nothing remains, no first page was
        loaded under the current filter, or a load is in flight.
        """
        if self.is_loading or not self.has_more or self._view is None:
            return None
        self.is_loading = True
        try:
            page = self._slice(self._next_page)
            self.visible_entries.extend(page.entries)
            self._next_page += 1
            self.has_more = page.has_more
            logger.info("Loaded history page %d with %d entries", page.page_index, len(page.entries))
            return page
        finally:
            self.is_loading = False

    async def refresh(self,
                      cancel_event: Optional[asyncio.Event] = None) -> Optional[HistoryPage]:
        """Re-read every entry from the store, then reload page 0."""
        if self.is_loading:
            return None
        self.is_loading = True
        try:
            await self._fetch_snapshot(cancel_event)
            return self._first_page()
        finally:
            self.is_loading = False

    async def _fetch_snapshot(self, cancel_event: Optional[asyncio.Event]) -> None:
        entries = await self.store.list_entries(cancel_event)
        self._snapshot = EntrySnapshot(entries=tuple(entries))

    def _first_page(self) -> HistoryPage:
        self._next_page = 0
        self._view = self._filter.apply(self._snapshot.entries)
        page = self._slice(0)
        self.visible_entries = list(page.entries)
        self._next_page = 1
        self.has_more = page.has_more
        logger.info(
            "Loaded %d journal entries (page 0), filtered from %d",
            len(page.entries), len(self._snapshot),
        )
        return page

    def _slice(self, page_index: int) -> HistoryPage:
        view = self._view
        start = page_index * self.page_size
        end = start + self.page_size
        return HistoryPage(
            entries=view[start:end],
            page_index=page_index,
            offset=start,
            total_count=len(view),
            has_more=len(view) > end,
        )


__all__ = ["EntryFilter", "EntrySnapshot", "HistoryPage", "HistoryPager"]
