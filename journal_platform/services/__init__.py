"""Platform-owned workflow services."""

from .entry_service import create_entry, delete_entry, update_entry, validate_entry_draft
from .history_service import EntryFilter, EntrySnapshot, HistoryPage, HistoryPager
from .preferences_service import load_preferences, update_preferences
from .statistics_service import JournalStatistics, compute_statistics, load_statistics
