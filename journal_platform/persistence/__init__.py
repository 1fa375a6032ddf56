"""Platform-owned persistence layer (database and stores)."""

from .database import apply_journal_tuning, init_db, is_throwaway_path, open_connection
from .entry_store import EntryStore
from .journal_store import JournalStore, open_default_store
from .preferences_store import PreferencesStore
