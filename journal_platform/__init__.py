"""Local persistence and query layer for the sleep journal."""

__version__ = "1.0.0"

from .persistence import JournalStore, open_default_store
from .runtime.models import (
    InvalidArgumentError,
    JournalEntry,
    JournalError,
    OperationCancelledError,
    StorageFailure,
    UserPreferences,
)
from .services import (
    EntryFilter,
    HistoryPage,
    HistoryPager,
    JournalStatistics,
    compute_statistics,
    load_statistics,
)

__all__ = [
    "__version__",
    "JournalStore",
    "open_default_store",
    "JournalEntry",
    "UserPreferences",
    "JournalError",
    "InvalidArgumentError",
    "OperationCancelledError",
    "StorageFailure",
    "EntryFilter",
    "HistoryPage",
    "HistoryPager",
    "JournalStatistics",
    "compute_statistics",
    "load_statistics",
]
