"""v1 input contract schemas."""

__version__ = "1.0.0"

from .schemas import EntryDraftContract, PreferencesContract

__all__ = [
    "__version__",
    "EntryDraftContract",
    "PreferencesContract",
]
