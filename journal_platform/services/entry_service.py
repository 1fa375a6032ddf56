"""Platform-owned entry workflows: validate a draft, then write it."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from contracts.v1 import EntryDraftContract
from journal_platform.persistence import JournalStore
from journal_platform.runtime.models import InvalidArgumentError, JournalEntry

from .history_service import HistoryPager


def _first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    # Custom validators surface as "Value error, <message>"
    msg = msg.removeprefix("Value error, ")
    return f"{loc}: {msg}" if loc else msg


def validate_entry_draft(payload: EntryDraftContract | Mapping[str, Any]) -> EntryDraftContract:
    """Validate user input for an entry, raising ``InvalidArgumentError``."""
    if isinstance(payload, EntryDraftContract):
        return payload
    if payload is None:
        raise InvalidArgumentError("entry draft must not be None")
    try:
        return EntryDraftContract.model_validate(dict(payload))
    except ValidationError as e:
        raise InvalidArgumentError(_first_error_message(e)) from e


async def create_entry(store: JournalStore, payload, *, now: datetime | None = None,
                       pager: HistoryPager | None = None,
                       cancel_event: Optional[asyncio.Event] = None) -> JournalEntry:
    """Validate ``payload`` and persist it as a new entry stamped ``now``."""
    draft = validate_entry_draft(payload)
    entry = JournalEntry(
        created_at=now or datetime.now(),
        text=draft.text,
        mood=draft.mood,
        social_comfort=draft.social_comfort,
        regret=draft.regret,
    )
    saved = await store.save_entry(entry, cancel_event)
    if pager is not None:
        pager.invalidate()
    return saved


async def update_entry(store: JournalStore, entry_id: int, payload, *,
                       pager: HistoryPager | None = None,
                       cancel_event: Optional[asyncio.Event] = None) -> Optional[JournalEntry]:
    """Overwrite the editable fields of an existing entry.

    ``id`` and ``created_at`` are kept. Returns None when no such entry exists.
    """
    draft = validate_entry_draft(payload)
    existing = await store.get_entry(entry_id, cancel_event)
    if existing is None:
        return None
    updated = replace(
        existing,
        text=draft.text,
        mood=draft.mood,
        social_comfort=draft.social_comfort,
        regret=draft.regret,
    )
    saved = await store.save_entry(updated, cancel_event)
    if pager is not None:
        pager.invalidate()
    return saved


async def delete_entry(store: JournalStore, entry_id: int, *,
                       pager: HistoryPager | None = None,
                       cancel_event: Optional[asyncio.Event] = None) -> bool:
    deleted = await store.delete_entry(entry_id, cancel_event)
    if pager is not None:
        pager.invalidate()
    return deleted


__all__ = ["validate_entry_draft", "create_entry", "update_entry", "delete_entry"]
