"""Commit planned changes to the note store.

Creates go out as one batch. Non-conflicting updates touch disjoint notes and
are written concurrently; a note is only written when adopting incoming values
actually changed it. Resolver overwrites use ``commit_update`` one at a time.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from logging import getLogger
from typing import TYPE_CHECKING

from orbitsync.domain.model import SOCIAL_KEYS

from .mapping import SOCIAL_SECTION

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from orbitsync.domain.model import MemberRecord, Note
    from orbitsync.domain.ports import NoteStore

    from .contracts import NoteUpdate

log = getLogger(__name__)

DEFAULT_UPDATE_WORKERS = 8


def adopt_unset_social(note: Note, record: MemberRecord) -> bool:
    """Fill social fields the note has no value for; return whether any changed."""

    social = note.custom.get(SOCIAL_SECTION)
    if not isinstance(social, dict):
        social = {}
        note.custom[SOCIAL_SECTION] = social

    changed = False
    for key in SOCIAL_KEYS:
        incoming = record.social.get(key)
        if social.get(key.value) is None and incoming is not None:
            social[key.value] = incoming
            changed = True
    return changed


def commit_creates(store: NoteStore, notes: Sequence[Note]) -> None:
    if not notes:
        return
    log.info("Creating %d note(s)", len(notes))
    store.bulk_add(notes)


def commit_update(store: NoteStore, note: Note, *, now: datetime | None = None) -> None:
    note.touch(now)
    store.update(note)


def commit_updates(
    store: NoteStore,
    updates: Sequence[NoteUpdate],
    *,
    max_workers: int = DEFAULT_UPDATE_WORKERS,
    now: datetime | None = None,
) -> list[Note]:
    """Adopt unset fields and write the changed notes concurrently.

    Waits for every write before returning; the first failure is re-raised once
    all submitted writes have settled. Returns the notes that were written.
    """

    changed = [update.note for update in updates if adopt_unset_social(update.note, update.record)]
    unchanged = len(updates) - len(changed)
    if unchanged:
        log.debug("Skipping %d update(s) with nothing to adopt", unchanged)
    if not changed:
        return []

    log.info("Updating %d note(s)", len(changed))
    with ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(changed))),
        thread_name_prefix="note-update",
    ) as executor:
        futures = [executor.submit(commit_update, store, note, now=now) for note in changed]
    for future in futures:
        future.result()
    return changed
