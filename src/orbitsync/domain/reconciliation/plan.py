"""Partition incoming members into create, update and conflict buckets.

The planner only reads from the vault (through ``lookup``); it never writes.
Notes for new members and quarantined replacements for conflicting ones are
synthesized in memory and handed to the applier and the resolver.
"""

from __future__ import annotations

from collections.abc import Callable
from copy import deepcopy
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

from orbitsync.domain.model import Note

from .conflicts import detect_conflicts
from .contracts import ConflictEntry, NoteUpdate, ReconciliationPlan
from .identity import resolve_note_name
from .mapping import SOCIAL_SECTION, map_member_metadata

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from orbitsync.domain.model import MemberRecord, Vault

log = getLogger(__name__)

PEOPLE_HIERARCHY: Final[str] = "people"
QUARANTINE_HIERARCHY: Final[str] = "people.orbit.duplicate"

type NoteLookup = Callable[[str], Note | None]


def note_fname(name: str, *, dest_name: str | None = None) -> str:
    """Return the vault name a member lands on."""

    if dest_name:
        return dest_name
    return f"{PEOPLE_HIERARCHY}.{name}"


def quarantine_fname(name: str, *, now: datetime) -> str:
    return f"{QUARANTINE_HIERARCHY}.{now:%Y.%m.%d}.{name}"


def plan_reconciliation(
    records: Iterable[MemberRecord],
    *,
    lookup: NoteLookup,
    vault: Vault,
    now: datetime,
    dest_name: str | None = None,
    frontmatter: Mapping[str, Any] | None = None,
) -> ReconciliationPlan:
    """Classify every record against the vault.

    - no note under the derived name (or ``dest_name``) -> new note in ``to_create``
    - note exists, no conflicting social fields -> ``NoteUpdate`` in ``to_update``
    - note exists with conflicts -> ``ConflictEntry`` with a quarantined replacement

    Each target name is planned once per batch; later records that land on an
    already planned name are dropped so buckets never touch the same note twice.
    """

    plan = ReconciliationPlan()
    base_custom: dict[str, Any] = dict(frontmatter or {})
    planned: set[str] = set()
    dropped = 0

    for record in records:
        name = resolve_note_name(record)
        fname = note_fname(name, dest_name=dest_name)
        if fname in planned:
            log.debug("Member %s maps to already planned note %s; skipping", record.id, fname)
            dropped += 1
            continue
        planned.add(fname)

        metadata = map_member_metadata(record, now=now)
        existing = lookup(fname)
        if existing is None:
            log.debug("No note %s for member %s; creating", fname, record.id)
            plan.to_create.append(
                Note(
                    fname=fname,
                    vault=vault,
                    custom={**deepcopy(base_custom), **metadata},
                    created=now,
                    updated=now,
                )
            )
            continue

        conflict_data = detect_conflicts(existing.custom, metadata[SOCIAL_SECTION])
        if not conflict_data:
            log.debug("Note %s has no conflicts with member %s", fname, record.id)
            plan.to_update.append(NoteUpdate(note=existing, record=record))
            continue

        log.debug("Note %s conflicts with member %s on %s", fname, record.id, conflict_data)
        plan.conflicts.append(
            ConflictEntry(
                conflict_note=existing,
                conflict_entry=Note(
                    fname=quarantine_fname(name, now=now),
                    vault=vault,
                    title=existing.title,
                    desc=existing.desc,
                    body=existing.body,
                    custom={**deepcopy(base_custom), **deepcopy(existing.custom), **metadata},
                    created=existing.created,
                    updated=now,
                ),
                conflict_data=conflict_data,
            )
        )

    if dropped:
        log.warning(
            "Dropped %d member(s) whose note name was already planned in this batch", dropped
        )
    log.info(
        "Planned %d create(s), %d update(s), %d conflict(s)",
        len(plan.to_create),
        len(plan.to_update),
        len(plan.conflicts),
    )
    return plan
