"""Sequential conflict resolution.

Conflicts are decided strictly one at a time and in planner order: a decision
source may be a person at a prompt, which cannot answer several questions at
once. State is the explicit ``(queue, index, result)`` triple of a plain loop.

Decisions:
- ``OVERWRITE_LOCAL``: rename the quarantined entry to the conflicted note's
  name and write it over the stored note.
- ``SKIP``: leave the stored note alone and drop the entry.
- ``SKIP_ALL``: as ``SKIP`` for this and every remaining entry, then stop.
- no answer (``None``) or an answer outside the menu: handled as ``SKIP`` and
  logged.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from orbitsync.domain.errors import DecisionValidationError

from .apply import commit_update
from .contracts import MERGE_CONFLICT_OPTIONS, ConflictResolutionResult, MergeConflictOption
from .mapping import SOCIAL_SECTION

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from orbitsync.domain.model import Note
    from orbitsync.domain.ports import DecisionSource, NoteStore

    from .contracts import ConflictEntry

log = getLogger(__name__)


def merge_conflict_options() -> tuple[MergeConflictOption, ...]:
    return MERGE_CONFLICT_OPTIONS


def merge_conflict_message(conflict: ConflictEntry) -> str:
    """Render the remote/local comparison shown when asking about ``conflict``."""

    remote = conflict.conflict_entry.custom.get(SOCIAL_SECTION) or {}
    local = conflict.conflict_note.custom.get(SOCIAL_SECTION) or {}
    entries = "".join(
        f"\n{key}: \nremote: {remote.get(key)}\nlocal: {local.get(key)}\n"
        for key in conflict.conflict_data
    )
    return (
        f"\nWe noticed different fields for user {conflict.conflict_note.title} "
        f"in the note: {conflict.conflict_note.fname}. {entries}\n"
    )


def validate_merge_conflict_choice(
    choice: int,
    options: Sequence[MergeConflictOption] = MERGE_CONFLICT_OPTIONS,
) -> bool | str:
    """Return ``True`` for a valid menu index, otherwise a corrective message."""

    if 0 <= choice < len(options):
        return True
    indices = "/".join(str(index) for index in range(len(options)))
    return f"Invalid choice! Choose {indices}"


def option_for_choice(
    choice: int,
    options: Sequence[MergeConflictOption] = MERGE_CONFLICT_OPTIONS,
) -> MergeConflictOption:
    verdict = validate_merge_conflict_choice(choice, options)
    if verdict is not True:
        raise DecisionValidationError(str(verdict))
    return options[choice]


def resolve_conflicts(
    conflicts: Sequence[ConflictEntry],
    *,
    store: NoteStore,
    decide: DecisionSource | None = None,
    overwrite_all: bool = False,
    now: datetime | None = None,
) -> ConflictResolutionResult:
    """Drain ``conflicts`` in order and commit overwrites as they are decided."""

    if not overwrite_all and decide is None and conflicts:
        raise ValueError("A decision source is required unless overwrite_all is set")

    result = ConflictResolutionResult(resolved=[conflict.conflict_note for conflict in conflicts])
    options = merge_conflict_options()
    index = 0
    while index < len(conflicts):
        conflict = conflicts[index]
        decision = (
            MergeConflictOption.OVERWRITE_LOCAL
            if overwrite_all
            else _ask(decide, conflict, options)
        )

        if decision is MergeConflictOption.OVERWRITE_LOCAL:
            result.resolved[index] = _overwrite(conflict, store=store, now=now)
            result.overwritten += 1
        elif decision is MergeConflictOption.SKIP_ALL:
            remaining = len(conflicts) - index
            log.info("Skipping remaining %d conflict(s) from index %d", remaining, index)
            result.skipped += remaining
            result.aborted_at = index
            break
        else:
            result.skipped += 1
        index += 1

    log.info(
        "Resolved %d conflict(s): overwritten=%d, skipped=%d",
        len(conflicts),
        result.overwritten,
        result.skipped,
    )
    return result


def _ask(
    decide: DecisionSource | None,
    conflict: ConflictEntry,
    options: Sequence[MergeConflictOption],
) -> MergeConflictOption | None:
    if decide is None:
        return None
    answer: object = decide(conflict, options)
    if answer is None:
        log.warning("No decision for conflict on %s; skipping", conflict.conflict_note.fname)
        return None
    if isinstance(answer, MergeConflictOption) and answer in options:
        return answer
    if isinstance(answer, str) and answer in {option.value for option in options}:
        return MergeConflictOption(answer)
    log.warning(
        "Unrecognized decision %r for conflict on %s; skipping",
        answer,
        conflict.conflict_note.fname,
    )
    return None


def _overwrite(conflict: ConflictEntry, *, store: NoteStore, now: datetime | None) -> Note:
    entry = conflict.conflict_entry
    original = conflict.conflict_note
    log.debug("Overwriting %s with %s", original.fname, entry.fname)
    entry.rename(original.fname)
    entry.id = original.id
    commit_update(store, entry, now=now)
    return entry
