"""Types exchanged between the planner, the conflict resolver and the applier."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from orbitsync.domain.model import MemberRecord, Note


class MergeConflictOption(StrEnum):
    """Policy applied to a single conflict."""

    OVERWRITE_LOCAL = "overwrite_local"
    SKIP = "skip"
    SKIP_ALL = "skip_all"


MERGE_CONFLICT_OPTIONS: Final[tuple[MergeConflictOption, ...]] = (
    MergeConflictOption.OVERWRITE_LOCAL,
    MergeConflictOption.SKIP,
    MergeConflictOption.SKIP_ALL,
)


@dataclass(slots=True, kw_only=True)
class ConflictEntry:
    """An existing note paired with its quarantined replacement.

    ``conflict_entry`` keeps its quarantine name until an overwrite renames it to
    ``conflict_note.fname``. ``conflict_data`` lists the disagreeing social keys
    in enumeration order.
    """

    conflict_note: Note
    conflict_entry: Note
    conflict_data: list[str]


@dataclass(slots=True, kw_only=True)
class NoteUpdate:
    """Existing note with no conflicting fields, to be filled from ``record``."""

    note: Note
    record: MemberRecord


@dataclass(slots=True)
class ReconciliationPlan:
    to_create: list[Note] = field(default_factory=list["Note"])
    to_update: list[NoteUpdate] = field(default_factory=list["NoteUpdate"])
    conflicts: list[ConflictEntry] = field(default_factory=list["ConflictEntry"])


@dataclass(slots=True)
class ConflictResolutionResult:
    """Outcome of draining the conflict queue.

    ``resolved`` holds one note per queued conflict, in queue order: the written
    replacement for overwritten entries, the untouched original otherwise.
    ``aborted_at`` is the queue index where ``SKIP_ALL`` stopped processing.
    """

    resolved: list[Note] = field(default_factory=list["Note"])
    overwritten: int = 0
    skipped: int = 0
    aborted_at: int | None = None
