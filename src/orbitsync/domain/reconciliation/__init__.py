"""Reconciliation of fetched members against the note vault.

Flow:
1) derive a note name per member (``identity``)
2) project the member into note metadata (``mapping``)
3) classify each member as create, update or conflict (``plan``/``conflicts``)
4) write non-conflicting changes (``apply``)
5) drain conflicts one decision at a time (``resolve``)
"""

from __future__ import annotations

from .apply import (
    DEFAULT_UPDATE_WORKERS,
    adopt_unset_social,
    commit_creates,
    commit_update,
    commit_updates,
)
from .conflicts import detect_conflicts
from .contracts import (
    MERGE_CONFLICT_OPTIONS,
    ConflictEntry,
    ConflictResolutionResult,
    MergeConflictOption,
    NoteUpdate,
    ReconciliationPlan,
)
from .identity import clean_fname, name_from_email, resolve_note_name
from .mapping import (
    IMPORTED_AT_KEY,
    PROVIDER_SECTION,
    SOCIAL_SECTION,
    map_member_metadata,
    provider_attributes,
    social_attributes,
)
from .plan import (
    PEOPLE_HIERARCHY,
    QUARANTINE_HIERARCHY,
    NoteLookup,
    note_fname,
    plan_reconciliation,
    quarantine_fname,
)
from .resolve import (
    merge_conflict_message,
    merge_conflict_options,
    option_for_choice,
    resolve_conflicts,
    validate_merge_conflict_choice,
)

__all__ = [
    "DEFAULT_UPDATE_WORKERS",
    "IMPORTED_AT_KEY",
    "MERGE_CONFLICT_OPTIONS",
    "PEOPLE_HIERARCHY",
    "PROVIDER_SECTION",
    "QUARANTINE_HIERARCHY",
    "SOCIAL_SECTION",
    "ConflictEntry",
    "ConflictResolutionResult",
    "MergeConflictOption",
    "NoteLookup",
    "NoteUpdate",
    "ReconciliationPlan",
    "adopt_unset_social",
    "clean_fname",
    "commit_creates",
    "commit_update",
    "commit_updates",
    "detect_conflicts",
    "map_member_metadata",
    "merge_conflict_message",
    "merge_conflict_options",
    "name_from_email",
    "note_fname",
    "option_for_choice",
    "plan_reconciliation",
    "provider_attributes",
    "quarantine_fname",
    "resolve_conflicts",
    "resolve_note_name",
    "social_attributes",
    "validate_merge_conflict_choice",
]
