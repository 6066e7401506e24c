"""In-memory stand-ins for the fetching and persistence ports."""

from __future__ import annotations

import threading
from copy import deepcopy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from orbitsync.domain.model import (
    HIERARCHY_SEPARATOR,
    MemberAttributes,
    MemberRecord,
    Note,
    SocialHandles,
)
from orbitsync.domain.ports import FIRST_PAGE, MemberFetcher, MemberPage, NoteStore

if TYPE_CHECKING:
    from collections.abc import Sequence

    from orbitsync.domain.model import Vault


def make_record(
    member_id: str = "m-1",
    *,
    name: str | None = None,
    github: str | None = None,
    discord: str | None = None,
    linkedin: str | None = None,
    twitter: str | None = None,
    email: str | None = None,
    **attributes: Any,
) -> MemberRecord:
    return MemberRecord(
        id=member_id,
        attributes=MemberAttributes(name=name, **attributes),
        social=SocialHandles(
            github=github,
            discord=discord,
            linkedin=linkedin,
            twitter=twitter,
            email=email,
        ),
    )


def _copy(note: Note) -> Note:
    return Note(
        fname=note.fname,
        vault=note.vault,
        id=note.id,
        title=note.title,
        desc=note.desc,
        body=note.body,
        custom=deepcopy(note.custom),
        created=note.created,
        updated=note.updated,
    )


@dataclass
class FakeNoteStore:
    """Dict-backed ``NoteStore`` recording every write call."""

    notes: dict[tuple[str, str], Note] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def seed(self, note: Note) -> Note:
        self.notes[(note.vault.name, note.fname)] = _copy(note)
        return note

    def get_by_fname(self, fname: str, vault: Vault) -> Note | None:
        stored = self.notes.get((vault.name, fname))
        return _copy(stored) if stored is not None else None

    def add(self, note: Note) -> None:
        self._write("add", note)

    def bulk_add(self, notes: Sequence[Note]) -> None:
        with self._lock:
            self.calls.append(("bulk_add", ",".join(note.fname for note in notes)))
        for note in notes:
            self.notes[(note.vault.name, note.fname)] = _copy(note)

    def update(self, note: Note) -> None:
        self._write("update", note)

    def children_of(self, fname: str, vault: Vault) -> list[Note]:
        prefix = f"{fname}{HIERARCHY_SEPARATOR}"
        return [
            _copy(note)
            for (vault_name, name), note in sorted(self.notes.items())
            if vault_name == vault.name
            and name.startswith(prefix)
            and HIERARCHY_SEPARATOR not in name[len(prefix) :]
        ]

    def writes(self, kind: str) -> list[str]:
        return [fname for call, fname in self.calls if call == kind]

    def _write(self, kind: str, note: Note) -> None:
        if note.fname in self.fail_on:
            raise RuntimeError(f"write failed for {note.fname}")
        with self._lock:
            self.calls.append((kind, note.fname))
            key = (note.vault.name, note.fname)
            existing = self.notes.get(key)
            if kind == "update" and existing is not None:
                note.id, note.created = existing.id, existing.created
            self.notes[key] = _copy(note)


@dataclass
class FakeMemberFetcher:
    """Serves member pages keyed by cursor, recording the cursors requested."""

    pages: list[list[MemberRecord]] = field(default_factory=list)
    members: dict[str, MemberRecord] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    def fetch_page(self, cursor: str = FIRST_PAGE) -> MemberPage:
        self.requested.append(cursor)
        index = 0 if cursor == FIRST_PAGE else int(cursor.rsplit("=", 1)[-1])
        records = self.pages[index] if index < len(self.pages) else []
        has_next = index + 1 < len(self.pages)
        next_cursor = f"https://orbit.test/members?page={index + 1}" if has_next else None
        return MemberPage(records=list(records), next_cursor=next_cursor)

    def fetch_member(self, member_id: str) -> MemberRecord:
        self.requested.append(member_id)
        return self.members[member_id]


if TYPE_CHECKING:
    _store_check: NoteStore = FakeNoteStore()
    _fetcher_check: MemberFetcher = FakeMemberFetcher()
