"""Notes of the local hierarchical vault.

A note's place in the hierarchy is implied by its dot-separated ``fname``
(``people.alice`` is a child of ``people``); no explicit edges are stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

HIERARCHY_SEPARATOR = "."


def new_note_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


def title_from_fname(fname: str) -> str:
    """Derive a display title from the last hierarchy segment."""

    basename = fname.rsplit(HIERARCHY_SEPARATOR, 1)[-1]
    if basename != basename.lower():
        return basename
    words = basename.replace("-", " ").strip()
    return words[:1].upper() + words[1:]


@dataclass(frozen=True, slots=True)
class Vault:
    name: str
    fs_path: str | None = None


@dataclass(eq=False, kw_only=True)
class Note:
    fname: str
    vault: Vault
    id: str = field(default_factory=new_note_id)
    title: str = ""
    desc: str = ""
    body: str = ""
    custom: dict[str, Any] = field(default_factory=dict)
    created: datetime = field(default_factory=utcnow)
    updated: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if not self.title:
            self.title = title_from_fname(self.fname)

    def __repr__(self) -> str:
        return f"Note(fname={self.fname!r}, vault={self.vault.name!r}, id={self.id!r})"

    def rename(self, fname: str) -> None:
        self.fname = fname

    def touch(self, when: datetime | None = None) -> None:
        self.updated = when or utcnow()
