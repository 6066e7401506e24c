from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from orbitsync.adapters.sqlalchemy import SqlAlchemyNoteStore, is_started, shutdown
from orbitsync.app import import_orbit_members, read_note
from orbitsync.config import load_import_options
from orbitsync.domain.model import Note, Vault
from orbitsync.domain.reconciliation import MergeConflictOption
from orbitsync.ui.decisions import ScriptedDecisionSource
from tests.support.members import FakeMemberFetcher, make_record

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def default_store_workspace(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    monkeypatch.setenv("ORBITSYNC_WORKSPACE", str(tmp_path))
    shutdown()
    try:
        yield tmp_path
    finally:
        shutdown()


def test_import_into_sqlite_store(
    sqlite_store: SqlAlchemyNoteStore,
    fake_fetcher: FakeMemberFetcher,
    now: datetime,
) -> None:
    vault = Vault(name="work")
    sqlite_store.add(
        Note(fname="people.bob", vault=vault, custom={"social": {"github": "bob-old"}})
    )
    fake_fetcher.pages = [
        [make_record("m-1", name="alice", github="alice")],
        [make_record("m-2", name="bob", github="bob-new")],
    ]
    options = load_import_options(vault_name="work", frontmatter={"source": "orbit"})

    result = import_orbit_members(
        options,
        fetcher=fake_fetcher,
        store=sqlite_store,
        decide=ScriptedDecisionSource([MergeConflictOption.OVERWRITE_LOCAL]),
        now=now,
    )

    assert [note.fname for note in result.imported_notes] == ["people.alice", "people.bob"]
    assert result.overwritten == 1
    alice = sqlite_store.get_by_fname("people.alice", vault)
    bob = sqlite_store.get_by_fname("people.bob", vault)
    assert alice is not None
    assert alice.custom["source"] == "orbit"
    assert bob is not None
    assert bob.custom["social"]["github"] == "bob-new"
    assert bob.custom["orbit"]["id"] == "m-2"
    assert [note.fname for note in sqlite_store.children_of("people", vault)] == [
        "people.alice",
        "people.bob",
    ]


def test_read_note_starts_default_store(default_store_workspace: Path) -> None:
    assert read_note("people.alice", vault_name="vault") is None

    assert is_started()
    assert (default_store_workspace / ".orbitsync" / "notes.db").exists()
