from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from orbitsync.domain.model import Note, Vault
from orbitsync.domain.reconciliation import (
    PROVIDER_SECTION,
    SOCIAL_SECTION,
    note_fname,
    plan_reconciliation,
    quarantine_fname,
)
from tests.support.members import FakeNoteStore, make_record


def _lookup(store: FakeNoteStore, vault: Vault):  # noqa: ANN202
    return lambda fname: store.get_by_fname(fname, vault)


def test_note_fname_uses_people_hierarchy_or_override() -> None:
    assert note_fname("alice") == "people.alice"
    assert note_fname("alice", dest_name="team.lead") == "team.lead"


def test_quarantine_fname_is_dated() -> None:
    when = datetime(2024, 3, 5, 23, 59, tzinfo=UTC)

    assert quarantine_fname("bob", now=when) == "people.orbit.duplicate.2024.03.05.bob"


def test_absent_note_is_planned_for_creation(
    fake_store: FakeNoteStore, vault: Vault, now: datetime
) -> None:
    plan = plan_reconciliation(
        [make_record("m-1", name="alice", github="alice")],
        lookup=_lookup(fake_store, vault),
        vault=vault,
        now=now,
        frontmatter={"tags": ["people"]},
    )

    assert plan.to_update == []
    assert plan.conflicts == []
    [created] = plan.to_create
    assert created.fname == "people.alice"
    assert created.vault == vault
    assert created.title == "Alice"
    assert created.custom["tags"] == ["people"]
    assert created.custom[SOCIAL_SECTION]["github"] == "alice"
    assert created.custom[PROVIDER_SECTION]["id"] == "m-1"


def test_existing_note_without_conflicts_is_planned_for_update(
    fake_store: FakeNoteStore, vault: Vault, now: datetime
) -> None:
    existing = fake_store.seed(
        Note(fname="people.alice", vault=vault, custom={"social": {"github": None}})
    )
    record = make_record("m-1", name="alice", github="alice")

    plan = plan_reconciliation(
        [record], lookup=_lookup(fake_store, vault), vault=vault, now=now
    )

    assert plan.to_create == []
    assert plan.conflicts == []
    [update] = plan.to_update
    assert update.note.id == existing.id
    assert update.record is record


def test_conflicting_note_gets_quarantined_entry(
    fake_store: FakeNoteStore, vault: Vault, now: datetime
) -> None:
    existing = fake_store.seed(
        Note(
            fname="people.bob",
            vault=vault,
            body="Met at the meetup.",
            custom={"social": {"github": "bob-old"}, "notes": "keep me"},
        )
    )

    plan = plan_reconciliation(
        [make_record("m-2", name="bob", github="bob-new")],
        lookup=_lookup(fake_store, vault),
        vault=vault,
        now=now,
        frontmatter={"source": "orbit"},
    )

    [conflict] = plan.conflicts
    assert conflict.conflict_note.id == existing.id
    assert conflict.conflict_data == ["github"]
    entry = conflict.conflict_entry
    assert entry.fname == "people.orbit.duplicate.2024.03.05.bob"
    assert entry.body == "Met at the meetup."
    assert entry.custom["source"] == "orbit"
    assert entry.custom["notes"] == "keep me"
    assert entry.custom[SOCIAL_SECTION]["github"] == "bob-new"
    assert conflict.conflict_note.custom[SOCIAL_SECTION]["github"] == "bob-old"


def test_dest_name_applies_to_lookup_and_create(
    fake_store: FakeNoteStore, vault: Vault, now: datetime
) -> None:
    plan = plan_reconciliation(
        [make_record("m-1", name="alice")],
        lookup=_lookup(fake_store, vault),
        vault=vault,
        now=now,
        dest_name="community.alice",
    )

    assert [note.fname for note in plan.to_create] == ["community.alice"]


def test_records_with_the_same_name_are_planned_once(
    fake_store: FakeNoteStore, vault: Vault, now: datetime
) -> None:
    plan = plan_reconciliation(
        [make_record("m-1", name="sam"), make_record("m-2", name="sam")],
        lookup=_lookup(fake_store, vault),
        vault=vault,
        now=now,
    )

    assert [note.custom[PROVIDER_SECTION]["id"] for note in plan.to_create] == ["m-1"]


def test_member_ids_differing_only_in_case_are_both_created(
    fake_store: FakeNoteStore, vault: Vault, now: datetime
) -> None:
    plan = plan_reconciliation(
        [make_record("ngsdMW"), make_record("NGSDmw")],
        lookup=_lookup(fake_store, vault),
        vault=vault,
        now=now,
    )

    assert [note.fname for note in plan.to_create] == ["people.ngsdMW", "people.NGSDmw"]


def test_dest_name_batch_reports_dropped_members_once(
    fake_store: FakeNoteStore,
    vault: Vault,
    now: datetime,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger="orbitsync.domain.reconciliation.plan")

    plan = plan_reconciliation(
        [make_record("m-1", name="ann"), make_record("m-2", name="ben"), make_record("m-3")],
        lookup=_lookup(fake_store, vault),
        vault=vault,
        now=now,
        dest_name="community.lead",
    )

    assert [note.fname for note in plan.to_create] == ["community.lead"]
    warnings = [record for record in caplog.records if record.levelno >= logging.WARNING]
    assert [record.getMessage() for record in warnings] == [
        "Dropped 2 member(s) whose note name was already planned in this batch"
    ]
