"""Application services for importing community members into the vault."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any

from orbitsync.domain.ports import FIRST_PAGE
from orbitsync.domain.reconciliation import (
    DEFAULT_UPDATE_WORKERS,
    commit_creates,
    commit_updates,
    plan_reconciliation,
    resolve_conflicts,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from orbitsync.domain.model import MemberRecord, Note, Vault
    from orbitsync.domain.ports import DecisionSource, MemberFetcher, NoteStore

log = getLogger(__name__)


@dataclass(slots=True)
class ImportResult:
    """Outcome of one member import run."""

    created: list[Note] = field(default_factory=list["Note"])
    resolved: list[Note] = field(default_factory=list["Note"])
    updated: list[Note] = field(default_factory=list["Note"])
    fetched: int = 0
    conflicts: int = 0
    overwritten: int = 0
    skipped: int = 0

    @property
    def imported_notes(self) -> list[Note]:
        return [*self.created, *self.resolved]


def fetch_all_members(fetcher: MemberFetcher) -> list[MemberRecord]:
    """Walk every listing page in order, starting from the first."""

    records: list[MemberRecord] = []
    cursor: str | None = FIRST_PAGE
    pages = 0
    while cursor is not None:
        page = fetcher.fetch_page(cursor)
        pages += 1
        records.extend(page.records)
        log.debug("Fetched page %d with %d member(s)", pages, len(page.records))
        cursor = page.next_cursor
    log.info("Fetched %d member(s) across %d page(s)", len(records), pages)
    return records


def import_members(
    *,
    fetcher: MemberFetcher,
    store: NoteStore,
    vault: Vault,
    decide: DecisionSource | None = None,
    orbit_id: str | None = None,
    dest_name: str | None = None,
    overwrite_all: bool = False,
    frontmatter: Mapping[str, Any] | None = None,
    update_workers: int = DEFAULT_UPDATE_WORKERS,
    now: datetime | None = None,
) -> ImportResult:
    """Fetch members, reconcile them with ``vault`` and commit the outcome.

    Order of effects: concurrent non-conflicting updates, one batch of creates,
    then conflicts one decision at a time. Any failure aborts the remaining
    steps; writes already committed stay committed.
    """

    run_at = now or datetime.now().astimezone()

    if orbit_id:
        log.info("Fetching single member %s", orbit_id)
        records = [fetcher.fetch_member(orbit_id)]
    else:
        records = fetch_all_members(fetcher)

    plan = plan_reconciliation(
        records,
        lookup=lambda fname: store.get_by_fname(fname, vault),
        vault=vault,
        now=run_at,
        dest_name=dest_name,
        frontmatter=frontmatter,
    )

    updated = commit_updates(store, plan.to_update, max_workers=update_workers, now=run_at)
    commit_creates(store, plan.to_create)
    resolution = resolve_conflicts(
        plan.conflicts,
        store=store,
        decide=decide,
        overwrite_all=overwrite_all,
        now=run_at,
    )

    result = ImportResult(
        created=list(plan.to_create),
        resolved=resolution.resolved,
        updated=updated,
        fetched=len(records),
        conflicts=len(plan.conflicts),
        overwritten=resolution.overwritten,
        skipped=resolution.skipped,
    )
    log.info(
        "Imported %d note(s): created=%d, updated=%d, conflicts=%d, overwritten=%d, skipped=%d",
        len(result.imported_notes),
        len(result.created),
        len(result.updated),
        result.conflicts,
        result.overwritten,
        result.skipped,
    )
    return result
