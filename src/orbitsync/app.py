"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import ExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from orbitsync.adapters.orbit import build_orbit_fetcher
from orbitsync.adapters.sqlalchemy import SqlAlchemyNoteStore, is_started, startup
from orbitsync.config import ImportOptions
from orbitsync.domain.import_pipeline import ImportResult, import_members
from orbitsync.domain.model import Vault

if TYPE_CHECKING:
    from datetime import datetime

    from orbitsync.domain.model import Note
    from orbitsync.domain.ports import DecisionSource, MemberFetcher, NoteStore


log = getLogger(__name__)


def _default_store() -> NoteStore:
    if not is_started():
        startup()
    return SqlAlchemyNoteStore()


def import_orbit_members(
    options: ImportOptions | None = None,
    *,
    fetcher: MemberFetcher | None = None,
    store: NoteStore | None = None,
    decide: DecisionSource | None = None,
    now: datetime | None = None,
) -> ImportResult:
    """Import Orbit members into the vault using the configured adapters."""

    effective_options = options or ImportOptions()
    effective_store = store or _default_store()
    log.info(
        "Starting Orbit import: vault=%s, orbit_id=%s, dest_name=%s, overwrite_all=%s",
        effective_options.vault_name,
        effective_options.orbit_id,
        effective_options.dest_name,
        effective_options.overwrite_all,
    )

    with ExitStack() as stack:
        effective_fetcher = (
            fetcher if fetcher is not None else stack.enter_context(build_orbit_fetcher())
        )
        return import_members(
            fetcher=effective_fetcher,
            store=effective_store,
            vault=Vault(name=effective_options.vault_name),
            decide=decide,
            orbit_id=effective_options.orbit_id,
            dest_name=effective_options.dest_name,
            overwrite_all=effective_options.overwrite_all,
            frontmatter=effective_options.frontmatter,
            update_workers=effective_options.update_workers,
            now=now,
        )


def read_note(
    fname: str,
    *,
    vault_name: str,
    store: NoteStore | None = None,
) -> Note | None:
    """Look up one stored note by name."""

    return (store or _default_store()).get_by_fname(fname, Vault(name=vault_name))
