"""SQLAlchemy-backed note store."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, insert, select, update
from sqlalchemy.orm import Session, sessionmaker

from orbitsync.config.storage import get_database_config
from orbitsync.domain.model import HIERARCHY_SEPARATOR
from orbitsync.domain.ports import NoteStore

from .mappings import create_all_tables, note_table, note_to_row, row_to_note

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.engine import Engine

    from orbitsync.domain.model import Note, Vault

log = getLogger(__name__)

# Concurrent note updates contend for the SQLite write lock; wait instead of failing.
_SQLITE_BUSY_TIMEOUT_SECONDS = 30


class StartupError(RuntimeError):
    """Raised when the note store is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "Note store not initialised. Call orbitsync.adapters.sqlalchemy."
                "startup() before using SqlAlchemyNoteStore."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def _create_engine(database_uri: str) -> Engine:
    if database_uri.startswith("sqlite"):
        return create_engine(
            database_uri, connect_args={"timeout": _SQLITE_BUSY_TIMEOUT_SECONDS}
        )
    return create_engine(database_uri)


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the engine, create the schema and reset the session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError("Note store already initialised. Pass force=True to reconfigure.")

    resolved_engine = engine or _create_engine(database_uri or get_database_config().uri)
    create_all_tables(resolved_engine)
    if _STATE.engine is not None and _STATE.engine is not resolved_engine:
        _STATE.engine.dispose()
    _STATE.engine = resolved_engine
    log.debug("Note store started on %s", resolved_engine.url)


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class SqlAlchemyNoteStore:
    """``NoteStore`` with one session and transaction per call.

    Notes are plain values on the way in and out; nothing stays attached to a
    session, so instances can be shared across worker threads.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory

    @property
    def session_factory(self) -> sessionmaker[Session]:
        return self._session_factory or _STATE.session_factory

    def get_by_fname(self, fname: str, vault: Vault) -> Note | None:
        stmt = (
            select(note_table)
            .where(note_table.c.vault_name == vault.name)
            .where(note_table.c.fname == fname)
        )
        with self.session_factory() as session:
            row = session.execute(stmt).mappings().one_or_none()
        return row_to_note(row) if row is not None else None

    def add(self, note: Note) -> None:
        with self.session_factory.begin() as session:
            session.execute(insert(note_table).values(**note_to_row(note)))

    def bulk_add(self, notes: Sequence[Note]) -> None:
        if not notes:
            return
        with self.session_factory.begin() as session:
            session.execute(insert(note_table), [note_to_row(note) for note in notes])
        log.debug("Inserted %d note(s)", len(notes))

    def update(self, note: Note) -> None:
        """Replace the stored note named ``note.fname``, or insert it when absent.

        The stored id and creation time win and are copied back onto ``note``.
        """

        lookup = (
            select(note_table.c.id, note_table.c.created)
            .where(note_table.c.vault_name == note.vault.name)
            .where(note_table.c.fname == note.fname)
        )
        with self.session_factory.begin() as session:
            existing = session.execute(lookup).one_or_none()
            if existing is None:
                session.execute(insert(note_table).values(**note_to_row(note)))
                return
            note.id, note.created = existing.id, existing.created
            values = note_to_row(note)
            del values["id"], values["created"]
            session.execute(update(note_table).where(note_table.c.id == note.id).values(**values))

    def children_of(self, fname: str, vault: Vault) -> list[Note]:
        prefix = f"{fname}{HIERARCHY_SEPARATOR}"
        stmt = (
            select(note_table)
            .where(note_table.c.vault_name == vault.name)
            .where(note_table.c.fname.startswith(prefix, autoescape=True))
            .order_by(note_table.c.fname)
        )
        with self.session_factory() as session:
            rows = session.execute(stmt).mappings().all()
        # LIKE is case-insensitive on SQLite; re-check the prefix exactly.
        return [
            row_to_note(row)
            for row in rows
            if row["fname"].startswith(prefix)
            and HIERARCHY_SEPARATOR not in row["fname"][len(prefix) :]
        ]


if TYPE_CHECKING:
    _store_check: NoteStore = SqlAlchemyNoteStore()
