"""SQLAlchemy table metadata for the note vault."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
)

from orbitsync.domain.model import Note, Vault

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine, RowMapping

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

note_table = Table(
    "note",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("vault_name", String(255), nullable=False),
    Column("vault_fs_path", String(1024), nullable=True),
    Column("fname", String(1024), nullable=False),
    Column("title", String(1024), nullable=False, default=""),
    Column("desc", Text, nullable=False, default=""),
    Column("body", Text, nullable=False, default=""),
    Column("custom", JSON, nullable=False, default=dict),
    Column("created", UTCDateTime(), nullable=False),
    Column("updated", UTCDateTime(), nullable=False),
    UniqueConstraint("vault_name", "fname"),
)


def note_to_row(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "vault_name": note.vault.name,
        "vault_fs_path": note.vault.fs_path,
        "fname": note.fname,
        "title": note.title,
        "desc": note.desc,
        "body": note.body,
        "custom": note.custom,
        "created": note.created,
        "updated": note.updated,
    }


def row_to_note(row: RowMapping) -> Note:
    return Note(
        id=row["id"],
        vault=Vault(name=row["vault_name"], fs_path=row["vault_fs_path"]),
        fname=row["fname"],
        title=row["title"],
        desc=row["desc"],
        body=row["body"],
        custom=dict(row["custom"] or {}),
        created=row["created"],
        updated=row["updated"],
    )


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the note metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
