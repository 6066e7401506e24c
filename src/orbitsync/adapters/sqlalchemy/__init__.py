"""SQLAlchemy adapter package for orbitsync."""

from __future__ import annotations

from .mappings import UTCDateTime, create_all_tables, metadata, note_table
from .store import (
    SqlAlchemyNoteStore,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyNoteStore",
    "StartupError",
    "UTCDateTime",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "note_table",
    "shutdown",
    "startup",
]
