from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from orbitsync.adapters.sqlalchemy import SqlAlchemyNoteStore, shutdown, startup
from orbitsync.domain.model import Vault
from tests.support.members import FakeMemberFetcher, FakeNoteStore

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

_ORBIT_ENV_VARS = (
    "ORBIT_WORKSPACE_SLUG",
    "ORBIT_TOKEN",
    "ORBIT_BASE_URL",
    "ORBIT_HTTP_RETRIES",
    "ORBIT_HTTP_CACHE",
    "ORBIT_PAGE_SIZE",
    "ORBITSYNC_WORKSPACE",
    "ORBITSYNC_LOG_LEVEL",
    "DATABASE_URI",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ORBIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def vault() -> Vault:
    return Vault(name="vault")


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 3, 5, 9, 30, tzinfo=UTC)


@pytest.fixture
def fake_store() -> FakeNoteStore:
    return FakeNoteStore()


@pytest.fixture
def fake_fetcher() -> FakeMemberFetcher:
    return FakeMemberFetcher()


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    # File database: updates run on worker threads with their own connections.
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'notes.db'}", connect_args={"timeout": 30}
    )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_store(sqlite_engine: Engine) -> Iterator[SqlAlchemyNoteStore]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemyNoteStore()
    finally:
        shutdown()
