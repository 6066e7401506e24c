"""Where the note vault database and HTTP cache live on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "orbitsync"
STATE_DIR_NAME: Final[str] = ".orbitsync"
DEFAULT_DB_FILENAME: Final[str] = "notes.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Storage layout rooted at a workspace directory.

    Everything orbitsync writes goes under ``<workspace_root>/.orbitsync`` so a
    workspace can be moved or deleted as one unit.
    """

    workspace_root: Path
    database_filename: str = DEFAULT_DB_FILENAME
    http_cache_filename: str = HTTP_CACHE_FILENAME

    def state_dir(self, *, ensure: bool = True) -> Path:
        path = self.workspace_root.expanduser().resolve() / STATE_DIR_NAME
        if ensure:
            path.mkdir(parents=True, exist_ok=True)
        return path

    def database_path(self, *, ensure: bool = True) -> Path:
        return self.state_dir(ensure=ensure) / self.database_filename

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        return self.state_dir(ensure=ensure) / self.http_cache_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _default_workspace_root() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return base_path / APP_DIR_NAME


def get_storage_config(*, workspace_root: Path | None = None) -> StorageConfig:
    if workspace_root is not None:
        return StorageConfig(workspace_root=workspace_root)
    env_root = os.getenv("ORBITSYNC_WORKSPACE")
    root = Path(env_root) if env_root else _default_workspace_root()
    return StorageConfig(workspace_root=root)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
