"""Validated options for one member import run."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from orbitsync.domain.reconciliation.apply import DEFAULT_UPDATE_WORKERS

from .errors import ConfigurationError

DEFAULT_VAULT_NAME = "vault"

_HIERARCHY_SEGMENT = re.compile(r"^[^\s./\\]+$")


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ImportOptions(BaseModel):
    """Options accepted by the member import.

    ``orbit_id`` switches from the paginated listing to a single member lookup.
    ``dest_name`` replaces the derived ``people.<name>`` note name for every
    record of the run, so a listing import writes only the first member and
    drops the rest; pair it with ``orbit_id``. ``overwrite_all`` answers every
    conflict with an overwrite without consulting the decision source.
    ``frontmatter`` is merged underneath the imported metadata of every note
    written.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    orbit_id: str | None = None
    dest_name: str | None = None
    overwrite_all: bool = False
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    vault_name: str = DEFAULT_VAULT_NAME
    update_workers: int = Field(default=DEFAULT_UPDATE_WORKERS, ge=1)

    _normalize_blank = field_validator("orbit_id", "dest_name", mode="before")(_blank_to_none)

    @field_validator("dest_name")
    @classmethod
    def _validate_dest_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        segments = value.split(".")
        if not all(_HIERARCHY_SEGMENT.match(segment) for segment in segments):
            raise ValueError(f"dest_name must be a dot-separated note name, got {value!r}")
        return value

    @field_validator("vault_name")
    @classmethod
    def _validate_vault_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("vault_name must not be blank")
        return stripped


def load_import_options(
    values: Mapping[str, object] | None = None,
    /,
    **overrides: object,
) -> ImportOptions:
    """Validate raw option values, raising ``ConfigurationError`` on bad input."""

    payload: dict[str, object] = dict(values or {})
    payload.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return ImportOptions.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid import options: {exc}") from exc
